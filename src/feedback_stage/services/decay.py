"""Exponential time decay applied to stored vote weights.

A vote keeps the base weight it was cast with. Its effective weight halves
every :data:`HALF_LIFE_DAYS` and is recomputed on every read, so there is
nothing to refresh in the background.
"""

from __future__ import annotations

from datetime import datetime

from feedback_stage.db.time import as_utc, utcnow

HALF_LIFE_DAYS = 180.0
SECONDS_PER_DAY = 86_400.0

__all__ = ["HALF_LIFE_DAYS", "age_in_days", "current_weight", "decayed_weight"]


def decayed_weight(
    base_weight: float,
    age_in_days: float,
    half_life_days: float = HALF_LIFE_DAYS,
) -> float:
    """Return ``base_weight * 2 ** (-age_in_days / half_life_days)``.

    Negative ages, which only appear with clock skew, count as zero so a vote
    never weighs more than its base weight.
    """
    if base_weight == 0:
        return 0.0
    age = max(0.0, age_in_days)
    if age == 0:
        return base_weight
    return base_weight * 2.0 ** (-age / half_life_days)


def age_in_days(created_at: datetime, now: datetime | None = None) -> float:
    """Return the fractional number of days between ``created_at`` and ``now``."""
    reference = as_utc(now) if now is not None else utcnow()
    return (reference - as_utc(created_at)).total_seconds() / SECONDS_PER_DAY


def current_weight(base_weight: float, created_at: datetime, now: datetime | None = None) -> float:
    """Return the decayed weight of a vote cast at ``created_at``, evaluated at ``now``."""
    return decayed_weight(base_weight, age_in_days(created_at, now))
