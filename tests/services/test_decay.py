"""Tests for exponential vote weight decay."""

from datetime import timedelta

import pytest

from feedback_stage.db.time import utcnow
from feedback_stage.services.decay import (
    HALF_LIFE_DAYS,
    age_in_days,
    current_weight,
    decayed_weight,
)


@pytest.mark.parametrize("weight", [0.5, 1.0, 1.3, 3.0, 4.95])
def test_fresh_vote_keeps_full_weight(weight: float) -> None:
    assert decayed_weight(weight, 0) == weight


def test_half_life_halves_the_weight() -> None:
    assert HALF_LIFE_DAYS == 180
    assert decayed_weight(1.0, 180) == pytest.approx(0.5)
    assert decayed_weight(3.0, 180) == pytest.approx(1.5)


def test_two_half_lives_quarter_the_weight() -> None:
    assert decayed_weight(1.0, 360) == pytest.approx(0.25)


def test_very_old_votes_approach_zero() -> None:
    weight = decayed_weight(1.0, 1800)
    assert 0 < weight < 0.001


@pytest.mark.parametrize("age", [0, 1, 180, 10_000])
def test_zero_weight_stays_zero(age: float) -> None:
    assert decayed_weight(0, age) == 0


def test_decay_is_monotonic() -> None:
    ages = [0, 0.5, 1, 30, 90, 180, 365, 720]
    weights = [decayed_weight(2.0, age) for age in ages]
    assert weights == sorted(weights, reverse=True)


def test_negative_age_counts_as_fresh() -> None:
    assert decayed_weight(2.0, -5) == 2.0


def test_age_in_days_keeps_fractions() -> None:
    now = utcnow()
    assert age_in_days(now - timedelta(hours=36), now) == pytest.approx(1.5)


def test_age_in_days_accepts_naive_utc_timestamps() -> None:
    now = utcnow()
    naive = (now - timedelta(days=2)).replace(tzinfo=None)
    assert age_in_days(naive, now) == pytest.approx(2.0)


def test_current_weight_uses_creation_time() -> None:
    now = utcnow()
    assert current_weight(2.0, now - timedelta(days=180), now) == pytest.approx(1.0)
