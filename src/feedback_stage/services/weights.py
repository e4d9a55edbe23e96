"""Base vote weight calculation.

Weight = (role weight + panel boost) * village multiplier.

The tables and the pure combination step are usable without a database; only
:func:`compute_base_weight` reads storage.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from sqlalchemy.orm import Session

from feedback_stage.models.user import Role, VillagePriority
from feedback_stage.repositories import FeedbackRepository, IdentityRepository
from feedback_stage.services.errors import FeedbackNotFoundError, UserNotFoundError

logger = logging.getLogger(__name__)

ROLE_WEIGHTS: Mapping[str, float] = {
    Role.USER: 1.0,
    Role.MODERATOR: 1.0,
    Role.ADMIN: 1.0,
    Role.RESEARCHER: 1.5,
    Role.PM: 2.0,
    Role.PO: 3.0,
}

VILLAGE_MULTIPLIERS: Mapping[str, float] = {
    VillagePriority.HIGH: 1.5,
    VillagePriority.MEDIUM: 1.0,
    VillagePriority.LOW: 0.5,
}

# Flat bonus for belonging to any active panel, regardless of how many.
PANEL_BOOST = 0.3
DEFAULT_VILLAGE_MULTIPLIER = 1.0


def role_weight(role: str) -> float:
    """Return the weight for a role; unknown roles count as a plain user."""
    return ROLE_WEIGHTS.get(role, ROLE_WEIGHTS[Role.USER])


def village_multiplier(priority: str | None) -> float:
    """Return the multiplier for a village priority tier, 1.0 when absent."""
    if priority is None:
        return DEFAULT_VILLAGE_MULTIPLIER
    return VILLAGE_MULTIPLIERS.get(priority, DEFAULT_VILLAGE_MULTIPLIER)


def combine_weight(role: str, has_active_panel: bool, priority: str | None) -> float:
    """Combine the three weighting factors into a base weight."""
    boost = PANEL_BOOST if has_active_panel else 0.0
    return (role_weight(role) + boost) * village_multiplier(priority)


def compute_base_weight(db: Session, user_id: str, feedback_id: str) -> float:
    """Compute the base weight of a vote by ``user_id`` on ``feedback_id``.

    The village is taken from the feedback item, falling back to the voter's
    current village.

    Args:
        db: Database session.
        user_id: Voter identifier.
        feedback_id: Feedback item identifier.

    Returns:
        The un-decayed base weight.

    Raises:
        UserNotFoundError: If the user does not exist.
        FeedbackNotFoundError: If the feedback item does not exist.
    """
    identities = IdentityRepository(db)
    user = identities.get_user(user_id)
    if user is None:
        raise UserNotFoundError(user_id)

    feedback = FeedbackRepository(db).get_by_id(feedback_id)
    if feedback is None:
        raise FeedbackNotFoundError(feedback_id)

    has_panel = identities.has_active_membership(user_id)

    priority = None
    village_id = feedback.village_id or user.current_village_id
    if village_id is not None:
        village = identities.get_village(village_id)
        if village is not None:
            priority = village.priority

    weight = combine_weight(user.role, has_panel, priority)
    logger.debug(
        "base weight %.3f for user=%s feedback=%s (role=%s panel=%s village=%s)",
        weight,
        user_id,
        feedback_id,
        user.role,
        has_panel,
        priority,
    )
    return weight
