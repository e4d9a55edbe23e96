"""Tests for base vote weight calculation."""

import pytest

from feedback_stage.models import Role
from feedback_stage.services.errors import FeedbackNotFoundError, UserNotFoundError
from feedback_stage.services.weights import (
    PANEL_BOOST,
    combine_weight,
    compute_base_weight,
    role_weight,
    village_multiplier,
)


@pytest.mark.parametrize(
    ("role", "expected"),
    [
        (Role.USER, 1.0),
        (Role.MODERATOR, 1.0),
        (Role.ADMIN, 1.0),
        (Role.RESEARCHER, 1.5),
        (Role.PM, 2.0),
        (Role.PO, 3.0),
    ],
)
def test_role_weights(role: str, expected: float) -> None:
    assert role_weight(role) == expected


@pytest.mark.parametrize(
    ("priority", "expected"),
    [("high", 1.5), ("medium", 1.0), ("low", 0.5), (None, 1.0)],
)
def test_village_multipliers(priority: str | None, expected: float) -> None:
    assert village_multiplier(priority) == expected


def test_combine_weight_adds_boost_before_multiplying() -> None:
    assert combine_weight(Role.PO, True, "high") == pytest.approx((3.0 + PANEL_BOOST) * 1.5)
    assert combine_weight(Role.USER, False, "low") == pytest.approx(0.5)


@pytest.mark.parametrize(
    ("role", "expected"),
    [(Role.USER, 1.0), (Role.PM, 2.0), (Role.PO, 3.0), (Role.RESEARCHER, 1.5)],
)
def test_base_weight_by_role(db_session, make_user, make_feedback, role, expected) -> None:
    user = make_user(role=role)
    feedback = make_feedback()

    assert compute_base_weight(db_session, user.id, feedback.id) == pytest.approx(expected)


@pytest.mark.parametrize(("role", "expected"), [(Role.USER, 1.3), (Role.PM, 2.3)])
def test_active_panel_adds_flat_boost(db_session, make_user, make_feedback, role, expected) -> None:
    user = make_user(role=role, active_panels=1)
    feedback = make_feedback()

    assert compute_base_weight(db_session, user.id, feedback.id) == pytest.approx(expected)


def test_panel_boost_does_not_stack(db_session, make_user, make_feedback) -> None:
    user = make_user(active_panels=3)
    feedback = make_feedback()

    assert compute_base_weight(db_session, user.id, feedback.id) == pytest.approx(1.3)


def test_inactive_membership_adds_nothing(db_session, make_user, make_feedback) -> None:
    user = make_user(inactive_panels=2)
    feedback = make_feedback()

    assert compute_base_weight(db_session, user.id, feedback.id) == pytest.approx(1.0)


def test_feedback_village_scales_weight(db_session, make_user, make_feedback, make_village) -> None:
    user = make_user(role=Role.PM)
    feedback = make_feedback(village=make_village("high"))

    assert compute_base_weight(db_session, user.id, feedback.id) == pytest.approx(3.0)


def test_user_village_is_the_fallback(db_session, make_user, make_feedback, make_village) -> None:
    user = make_user(village=make_village("low"))
    feedback = make_feedback()

    assert compute_base_weight(db_session, user.id, feedback.id) == pytest.approx(0.5)


def test_feedback_village_wins_over_user_village(
    db_session, make_user, make_feedback, make_village
) -> None:
    user = make_user(village=make_village("low"))
    feedback = make_feedback(village=make_village("high"))

    assert compute_base_weight(db_session, user.id, feedback.id) == pytest.approx(1.5)


def test_all_factors_combined(db_session, make_user, make_feedback, make_village) -> None:
    user = make_user(role=Role.PO, active_panels=1)
    feedback = make_feedback(village=make_village("high"))

    assert compute_base_weight(db_session, user.id, feedback.id) == pytest.approx(4.95)


def test_unknown_user_raises(db_session, make_feedback) -> None:
    feedback = make_feedback()

    with pytest.raises(UserNotFoundError):
        compute_base_weight(db_session, "usr_missing", feedback.id)


def test_unknown_feedback_raises(db_session, make_user) -> None:
    user = make_user()

    with pytest.raises(FeedbackNotFoundError):
        compute_base_weight(db_session, user.id, "fb_missing")
