"""Storage-level guarantees enforced by the schema itself."""

import pytest
from sqlalchemy.exc import IntegrityError

from feedback_stage.models import Feedback, Vote


def test_vote_table_has_unique_feedback_user_constraint() -> None:
    constraints = {
        constraint.name: {column.name for column in constraint.columns}
        for constraint in Vote.__table__.constraints
        if constraint.name
    }
    assert constraints["uq_vote_feedback_user"] == {"feedback_id", "user_id"}


def test_database_rejects_second_vote_for_same_pair(db_session, make_user, make_feedback) -> None:
    voter = make_user()
    feedback = make_feedback()
    db_session.add(Vote(feedback_id=feedback.id, user_id=voter.id, weight=1.0))
    db_session.commit()

    db_session.add(Vote(feedback_id=feedback.id, user_id=voter.id, weight=2.0))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_same_user_may_vote_on_different_feedback(db_session, make_user, make_feedback) -> None:
    voter = make_user()
    db_session.add(Vote(feedback_id=make_feedback().id, user_id=voter.id, weight=1.0))
    db_session.add(Vote(feedback_id=make_feedback(title="Other").id, user_id=voter.id, weight=1.0))
    db_session.commit()


def test_merged_feedback_requires_a_target(db_session, make_feedback) -> None:
    feedback = make_feedback()
    feedback.state = "merged"

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_feedback_cannot_be_duplicate_of_itself(db_session) -> None:
    feedback = Feedback(id="fb_loop", title="Loop", state="merged", duplicate_of_id="fb_loop")
    db_session.add(feedback)

    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_new_feedback_defaults_to_active(db_session, make_feedback) -> None:
    feedback = make_feedback()

    assert feedback.state == "active"
    assert feedback.is_merged is False
    assert feedback.id.startswith("fb_")
