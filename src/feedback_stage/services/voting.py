"""Casting and withdrawing votes on feedback."""
from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from feedback_stage.db.session import unit_of_work
from feedback_stage.models.event import EVENT_VOTE_CAST, EVENT_VOTE_REMOVED
from feedback_stage.models.vote import Vote
from feedback_stage.repositories import FeedbackRepository, VoteRepository
from feedback_stage.services.audit import record_event
from feedback_stage.services.errors import (
    DuplicateVoteError,
    FeedbackMergedError,
    FeedbackNotFoundError,
    VoteConstraintViolationError,
    VoteNotFoundError,
)
from feedback_stage.services.weights import compute_base_weight

logger = logging.getLogger(__name__)

__all__ = ["cast_vote", "get_user_vote", "remove_vote"]


def cast_vote(db: Session, user_id: str, feedback_id: str, now: datetime | None = None) -> Vote:
    """Record a vote and snapshot its base weight.

    The weight is computed once here and never recomputed, even if the
    voter's role or panel membership changes later.

    Args:
        db: Database session.
        user_id: Voter identifier.
        feedback_id: Feedback item being voted on.
        now: Cast time; defaults to the current time.

    Returns:
        The committed vote.

    Raises:
        FeedbackNotFoundError: If the feedback item does not exist.
        FeedbackMergedError: If the item was merged into another one.
        UserNotFoundError: If the voter does not exist.
        DuplicateVoteError: If the user already voted on the item.
        VoteConstraintViolationError: If a concurrent request inserted the
            same vote between the check and the insert.
    """
    votes = VoteRepository(db)
    with unit_of_work(db):
        feedback = FeedbackRepository(db).get_by_id(feedback_id)
        if feedback is None:
            raise FeedbackNotFoundError(feedback_id)
        if feedback.is_merged:
            raise FeedbackMergedError(feedback_id, feedback.duplicate_of_id)

        if votes.get_for_user(feedback_id, user_id) is not None:
            raise DuplicateVoteError(f"User {user_id} has already voted on {feedback_id}")

        weight = compute_base_weight(db, user_id, feedback_id)
        try:
            vote = votes.create(
                feedback_id=feedback_id,
                user_id=user_id,
                weight=weight,
                created_at=now,
            )
        except IntegrityError as err:
            logger.warning("concurrent vote rejected: user=%s feedback=%s", user_id, feedback_id)
            raise VoteConstraintViolationError(
                f"User {user_id} has already voted on {feedback_id}"
            ) from err

        record_event(
            db,
            EVENT_VOTE_CAST,
            {
                "feedbackId": feedback_id,
                "voteId": vote.id,
                "weight": weight,
                "timestamp": vote.created_at.isoformat(),
            },
            user_id=user_id,
        )

    logger.info("vote cast: user=%s feedback=%s weight=%.3f", user_id, feedback_id, weight)
    return vote


def remove_vote(db: Session, user_id: str, feedback_id: str) -> None:
    """Withdraw the user's vote from a feedback item.

    Raises:
        FeedbackNotFoundError: If the feedback item does not exist.
        VoteNotFoundError: If the user has not voted on it.
    """
    votes = VoteRepository(db)
    with unit_of_work(db):
        if FeedbackRepository(db).get_by_id(feedback_id) is None:
            raise FeedbackNotFoundError(feedback_id)

        vote = votes.get_for_user(feedback_id, user_id)
        if vote is None:
            raise VoteNotFoundError(f"{feedback_id}:{user_id}")

        vote_id = vote.id
        votes.delete(vote)
        record_event(
            db,
            EVENT_VOTE_REMOVED,
            {"feedbackId": feedback_id, "voteId": vote_id},
            user_id=user_id,
        )

    logger.info("vote removed: user=%s feedback=%s", user_id, feedback_id)


def get_user_vote(db: Session, user_id: str, feedback_id: str) -> Vote | None:
    """Return the user's vote on a feedback item, or None."""
    return VoteRepository(db).get_for_user(feedback_id, user_id)
