"""Atomic merging of duplicate feedback items."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from feedback_stage.db.session import unit_of_work
from feedback_stage.models.event import EVENT_FEEDBACK_MERGED
from feedback_stage.repositories import FeedbackRepository, VoteRepository
from feedback_stage.services.audit import record_event
from feedback_stage.services.errors import (
    AlreadyMergedError,
    CircularMergeError,
    FeedbackNotFoundError,
    SelfMergeError,
    VoteConstraintViolationError,
)

logger = logging.getLogger(__name__)

SOURCE_ALREADY_MERGED = "source already merged"
TARGET_ALREADY_MERGED = "target already merged; merge into canonical item instead"


@dataclass(frozen=True)
class MergeResult:
    """Outcome of a completed merge."""

    source_id: str
    target_id: str
    votes_migrated: int
    votes_discarded: int


def merge_feedback(
    db: Session,
    source_id: str,
    target_id: str,
    actor_id: str | None = None,
) -> MergeResult:
    """Fold ``source_id`` into ``target_id`` and move its votes across.

    All of the following happen in one transaction, or none of them do:

    1. The source is marked merged with ``duplicate_of_id = target_id``.
    2. Each source vote is recreated on the target with its original weight
       and cast time, unless the voter already has a vote on the target. In
       that case the target vote is kept as is and the source vote dropped.
    3. Every source vote is deleted.
    4. A ``feedback.merged`` audit event is written.

    The source state is checked again by the update in step 1, so of two
    concurrent merges of the same source only one commits.

    Args:
        db: Database session.
        source_id: Duplicate item to retire.
        target_id: Canonical active item that keeps the votes.
        actor_id: User performing the merge, recorded on the audit event.

    Returns:
        Counts of migrated and discarded votes.

    Raises:
        SelfMergeError: If source and target are the same item.
        FeedbackNotFoundError: If either item does not exist.
        AlreadyMergedError: If the source or the target was already merged.
        CircularMergeError: If the target is already a duplicate of the source.
        VoteConstraintViolationError: If a vote was cast on the target
            concurrently by a voter being migrated.
    """
    if source_id == target_id:
        raise SelfMergeError("cannot merge feedback into itself")

    feedback = FeedbackRepository(db)
    votes = VoteRepository(db)

    try:
        with unit_of_work(db):
            source = feedback.get_by_id(source_id, for_update=True)
            if source is None:
                raise FeedbackNotFoundError(source_id)
            target = feedback.get_by_id(target_id, for_update=True)
            if target is None:
                raise FeedbackNotFoundError(target_id)

            if source.is_merged:
                raise AlreadyMergedError(SOURCE_ALREADY_MERGED)
            # Checked before the target state: a target pointing back at the
            # source is necessarily merged, and this is the more precise error.
            if target.duplicate_of_id == source_id:
                raise CircularMergeError(
                    f"{target_id} is already a duplicate of {source_id}; merge would form a cycle"
                )
            if target.is_merged:
                raise AlreadyMergedError(TARGET_ALREADY_MERGED)

            if not feedback.mark_merged(source_id, target_id):
                raise AlreadyMergedError(SOURCE_ALREADY_MERGED)

            existing_voters = votes.voter_ids(target_id)
            source_votes = votes.list_for_feedback(source_id)
            migrated = 0
            for vote in source_votes:
                if vote.user_id in existing_voters:
                    continue
                votes.create(
                    feedback_id=target_id,
                    user_id=vote.user_id,
                    weight=vote.weight,
                    created_at=vote.created_at,
                )
                existing_voters.add(vote.user_id)
                migrated += 1

            removed = votes.delete_for_feedback(source_id)
            record_event(
                db,
                EVENT_FEEDBACK_MERGED,
                {"sourceId": source_id, "targetId": target_id, "votesMigrated": migrated},
                user_id=actor_id,
            )
    except IntegrityError as err:
        logger.warning("merge %s -> %s aborted by a concurrent vote", source_id, target_id)
        raise VoteConstraintViolationError(
            f"concurrent vote on {target_id} conflicted with merge of {source_id}"
        ) from err
    except (AlreadyMergedError, CircularMergeError) as err:
        logger.warning("merge %s -> %s rejected: %s", source_id, target_id, err)
        raise

    logger.info(
        "merged feedback %s into %s: %d votes migrated, %d discarded",
        source_id,
        target_id,
        migrated,
        removed - migrated,
    )
    return MergeResult(
        source_id=source_id,
        target_id=target_id,
        votes_migrated=migrated,
        votes_discarded=removed - migrated,
    )
