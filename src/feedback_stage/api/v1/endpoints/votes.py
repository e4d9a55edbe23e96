"""Vote-related endpoints for the Feedback Stage API."""

from fastapi import APIRouter, Response, status
from sqlalchemy.orm import Session

from feedback_stage.api.v1.dependencies import CurrentUserDep, SessionDep
from feedback_stage.repositories import FeedbackRepository, VoteRepository
from feedback_stage.schemas.vote import (
    MyVoteResponse,
    VoteCastResponse,
    VoteResponse,
    VoteStatsResponse,
    VoteWeightResponse,
)
from feedback_stage.services.aggregator import calculate_current_weight, vote_stats
from feedback_stage.services.decay import current_weight
from feedback_stage.services.errors import FeedbackNotFoundError, VoteNotFoundError
from feedback_stage.services.voting import cast_vote, get_user_vote, remove_vote

router = APIRouter(tags=["votes"])


def _ensure_feedback_exists(db: Session, feedback_id: str) -> None:
    if FeedbackRepository(db).get_by_id(feedback_id) is None:
        raise FeedbackNotFoundError(feedback_id)


@router.post(
    "/feedback/{feedback_id}/vote",
    status_code=status.HTTP_201_CREATED,
    response_model=VoteCastResponse,
)
async def cast_feedback_vote(
    feedback_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> VoteCastResponse:
    """Cast the caller's vote on a feedback item."""
    vote = cast_vote(db, current_user.id, feedback_id)
    stats = vote_stats(db, feedback_id)
    return VoteCastResponse(
        vote=VoteResponse.model_validate(vote),
        stats=VoteStatsResponse.model_validate(stats),
    )


@router.get("/feedback/{feedback_id}/vote", response_model=MyVoteResponse)
async def get_my_vote(
    feedback_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MyVoteResponse:
    """Get the caller's vote on a feedback item with its current decayed weight."""
    _ensure_feedback_exists(db, feedback_id)
    vote = get_user_vote(db, current_user.id, feedback_id)
    if vote is None:
        return MyVoteResponse(has_voted=False)

    return MyVoteResponse(
        has_voted=True,
        vote=VoteResponse.model_validate(vote),
        current_decayed_weight=current_weight(vote.weight, vote.created_at),
    )


@router.delete("/feedback/{feedback_id}/vote", status_code=status.HTTP_204_NO_CONTENT)
async def delete_my_vote(
    feedback_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Response:
    """Withdraw the caller's vote."""
    remove_vote(db, current_user.id, feedback_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/feedback/{feedback_id}/votes/stats", response_model=VoteStatsResponse)
async def get_vote_stats(feedback_id: str, db: SessionDep) -> VoteStatsResponse:
    """Return vote count, base weight total and decayed weight total."""
    _ensure_feedback_exists(db, feedback_id)
    return VoteStatsResponse.model_validate(vote_stats(db, feedback_id))


@router.get("/votes/{vote_id}/weight", response_model=VoteWeightResponse)
async def get_vote_weight(vote_id: str, db: SessionDep) -> VoteWeightResponse:
    """Return the stored base weight and current decayed weight of a vote."""
    vote = VoteRepository(db).get_by_id(vote_id)
    if vote is None:
        raise VoteNotFoundError(vote_id)
    return VoteWeightResponse(
        vote_id=vote_id,
        weight=vote.weight,
        current_weight=calculate_current_weight(db, vote_id),
    )
