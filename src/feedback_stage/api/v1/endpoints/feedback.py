"""Duplicate discovery and merge endpoints for feedback items."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, status

from feedback_stage.api.v1.dependencies import CurrentUserDep, SessionDep
from feedback_stage.core.settings import settings
from feedback_stage.models import Role
from feedback_stage.schemas.feedback import (
    DuplicateMatchResponse,
    MergeRequest,
    MergeResponse,
)
from feedback_stage.services.duplicates import (
    DuplicateMatch,
    find_duplicates,
    find_duplicates_for_feedback,
    similarity_level,
)
from feedback_stage.services.merge import merge_feedback

router = APIRouter(prefix="/feedback", tags=["feedback"])

# Roles allowed to consolidate duplicates.
MERGE_ROLES = frozenset({Role.PM, Role.PO, Role.MODERATOR, Role.ADMIN})


def _to_response(match: DuplicateMatch) -> DuplicateMatchResponse:
    return DuplicateMatchResponse(
        id=match.id,
        title=match.title,
        snippet=match.snippet,
        state=match.state,
        created_at=match.created_at,
        similarity=round(match.similarity, 4),
        similarity_level=similarity_level(match.similarity),
    )


@router.get("/duplicates", response_model=list[DuplicateMatchResponse])
async def search_duplicates(
    db: SessionDep,
    title: str = Query(..., min_length=1, max_length=500),
    exclude_id: str | None = Query(None),
) -> list[DuplicateMatchResponse]:
    """Find active feedback whose title resembles ``title``."""
    matches = find_duplicates(
        db,
        title,
        exclude_feedback_id=exclude_id,
        threshold=settings.duplicate_similarity_threshold,
    )
    return [_to_response(match) for match in matches]


@router.get("/{feedback_id}/duplicates", response_model=list[DuplicateMatchResponse])
async def get_feedback_duplicates(feedback_id: str, db: SessionDep) -> list[DuplicateMatchResponse]:
    """Find likely duplicates of an existing feedback item."""
    matches = find_duplicates_for_feedback(
        db,
        feedback_id,
        threshold=settings.duplicate_similarity_threshold,
    )
    return [_to_response(match) for match in matches]


@router.post("/{feedback_id}/merge", response_model=MergeResponse)
async def merge_into(
    feedback_id: str,
    merge_data: MergeRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MergeResponse:
    """Merge this feedback item into ``target_id`` and migrate its votes."""
    if current_user.role not in MERGE_ROLES:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only product and moderation staff can merge feedback",
        )

    result = merge_feedback(db, feedback_id, merge_data.target_id, actor_id=current_user.id)
    return MergeResponse.model_validate(result)
