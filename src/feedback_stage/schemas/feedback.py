"""Feedback duplicate and merge schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DuplicateMatchResponse(BaseModel):
    """A feedback item that looks like a duplicate of the query title."""

    id: str
    title: str
    snippet: str
    state: str
    created_at: datetime
    similarity: float = Field(..., ge=0.0, le=1.0)
    similarity_level: str

    model_config = ConfigDict(from_attributes=True)


class MergeRequest(BaseModel):
    """Schema for merging a feedback item into a canonical one."""

    target_id: str = Field(..., min_length=1, description="Canonical feedback item to merge into")


class MergeResponse(BaseModel):
    """Result of a merge."""

    source_id: str
    target_id: str
    votes_migrated: int
    votes_discarded: int

    model_config = ConfigDict(from_attributes=True)
