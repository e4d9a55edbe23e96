"""Vote-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VoteResponse(BaseModel):
    """Stored vote as returned by the API."""

    id: str
    feedback_id: str
    user_id: str
    weight: float = Field(..., description="Base weight snapshotted when the vote was cast")
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class VoteStatsResponse(BaseModel):
    """Vote totals for a feedback item."""

    count: int
    total_weight: float
    total_decayed_weight: float

    model_config = ConfigDict(from_attributes=True)


class VoteCastResponse(BaseModel):
    """Result of casting a vote."""

    vote: VoteResponse
    stats: VoteStatsResponse


class MyVoteResponse(BaseModel):
    """The caller's vote on a feedback item, if any."""

    has_voted: bool
    vote: VoteResponse | None = None
    current_decayed_weight: float | None = None


class VoteWeightResponse(BaseModel):
    """Current decayed weight of one vote."""

    vote_id: str
    weight: float
    current_weight: float
