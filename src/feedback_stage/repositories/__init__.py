"""Repositories wrapping database access for the service layer."""

from .feedback_repo import FeedbackRepository
from .identity_repo import IdentityRepository
from .vote_repo import VoteRepository

__all__ = ["FeedbackRepository", "IdentityRepository", "VoteRepository"]
