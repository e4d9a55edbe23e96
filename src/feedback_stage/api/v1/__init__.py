"""Version 1 API endpoints."""

from .endpoints import feedback_router, votes_router

__all__ = [
    "feedback_router",
    "votes_router",
]
