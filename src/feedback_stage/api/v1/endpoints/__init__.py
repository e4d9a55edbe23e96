"""API endpoint modules for version 1."""

from .feedback import router as feedback_router
from .votes import router as votes_router

__all__ = [
    "feedback_router",
    "votes_router",
]
