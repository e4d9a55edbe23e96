"""SQLAlchemy models for the Feedback Stage application."""

from .event import Event
from .feedback import FEEDBACK_STATE_ACTIVE, FEEDBACK_STATE_MERGED, Feedback
from .user import PanelMembership, Role, User, Village, VillagePriority
from .vote import Vote

__all__ = [
    "Event",
    "Feedback", "FEEDBACK_STATE_ACTIVE", "FEEDBACK_STATE_MERGED",
    "PanelMembership", "Role", "User", "Village", "VillagePriority",
    "Vote",
]
