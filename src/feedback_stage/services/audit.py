"""Append-only audit trail for vote and merge events."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from feedback_stage.models.event import Event

logger = logging.getLogger(__name__)


def record_event(
    db: Session,
    event_type: str,
    payload: dict[str, Any],
    user_id: str | None = None,
) -> Event:
    """Stage an audit event in the caller's transaction.

    The event is only durable if the surrounding transaction commits, so a
    rolled-back change never leaves an audit record behind.
    """
    event = Event(type=event_type, user_id=user_id, payload=dict(payload))
    db.add(event)
    db.flush()
    logger.debug("audit event %s staged: %s", event_type, payload)
    return event


def list_events(db: Session, event_type: str | None = None, limit: int = 100) -> list[Event]:
    """Return the most recent audit events, newest first."""
    stmt = select(Event)
    if event_type is not None:
        stmt = stmt.where(Event.type == event_type)
    stmt = stmt.order_by(Event.id.desc()).limit(limit)
    return list(db.execute(stmt).scalars())
