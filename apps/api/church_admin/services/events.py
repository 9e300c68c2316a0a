from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from church_admin.models.entities import Broadcast, Event, EventRegistration, EventStatusEnum
from church_admin.services.access import require_event
from church_admin.services.notifications import queue_event_broadcast

logger = logging.getLogger(__name__)


def registration_count(db: Session, event_id: int) -> int:
    return int(
        db.execute(
            select(func.count()).select_from(EventRegistration).where(EventRegistration.event_id == event_id)
        ).scalar_one()
    )


def publish_event(db: Session, event_id: int) -> tuple[Event, Broadcast | None]:
    """
    Publishing twice is a no-op; only the first publish queues an announcement.

    The announcement is returned as a draft broadcast so the caller can push it
    after committing; a rolled-back publish never reaches devices.
    """
    event = require_event(db, event_id)
    if event.status == EventStatusEnum.published:
        return event, None
    event.status = EventStatusEnum.published
    db.flush()
    announcement = queue_event_broadcast(db, event)
    logger.info("event %s published", event.id)
    return event, announcement


def register_for_event(db: Session, event_id: int, user_id: int) -> EventRegistration:
    event = require_event(db, event_id)
    if event.status != EventStatusEnum.published:
        raise HTTPException(status_code=404, detail="event not found")
    existing = db.execute(
        select(EventRegistration).where(EventRegistration.event_id == event_id, EventRegistration.user_id == user_id)
    ).scalar_one_or_none()
    if existing is not None:
        raise HTTPException(status_code=409, detail="already registered for this event")
    registration = EventRegistration(event_id=event_id, user_id=user_id)
    db.add(registration)
    db.flush()
    return registration


def delete_event(db: Session, event_id: int) -> None:
    event = require_event(db, event_id)
    db.execute(delete(EventRegistration).where(EventRegistration.event_id == event.id))
    db.delete(event)
    db.flush()


def upcoming_published(db: Session, now: datetime | None = None) -> list[Event]:
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    return list(
        db.execute(
            select(Event)
            .where(Event.status == EventStatusEnum.published, Event.date >= now)
            .order_by(Event.date.asc(), Event.id.asc())
        ).scalars()
    )
