from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from church_admin.models.entities import PrayerRequest, PrayerStatusEnum, User
from church_admin.services.access import require_row

logger = logging.getLogger(__name__)


def require_prayer_request(db: Session, request_id: int) -> PrayerRequest:
    return require_row(db, PrayerRequest, request_id, "prayer request")


def list_prayer_requests(db: Session, status: PrayerStatusEnum | None = None) -> list[PrayerRequest]:
    stmt = select(PrayerRequest).options(joinedload(PrayerRequest.user).joinedload(User.member))
    if status is not None:
        stmt = stmt.where(PrayerRequest.status == status)
    return list(db.execute(stmt.order_by(PrayerRequest.created_at.desc(), PrayerRequest.id.desc())).scalars())


def submit_prayer_request(db: Session, user_id: int, content: str) -> PrayerRequest:
    request = PrayerRequest(user_id=user_id, content=content, status=PrayerStatusEnum.pending)
    db.add(request)
    db.flush()
    return request


def set_prayer_status(db: Session, request_id: int, status: PrayerStatusEnum) -> PrayerRequest:
    request = require_prayer_request(db, request_id)
    previous = request.status
    request.status = status
    db.flush()
    logger.info("prayer request %s moved from %s to %s", request.id, previous.value, status.value)
    return request


def acknowledge_prayer_request(db: Session, request_id: int) -> PrayerRequest:
    return set_prayer_status(db, request_id, PrayerStatusEnum.acknowledged)


def delete_prayer_request(db: Session, request_id: int) -> None:
    db.delete(require_prayer_request(db, request_id))
    db.flush()
