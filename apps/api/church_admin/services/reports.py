from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from church_admin.models.entities import (
    Event,
    EventRegistration,
    Family,
    Member,
    MemberStatusEnum,
    Ministry,
    MinistryMember,
    PrayerRequest,
    PrayerStatusEnum,
    Sacrament,
)


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _count(db: Session, stmt) -> int:
    return int(db.execute(stmt).scalar_one())


def dashboard_stats(db: Session) -> dict[str, Any]:
    by_status = dict(db.execute(select(Member.status, func.count()).group_by(Member.status)).all())
    active = int(by_status.get(MemberStatusEnum.active, 0))
    pending = int(by_status.get(MemberStatusEnum.pending_approval, 0))
    inactive = int(by_status.get(MemberStatusEnum.inactive, 0))
    return {
        "members": {
            "total": active + pending + inactive,
            "active": active,
            "pending": pending,
            "inactive": inactive,
        },
        "families": _count(db, select(func.count()).select_from(Family)),
        "ministries": _count(db, select(func.count()).select_from(Ministry)),
        "events": {
            "total": _count(db, select(func.count()).select_from(Event)),
            "upcoming": _count(db, select(func.count()).select_from(Event).where(Event.date >= _now())),
        },
        "prayer_requests": {
            "pending": _count(
                db,
                select(func.count()).select_from(PrayerRequest).where(PrayerRequest.status == PrayerStatusEnum.pending),
            ),
        },
    }


def member_growth(db: Session, months: int = 12) -> list[dict[str, Any]]:
    start = _now() - timedelta(days=31 * months)
    created = db.execute(select(Member.created_at).where(Member.created_at >= start)).scalars()
    counts = Counter(value.strftime("%Y-%m") for value in created if value is not None)
    return [{"month": month, "count": counts[month]} for month in sorted(counts)]


def ministry_participation(db: Session) -> list[dict[str, Any]]:
    rows = db.execute(
        select(Ministry.id, Ministry.name, func.count(MinistryMember.id))
        .outerjoin(MinistryMember, MinistryMember.ministry_id == Ministry.id)
        .group_by(Ministry.id, Ministry.name)
        .order_by(Ministry.name.asc())
    ).all()
    return [{"id": row[0], "name": row[1], "member_count": int(row[2])} for row in rows]


def event_attendance(db: Session, limit: int = 20) -> list[dict[str, Any]]:
    rows = db.execute(
        select(Event.id, Event.title, Event.date, func.count(EventRegistration.id))
        .outerjoin(EventRegistration, EventRegistration.event_id == Event.id)
        .where(Event.date <= _now())
        .group_by(Event.id, Event.title, Event.date)
        .order_by(Event.date.desc())
        .limit(limit)
    ).all()
    return [{"id": row[0], "title": row[1], "date": row[2], "registrations": int(row[3])} for row in rows]


def sacrament_counts(db: Session) -> list[dict[str, Any]]:
    rows = db.execute(
        select(Sacrament.type, func.count()).group_by(Sacrament.type).order_by(Sacrament.type.asc())
    ).all()
    return [{"type": row[0].value, "count": int(row[1])} for row in rows]
