from __future__ import annotations

import logging
import math
from typing import Any

from fastapi import HTTPException
from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from church_admin.models.entities import Family, Member, MemberStatusEnum
from church_admin.services.access import require_member
from church_admin.services.household import place_member, validate_placement

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SORT_COLUMNS = {
    "name": Member.name,
    "email": Member.email,
    "phone": Member.phone,
    "status": Member.status,
    "created_at": Member.created_at,
    "createdAt": Member.created_at,
}
SORTABLE_FIELDS = tuple(SORT_COLUMNS) + ("family",)


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def member_filters(
    search: str | None = None,
    status: str | None = None,
    family_id: int | None = None,
) -> list[Any]:
    filters: list[Any] = []
    term = (search or "").strip()
    if term:
        pattern = f"%{escape_like(term)}%"
        filters.append(
            or_(
                Member.name.ilike(pattern, escape="\\"),
                Member.email.ilike(pattern, escape="\\"),
                Member.phone.ilike(pattern, escape="\\"),
            )
        )
    if status and status != "ALL":
        filters.append(Member.status == MemberStatusEnum(status))
    if family_id is not None:
        filters.append(Member.family_id == family_id)
    return filters


def search_members(
    db: Session,
    *,
    search: str | None = None,
    status: str | None = None,
    family_id: int | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
) -> tuple[list[Member], int]:
    """
    One page of the member directory plus the unpaged total.

    `total` depends only on the filters, never on page/limit. Sorting by
    `family` orders by the related family's name; unassigned members go last.
    """
    if sort_by not in SORTABLE_FIELDS:
        raise HTTPException(status_code=400, detail=f"cannot sort by {sort_by}")
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_PAGE_SIZE)
    filters = member_filters(search, status, family_id)

    total = db.execute(select(func.count(Member.id)).where(*filters)).scalar_one()

    query = select(Member).where(*filters)
    if sort_by == "family":
        query = query.outerjoin(Family, Family.id == Member.family_id)
        column = Family.name
    else:
        column = SORT_COLUMNS[sort_by]
    ordering = column.desc() if sort_order == "desc" else column.asc()
    query = query.order_by(ordering.nulls_last(), Member.id.asc()).offset((page - 1) * limit).limit(limit)

    return list(db.execute(query).scalars()), total


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def create_member(db: Session, fields: dict[str, Any]) -> Member:
    family_id = fields.pop("family_id", None)
    house_id = fields.pop("house_id", None)
    spouse_id = fields.get("spouse_id")
    if spouse_id is not None and db.get(Member, spouse_id) is None:
        raise HTTPException(status_code=400, detail="spouse not found")

    validate_placement(db, family_id, house_id)
    member = Member(**fields, family_id=family_id, house_id=house_id)
    db.add(member)
    db.flush()
    return member


def update_member(db: Session, member_id: int, fields: dict[str, Any]) -> Member:
    member = require_member(db, member_id)

    if "family_id" in fields or "house_id" in fields:
        family_id = fields.pop("family_id", member.family_id)
        default_house = member.house_id if family_id == member.family_id else None
        house_id = fields.pop("house_id", default_house)
        place_member(db, member, family_id, house_id)
        if family_id is None:
            member.family_role = None

    spouse_id = fields.get("spouse_id")
    if spouse_id is not None:
        if spouse_id == member.id:
            raise HTTPException(status_code=400, detail="member cannot be their own spouse")
        if db.get(Member, spouse_id) is None:
            raise HTTPException(status_code=400, detail="spouse not found")

    for key, value in fields.items():
        setattr(member, key, value)
    db.flush()
    return member


def approve_member(db: Session, member_id: int) -> Member:
    member = require_member(db, member_id)
    if member.status != MemberStatusEnum.pending_approval:
        raise HTTPException(status_code=400, detail="only members pending approval can be approved")
    member.status = MemberStatusEnum.active
    db.flush()
    logger.info("member %s approved", member.id)
    return member


def deactivate_member(db: Session, member_id: int) -> Member:
    member = require_member(db, member_id)
    member.status = MemberStatusEnum.inactive
    db.flush()
    return member


def deactivate_members(db: Session, member_ids: list[int]) -> int:
    result = db.execute(
        update(Member).where(Member.id.in_(member_ids)).values(status=MemberStatusEnum.inactive)
    )
    logger.info("bulk deactivated %s member(s)", result.rowcount)
    return result.rowcount
