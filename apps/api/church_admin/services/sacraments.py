from __future__ import annotations

from typing import Any

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from church_admin.models.entities import Member, Sacrament, SacramentTypeEnum
from church_admin.services.access import require_row
from church_admin.services.members import escape_like


def require_sacrament(db: Session, sacrament_id: int) -> Sacrament:
    return require_row(db, Sacrament, sacrament_id, "sacrament")


def _require_member_reference(db: Session, member_id: int) -> None:
    if db.get(Member, member_id) is None:
        raise HTTPException(status_code=400, detail="member not found")


def search_sacraments(
    db: Session,
    *,
    type: SacramentTypeEnum | None = None,
    member_id: int | None = None,
    search: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Sacrament], int]:
    filters = []
    if type is not None:
        filters.append(Sacrament.type == type)
    if member_id is not None:
        filters.append(Sacrament.member_id == member_id)
    if search:
        filters.append(Member.name.ilike(f"%{escape_like(search.strip())}%", escape="\\"))

    base = select(Sacrament).join(Member, Member.id == Sacrament.member_id).where(*filters)
    total = db.execute(select(func.count()).select_from(base.subquery())).scalar_one()
    rows = db.execute(
        base.options(joinedload(Sacrament.member))
        .order_by(Sacrament.date.desc(), Sacrament.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    ).scalars()
    return list(rows), int(total)


def member_sacraments(db: Session, member_id: int) -> list[Sacrament]:
    return list(
        db.execute(
            select(Sacrament)
            .options(joinedload(Sacrament.member))
            .where(Sacrament.member_id == member_id)
            .order_by(Sacrament.date.desc(), Sacrament.id.desc())
        ).scalars()
    )


def create_sacrament(db: Session, fields: dict[str, Any]) -> Sacrament:
    _require_member_reference(db, fields["member_id"])
    sacrament = Sacrament(**fields)
    db.add(sacrament)
    db.flush()
    return sacrament


def update_sacrament(db: Session, sacrament_id: int, fields: dict[str, Any]) -> Sacrament:
    sacrament = require_sacrament(db, sacrament_id)
    if fields.get("member_id") is not None:
        _require_member_reference(db, fields["member_id"])
    for field, value in fields.items():
        # type, date and member are required columns; null leaves them as is
        if value is None and field != "details":
            continue
        setattr(sacrament, field, value)
    db.flush()
    return sacrament
