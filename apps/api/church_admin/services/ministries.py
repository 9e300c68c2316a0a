from __future__ import annotations

import logging

from fastapi import HTTPException
from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from church_admin.models.entities import Member, MinistryMember, MinistryRoleEnum
from church_admin.services.access import require_ministry

logger = logging.getLogger(__name__)


def _membership(db: Session, ministry_id: int, member_id: int) -> MinistryMember | None:
    return db.execute(
        select(MinistryMember).where(MinistryMember.ministry_id == ministry_id, MinistryMember.member_id == member_id)
    ).scalar_one_or_none()


def _require_member_reference(db: Session, member_id: int) -> None:
    if db.get(Member, member_id) is None:
        raise HTTPException(status_code=400, detail="member not found")


def add_ministry_member(db: Session, ministry_id: int, member_id: int) -> MinistryMember:
    require_ministry(db, ministry_id)
    _require_member_reference(db, member_id)
    if _membership(db, ministry_id, member_id) is not None:
        raise HTTPException(status_code=409, detail="member already belongs to this ministry")
    link = MinistryMember(ministry_id=ministry_id, member_id=member_id, role=MinistryRoleEnum.member)
    db.add(link)
    db.flush()
    return link


def remove_ministry_member(db: Session, ministry_id: int, member_id: int) -> None:
    require_ministry(db, ministry_id)
    link = _membership(db, ministry_id, member_id)
    if link is None:
        raise HTTPException(status_code=404, detail="member not found in this ministry")
    db.delete(link)
    db.flush()


def assign_leader(db: Session, ministry_id: int, member_id: int) -> MinistryMember:
    """A ministry has at most one LEADER; everyone else is demoted to MEMBER."""
    require_ministry(db, ministry_id)
    _require_member_reference(db, member_id)

    db.execute(
        update(MinistryMember)
        .where(MinistryMember.ministry_id == ministry_id, MinistryMember.member_id != member_id)
        .values(role=MinistryRoleEnum.member)
    )
    link = _membership(db, ministry_id, member_id)
    if link is None:
        link = MinistryMember(ministry_id=ministry_id, member_id=member_id, role=MinistryRoleEnum.leader)
        db.add(link)
    else:
        link.role = MinistryRoleEnum.leader
    db.flush()
    logger.info("member %s is now leader of ministry %s", member_id, ministry_id)
    return link


def delete_ministry(db: Session, ministry_id: int) -> None:
    ministry = require_ministry(db, ministry_id)
    db.execute(delete(MinistryMember).where(MinistryMember.ministry_id == ministry.id))
    db.delete(ministry)
    db.flush()
