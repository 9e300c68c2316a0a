"""
Family -> House -> Member containment rules.

A member may sit directly under a family or inside one of that family's
houses. Every mutation here keeps `member.house_id` pointing at a house of
`member.family_id` (or None). Nothing in this module commits; callers own
the transaction.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException
from sqlalchemy import and_, delete, insert, or_, select, update
from sqlalchemy.orm import Session

from church_admin.models.entities import (
    Family,
    FamilyRoleEnum,
    House,
    Member,
    MemberStatusEnum,
    family_relations,
)
from church_admin.services.access import require_family, require_house, require_member

logger = logging.getLogger(__name__)


def validate_placement(db: Session, family_id: int | None, house_id: int | None) -> None:
    if family_id is not None and db.get(Family, family_id) is None:
        raise HTTPException(status_code=400, detail="family not found")
    if house_id is None:
        return
    if family_id is None:
        raise HTTPException(status_code=400, detail="house_id requires family_id")
    house = db.get(House, house_id)
    if house is None:
        raise HTTPException(status_code=400, detail="house not found")
    if house.family_id != family_id:
        raise HTTPException(status_code=400, detail="house does not belong to family")


def _release_house_headship(db: Session, member_id: int, keep_house_id: int | None = None) -> None:
    stmt = update(House).where(House.head_member_id == member_id)
    if keep_house_id is not None:
        stmt = stmt.where(House.id != keep_house_id)
    db.execute(stmt.values(head_member_id=None))


def place_member(db: Session, member: Member, family_id: int | None, house_id: int | None) -> Member:
    """Set both references at once; the only writer of family_id/house_id."""
    validate_placement(db, family_id, house_id)

    if member.family_id != family_id:
        # Policy: a spouse link does not survive a move to another family.
        member.spouse_id = None
        member.head_of_family = False
    if member.house_id != house_id:
        _release_house_headship(db, member.id, keep_house_id=house_id)

    member.family_id = family_id
    member.house_id = house_id
    return member


def assign_member(
    db: Session,
    member_id: int,
    family_id: int,
    house_id: int | None = None,
    family_role: FamilyRoleEnum | None = None,
) -> Member:
    member = require_member(db, member_id)
    previous_family_id = member.family_id
    if house_id is None and member.family_id == family_id:
        house_id = member.house_id

    place_member(db, member, family_id, house_id)
    if family_role is not None:
        member.family_role = family_role
    db.flush()
    logger.info(
        "member %s assigned to family %s (house=%s, previous family=%s)",
        member.id,
        family_id,
        house_id,
        previous_family_id,
    )
    return member


def assign_members_batch(
    db: Session,
    family_id: int,
    member_ids: list[int],
    house_id: int | None = None,
    family_role: FamilyRoleEnum | None = None,
) -> list[Member]:
    require_family(db, family_id)
    members: list[Member] = []
    for member_id in dict.fromkeys(member_ids):
        members.append(assign_member(db, member_id, family_id, house_id, family_role))
    return members


def remove_member(db: Session, member_id: int) -> Member:
    member = require_member(db, member_id)
    previous_family_id = member.family_id
    place_member(db, member, None, None)
    member.family_role = None
    member.head_of_family = False
    db.flush()
    logger.info("member %s removed from family %s", member.id, previous_family_id)
    return member


def change_family_role(db: Session, member_id: int, role: FamilyRoleEnum) -> Member:
    member = require_member(db, member_id)
    if member.family_id is None:
        raise HTTPException(status_code=400, detail="member is not assigned to a family")
    # HEAD may repeat; the per-family marker is head_of_family.
    member.family_role = role
    db.flush()
    return member


def _mark_head_of_family(db: Session, member: Member, family_id: int) -> None:
    db.execute(
        update(Member)
        .where(Member.family_id == family_id, Member.id != member.id)
        .values(head_of_family=False)
    )
    member.head_of_family = True


def set_head_of_family(db: Session, member_id: int, family_id: int) -> Member:
    member = require_member(db, member_id)
    if db.get(Family, family_id) is None:
        raise HTTPException(status_code=400, detail="family not found")
    if member.family_id != family_id:
        raise HTTPException(status_code=400, detail="member does not belong to family")

    _mark_head_of_family(db, member, family_id)
    db.flush()
    logger.info("member %s set as head of family %s", member.id, family_id)
    return member


def create_house(
    db: Session,
    family_id: int,
    name: str,
    head_member_id: int | None = None,
    head_member_data: dict[str, Any] | None = None,
) -> House:
    if db.get(Family, family_id) is None:
        raise HTTPException(status_code=400, detail="family not found")
    house = House(family_id=family_id, name=name)
    db.add(house)
    db.flush()

    head: Member | None = None
    if head_member_id is not None:
        if db.get(Member, head_member_id) is None:
            raise HTTPException(status_code=400, detail="head member not found")
        head = assign_member(db, head_member_id, family_id, house.id, FamilyRoleEnum.head)
    elif head_member_data:
        head = Member(
            **head_member_data,
            family_id=family_id,
            house_id=house.id,
            family_role=FamilyRoleEnum.head,
            status=MemberStatusEnum.active,
        )
        db.add(head)
        db.flush()

    if head is not None:
        _mark_head_of_family(db, head, family_id)
        house.head_member_id = head.id
        db.flush()
    logger.info("house %s created in family %s (head=%s)", house.id, family_id, house.head_member_id)
    return house


def delete_house(db: Session, house_id: int) -> None:
    house = require_house(db, house_id)
    result = db.execute(
        update(Member)
        .where(Member.house_id == house.id)
        .values(house_id=None, head_of_family=False)
    )
    db.delete(house)
    db.flush()
    logger.info("house %s deleted; %s member(s) detached", house_id, result.rowcount)


def delete_family(db: Session, family_id: int) -> None:
    family = require_family(db, family_id)
    result = db.execute(
        update(Member)
        .where(Member.family_id == family.id)
        .values(family_id=None, house_id=None, family_role=None, head_of_family=False, spouse_id=None)
    )
    db.execute(delete(House).where(House.family_id == family.id))
    db.execute(
        delete(family_relations).where(
            or_(
                family_relations.c.family_id == family.id,
                family_relations.c.related_family_id == family.id,
            )
        )
    )
    db.delete(family)
    db.flush()
    logger.info("family %s deleted; %s member(s) unassigned", family_id, result.rowcount)


def _relation_clause(family_id: int, related_family_id: int):
    return or_(
        and_(
            family_relations.c.family_id == family_id,
            family_relations.c.related_family_id == related_family_id,
        ),
        and_(
            family_relations.c.family_id == related_family_id,
            family_relations.c.related_family_id == family_id,
        ),
    )


def link_related_families(db: Session, family_id: int, related_family_id: int) -> None:
    if family_id == related_family_id:
        raise HTTPException(status_code=400, detail="a family cannot be related to itself")
    require_family(db, family_id)
    require_family(db, related_family_id)

    existing = db.execute(
        select(family_relations.c.family_id).where(_relation_clause(family_id, related_family_id)).limit(1)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="families are already related")

    db.execute(insert(family_relations).values(family_id=family_id, related_family_id=related_family_id))
    db.flush()
    logger.info("families %s and %s linked", family_id, related_family_id)


def unlink_related_families(db: Session, family_id: int, related_family_id: int) -> None:
    require_family(db, family_id)
    require_family(db, related_family_id)
    result = db.execute(delete(family_relations).where(_relation_clause(family_id, related_family_id)))
    if result.rowcount == 0:
        raise HTTPException(status_code=404, detail="families are not related")
    db.flush()
    logger.info("families %s and %s unlinked", family_id, related_family_id)


def related_families(db: Session, family_id: int) -> list[Family]:
    forward = select(family_relations.c.related_family_id).where(family_relations.c.family_id == family_id)
    backward = select(family_relations.c.family_id).where(family_relations.c.related_family_id == family_id)
    return list(
        db.execute(
            select(Family).where(or_(Family.id.in_(forward), Family.id.in_(backward))).order_by(Family.id.asc())
        ).scalars()
    )


def family_members(db: Session, family_id: int) -> list[Member]:
    return list(
        db.execute(select(Member).where(Member.family_id == family_id).order_by(Member.id.asc())).scalars()
    )


def family_houses(db: Session, family_id: int) -> list[House]:
    return list(db.execute(select(House).where(House.family_id == family_id).order_by(House.id.asc())).scalars())


def house_members(db: Session, house_id: int) -> list[Member]:
    return list(db.execute(select(Member).where(Member.house_id == house_id).order_by(Member.id.asc())).scalars())
