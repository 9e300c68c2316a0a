from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from church_admin.core.auth import require_admin
from church_admin.core.db import get_db
from church_admin.models.entities import Member, Ministry, MinistryMember
from church_admin.schemas.common import MessageResponse
from church_admin.schemas.ministries import (
    MinistryCreate,
    MinistryListResponse,
    MinistryMemberRequest,
    MinistryMemberResponse,
    MinistryResponse,
    MinistryUpdate,
)
from church_admin.services.access import require_ministry
from church_admin.services.ministries import (
    add_ministry_member,
    assign_leader,
    delete_ministry,
    remove_ministry_member,
)

router = APIRouter(prefix="/admin/ministries", tags=["ministries"], dependencies=[Depends(require_admin)])


def _to_ministry_response(db: Session, ministry: Ministry) -> MinistryResponse:
    rows = db.execute(
        select(MinistryMember, Member)
        .join(Member, Member.id == MinistryMember.member_id)
        .where(MinistryMember.ministry_id == ministry.id)
        .order_by(MinistryMember.role.asc(), Member.name.asc())
    ).all()
    response = MinistryResponse.model_validate(ministry, from_attributes=True)
    response.members = [
        MinistryMemberResponse(
            member_id=member.id,
            name=member.name,
            email=member.email,
            phone=member.phone,
            profile_image=member.profile_image,
            role=link.role,
        )
        for link, member in rows
    ]
    return response


@router.get("", response_model=MinistryListResponse)
def list_ministries(db: Session = Depends(get_db)):
    ministries = db.execute(select(Ministry).order_by(Ministry.name.asc())).scalars().all()
    return MinistryListResponse(items=[_to_ministry_response(db, item) for item in ministries])


@router.get("/{ministry_id}", response_model=MinistryResponse)
def get_ministry(ministry_id: int, db: Session = Depends(get_db)):
    return _to_ministry_response(db, require_ministry(db, ministry_id))


@router.post("", response_model=MinistryResponse, status_code=201)
def create_ministry(payload: MinistryCreate, db: Session = Depends(get_db)):
    ministry = Ministry(**payload.model_dump())
    db.add(ministry)
    db.commit()
    db.refresh(ministry)
    return _to_ministry_response(db, ministry)


@router.put("/{ministry_id}", response_model=MinistryResponse)
def update_ministry(ministry_id: int, payload: MinistryUpdate, db: Session = Depends(get_db)):
    ministry = require_ministry(db, ministry_id)
    if payload.name is not None:
        ministry.name = payload.name
    if payload.description is not None:
        ministry.description = payload.description
    if payload.meeting_schedule is not None:
        ministry.meeting_schedule = payload.meeting_schedule
    db.commit()
    db.refresh(ministry)
    return _to_ministry_response(db, ministry)


@router.delete("/{ministry_id}", response_model=MessageResponse)
def delete_ministry_route(ministry_id: int, db: Session = Depends(get_db)):
    delete_ministry(db, ministry_id)
    db.commit()
    return MessageResponse(message="ministry deleted")


@router.post("/{ministry_id}/leader", response_model=MinistryResponse)
def assign_ministry_leader(ministry_id: int, payload: MinistryMemberRequest, db: Session = Depends(get_db)):
    assign_leader(db, ministry_id, payload.member_id)
    db.commit()
    return _to_ministry_response(db, require_ministry(db, ministry_id))


@router.post("/{ministry_id}/members", response_model=MinistryResponse, status_code=201)
def add_member(ministry_id: int, payload: MinistryMemberRequest, db: Session = Depends(get_db)):
    add_ministry_member(db, ministry_id, payload.member_id)
    db.commit()
    return _to_ministry_response(db, require_ministry(db, ministry_id))


@router.delete("/{ministry_id}/members/{member_id}", response_model=MessageResponse)
def remove_member(ministry_id: int, member_id: int, db: Session = Depends(get_db)):
    remove_ministry_member(db, ministry_id, member_id)
    db.commit()
    return MessageResponse(message="member removed from ministry")
