from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from church_admin.core.auth import require_admin
from church_admin.core.db import get_db
from church_admin.models.entities import Family, Member
from church_admin.schemas.common import MessageResponse
from church_admin.schemas.families import (
    FamilyCreate,
    FamilyDetailResponse,
    FamilyHouseSummary,
    FamilyListResponse,
    FamilyMemberAssign,
    FamilyMemberSummary,
    FamilyResponse,
    FamilyUpdate,
    RelatedFamilyLink,
    RelatedFamilySummary,
)
from church_admin.schemas.members import MemberListResponse, MemberResponse
from church_admin.services.access import require_family
from church_admin.services.household import (
    assign_members_batch,
    delete_family,
    family_houses,
    family_members,
    link_related_families,
    related_families,
    unlink_related_families,
)

router = APIRouter(prefix="/admin/families", tags=["families"], dependencies=[Depends(require_admin)])


def _member_summaries(members: list[Member]) -> list[FamilyMemberSummary]:
    return [FamilyMemberSummary.model_validate(item, from_attributes=True) for item in members]


def _to_family_response(db: Session, family: Family) -> FamilyResponse:
    response = FamilyResponse.model_validate(family, from_attributes=True)
    response.members = _member_summaries(family_members(db, family.id))
    return response


def _to_family_detail(db: Session, family: Family) -> FamilyDetailResponse:
    return FamilyDetailResponse(
        **_to_family_response(db, family).model_dump(),
        houses=[FamilyHouseSummary.model_validate(item, from_attributes=True) for item in family_houses(db, family.id)],
        related_families=[
            RelatedFamilySummary.model_validate(item, from_attributes=True) for item in related_families(db, family.id)
        ],
    )


@router.get("", response_model=FamilyListResponse)
def list_families(db: Session = Depends(get_db)):
    families = db.execute(select(Family).order_by(Family.created_at.desc(), Family.id.desc())).scalars().all()
    return FamilyListResponse(items=[_to_family_response(db, item) for item in families])


@router.post("", response_model=FamilyResponse, status_code=201)
def create_family(payload: FamilyCreate, db: Session = Depends(get_db)):
    family = Family(**payload.model_dump())
    db.add(family)
    db.commit()
    db.refresh(family)
    return _to_family_response(db, family)


@router.get("/{family_id}", response_model=FamilyDetailResponse)
def get_family(family_id: int, db: Session = Depends(get_db)):
    family = require_family(db, family_id)
    return _to_family_detail(db, family)


@router.put("/{family_id}", response_model=FamilyResponse)
def update_family(family_id: int, payload: FamilyUpdate, db: Session = Depends(get_db)):
    family = require_family(db, family_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if key == "name" and value is None:
            raise HTTPException(status_code=400, detail="family name cannot be empty")
        setattr(family, key, value)
    db.commit()
    db.refresh(family)
    return _to_family_response(db, family)


@router.delete("/{family_id}", response_model=MessageResponse)
def delete_family_route(family_id: int, db: Session = Depends(get_db)):
    delete_family(db, family_id)
    db.commit()
    return MessageResponse(message="family deleted")


@router.post("/{family_id}/related", response_model=FamilyDetailResponse, status_code=201)
def add_related_family(family_id: int, payload: RelatedFamilyLink, db: Session = Depends(get_db)):
    link_related_families(db, family_id, payload.related_family_id)
    db.commit()
    return _to_family_detail(db, require_family(db, family_id))


@router.delete("/{family_id}/related/{related_family_id}", response_model=MessageResponse)
def remove_related_family(family_id: int, related_family_id: int, db: Session = Depends(get_db)):
    unlink_related_families(db, family_id, related_family_id)
    db.commit()
    return MessageResponse(message="relation removed")


@router.post("/{family_id}/members", response_model=MemberListResponse)
def assign_family_members(family_id: int, payload: FamilyMemberAssign, db: Session = Depends(get_db)):
    """All-or-nothing: one invalid member or house rejects the whole batch."""
    try:
        members = assign_members_batch(db, family_id, payload.member_ids, payload.house_id, payload.family_role)
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    return MemberListResponse(items=[MemberResponse.model_validate(item, from_attributes=True) for item in members])
