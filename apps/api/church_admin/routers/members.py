from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from church_admin.core.auth import require_admin
from church_admin.core.db import get_db
from church_admin.models.entities import Member, Ministry, MinistryMember, Sacrament, User
from church_admin.schemas.common import BulkIdsRequest, MessageResponse, PageMeta
from church_admin.schemas.members import (
    MemberCreate,
    MemberDetailResponse,
    MemberFamilyAssign,
    MemberFamilyRoleUpdate,
    MemberListResponse,
    MemberMinistrySummary,
    MemberPageResponse,
    MemberResponse,
    MemberSacramentSummary,
    MemberSetHead,
    MemberUpdate,
    MemberUserSummary,
)
from church_admin.services.access import require_family, require_member
from church_admin.services.household import (
    assign_member,
    change_family_role,
    family_members,
    remove_member,
    set_head_of_family,
)
from church_admin.services.members import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    approve_member,
    create_member,
    deactivate_member,
    deactivate_members,
    page_count,
    search_members,
    update_member,
)

router = APIRouter(prefix="/admin/members", tags=["members"], dependencies=[Depends(require_admin)])


def _to_member_response(member: Member) -> MemberResponse:
    return MemberResponse.model_validate(member, from_attributes=True)


def _to_member_detail(db: Session, member: Member) -> MemberDetailResponse:
    sacraments = db.execute(
        select(Sacrament).where(Sacrament.member_id == member.id).order_by(Sacrament.date.desc())
    ).scalars().all()
    ministries = db.execute(
        select(MinistryMember, Ministry)
        .join(Ministry, Ministry.id == MinistryMember.ministry_id)
        .where(MinistryMember.member_id == member.id)
        .order_by(Ministry.name.asc())
    ).all()
    user = db.execute(select(User).where(User.member_id == member.id)).scalar_one_or_none()
    return MemberDetailResponse(
        **_to_member_response(member).model_dump(),
        sacraments=[MemberSacramentSummary.model_validate(item, from_attributes=True) for item in sacraments],
        ministries=[
            MemberMinistrySummary(ministry_id=ministry.id, name=ministry.name, role=link.role)
            for link, ministry in ministries
        ],
        user=MemberUserSummary.model_validate(user, from_attributes=True) if user is not None else None,
    )


@router.get("", response_model=MemberPageResponse)
def list_members(
    search: str | None = Query(default=None),
    status: str = Query(default="ALL", pattern="^(ALL|ACTIVE|PENDING_APPROVAL|INACTIVE)$"),
    family_id: int | None = Query(default=None),
    sort_by: str = Query(default="created_at"),
    sort_order: str = Query(default="desc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db: Session = Depends(get_db),
):
    members, total = search_members(
        db,
        search=search,
        status=status,
        family_id=family_id,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return MemberPageResponse(
        items=[_to_member_response(item) for item in members],
        meta=PageMeta(total=total, page=page, limit=limit, pages=page_count(total, limit)),
    )


@router.get("/family/{family_id}", response_model=MemberListResponse)
def list_family_members(family_id: int, db: Session = Depends(get_db)):
    require_family(db, family_id)
    return MemberListResponse(items=[_to_member_response(item) for item in family_members(db, family_id)])


@router.post("/delete-bulk", response_model=MessageResponse)
def bulk_delete_members(payload: BulkIdsRequest, db: Session = Depends(get_db)):
    count = deactivate_members(db, payload.ids)
    db.commit()
    return MessageResponse(message=f"{count} member(s) deactivated")


@router.get("/{member_id}", response_model=MemberDetailResponse)
def get_member(member_id: int, db: Session = Depends(get_db)):
    return _to_member_detail(db, require_member(db, member_id))


@router.post("", response_model=MemberResponse, status_code=201)
def create_member_route(payload: MemberCreate, db: Session = Depends(get_db)):
    member = create_member(db, payload.model_dump())
    db.commit()
    db.refresh(member)
    return _to_member_response(member)


@router.put("/{member_id}", response_model=MemberResponse)
def update_member_route(member_id: int, payload: MemberUpdate, db: Session = Depends(get_db)):
    member = update_member(db, member_id, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(member)
    return _to_member_response(member)


@router.delete("/{member_id}", response_model=MessageResponse)
def delete_member(member_id: int, db: Session = Depends(get_db)):
    deactivate_member(db, member_id)
    db.commit()
    return MessageResponse(message="member deactivated")


@router.post("/{member_id}/approve", response_model=MemberResponse)
def approve_member_route(member_id: int, db: Session = Depends(get_db)):
    member = approve_member(db, member_id)
    db.commit()
    db.refresh(member)
    return _to_member_response(member)


@router.post("/{member_id}/family", response_model=MemberResponse)
def assign_member_to_family(member_id: int, payload: MemberFamilyAssign, db: Session = Depends(get_db)):
    member = assign_member(db, member_id, payload.family_id, payload.house_id, payload.family_role)
    db.commit()
    db.refresh(member)
    return _to_member_response(member)


@router.delete("/{member_id}/family", response_model=MemberResponse)
def remove_member_from_family(member_id: int, db: Session = Depends(get_db)):
    member = remove_member(db, member_id)
    db.commit()
    db.refresh(member)
    return _to_member_response(member)


@router.put("/{member_id}/family-role", response_model=MemberResponse)
def update_family_role(member_id: int, payload: MemberFamilyRoleUpdate, db: Session = Depends(get_db)):
    member = change_family_role(db, member_id, payload.family_role)
    db.commit()
    db.refresh(member)
    return _to_member_response(member)


@router.post("/{member_id}/set-head", response_model=MemberResponse)
def set_head(member_id: int, payload: MemberSetHead, db: Session = Depends(get_db)):
    member = set_head_of_family(db, member_id, payload.family_id)
    db.commit()
    db.refresh(member)
    return _to_member_response(member)
