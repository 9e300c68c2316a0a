from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from church_admin.core.auth import AuthContext, require_admin, require_auth
from church_admin.core.db import get_db
from church_admin.models.entities import Member, User
from church_admin.schemas.common import BulkIdsRequest, MessageResponse
from church_admin.schemas.members import MemberResponse
from church_admin.schemas.users import (
    ProfileResponse,
    ProfileUpdate,
    UserCreate,
    UserListResponse,
    UserResponse,
    UserUpdate,
)
from church_admin.services.access import require_user
from church_admin.services.users import (
    create_user,
    delete_user,
    delete_users,
    search_users,
    update_profile,
    update_user,
)

router = APIRouter(prefix="/users", tags=["users"])


def to_user_response(user: User) -> UserResponse:
    member = user.member
    return UserResponse(
        id=user.id,
        email=user.email,
        username=user.username,
        role=user.role,
        member_id=user.member_id,
        member_name=member.name if member is not None else None,
        profile_image=member.profile_image if member is not None else None,
        created_at=user.created_at,
    )


def _to_profile_response(db: Session, user: User) -> ProfileResponse:
    member = db.get(Member, user.member_id) if user.member_id is not None else None
    return ProfileResponse(
        **to_user_response(user).model_dump(),
        member=MemberResponse.model_validate(member, from_attributes=True) if member is not None else None,
    )


def _commit_or_conflict(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="user already exists")


@router.get("/profile", response_model=ProfileResponse)
def get_profile(db: Session = Depends(get_db), ctx: AuthContext = Depends(require_auth)):
    return _to_profile_response(db, require_user(db, ctx.user_id))


@router.put("/profile", response_model=ProfileResponse)
def update_own_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    user = update_profile(db, ctx.user_id, payload.model_dump(exclude_unset=True))
    _commit_or_conflict(db)
    db.refresh(user)
    return _to_profile_response(db, user)


@router.get("", response_model=UserListResponse, dependencies=[Depends(require_admin)])
def list_users(
    search: str | None = None,
    sort: str | None = None,
    order: str = Query(default="desc", pattern="^(asc|desc)$"),
    db: Session = Depends(get_db),
):
    return UserListResponse(items=[to_user_response(user) for user in search_users(db, search=search, sort=sort, order=order)])


@router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(require_admin)])
def get_user(user_id: int, db: Session = Depends(get_db)):
    return to_user_response(require_user(db, user_id))


@router.post("", response_model=UserResponse, status_code=201, dependencies=[Depends(require_admin)])
def create_user_route(payload: UserCreate, db: Session = Depends(get_db)):
    user = create_user(db, payload.model_dump())
    _commit_or_conflict(db)
    db.refresh(user)
    return to_user_response(user)


@router.put("/{user_id}", response_model=UserResponse, dependencies=[Depends(require_admin)])
def update_user_route(user_id: int, payload: UserUpdate, db: Session = Depends(get_db)):
    user = update_user(db, user_id, payload.model_dump(exclude_unset=True))
    _commit_or_conflict(db)
    db.refresh(user)
    return to_user_response(user)


@router.delete("/{user_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
def delete_user_route(user_id: int, db: Session = Depends(get_db)):
    delete_user(db, user_id)
    db.commit()
    return MessageResponse(message="user deleted")


@router.post("/delete-bulk", response_model=MessageResponse, dependencies=[Depends(require_admin)])
def bulk_delete_users(payload: BulkIdsRequest, db: Session = Depends(get_db)):
    count = delete_users(db, payload.ids)
    db.commit()
    return MessageResponse(message=f"{count} user(s) deleted")
