from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException
from sqlalchemy import delete, or_, select
from sqlalchemy.orm import Session, joinedload

from church_admin.core.security import hash_password, verify_password
from church_admin.models.entities import (
    DeviceToken,
    EventRegistration,
    Member,
    Notification,
    PrayerRequest,
    User,
    UserRoleEnum,
)
from church_admin.services.access import require_user
from church_admin.services.members import escape_like

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "email": User.email,
    "username": User.username,
    "role": User.role,
    "created_at": User.created_at,
    "name": Member.name,
}


def search_users(
    db: Session,
    *,
    search: str | None = None,
    sort: str | None = None,
    order: str = "desc",
) -> list[User]:
    sort = sort or "created_at"
    if sort not in SORT_COLUMNS:
        raise HTTPException(status_code=400, detail=f"cannot sort users by {sort}")
    column = SORT_COLUMNS[sort]
    ordering = column.asc() if order == "asc" else column.desc()

    stmt = select(User).outerjoin(Member, Member.id == User.member_id).options(joinedload(User.member))
    if search and search.strip():
        pattern = f"%{escape_like(search.strip())}%"
        stmt = stmt.where(or_(User.email.ilike(pattern, escape="\\"), Member.name.ilike(pattern, escape="\\")))
    return list(db.execute(stmt.order_by(ordering.nulls_last(), User.id.asc())).scalars())


def _check_unique(db: Session, *, email: str | None, username: str | None, exclude_id: int | None = None) -> None:
    if email is not None:
        stmt = select(User.id).where(User.email == email)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        if db.execute(stmt).first() is not None:
            raise HTTPException(status_code=409, detail="email already in use")
    if username is not None:
        stmt = select(User.id).where(User.username == username)
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        if db.execute(stmt).first() is not None:
            raise HTTPException(status_code=409, detail="username already in use")


def _check_member_link(db: Session, member_id: int, exclude_id: int | None = None) -> None:
    if db.get(Member, member_id) is None:
        raise HTTPException(status_code=400, detail="member not found")
    stmt = select(User.id).where(User.member_id == member_id)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    if db.execute(stmt).first() is not None:
        raise HTTPException(status_code=409, detail="member already has a user account")


def create_user(db: Session, fields: dict[str, Any]) -> User:
    fields = dict(fields)
    _check_unique(db, email=fields["email"], username=fields.get("username"))
    if fields.get("member_id") is not None:
        _check_member_link(db, fields["member_id"])
    password = fields.pop("password")
    user = User(**fields, password_hash=hash_password(password))
    db.add(user)
    db.flush()
    logger.info("created user %s with role %s", user.id, user.role.value)
    return user


def register_user(db: Session, email: str, password: str) -> User:
    return create_user(db, {"email": email, "password": password, "role": UserRoleEnum.member})


def update_user(db: Session, user_id: int, fields: dict[str, Any]) -> User:
    user = require_user(db, user_id)
    _check_unique(db, email=fields.get("email"), username=fields.get("username"), exclude_id=user.id)
    if fields.get("member_id") is not None:
        _check_member_link(db, fields["member_id"], exclude_id=user.id)

    password = fields.pop("password", None)
    if password:
        user.password_hash = hash_password(password)
    for field, value in fields.items():
        if value is None and field in {"email", "role"}:
            continue
        setattr(user, field, value)
    db.flush()
    return user


def update_profile(db: Session, user_id: int, fields: dict[str, Any]) -> User:
    user = require_user(db, user_id)
    if "username" in fields:
        _check_unique(db, email=None, username=fields["username"], exclude_id=user.id)
        user.username = fields.pop("username")
    member = db.get(Member, user.member_id) if user.member_id is not None else None
    if fields and member is None:
        raise HTTPException(status_code=400, detail="no member profile linked to this user")
    for field, value in fields.items():
        if value is None and field == "name":
            continue
        setattr(member, field, value)
    db.flush()
    return user


def delete_users(db: Session, user_ids: list[int]) -> int:
    ids = set(user_ids)
    for model in (Notification, DeviceToken, EventRegistration, PrayerRequest):
        db.execute(delete(model).where(model.user_id.in_(ids)))
    result = db.execute(delete(User).where(User.id.in_(ids)))
    db.flush()
    logger.info("deleted %d user(s)", result.rowcount or 0)
    return result.rowcount or 0


def delete_user(db: Session, user_id: int) -> None:
    require_user(db, user_id)
    delete_users(db, [user_id])


def authenticate(db: Session, identifier: str, password: str) -> User | None:
    user = db.execute(select(User).where(User.email == identifier)).scalar_one_or_none()
    if user is None:
        user = db.execute(select(User).where(User.username == identifier)).scalar_one_or_none()
    if user is None or not verify_password(password, user.password_hash):
        logger.info("failed login for %s", identifier)
        return None
    return user
