from __future__ import annotations

from typing import TypeVar

from fastapi import HTTPException
from sqlalchemy.orm import Session

from church_admin.models.base import Base
from church_admin.models.entities import (
    Event,
    Family,
    GalleryAlbum,
    GalleryCategory,
    House,
    Member,
    Ministry,
    User,
)

ModelT = TypeVar("ModelT", bound=Base)


def require_row(db: Session, model: type[ModelT], row_id: int, label: str) -> ModelT:
    row = db.get(model, row_id)
    if row is None:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return row


def require_family(db: Session, family_id: int) -> Family:
    return require_row(db, Family, family_id, "family")


def require_house(db: Session, house_id: int) -> House:
    return require_row(db, House, house_id, "house")


def require_member(db: Session, member_id: int) -> Member:
    return require_row(db, Member, member_id, "member")


def require_user(db: Session, user_id: int) -> User:
    return require_row(db, User, user_id, "user")


def require_ministry(db: Session, ministry_id: int) -> Ministry:
    return require_row(db, Ministry, ministry_id, "ministry")


def require_event(db: Session, event_id: int) -> Event:
    return require_row(db, Event, event_id, "event")


def require_category(db: Session, category_id: int) -> GalleryCategory:
    return require_row(db, GalleryCategory, category_id, "category")


def require_album(db: Session, album_id: int) -> GalleryAlbum:
    return require_row(db, GalleryAlbum, album_id, "album")
