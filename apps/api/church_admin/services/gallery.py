from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException
from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from church_admin.models.entities import GalleryAlbum, GalleryCategory, GalleryImage
from church_admin.services.access import require_album, require_category, require_row

logger = logging.getLogger(__name__)


def require_image(db: Session, image_id: int) -> GalleryImage:
    return require_row(db, GalleryImage, image_id, "image")


def _require_category_reference(db: Session, category_id: int) -> None:
    if db.get(GalleryCategory, category_id) is None:
        raise HTTPException(status_code=400, detail="category not found")


def album_count(db: Session, category_id: int) -> int:
    return int(
        db.execute(
            select(func.count()).select_from(GalleryAlbum).where(GalleryAlbum.category_id == category_id)
        ).scalar_one()
    )


def image_count(db: Session, album_id: int) -> int:
    return int(
        db.execute(select(func.count()).select_from(GalleryImage).where(GalleryImage.album_id == album_id)).scalar_one()
    )


def album_images(db: Session, album_id: int) -> list[GalleryImage]:
    return list(
        db.execute(
            select(GalleryImage)
            .where(GalleryImage.album_id == album_id)
            .order_by(GalleryImage.created_at.asc(), GalleryImage.id.asc())
        ).scalars()
    )


def delete_category(db: Session, category_id: int) -> None:
    category = require_category(db, category_id)
    if album_count(db, category.id):
        raise HTTPException(status_code=409, detail="category still has albums")
    db.delete(category)
    db.flush()


def create_album(db: Session, fields: dict[str, Any]) -> GalleryAlbum:
    _require_category_reference(db, fields["category_id"])
    album = GalleryAlbum(**fields)
    db.add(album)
    db.flush()
    return album


def update_album(db: Session, album_id: int, fields: dict[str, Any]) -> GalleryAlbum:
    album = require_album(db, album_id)
    if fields.get("category_id") is not None:
        _require_category_reference(db, fields["category_id"])
    for field, value in fields.items():
        if value is None and field in {"title", "category_id"}:
            continue
        setattr(album, field, value)
    db.flush()
    return album


def delete_album(db: Session, album_id: int) -> None:
    album = require_album(db, album_id)
    db.execute(delete(GalleryImage).where(GalleryImage.album_id == album.id))
    db.delete(album)
    db.flush()


def add_images(db: Session, album_id: int, urls: list[str]) -> list[GalleryImage]:
    """Attach already-uploaded URLs; the first one becomes the cover if the album has none."""
    album = require_album(db, album_id)
    images = [GalleryImage(album_id=album.id, url=url) for url in urls]
    db.add_all(images)
    if not album.cover_image and urls:
        album.cover_image = urls[0]
    db.flush()
    logger.info("added %d image(s) to album %s", len(images), album.id)
    return images


def delete_image(db: Session, image_id: int) -> None:
    image = require_image(db, image_id)
    album = db.get(GalleryAlbum, image.album_id)
    url = image.url
    db.delete(image)
    db.flush()
    if album is not None and album.cover_image == url:
        replacement = db.execute(
            select(GalleryImage.url)
            .where(GalleryImage.album_id == album.id)
            .order_by(GalleryImage.created_at.asc(), GalleryImage.id.asc())
            .limit(1)
        ).scalar_one_or_none()
        album.cover_image = replacement
        db.flush()
