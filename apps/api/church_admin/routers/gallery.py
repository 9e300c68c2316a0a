from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from church_admin.core.auth import require_admin
from church_admin.core.db import get_db
from church_admin.models.entities import GalleryAlbum, GalleryCategory
from church_admin.schemas.common import MessageResponse
from church_admin.schemas.gallery import (
    AddImagesRequest,
    AlbumCreate,
    AlbumDetailResponse,
    AlbumListResponse,
    AlbumResponse,
    AlbumUpdate,
    CategoryCreate,
    CategoryListResponse,
    CategoryResponse,
    ImageResponse,
)
from church_admin.services.access import require_album, require_category
from church_admin.services.gallery import (
    add_images,
    album_count,
    album_images,
    create_album,
    delete_album,
    delete_category,
    delete_image,
    image_count,
    update_album,
)

router = APIRouter(prefix="/admin/gallery", tags=["gallery"], dependencies=[Depends(require_admin)])


def _to_category_response(db: Session, category: GalleryCategory) -> CategoryResponse:
    return CategoryResponse(id=category.id, name=category.name, album_count=album_count(db, category.id))


def _to_album_response(db: Session, album: GalleryAlbum) -> AlbumResponse:
    response = AlbumResponse.model_validate(album, from_attributes=True)
    category = db.get(GalleryCategory, album.category_id)
    response.category_name = category.name if category is not None else None
    response.image_count = image_count(db, album.id)
    return response


def _to_album_detail(db: Session, album: GalleryAlbum) -> AlbumDetailResponse:
    base = _to_album_response(db, album)
    return AlbumDetailResponse(
        **base.model_dump(),
        images=[ImageResponse.model_validate(item, from_attributes=True) for item in album_images(db, album.id)],
    )


@router.get("/categories", response_model=CategoryListResponse)
def list_categories(db: Session = Depends(get_db)):
    categories = db.execute(select(GalleryCategory).order_by(GalleryCategory.name.asc())).scalars().all()
    return CategoryListResponse(items=[_to_category_response(db, item) for item in categories])


@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    category = GalleryCategory(name=payload.name.strip())
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="category already exists")
    db.refresh(category)
    return _to_category_response(db, category)


@router.put("/categories/{category_id}", response_model=CategoryResponse)
def update_category(category_id: int, payload: CategoryCreate, db: Session = Depends(get_db)):
    category = require_category(db, category_id)
    category.name = payload.name.strip()
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="category already exists")
    db.refresh(category)
    return _to_category_response(db, category)


@router.delete("/categories/{category_id}", response_model=MessageResponse)
def delete_category_route(category_id: int, db: Session = Depends(get_db)):
    delete_category(db, category_id)
    db.commit()
    return MessageResponse(message="category deleted")


@router.get("/albums", response_model=AlbumListResponse)
def list_albums(category_id: int | None = None, db: Session = Depends(get_db)):
    stmt = select(GalleryAlbum)
    if category_id is not None:
        stmt = stmt.where(GalleryAlbum.category_id == category_id)
    albums = db.execute(stmt.order_by(GalleryAlbum.created_at.desc(), GalleryAlbum.id.desc())).scalars().all()
    return AlbumListResponse(items=[_to_album_response(db, item) for item in albums])


@router.get("/albums/{album_id}", response_model=AlbumDetailResponse)
def get_album(album_id: int, db: Session = Depends(get_db)):
    return _to_album_detail(db, require_album(db, album_id))


@router.post("/albums", response_model=AlbumResponse, status_code=201)
def create_album_route(payload: AlbumCreate, db: Session = Depends(get_db)):
    album = create_album(db, payload.model_dump())
    db.commit()
    db.refresh(album)
    return _to_album_response(db, album)


@router.put("/albums/{album_id}", response_model=AlbumResponse)
def update_album_route(album_id: int, payload: AlbumUpdate, db: Session = Depends(get_db)):
    album = update_album(db, album_id, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(album)
    return _to_album_response(db, album)


@router.delete("/albums/{album_id}", response_model=MessageResponse)
def delete_album_route(album_id: int, db: Session = Depends(get_db)):
    delete_album(db, album_id)
    db.commit()
    return MessageResponse(message="album deleted")


@router.post("/albums/{album_id}/images", response_model=AlbumDetailResponse, status_code=201)
def add_album_images(album_id: int, payload: AddImagesRequest, db: Session = Depends(get_db)):
    add_images(db, album_id, payload.urls)
    db.commit()
    return _to_album_detail(db, require_album(db, album_id))


@router.delete("/images/{image_id}", response_model=MessageResponse)
def delete_image_route(image_id: int, db: Session = Depends(get_db)):
    delete_image(db, image_id)
    db.commit()
    return MessageResponse(message="image deleted")
