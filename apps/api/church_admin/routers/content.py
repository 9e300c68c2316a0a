from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from church_admin.core.auth import require_admin
from church_admin.core.db import get_db
from church_admin.models.entities import Content
from church_admin.schemas.common import MessageResponse
from church_admin.schemas.content import ContentCreate, ContentListResponse, ContentResponse, ContentUpdate

router = APIRouter(prefix="/admin/content", tags=["content"], dependencies=[Depends(require_admin)])


def _content_type(raw: str) -> str:
    # Types are free-form slugs ("news", "sermon", ...) stored upper-case.
    value = raw.strip().upper()
    if not value:
        raise HTTPException(status_code=400, detail="content type is required")
    return value


def _get_content_or_404(db: Session, content_type: str, content_id: int) -> Content:
    item = db.get(Content, content_id)
    if item is None or item.type != _content_type(content_type):
        raise HTTPException(status_code=404, detail="content not found")
    return item


@router.get("/{content_type}", response_model=ContentListResponse)
def list_content(content_type: str, db: Session = Depends(get_db)):
    items = (
        db.execute(
            select(Content)
            .where(Content.type == _content_type(content_type))
            .order_by(Content.date.desc(), Content.id.desc())
        )
        .scalars()
        .all()
    )
    return ContentListResponse(items=[ContentResponse.model_validate(item, from_attributes=True) for item in items])


@router.post("/{content_type}", response_model=ContentResponse, status_code=201)
def create_content(content_type: str, payload: ContentCreate, db: Session = Depends(get_db)):
    fields = payload.model_dump(exclude_none=True)
    item = Content(type=_content_type(content_type), **fields)
    db.add(item)
    db.commit()
    db.refresh(item)
    return ContentResponse.model_validate(item, from_attributes=True)


@router.put("/{content_type}/{content_id}", response_model=ContentResponse)
def update_content(content_type: str, content_id: int, payload: ContentUpdate, db: Session = Depends(get_db)):
    item = _get_content_or_404(db, content_type, content_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in {"title", "date"}:
            continue
        setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return ContentResponse.model_validate(item, from_attributes=True)


@router.delete("/{content_type}/{content_id}", response_model=MessageResponse)
def delete_content(content_type: str, content_id: int, db: Session = Depends(get_db)):
    db.delete(_get_content_or_404(db, content_type, content_id))
    db.commit()
    return MessageResponse(message="content deleted")
