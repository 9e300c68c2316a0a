from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from church_admin.core.auth import require_admin
from church_admin.core.db import get_db
from church_admin.models.entities import Sacrament, SacramentTypeEnum
from church_admin.schemas.common import MessageResponse, PageMeta
from church_admin.schemas.sacraments import (
    SacramentCreate,
    SacramentListResponse,
    SacramentPageResponse,
    SacramentResponse,
    SacramentUpdate,
)
from church_admin.services.access import require_member
from church_admin.services.members import page_count
from church_admin.services.sacraments import (
    create_sacrament,
    member_sacraments,
    require_sacrament,
    search_sacraments,
    update_sacrament,
)

router = APIRouter(prefix="/admin/sacraments", tags=["sacraments"], dependencies=[Depends(require_admin)])


def _to_sacrament_response(sacrament: Sacrament) -> SacramentResponse:
    return SacramentResponse.model_validate(sacrament, from_attributes=True)


@router.get("", response_model=SacramentPageResponse)
def list_sacraments(
    type: SacramentTypeEnum | None = None,
    member_id: int | None = None,
    search: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    items, total = search_sacraments(db, type=type, member_id=member_id, search=search, page=page, limit=limit)
    return SacramentPageResponse(
        items=[_to_sacrament_response(item) for item in items],
        meta=PageMeta(total=total, page=page, limit=limit, pages=page_count(total, limit)),
    )


@router.get("/member/{member_id}", response_model=SacramentListResponse)
def list_member_sacraments(member_id: int, db: Session = Depends(get_db)):
    require_member(db, member_id)
    return SacramentListResponse(items=[_to_sacrament_response(item) for item in member_sacraments(db, member_id)])


@router.get("/{sacrament_id}", response_model=SacramentResponse)
def get_sacrament(sacrament_id: int, db: Session = Depends(get_db)):
    return _to_sacrament_response(require_sacrament(db, sacrament_id))


@router.post("", response_model=SacramentResponse, status_code=201)
def create_sacrament_route(payload: SacramentCreate, db: Session = Depends(get_db)):
    sacrament = create_sacrament(db, payload.model_dump())
    db.commit()
    db.refresh(sacrament)
    return _to_sacrament_response(sacrament)


@router.put("/{sacrament_id}", response_model=SacramentResponse)
def update_sacrament_route(sacrament_id: int, payload: SacramentUpdate, db: Session = Depends(get_db)):
    sacrament = update_sacrament(db, sacrament_id, payload.model_dump(exclude_unset=True))
    db.commit()
    db.refresh(sacrament)
    return _to_sacrament_response(sacrament)


@router.delete("/{sacrament_id}", response_model=MessageResponse)
def delete_sacrament(sacrament_id: int, db: Session = Depends(get_db)):
    db.delete(require_sacrament(db, sacrament_id))
    db.commit()
    return MessageResponse(message="sacrament deleted")
