from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from church_admin.core.auth import require_admin
from church_admin.core.db import get_db
from church_admin.models.entities import House
from church_admin.schemas.common import MessageResponse
from church_admin.schemas.families import FamilyMemberSummary
from church_admin.schemas.houses import HouseCreate, HouseListResponse, HouseResponse, HouseUpdate
from church_admin.services.access import require_family, require_house
from church_admin.services.household import create_house, delete_house, family_houses, house_members

router = APIRouter(prefix="/admin/houses", tags=["houses"], dependencies=[Depends(require_admin)])


def _to_house_response(db: Session, house: House) -> HouseResponse:
    response = HouseResponse.model_validate(house, from_attributes=True)
    response.members = [
        FamilyMemberSummary.model_validate(item, from_attributes=True) for item in house_members(db, house.id)
    ]
    return response


@router.post("", response_model=HouseResponse, status_code=201)
def create_house_route(payload: HouseCreate, db: Session = Depends(get_db)):
    head_data = payload.head_member_data.model_dump() if payload.head_member_data else None
    house = create_house(db, payload.family_id, payload.name, payload.head_member_id, head_data)
    db.commit()
    db.refresh(house)
    return _to_house_response(db, house)


@router.get("/family/{family_id}", response_model=HouseListResponse)
def list_family_houses(family_id: int, db: Session = Depends(get_db)):
    require_family(db, family_id)
    return HouseListResponse(items=[_to_house_response(db, item) for item in family_houses(db, family_id)])


@router.get("/{house_id}", response_model=HouseResponse)
def get_house(house_id: int, db: Session = Depends(get_db)):
    return _to_house_response(db, require_house(db, house_id))


@router.put("/{house_id}", response_model=HouseResponse)
def update_house(house_id: int, payload: HouseUpdate, db: Session = Depends(get_db)):
    house = require_house(db, house_id)
    house.name = payload.name
    db.commit()
    db.refresh(house)
    return _to_house_response(db, house)


@router.delete("/{house_id}", response_model=MessageResponse)
def delete_house_route(house_id: int, db: Session = Depends(get_db)):
    delete_house(db, house_id)
    db.commit()
    return MessageResponse(message="house deleted")
