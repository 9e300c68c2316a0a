from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from church_admin.core.auth import require_admin
from church_admin.core.db import get_db
from church_admin.models.entities import ChurchSettings
from church_admin.schemas.settings import ChurchSettingsResponse, ChurchSettingsUpdate

router = APIRouter(prefix="/admin/settings", tags=["settings"], dependencies=[Depends(require_admin)])

DEFAULT_CHURCH_NAME = "My Church"


def get_or_create_settings(db: Session) -> ChurchSettings:
    row = db.execute(select(ChurchSettings).order_by(ChurchSettings.id.asc()).limit(1)).scalar_one_or_none()
    if row is None:
        row = ChurchSettings(church_name=DEFAULT_CHURCH_NAME)
        db.add(row)
        db.flush()
    return row


@router.get("", response_model=ChurchSettingsResponse)
def get_settings(db: Session = Depends(get_db)):
    row = get_or_create_settings(db)
    db.commit()
    db.refresh(row)
    return ChurchSettingsResponse.model_validate(row, from_attributes=True)


@router.put("", response_model=ChurchSettingsResponse)
def update_settings(payload: ChurchSettingsUpdate, db: Session = Depends(get_db)):
    row = get_or_create_settings(db)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "church_name" and value is None:
            continue
        setattr(row, field, value)
    db.commit()
    db.refresh(row)
    return ChurchSettingsResponse.model_validate(row, from_attributes=True)
