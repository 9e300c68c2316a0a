from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from church_admin.core.auth import require_admin
from church_admin.core.db import get_db
from church_admin.services.reports import (
    dashboard_stats,
    event_attendance,
    member_growth,
    ministry_participation,
    sacrament_counts,
)

router = APIRouter(prefix="/admin/reports", tags=["reports"], dependencies=[Depends(require_admin)])


@router.get("/dashboard")
def get_dashboard(db: Session = Depends(get_db)):
    return dashboard_stats(db)


@router.get("/member-growth")
def get_member_growth(months: int = Query(default=12, ge=1, le=120), db: Session = Depends(get_db)):
    return {"items": member_growth(db, months)}


@router.get("/ministry-participation")
def get_ministry_participation(db: Session = Depends(get_db)):
    return {"items": ministry_participation(db)}


@router.get("/event-attendance")
def get_event_attendance(db: Session = Depends(get_db)):
    return {"items": event_attendance(db)}


@router.get("/sacraments")
def get_sacrament_counts(db: Session = Depends(get_db)):
    return {"items": sacrament_counts(db)}
