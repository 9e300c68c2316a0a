from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from church_admin.core.auth import AuthContext, require_admin, require_auth
from church_admin.core.db import get_db
from church_admin.models.entities import PrayerRequest, PrayerStatusEnum
from church_admin.schemas.common import MessageResponse
from church_admin.schemas.prayers import (
    PrayerRequestCreate,
    PrayerRequester,
    PrayerRequestListResponse,
    PrayerRequestResponse,
    PrayerStatusUpdate,
)
from church_admin.services.prayers import (
    acknowledge_prayer_request,
    delete_prayer_request,
    list_prayer_requests,
    set_prayer_status,
    submit_prayer_request,
)

router = APIRouter(prefix="/admin/prayer-requests", tags=["prayer-requests"], dependencies=[Depends(require_admin)])
member_router = APIRouter(prefix="/prayer-requests", tags=["prayer-requests"])


def _to_prayer_response(request: PrayerRequest) -> PrayerRequestResponse:
    user = request.user
    requester = None
    if user is not None:
        member = user.member
        requester = PrayerRequester(
            id=user.id,
            email=user.email,
            name=member.name if member is not None else user.username,
            phone=member.phone if member is not None else None,
        )
    return PrayerRequestResponse(
        id=request.id,
        content=request.content,
        status=request.status,
        created_at=request.created_at,
        user=requester,
    )


@router.get("", response_model=PrayerRequestListResponse)
def list_requests(status: PrayerStatusEnum | None = None, db: Session = Depends(get_db)):
    return PrayerRequestListResponse(items=[_to_prayer_response(item) for item in list_prayer_requests(db, status)])


@router.put("/{request_id}/acknowledge", response_model=PrayerRequestResponse)
def acknowledge_request(request_id: int, db: Session = Depends(get_db)):
    request = acknowledge_prayer_request(db, request_id)
    db.commit()
    db.refresh(request)
    return _to_prayer_response(request)


@router.put("/{request_id}/status", response_model=PrayerRequestResponse)
def update_request_status(request_id: int, payload: PrayerStatusUpdate, db: Session = Depends(get_db)):
    request = set_prayer_status(db, request_id, payload.status)
    db.commit()
    db.refresh(request)
    return _to_prayer_response(request)


@router.delete("/{request_id}", response_model=MessageResponse)
def delete_request(request_id: int, db: Session = Depends(get_db)):
    delete_prayer_request(db, request_id)
    db.commit()
    return MessageResponse(message="prayer request deleted")


@member_router.post("", response_model=PrayerRequestResponse, status_code=201)
def submit_request(
    payload: PrayerRequestCreate,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    request = submit_prayer_request(db, ctx.user_id, payload.content)
    db.commit()
    db.refresh(request)
    return _to_prayer_response(request)
