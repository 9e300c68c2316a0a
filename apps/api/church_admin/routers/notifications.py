from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from church_admin.core.auth import AuthContext, require_admin, require_auth
from church_admin.core.db import get_db
from church_admin.models.entities import Broadcast, Notification
from church_admin.schemas.common import MessageResponse
from church_admin.schemas.notifications import (
    BroadcastListResponse,
    BroadcastRequest,
    BroadcastResponse,
    BroadcastUpdate,
    DeviceTokenRequest,
    NotificationListResponse,
    NotificationResponse,
    SendToUserRequest,
)
from church_admin.services.notifications import (
    create_broadcast,
    register_device_token,
    send_to_user,
    update_broadcast,
)
from church_admin.services.push_gateway import PushGateway, get_push_gateway

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _get_own_notification(db: Session, notification_id: int, user_id: int) -> Notification:
    notification = db.get(Notification, notification_id)
    if notification is None or notification.user_id != user_id:
        raise HTTPException(status_code=404, detail="notification not found")
    return notification


@router.post("/broadcast", response_model=BroadcastResponse, status_code=201, dependencies=[Depends(require_admin)])
def broadcast(
    payload: BroadcastRequest,
    db: Session = Depends(get_db),
    gateway: PushGateway = Depends(get_push_gateway),
):
    row = create_broadcast(db, gateway, payload.title, payload.body, payload.data, draft=payload.draft)
    db.commit()
    db.refresh(row)
    return BroadcastResponse.model_validate(row, from_attributes=True)


@router.put("/broadcast/{broadcast_id}", response_model=BroadcastResponse, dependencies=[Depends(require_admin)])
def edit_broadcast(
    broadcast_id: int,
    payload: BroadcastUpdate,
    db: Session = Depends(get_db),
    gateway: PushGateway = Depends(get_push_gateway),
):
    row = update_broadcast(db, gateway, broadcast_id, payload.title, payload.body, payload.data, send_now=payload.send_now)
    db.commit()
    db.refresh(row)
    return BroadcastResponse.model_validate(row, from_attributes=True)


@router.get("/broadcasts", response_model=BroadcastListResponse, dependencies=[Depends(require_admin)])
def list_broadcasts(db: Session = Depends(get_db)):
    rows = db.execute(select(Broadcast).order_by(Broadcast.created_at.desc(), Broadcast.id.desc())).scalars().all()
    return BroadcastListResponse(items=[BroadcastResponse.model_validate(row, from_attributes=True) for row in rows])


@router.post("/send-user", response_model=NotificationResponse, status_code=201, dependencies=[Depends(require_admin)])
def send_user_notification(
    payload: SendToUserRequest,
    db: Session = Depends(get_db),
    gateway: PushGateway = Depends(get_push_gateway),
):
    notification = send_to_user(db, gateway, payload.user_id, payload.title, payload.body, payload.type, payload.data)
    db.commit()
    db.refresh(notification)
    return NotificationResponse.model_validate(notification, from_attributes=True)


@router.get("", response_model=NotificationListResponse)
def list_my_notifications(db: Session = Depends(get_db), ctx: AuthContext = Depends(require_auth)):
    rows = (
        db.execute(
            select(Notification)
            .where(Notification.user_id == ctx.user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        .scalars()
        .all()
    )
    return NotificationListResponse(
        items=[NotificationResponse.model_validate(row, from_attributes=True) for row in rows],
        unread=sum(1 for row in rows if not row.is_read),
    )


@router.post("/register-token", response_model=MessageResponse)
def register_token(
    payload: DeviceTokenRequest,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    register_device_token(db, ctx.user_id, payload.token, payload.platform)
    db.commit()
    return MessageResponse(message="device token registered")


@router.put("/{notification_id}/read", response_model=NotificationResponse)
def mark_read(notification_id: int, db: Session = Depends(get_db), ctx: AuthContext = Depends(require_auth)):
    notification = _get_own_notification(db, notification_id, ctx.user_id)
    notification.is_read = True
    db.commit()
    db.refresh(notification)
    return NotificationResponse.model_validate(notification, from_attributes=True)


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(notification_id: int, db: Session = Depends(get_db), ctx: AuthContext = Depends(require_auth)):
    db.delete(_get_own_notification(db, notification_id, ctx.user_id))
    db.commit()
    return MessageResponse(message="notification deleted")
