from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from church_admin.core.config import settings
from church_admin.models.entities import (
    Broadcast,
    BroadcastStatusEnum,
    DeviceToken,
    Event,
    Notification,
    User,
)
from church_admin.services.push_gateway import PushGateway

logger = logging.getLogger(__name__)


def _require_broadcast(db: Session, broadcast_id: int) -> Broadcast:
    broadcast = db.get(Broadcast, broadcast_id)
    if broadcast is None:
        raise HTTPException(status_code=404, detail="broadcast not found")
    return broadcast


def _push_data(data: dict[str, Any] | None) -> dict[str, str]:
    # Push payload values must be strings.
    return {key: str(value) for key, value in (data or {}).items()}


def register_device_token(db: Session, user_id: int, token: str, platform: str) -> DeviceToken:
    device = db.execute(select(DeviceToken).where(DeviceToken.token == token)).scalar_one_or_none()
    if device is None:
        device = DeviceToken(user_id=user_id, token=token, platform=platform)
        db.add(device)
    else:
        device.user_id = user_id
        device.platform = platform
    db.flush()
    return device


def send_to_user(
    db: Session,
    gateway: PushGateway,
    user_id: int,
    title: str,
    body: str,
    type: str = "GENERAL",
    data: dict[str, Any] | None = None,
) -> Notification:
    if db.get(User, user_id) is None:
        raise HTTPException(status_code=400, detail="user not found")
    notification = Notification(user_id=user_id, title=title, body=body, type=type, data=json.dumps(data or {}))
    db.add(notification)
    db.flush()

    tokens = list(db.execute(select(DeviceToken.token).where(DeviceToken.user_id == user_id)).scalars())
    gateway.send_to_tokens(tokens, title, body, _push_data(data))
    return notification


def deliver_broadcast(gateway: PushGateway, broadcast: Broadcast) -> None:
    delivered = gateway.send_to_topic(
        settings.push_broadcast_topic,
        broadcast.title,
        broadcast.body,
        _push_data(json.loads(broadcast.data or "{}")),
    )
    if not delivered:
        logger.warning("broadcast %s recorded as sent but push delivery did not succeed", broadcast.id)
    broadcast.status = BroadcastStatusEnum.sent
    broadcast.sent_at = datetime.now(timezone.utc)


def create_broadcast(
    db: Session,
    gateway: PushGateway,
    title: str,
    body: str,
    data: dict[str, Any] | None = None,
    draft: bool = False,
) -> Broadcast:
    broadcast = Broadcast(title=title, body=body, data=json.dumps(data or {}), status=BroadcastStatusEnum.draft)
    db.add(broadcast)
    db.flush()
    if not draft:
        deliver_broadcast(gateway, broadcast)
        db.flush()
    return broadcast


def update_broadcast(
    db: Session,
    gateway: PushGateway,
    broadcast_id: int,
    title: str,
    body: str,
    data: dict[str, Any] | None = None,
    send_now: bool = False,
) -> Broadcast:
    broadcast = _require_broadcast(db, broadcast_id)
    if broadcast.status != BroadcastStatusEnum.draft:
        raise HTTPException(status_code=409, detail="only draft broadcasts can be edited")
    broadcast.title = title
    broadcast.body = body
    broadcast.data = json.dumps(data or {})
    if send_now:
        deliver_broadcast(gateway, broadcast)
    db.flush()
    return broadcast


def queue_event_broadcast(db: Session, event: Event) -> Broadcast:
    """Record the announcement as a draft; `deliver_broadcast` sends it once the publish is committed."""
    body = f"{event.title} on {event.date:%Y-%m-%d}"
    if event.location:
        body = f"{body} at {event.location}"
    broadcast = Broadcast(
        title="New event",
        body=body,
        data=json.dumps({"type": "EVENT", "eventId": event.id}),
        status=BroadcastStatusEnum.draft,
    )
    db.add(broadcast)
    db.flush()
    return broadcast
