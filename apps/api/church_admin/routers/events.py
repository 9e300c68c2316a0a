from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from church_admin.core.auth import AuthContext, require_admin, require_auth
from church_admin.core.db import get_db
from church_admin.models.entities import Event, EventRegistration, EventStatusEnum, Member, User
from church_admin.schemas.common import MessageResponse
from church_admin.schemas.events import (
    EventCreate,
    EventListResponse,
    EventRegistrationListResponse,
    EventRegistrationResponse,
    EventResponse,
    EventUpdate,
)
from church_admin.services.access import require_event
from church_admin.services.events import (
    delete_event,
    publish_event,
    register_for_event,
    registration_count,
    upcoming_published,
)
from church_admin.services.notifications import deliver_broadcast
from church_admin.services.push_gateway import PushGateway, get_push_gateway

router = APIRouter(prefix="/admin/events", tags=["events"], dependencies=[Depends(require_admin)])
public_router = APIRouter(prefix="/events", tags=["events"])


def _to_event_response(db: Session, event: Event) -> EventResponse:
    response = EventResponse.model_validate(event, from_attributes=True)
    response.registration_count = registration_count(db, event.id)
    return response


@router.get("", response_model=EventListResponse)
def list_events(db: Session = Depends(get_db)):
    events = db.execute(select(Event).order_by(Event.date.desc(), Event.id.desc())).scalars().all()
    return EventListResponse(items=[_to_event_response(db, item) for item in events])


@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: int, db: Session = Depends(get_db)):
    return _to_event_response(db, require_event(db, event_id))


@router.post("", response_model=EventResponse, status_code=201)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    event = Event(**payload.model_dump(), status=EventStatusEnum.draft)
    db.add(event)
    db.commit()
    db.refresh(event)
    return _to_event_response(db, event)


@router.put("/{event_id}", response_model=EventResponse)
def update_event(event_id: int, payload: EventUpdate, db: Session = Depends(get_db)):
    event = require_event(db, event_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in {"title", "date", "is_live", "is_featured"}:
            continue
        setattr(event, field, value)
    db.commit()
    db.refresh(event)
    return _to_event_response(db, event)


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event_route(event_id: int, db: Session = Depends(get_db)):
    delete_event(db, event_id)
    db.commit()
    return MessageResponse(message="event deleted")


@router.post("/{event_id}/publish", response_model=EventResponse)
def publish_event_route(
    event_id: int,
    db: Session = Depends(get_db),
    gateway: PushGateway = Depends(get_push_gateway),
):
    event, announcement = publish_event(db, event_id)
    db.commit()
    if announcement is not None:
        deliver_broadcast(gateway, announcement)
        db.commit()
    db.refresh(event)
    return _to_event_response(db, event)


@router.get("/{event_id}/registrations", response_model=EventRegistrationListResponse)
def list_registrations(event_id: int, db: Session = Depends(get_db)):
    require_event(db, event_id)
    rows = db.execute(
        select(EventRegistration, User, Member)
        .join(User, User.id == EventRegistration.user_id)
        .outerjoin(Member, Member.id == User.member_id)
        .where(EventRegistration.event_id == event_id)
        .order_by(EventRegistration.created_at.asc(), EventRegistration.id.asc())
    ).all()
    return EventRegistrationListResponse(
        items=[
            EventRegistrationResponse(
                id=registration.id,
                event_id=registration.event_id,
                user_id=registration.user_id,
                user_email=user.email,
                member_name=member.name if member is not None else None,
                created_at=registration.created_at,
            )
            for registration, user, member in rows
        ]
    )


@public_router.get("", response_model=EventListResponse)
def list_published_events(upcoming: bool = False, db: Session = Depends(get_db)):
    if upcoming:
        events = upcoming_published(db)
    else:
        events = (
            db.execute(
                select(Event)
                .where(Event.status == EventStatusEnum.published)
                .order_by(Event.date.desc(), Event.id.desc())
            )
            .scalars()
            .all()
        )
    return EventListResponse(items=[_to_event_response(db, item) for item in events])


@public_router.post("/{event_id}/register", response_model=EventRegistrationResponse, status_code=201)
def register(
    event_id: int,
    db: Session = Depends(get_db),
    ctx: AuthContext = Depends(require_auth),
):
    registration = register_for_event(db, event_id, ctx.user_id)
    db.commit()
    db.refresh(registration)
    return EventRegistrationResponse(
        id=registration.id,
        event_id=registration.event_id,
        user_id=registration.user_id,
        created_at=registration.created_at,
    )
