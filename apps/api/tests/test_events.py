from datetime import datetime

from church_admin.models.entities import BroadcastStatusEnum, Event, EventStatusEnum, UserRoleEnum
from church_admin.services.events import publish_event
from church_admin.services.notifications import deliver_broadcast


def _event(client, title="Harvest Festival", date="2099-10-01T10:00:00", **fields):
    resp = client.post("/api/admin/events", json={"title": title, "date": date, **fields})
    assert resp.status_code == 201
    return resp.json()


def test_event_crud(client):
    event = _event(client, location="Main Hall")
    assert event["status"] == "DRAFT"

    update = client.put(f"/api/admin/events/{event['id']}", json={"is_featured": True, "location": "Garden"})
    assert update.status_code == 200
    assert update.json()["is_featured"] is True
    assert update.json()["location"] == "Garden"

    assert client.delete(f"/api/admin/events/{event['id']}").status_code == 200
    assert client.get(f"/api/admin/events/{event['id']}").status_code == 404


def test_publish_broadcasts_once(client, push_gateway):
    event = _event(client, location="Main Hall")

    published = client.post(f"/api/admin/events/{event['id']}/publish")
    assert published.status_code == 200
    assert published.json()["status"] == "PUBLISHED"

    again = client.post(f"/api/admin/events/{event['id']}/publish")
    assert again.status_code == 200

    assert len(push_gateway.topic_pushes) == 1
    push = push_gateway.topic_pushes[0]
    assert push["topic"] == "all"
    assert "Harvest Festival" in push["body"]
    assert push["data"] == {"type": "EVENT", "eventId": str(event["id"])}

    broadcasts = client.get("/api/notifications/broadcasts").json()["items"]
    assert len(broadcasts) == 1
    assert broadcasts[0]["status"] == "SENT"


def test_publish_queues_announcement_until_delivered(db_session, push_gateway):
    event = Event(title="Vigil", date=datetime(2099, 12, 24, 22, 0), status=EventStatusEnum.draft)
    db_session.add(event)
    db_session.flush()
    draft_id = event.id

    published, announcement = publish_event(db_session, draft_id)

    assert published.status == EventStatusEnum.published
    assert announcement.status == BroadcastStatusEnum.draft
    assert push_gateway.topic_pushes == []

    db_session.rollback()
    assert db_session.get(Event, draft_id) is None
    assert push_gateway.topic_pushes == []

    event = Event(title="Vigil", date=datetime(2099, 12, 24, 22, 0), status=EventStatusEnum.draft)
    db_session.add(event)
    db_session.flush()
    _, announcement = publish_event(db_session, event.id)
    db_session.commit()
    deliver_broadcast(push_gateway, announcement)
    db_session.commit()

    assert announcement.status == BroadcastStatusEnum.sent
    assert [push["title"] for push in push_gateway.topic_pushes] == ["New event"]
    assert publish_event(db_session, event.id)[1] is None


def test_public_listing_shows_only_published(client):
    draft = _event(client, title="Draft Event")
    live = _event(client, title="Live Event")
    client.post(f"/api/admin/events/{live['id']}/publish")

    resp = client.get("/api/events")
    assert resp.status_code == 200
    assert [item["id"] for item in resp.json()["items"]] == [live["id"]]
    assert draft["id"] not in [item["id"] for item in resp.json()["items"]]

    upcoming = client.get("/api/events", params={"upcoming": True}).json()
    assert [item["id"] for item in upcoming["items"]] == [live["id"]]


def test_register_requires_auth_and_is_unique(client, jwt_mode, make_user, auth_headers):
    admin = make_user("admin@example.com", role=UserRoleEnum.admin)
    user = make_user("user@example.com")
    event = client.post(
        "/api/admin/events",
        json={"title": "Retreat", "date": "2099-06-01T09:00:00"},
        headers=auth_headers(admin),
    ).json()
    client.post(f"/api/admin/events/{event['id']}/publish", headers=auth_headers(admin))

    assert client.post(f"/api/events/{event['id']}/register").status_code == 401

    first = client.post(f"/api/events/{event['id']}/register", headers=auth_headers(user))
    assert first.status_code == 201
    duplicate = client.post(f"/api/events/{event['id']}/register", headers=auth_headers(user))
    assert duplicate.status_code == 409

    registrations = client.get(f"/api/admin/events/{event['id']}/registrations", headers=auth_headers(admin)).json()
    assert [item["user_email"] for item in registrations["items"]] == ["user@example.com"]

    detail = client.get(f"/api/admin/events/{event['id']}", headers=auth_headers(admin)).json()
    assert detail["registration_count"] == 1


def test_cannot_register_for_draft_event(client, jwt_mode, make_user, auth_headers):
    admin = make_user("admin@example.com", role=UserRoleEnum.admin)
    user = make_user("user@example.com")
    event = client.post(
        "/api/admin/events",
        json={"title": "Secret", "date": "2099-06-01T09:00:00"},
        headers=auth_headers(admin),
    ).json()

    assert client.post(f"/api/events/{event['id']}/register", headers=auth_headers(user)).status_code == 404


def test_member_role_cannot_manage_events(client, jwt_mode, make_user, auth_headers):
    user = make_user("user@example.com")

    resp = client.post(
        "/api/admin/events",
        json={"title": "Nope", "date": "2099-06-01T09:00:00"},
        headers=auth_headers(user),
    )
    assert resp.status_code == 403
