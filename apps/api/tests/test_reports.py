from datetime import datetime, timezone


def test_dashboard_counts(client):
    family = client.post("/api/admin/families", json={"name": "Smith"}).json()
    client.post("/api/admin/members", json={"name": "A", "family_id": family["id"]})
    client.post("/api/admin/members", json={"name": "B", "status": "PENDING_APPROVAL"})
    c = client.post("/api/admin/members", json={"name": "C"}).json()
    client.delete(f"/api/admin/members/{c['id']}")
    client.post("/api/admin/ministries", json={"name": "Choir"})
    client.post("/api/admin/events", json={"title": "Future", "date": "2099-01-01T00:00:00"})
    client.post("/api/admin/events", json={"title": "Past", "date": "2000-01-01T00:00:00"})

    stats = client.get("/api/admin/reports/dashboard").json()
    assert stats["members"] == {"total": 3, "active": 1, "pending": 1, "inactive": 1}
    assert stats["families"] == 1
    assert stats["ministries"] == 1
    assert stats["events"] == {"total": 2, "upcoming": 1}
    assert stats["prayer_requests"] == {"pending": 0}


def test_member_growth_groups_by_month(client):
    client.post("/api/admin/members", json={"name": "A"})
    client.post("/api/admin/members", json={"name": "B"})

    month = datetime.now(timezone.utc).strftime("%Y-%m")
    growth = client.get("/api/admin/reports/member-growth").json()["items"]
    assert growth == [{"month": month, "count": 2}]


def test_participation_and_sacrament_counts(client):
    choir = client.post("/api/admin/ministries", json={"name": "Choir"}).json()
    client.post("/api/admin/ministries", json={"name": "Ushers"})
    member = client.post("/api/admin/members", json={"name": "A"}).json()
    client.post(f"/api/admin/ministries/{choir['id']}/members", json={"member_id": member["id"]})
    client.post("/api/admin/sacraments", json={"type": "BAPTISM", "date": "2000-01-01", "member_id": member["id"]})
    client.post("/api/admin/sacraments", json={"type": "BAPTISM", "date": "2001-01-01", "member_id": member["id"]})

    participation = client.get("/api/admin/reports/ministry-participation").json()["items"]
    assert [(item["name"], item["member_count"]) for item in participation] == [("Choir", 1), ("Ushers", 0)]

    sacraments = client.get("/api/admin/reports/sacraments").json()["items"]
    assert sacraments == [{"type": "BAPTISM", "count": 2}]
