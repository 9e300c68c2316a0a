from church_admin.models.entities import Member, UserRoleEnum


def _submit(client, headers, content="Please pray for my mother's recovery"):
    resp = client.post("/api/prayer-requests", json={"content": content}, headers=headers)
    assert resp.status_code == 201
    return resp.json()


def test_member_submits_and_admin_lists_by_status(client, jwt_mode, db_session, make_user, auth_headers):
    member = Member(name="Mary Smith", phone="555-0101")
    db_session.add(member)
    db_session.commit()
    admin = make_user("admin@example.com", role=UserRoleEnum.pastor)
    user = make_user("mary@example.com", member_id=member.id)

    first = _submit(client, auth_headers(user))
    second = _submit(client, auth_headers(user), content="Thanksgiving for a new job")
    assert first["status"] == "PENDING"
    assert first["user"] == {"id": user.id, "email": "mary@example.com", "name": "Mary Smith", "phone": "555-0101"}

    client.put(f"/api/admin/prayer-requests/{first['id']}/acknowledge", headers=auth_headers(admin))

    everything = client.get("/api/admin/prayer-requests", headers=auth_headers(admin)).json()["items"]
    assert {item["id"] for item in everything} == {first["id"], second["id"]}

    pending = client.get(
        "/api/admin/prayer-requests", params={"status": "PENDING"}, headers=auth_headers(admin)
    ).json()["items"]
    assert [item["id"] for item in pending] == [second["id"]]

    stats = client.get("/api/admin/reports/dashboard", headers=auth_headers(admin)).json()
    assert stats["prayer_requests"] == {"pending": 1}


def test_submission_requires_signed_in_user(client):
    # AUTH_MODE=none has no caller to attribute a submission to.
    assert client.post("/api/prayer-requests", json={"content": "x"}).status_code == 401


def test_admin_moderation_flow(client, jwt_mode, make_user, auth_headers):
    admin = make_user("admin@example.com", role=UserRoleEnum.admin)
    user = make_user("user@example.com", username="user1")
    request = _submit(client, auth_headers(user))

    acknowledged = client.put(f"/api/admin/prayer-requests/{request['id']}/acknowledge", headers=auth_headers(admin))
    assert acknowledged.status_code == 200
    assert acknowledged.json()["status"] == "ACKNOWLEDGED"
    assert acknowledged.json()["user"]["name"] == "user1"

    answered = client.put(
        f"/api/admin/prayer-requests/{request['id']}/status",
        json={"status": "ANSWERED"},
        headers=auth_headers(admin),
    )
    assert answered.status_code == 200
    assert answered.json()["status"] == "ANSWERED"

    invalid = client.put(
        f"/api/admin/prayer-requests/{request['id']}/status",
        json={"status": "LOST"},
        headers=auth_headers(admin),
    )
    assert invalid.status_code == 422

    assert client.delete(f"/api/admin/prayer-requests/{request['id']}", headers=auth_headers(admin)).status_code == 200
    missing = client.put(f"/api/admin/prayer-requests/{request['id']}/acknowledge", headers=auth_headers(admin))
    assert missing.status_code == 404
    assert missing.json()["detail"] == "prayer request not found"


def test_members_cannot_moderate(client, jwt_mode, make_user, auth_headers):
    user = make_user("user@example.com")
    request = _submit(client, auth_headers(user))

    assert client.get("/api/admin/prayer-requests", headers=auth_headers(user)).status_code == 403
    resp = client.put(f"/api/admin/prayer-requests/{request['id']}/acknowledge", headers=auth_headers(user))
    assert resp.status_code == 403
