def _member(client, name):
    return client.post("/api/admin/members", json={"name": name}).json()


def _ministry(client, name="Choir"):
    resp = client.post("/api/admin/ministries", json={"name": name, "meeting_schedule": "Sundays 9am"})
    assert resp.status_code == 201
    return resp.json()


def test_ministry_crud(client):
    ministry = _ministry(client)

    update = client.put(f"/api/admin/ministries/{ministry['id']}", json={"description": "Sings on Sundays"})
    assert update.status_code == 200
    assert update.json()["name"] == "Choir"
    assert update.json()["description"] == "Sings on Sundays"

    listing = client.get("/api/admin/ministries").json()
    assert [item["name"] for item in listing["items"]] == ["Choir"]

    assert client.delete(f"/api/admin/ministries/{ministry['id']}").status_code == 200
    assert client.get(f"/api/admin/ministries/{ministry['id']}").status_code == 404


def test_add_and_remove_member(client):
    ministry = _ministry(client)
    member = _member(client, "Anna")

    added = client.post(f"/api/admin/ministries/{ministry['id']}/members", json={"member_id": member["id"]})
    assert added.status_code == 201
    assert [(m["member_id"], m["role"]) for m in added.json()["members"]] == [(member["id"], "MEMBER")]

    duplicate = client.post(f"/api/admin/ministries/{ministry['id']}/members", json={"member_id": member["id"]})
    assert duplicate.status_code == 409

    unknown = client.post(f"/api/admin/ministries/{ministry['id']}/members", json={"member_id": 999})
    assert unknown.status_code == 400

    removed = client.delete(f"/api/admin/ministries/{ministry['id']}/members/{member['id']}")
    assert removed.status_code == 200
    again = client.delete(f"/api/admin/ministries/{ministry['id']}/members/{member['id']}")
    assert again.status_code == 404


def test_assign_leader_keeps_a_single_leader(client):
    ministry = _ministry(client)
    anna = _member(client, "Anna")
    ben = _member(client, "Ben")
    client.post(f"/api/admin/ministries/{ministry['id']}/members", json={"member_id": anna["id"]})

    first = client.post(f"/api/admin/ministries/{ministry['id']}/leader", json={"member_id": anna["id"]})
    assert first.status_code == 200

    # Ben is not yet a member; becoming leader also enrols him.
    second = client.post(f"/api/admin/ministries/{ministry['id']}/leader", json={"member_id": ben["id"]})
    roles = {m["name"]: m["role"] for m in second.json()["members"]}
    assert roles == {"Anna": "MEMBER", "Ben": "LEADER"}


def test_delete_ministry_removes_memberships(client, db_session):
    from sqlalchemy import func, select

    from church_admin.models.entities import MinistryMember

    ministry = _ministry(client)
    member = _member(client, "Anna")
    client.post(f"/api/admin/ministries/{ministry['id']}/members", json={"member_id": member["id"]})

    client.delete(f"/api/admin/ministries/{ministry['id']}")

    assert db_session.execute(select(func.count()).select_from(MinistryMember)).scalar_one() == 0
    assert client.get(f"/api/admin/members/{member['id']}").status_code == 200
