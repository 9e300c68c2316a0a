def _member(client, name, **fields):
    resp = client.post("/api/admin/members", json={"name": name, **fields})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _family(client, name):
    return client.post("/api/admin/families", json={"name": name}).json()


def test_household_walkthrough(client):
    smith = _family(client, "Smith")
    house = client.post("/api/admin/houses", json={"name": "North House", "family_id": smith["id"]}).json()
    john = _member(client, "John Smith", email="john@example.com")

    assign = client.post(
        f"/api/admin/members/{john['id']}/family",
        json={"family_id": smith["id"], "house_id": house["id"], "family_role": "HEAD"},
    )
    assert assign.status_code == 200
    assert assign.json()["family"] == {"id": smith["id"], "name": "Smith"}
    assert assign.json()["house_id"] == house["id"]

    head = client.post(f"/api/admin/members/{john['id']}/set-head", json={"family_id": smith["id"]})
    assert head.status_code == 200
    assert head.json()["head_of_family"] is True

    found = client.get("/api/admin/members", params={"search": "john"}).json()
    assert [item["id"] for item in found["items"]] == [john["id"]]
    assert found["meta"] == {"total": 1, "page": 1, "limit": 10, "pages": 1}

    removed = client.delete(f"/api/admin/members/{john['id']}/family")
    assert removed.status_code == 200
    assert removed.json()["family_id"] is None
    assert removed.json()["house_id"] is None
    assert removed.json()["head_of_family"] is False


def test_create_member_rejects_foreign_house(client):
    smith = _family(client, "Smith")
    jones = _family(client, "Jones")
    jones_house = client.post("/api/admin/houses", json={"name": "South House", "family_id": jones["id"]}).json()

    resp = client.post(
        "/api/admin/members",
        json={"name": "John Smith", "family_id": smith["id"], "house_id": jones_house["id"]},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"] == "house does not belong to family"

    no_family = client.post("/api/admin/members", json={"name": "John Smith", "house_id": jones_house["id"]})
    assert no_family.status_code == 400


def test_update_member_family_change_drops_house(client):
    smith = _family(client, "Smith")
    jones = _family(client, "Jones")
    house = client.post("/api/admin/houses", json={"name": "North House", "family_id": smith["id"]}).json()
    member = _member(client, "John Smith", family_id=smith["id"], house_id=house["id"])

    resp = client.put(f"/api/admin/members/{member['id']}", json={"family_id": jones["id"]})
    assert resp.status_code == 200
    assert resp.json()["family_id"] == jones["id"]
    assert resp.json()["house_id"] is None


def test_search_is_case_insensitive_over_name_email_and_phone(client):
    _member(client, "Alice Brown", email="alice@example.com", phone="555-1000")
    _member(client, "Bob Green", email="bob@example.com", phone="555-2000")
    _member(client, "Carol White", email="JOHNNY@example.com", phone="555-3000")

    by_email = client.get("/api/admin/members", params={"search": "johnny"}).json()
    assert [item["name"] for item in by_email["items"]] == ["Carol White"]

    by_phone = client.get("/api/admin/members", params={"search": "555-2"}).json()
    assert [item["name"] for item in by_phone["items"]] == ["Bob Green"]

    by_name = client.get("/api/admin/members", params={"search": "ALICE"}).json()
    assert [item["name"] for item in by_name["items"]] == ["Alice Brown"]


def test_search_treats_wildcards_literally(client):
    _member(client, "100% Volunteer")
    _member(client, "Regular Member")

    resp = client.get("/api/admin/members", params={"search": "%"}).json()
    assert [item["name"] for item in resp["items"]] == ["100% Volunteer"]


def test_pagination_total_is_independent_of_page(client):
    for index in range(25):
        _member(client, f"Member {index:02d}")

    first = client.get("/api/admin/members", params={"sort_by": "name", "sort_order": "asc", "limit": 10}).json()
    third = client.get(
        "/api/admin/members", params={"sort_by": "name", "sort_order": "asc", "limit": 10, "page": 3}
    ).json()

    assert first["meta"] == {"total": 25, "page": 1, "limit": 10, "pages": 3}
    assert third["meta"]["total"] == 25
    assert [item["name"] for item in first["items"]][:2] == ["Member 00", "Member 01"]
    assert [item["name"] for item in third["items"]] == [f"Member {index}" for index in range(20, 25)]

    beyond = client.get("/api/admin/members", params={"page": 9}).json()
    assert beyond["items"] == []
    assert beyond["meta"]["total"] == 25


def test_limit_above_maximum_is_rejected(client):
    assert client.get("/api/admin/members", params={"limit": 101}).status_code == 422


def test_status_and_family_filters(client):
    smith = _family(client, "Smith")
    _member(client, "Active Smith", family_id=smith["id"])
    _member(client, "Pending Smith", family_id=smith["id"], status="PENDING_APPROVAL")
    _member(client, "Pending Other", status="PENDING_APPROVAL")

    pending = client.get("/api/admin/members", params={"status": "PENDING_APPROVAL"}).json()
    assert pending["meta"]["total"] == 2

    pending_smiths = client.get(
        "/api/admin/members", params={"status": "PENDING_APPROVAL", "family_id": smith["id"]}
    ).json()
    assert [item["name"] for item in pending_smiths["items"]] == ["Pending Smith"]

    everyone = client.get("/api/admin/members", params={"status": "ALL"}).json()
    assert everyone["meta"]["total"] == 3

    assert client.get("/api/admin/members", params={"status": "UNKNOWN"}).status_code == 422


def test_sort_by_family_puts_unassigned_last(client):
    alpha = _family(client, "Alpha")
    zulu = _family(client, "Zulu")
    _member(client, "No Family")
    _member(client, "In Zulu", family_id=zulu["id"])
    _member(client, "In Alpha", family_id=alpha["id"])

    asc = client.get("/api/admin/members", params={"sort_by": "family", "sort_order": "asc"}).json()
    assert [item["name"] for item in asc["items"]] == ["In Alpha", "In Zulu", "No Family"]

    assert client.get("/api/admin/members", params={"sort_by": "shoe_size"}).status_code == 400


def test_approval_only_from_pending(client):
    pending = _member(client, "New Person", status="PENDING_APPROVAL")
    active = _member(client, "Old Friend")

    approved = client.post(f"/api/admin/members/{pending['id']}/approve")
    assert approved.status_code == 200
    assert approved.json()["status"] == "ACTIVE"

    again = client.post(f"/api/admin/members/{pending['id']}/approve")
    assert again.status_code == 400

    assert client.post(f"/api/admin/members/{active['id']}/approve").status_code == 400
    assert client.post("/api/admin/members/999/approve").status_code == 404


def test_delete_is_soft(client):
    a = _member(client, "A")
    b = _member(client, "B")
    c = _member(client, "C")

    assert client.delete(f"/api/admin/members/{a['id']}").status_code == 200
    assert client.get(f"/api/admin/members/{a['id']}").json()["status"] == "INACTIVE"

    bulk = client.post("/api/admin/members/delete-bulk", json={"ids": [b["id"], c["id"]]})
    assert bulk.status_code == 200

    inactive = client.get("/api/admin/members", params={"status": "INACTIVE"}).json()
    assert inactive["meta"]["total"] == 3


def test_member_detail_includes_sacraments_and_ministries(client):
    member = _member(client, "John Smith")
    ministry = client.post("/api/admin/ministries", json={"name": "Choir"}).json()
    client.post(f"/api/admin/ministries/{ministry['id']}/members", json={"member_id": member["id"]})
    client.post(
        "/api/admin/sacraments",
        json={"type": "BAPTISM", "date": "2001-05-06", "member_id": member["id"]},
    )

    detail = client.get(f"/api/admin/members/{member['id']}").json()
    assert [s["type"] for s in detail["sacraments"]] == ["BAPTISM"]
    assert detail["ministries"] == [{"ministry_id": ministry["id"], "name": "Choir", "role": "MEMBER"}]
    assert detail["user"] is None


def test_change_family_role(client):
    smith = _family(client, "Smith")
    member = _member(client, "John Smith", family_id=smith["id"])
    loner = _member(client, "Loner")

    resp = client.put(f"/api/admin/members/{member['id']}/family-role", json={"family_role": "FATHER"})
    assert resp.status_code == 200
    assert resp.json()["family_role"] == "FATHER"

    assert client.put(f"/api/admin/members/{loner['id']}/family-role", json={"family_role": "SON"}).status_code == 400
    assert client.put(f"/api/admin/members/{member['id']}/family-role", json={"family_role": "COUSIN"}).status_code == 422


def test_members_by_family(client):
    smith = _family(client, "Smith")
    member = _member(client, "John Smith", family_id=smith["id"])
    _member(client, "Someone Else")

    resp = client.get(f"/api/admin/members/family/{smith['id']}")
    assert [item["id"] for item in resp.json()["items"]] == [member["id"]]
    assert client.get("/api/admin/members/family/999").status_code == 404
