def _category(client, name="Events"):
    resp = client.post("/api/admin/gallery/categories", json={"name": name})
    assert resp.status_code == 201
    return resp.json()


def _album(client, category_id, title="Easter 2026"):
    resp = client.post("/api/admin/gallery/albums", json={"title": title, "category_id": category_id})
    assert resp.status_code == 201
    return resp.json()


def test_category_names_are_unique(client):
    _category(client, "Events")
    assert client.post("/api/admin/gallery/categories", json={"name": "Events"}).status_code == 409


def test_non_empty_category_cannot_be_deleted(client):
    category = _category(client)
    album = _album(client, category["id"])

    listing = client.get("/api/admin/gallery/categories").json()
    assert listing["items"][0]["album_count"] == 1

    assert client.delete(f"/api/admin/gallery/categories/{category['id']}").status_code == 409

    client.delete(f"/api/admin/gallery/albums/{album['id']}")
    assert client.delete(f"/api/admin/gallery/categories/{category['id']}").status_code == 200


def test_album_requires_known_category(client):
    resp = client.post("/api/admin/gallery/albums", json={"title": "Lost", "category_id": 999})
    assert resp.status_code == 400


def test_first_image_becomes_cover(client):
    category = _category(client)
    album = _album(client, category["id"])

    resp = client.post(
        f"/api/admin/gallery/albums/{album['id']}/images",
        json={"urls": ["/uploads/images/a.jpg", "/uploads/images/b.jpg"]},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["cover_image"] == "/uploads/images/a.jpg"
    assert body["image_count"] == 2

    more = client.post(f"/api/admin/gallery/albums/{album['id']}/images", json={"urls": ["/uploads/images/c.jpg"]})
    assert more.json()["cover_image"] == "/uploads/images/a.jpg"


def test_deleting_cover_image_moves_cover(client):
    category = _category(client)
    album = _album(client, category["id"])
    images = client.post(
        f"/api/admin/gallery/albums/{album['id']}/images",
        json={"urls": ["/uploads/images/a.jpg", "/uploads/images/b.jpg"]},
    ).json()["images"]
    cover, other = images

    client.delete(f"/api/admin/gallery/images/{cover['id']}")
    assert client.get(f"/api/admin/gallery/albums/{album['id']}").json()["cover_image"] == other["url"]

    client.delete(f"/api/admin/gallery/images/{other['id']}")
    detail = client.get(f"/api/admin/gallery/albums/{album['id']}").json()
    assert detail["cover_image"] is None
    assert detail["images"] == []


def test_albums_filter_by_category(client):
    events = _category(client, "Events")
    youth = _category(client, "Youth")
    _album(client, events["id"], "Easter")
    _album(client, youth["id"], "Camp")

    resp = client.get("/api/admin/gallery/albums", params={"category_id": youth["id"]}).json()
    assert [(item["title"], item["category_name"]) for item in resp["items"]] == [("Camp", "Youth")]
