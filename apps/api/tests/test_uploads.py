import pytest

from church_admin.core.config import settings

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "upload_dir", str(tmp_path))
    return tmp_path


def test_upload_image_returns_url(client, upload_dir):
    resp = client.post("/api/common/upload", files={"image": ("photo.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 201
    url = resp.json()["url"]
    assert url.startswith("/uploads/images/")
    assert url.endswith(".png")

    stored = upload_dir / url.removeprefix("/uploads/")
    assert stored.read_bytes() == PNG_BYTES


def test_upload_uses_public_base_url(client, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "public_base_url", "https://cdn.example.com/")

    resp = client.post("/api/common/upload", files={"image": ("photo.png", PNG_BYTES, "image/png")})
    assert resp.json()["url"].startswith("https://cdn.example.com/uploads/images/")


def test_upload_rejects_non_images(client, upload_dir):
    resp = client.post("/api/common/upload", files={"image": ("notes.txt", b"hello", "text/plain")})
    assert resp.status_code == 400


def test_upload_rejects_oversized_files(client, upload_dir, monkeypatch):
    monkeypatch.setattr(settings, "max_upload_bytes", 16)

    resp = client.post("/api/common/upload", files={"image": ("photo.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 400
    assert list(upload_dir.iterdir()) == []


def test_upload_requires_field(client, upload_dir):
    assert client.post("/api/common/upload", files={"file": ("photo.png", PNG_BYTES, "image/png")}).status_code == 422


def test_upload_requires_token_in_jwt_mode(client, upload_dir, jwt_mode):
    resp = client.post("/api/common/upload", files={"image": ("photo.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 401
