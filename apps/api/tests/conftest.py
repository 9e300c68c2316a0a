import os
import tempfile

os.environ.setdefault("AUTH_MODE", "none")
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="church-admin-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from church_admin.core.config import settings
from church_admin.core.db import get_db
from church_admin.core.security import create_access_token, hash_password
from church_admin.main import app
from church_admin.models.base import Base
from church_admin.models import entities  # noqa: F401
from church_admin.models.entities import User, UserRoleEnum
from church_admin.services.push_gateway import PushResult, get_push_gateway


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class RecordingPushGateway:
    def __init__(self):
        self.token_pushes = []
        self.topic_pushes = []

    def send_to_tokens(self, tokens, title, body, data=None):
        self.token_pushes.append({"tokens": list(tokens), "title": title, "body": body, "data": data or {}})
        return PushResult(success_count=len(tokens))

    def send_to_topic(self, topic, title, body, data=None):
        self.topic_pushes.append({"topic": topic, "title": title, "body": body, "data": data or {}})
        return True


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(autouse=True)
def push_gateway():
    gateway = RecordingPushGateway()
    app.dependency_overrides[get_push_gateway] = lambda: gateway
    yield gateway
    app.dependency_overrides.pop(get_push_gateway, None)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def jwt_mode(monkeypatch):
    monkeypatch.setattr(settings, "auth_mode", "jwt")


@pytest.fixture
def make_user(db_session):
    def _make_user(email, password="secret123", role=UserRoleEnum.member, username=None, member_id=None):
        user = User(
            email=email,
            username=username,
            password_hash=hash_password(password),
            role=role,
            member_id=member_id,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id, user.role.value)}"}

    return _auth_headers
