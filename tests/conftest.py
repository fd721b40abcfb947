"""Pytest fixtures."""

import itertools

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from legacy_vault.core.config import settings
from legacy_vault.db.base import Base
from legacy_vault.models import ActivityLog, AdminAction, Asset, MoodEntry, Nominee, User, WellbeingAlert, WellbeingSettings  # noqa: F401 - register for create_all
from legacy_vault.main import app
from legacy_vault.db.session import get_db
from legacy_vault.services import registration_service
from legacy_vault.services.auth_service import create_user

TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

_seq = itertools.count(1)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


class _FakeCollection:
    """In-memory stand-in for the pending registrations collection."""

    def __init__(self):
        self.docs = {}
        self.indexes = []

    async def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))
        return keys

    async def insert_one(self, doc):
        self.docs[doc["token"]] = dict(doc)

    async def find_one(self, query):
        doc = self.docs.get(query.get("token"))
        return dict(doc) if doc else None

    async def delete_one(self, query):
        self.docs.pop(query.get("token"), None)


@pytest.fixture(autouse=True)
def registrations(monkeypatch):
    """Route registration storage to an in-memory collection."""
    fake = _FakeCollection()
    monkeypatch.setattr(registration_service, "get_registrations_collection", lambda: fake)
    return fake


@pytest.fixture(scope="session")
def setup_db():
    """Create tables once for test session."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(setup_db):
    """Test client with overridden DB."""
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def session_factory(setup_db):
    """Independent sessions, e.g. one per thread or per simulated request."""
    return TestingSessionLocal


@pytest.fixture
def db_session(setup_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """Run both registration steps and return the new account's ids and token."""

    def _register(password="s3cret-pass", full_name="Asha Menon"):
        n = next(_seq)
        mobile = f"98{n:08d}"
        email = f"user{n}@test.com"
        step1 = client.post(
            "/auth/register/step1",
            json={
                "full_name": full_name,
                "date_of_birth": "1958-04-12",
                "mobile_number": mobile,
                "country_code": "+91",
                "address": "12 Residency Road, Bengaluru",
            },
        )
        assert step1.status_code == 200, step1.text
        step2 = client.post(
            "/auth/register/step2",
            json={
                "registration_token": step1.json()["registration_token"],
                "email": email,
                "password": password,
            },
        )
        assert step2.status_code == 201, step2.text
        body = step2.json()
        return {
            "id": body["user"]["id"],
            "email": email,
            "mobile": mobile,
            "password": password,
            "headers": auth_headers(body["access_token"]),
        }

    return _register


@pytest.fixture
def admin_headers(client):
    r = client.post(
        "/auth/login",
        json={"identifier": settings.admin_email, "password": settings.admin_password},
    )
    assert r.status_code == 200, r.text
    return auth_headers(r.json()["access_token"])


@pytest.fixture
def make_user(db_session):
    """Create a user directly through the service layer."""

    def _make(with_wellbeing_settings=True):
        n = next(_seq)
        return create_user(
            db_session,
            email=f"direct{n}@test.com",
            full_name="Direct User",
            password="s3cret-pass",
            mobile_number=f"97{n:08d}",
            address="4 Lake View, Kochi",
            with_wellbeing_settings=with_wellbeing_settings,
        )

    return _make
