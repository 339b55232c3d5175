"""Pytest fixtures: SQLite database and TestClient for fast, isolated tests."""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from gift_registry.database import Base, get_db
from gift_registry.main import app
from gift_registry.models.profile import Role
from gift_registry.security import IDENTITY, create_token
from gift_registry.services import role_service
from gift_registry.services.access_service import OpenAccessPolicy, get_access_policy
from gift_registry.storage.blob_store import LocalBlobStore, get_blob_store

# Import all models so they register with Base.metadata
import gift_registry.models  # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def blob_store(tmp_path):
    return LocalBlobStore(str(tmp_path / "receipts"))


@pytest.fixture(scope="function")
def client(session_factory, blob_store):
    """FastAPI TestClient with database, blob store and access policy overridden."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_access_policy] = OpenAccessPolicy
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def create_profile(db, user_id: str, role: Role, password: str = "secret", email: str = None):
    """Helper: provision a profile directly through the Role Registry."""
    return role_service.provision_profile(
        db=db,
        user_id=user_id,
        full_name=user_id.title(),
        role=role,
        email=email,
        password=password,
    )


def auth_headers(user_id: str) -> dict:
    """Helper: bearer header with a signed identity token for ``user_id``."""
    token, _ = create_token(subject=user_id, token_type=IDENTITY, expires_minutes=5)
    return {"Authorization": f"Bearer {token}"}


def guest_headers(session_token: str) -> dict:
    return {"Authorization": f"Bearer {session_token}"}


def register_test_guest(client: TestClient, name: str = "Test Guest", code: str = "WED2025",
                        email: str = "guest@example.com", phone: str = "11999990000") -> dict:
    """Helper: admit with ``code`` then POST /api/rsvp; returns the session JSON."""
    resp = client.post("/api/access/admit", json={"code": code})
    assert resp.status_code == 200, resp.text
    resp = client.post("/api/rsvp", json={
        "access_ticket": resp.json()["access_ticket"],
        "full_name": name,
        "email": email,
        "phone": phone,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_gift(client: TestClient, headers: dict, name: str = "Toaster", price: str = "150.00") -> dict:
    """Helper: POST /api/admin/gifts and return response JSON."""
    resp = client.post("/api/admin/gifts", json={"name": name, "suggested_price": price}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def configure_event(client: TestClient, headers: dict, access_code: str = "WED2025",
                    pix_key: str = "pix@example.com") -> dict:
    """Helper: PUT /api/admin/event-config and return response JSON."""
    resp = client.put("/api/admin/event-config", json={
        "event_date": "2025-11-22T16:00:00",
        "pix_key": pix_key,
        "access_code": access_code,
        "welcome_message": "Welcome!",
    }, headers=headers)
    assert resp.status_code == 200, resp.text
    return resp.json()
