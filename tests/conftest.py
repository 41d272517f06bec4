# tests/conftest.py
# Test setup: temporary SQLite DBs, an app wired to the test engine, and a few builders.

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine

# Ensure repo root on sys.path so "import finances" works
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import finances.models as _models  # noqa: F401,E402  # registers tables on SQLModel.metadata
from finances.main import create_app  # noqa: E402
from finances.models import User  # noqa: E402


@pytest.fixture()
def engine():
    # In-memory DB for service-level tests (single thread, shared connection)
    eng = create_engine("sqlite:///:memory:", echo=False)
    SQLModel.metadata.create_all(eng)
    try:
        yield eng
    finally:
        eng.dispose()


@pytest.fixture()
def make_user(engine):
    """Insert a user row directly (no bcrypt; service tests don't sign in)."""

    def _make(email="svc@test.com", username="svc", fullname="Service User") -> int:
        with Session(engine) as s:
            user = User(
                email=email, username=username, fullname=fullname, hashed_password="x"
            )
            s.add(user)
            s.commit()
            s.refresh(user)
            return user.id

    return _make


@pytest.fixture()
def tmp_db_path(tmp_path: Path) -> Path:
    return tmp_path / "test_finances.db"


@pytest.fixture()
def test_engine(tmp_db_path: Path):
    # File-based SQLite so TestClient's worker threads share the same DB
    url = f"sqlite:///{tmp_db_path}"
    eng = create_engine(url, connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(eng)
    try:
        yield eng
    finally:
        eng.dispose()
        if tmp_db_path.exists():
            tmp_db_path.unlink()


@pytest.fixture()
def client(test_engine):
    # The app opens request sessions from the engine we hand it
    fastapi_app = create_app(engine=test_engine)
    with TestClient(fastapi_app) as c:
        yield c


def _register_and_login(
    client, email="t@test.com", username="tester", password="pw123456"
) -> int:
    r = client.post(
        "/api/auth/register",
        json={
            "email": email,
            "username": username,
            "fullname": "Test User",
            "password": password,
            "confirm_password": password,
        },
    )
    assert r.status_code == 201, r.text
    r = client.post("/api/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["user"]["id"]


@pytest.fixture()
def login(client):
    """Register + sign in on the shared client; returns the new user id."""

    def _login(**kwargs) -> int:
        return _register_and_login(client, **kwargs)

    return _login


@pytest.fixture()
def signed_in(client, login):
    """A client with a registered, signed-in user; returns (client, user_id)."""
    return client, login()
