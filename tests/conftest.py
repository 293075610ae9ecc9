"""Shared test fixtures for the bizbooks test suite."""

import asyncio

import pytest

from bizbooks.core import db as core_db
from bizbooks.core.config import settings
from bizbooks.domain.services.access_control import UserContext


@pytest.fixture(scope="session")
def event_loop():
    """Use a single event loop for the entire test session."""
    loop = asyncio.new_event_loop()
    yield loop
    loop.close()


@pytest.fixture
def db_url(tmp_path) -> str:
    """A throwaway sqlite file per test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def db_session(event_loop, db_url):
    """An AsyncSession on a fresh schema; drive it with ``event_loop.run_until_complete``."""
    engine = core_db.make_engine(db_url)
    event_loop.run_until_complete(core_db.init_models(engine))
    session = core_db.make_session_factory(engine)()
    yield session
    event_loop.run_until_complete(session.close())
    event_loop.run_until_complete(engine.dispose())


@pytest.fixture
def api_client(monkeypatch, db_url):
    """TestClient running the app against a fresh, demo-seeded database."""
    from fastapi.testclient import TestClient

    engine = core_db.make_engine(db_url)
    monkeypatch.setattr(core_db, "engine", engine)
    monkeypatch.setattr(core_db, "AsyncSessionLocal", core_db.make_session_factory(engine))
    monkeypatch.setattr(settings, "SEED_DEMO_DATA", True)

    from bizbooks.main import app

    with TestClient(app) as client:
        yield client


def auth_headers(client, email: str, password: str = "demo123") -> dict:
    resp = client.post("/api/v1/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['data']['access_token']}"}


@pytest.fixture
def admin_headers(api_client) -> dict:
    return auth_headers(api_client, "jogendra@email.com")


@pytest.fixture
def assistant_headers(api_client) -> dict:
    return auth_headers(api_client, "assistant@email.com")


@pytest.fixture
def admin() -> UserContext:
    return UserContext(id="1", name="Admin", email="admin@example.com", role="admin", firm_access=("1", "2"))


@pytest.fixture
def assistant() -> UserContext:
    return UserContext(id="2", name="Assistant", email="assistant@example.com", role="user", firm_access=("1",))
