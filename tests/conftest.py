"""Shared test fixtures for the Travel Companion API."""

import os

# Configure before anything under app/ builds its Settings
os.environ.setdefault("IDENTITY_PROVIDER", "jwt")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("CREATE_TABLES_ON_STARTUP", "false")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.core.config import Settings
from app.main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'travel_companion_test.db'}",
        IDENTITY_PROVIDER="jwt",
        JWT_SECRET_KEY=TEST_SECRET,
        CREATE_TABLES_ON_STARTUP=False,
    )


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    await application.state.db.create_all()
    yield application
    await application.state.db.dispose()


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(app):
    """Build an Authorization header for any subject."""
    verifier = app.state.identity_verifier

    def _headers(subject_id: str = "user-a", email: str = None, display_name: str = None) -> dict:
        token = verifier.issue_token(subject_id, email or f"{subject_id}@example.com", display_name)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def japan_trip():
    return {
        "title": "Japan",
        "country": "JP",
        "city": "Tokyo",
        "start_date": "2025-04-01",
        "end_date": "2025-04-10",
    }


@pytest_asyncio.fixture
async def create_trip(client, auth_headers, japan_trip):
    async def _create(subject_id: str = "user-a", **overrides) -> dict:
        payload = {**japan_trip, **overrides}
        resp = await client.post("/trips", json=payload, headers=auth_headers(subject_id))
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
