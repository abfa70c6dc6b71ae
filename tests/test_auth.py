"""Bearer authentication and local user sync."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from jose import jwt
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from app.models.user.user import User


async def _users(app, subject_id):
    async with app.state.db.session_factory() as session:
        result = await session.execute(select(User).where(User.subject_id == subject_id))
        return result.scalars().all()


@pytest.mark.asyncio
async def test_home_and_health_need_no_token(client):
    home = await client.get("/")
    assert home.status_code == 200
    assert "message" in home.json()

    health = await client.get("/health")
    assert health.status_code == 200
    assert health.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_health_reports_unreachable_store(client):
    failure = OperationalError("SELECT 1", {}, Exception("connection refused"))
    with patch("app.core.database.Database.ping", AsyncMock(side_effect=failure)):
        resp = await client.get("/health")

    assert resp.status_code == 503
    assert resp.json() == {"status": "unhealthy"}


@pytest.mark.asyncio
async def test_missing_token_is_rejected(client):
    resp = await client.get("/trips")
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized: No token provided"}
    assert resp.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
@pytest.mark.parametrize("header", ["Basic dXNlcjpwYXNz", "Bearer", "token-without-scheme"])
async def test_malformed_header_is_rejected(client, header):
    resp = await client.get("/trips", headers={"Authorization": header})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Unauthorized: No token provided"


@pytest.mark.asyncio
async def test_forged_token_is_rejected(client):
    forged = jwt.encode({"sub": "user-a"}, "not-the-secret", algorithm="HS256")
    resp = await client.get("/trips", headers={"Authorization": f"Bearer {forged}"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized: Invalid token"}


@pytest.mark.asyncio
async def test_expired_token_is_rejected(app, client):
    token = app.state.identity_verifier.issue_token("user-a", expires_delta=timedelta(minutes=-5))
    resp = await client.get("/trips", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Unauthorized: Invalid token"}


@pytest.mark.asyncio
async def test_first_request_provisions_user(app, client, auth_headers):
    resp = await client.get("/trips", headers=auth_headers("user-a", "a@example.com", "Ada"))
    assert resp.status_code == 200

    users = await _users(app, "user-a")
    assert len(users) == 1
    assert users[0].email == "a@example.com"
    assert users[0].display_name == "Ada"


@pytest.mark.asyncio
async def test_repeat_login_refreshes_identity_without_duplicates(app, client, auth_headers):
    await client.get("/trips", headers=auth_headers("user-a", "old@example.com", "Ada"))
    await client.get("/trips", headers=auth_headers("user-a", "new@example.com", "Ada L."))

    users = await _users(app, "user-a")
    assert len(users) == 1
    assert users[0].email == "new@example.com"
    assert users[0].display_name == "Ada L."


@pytest.mark.asyncio
async def test_user_sync_failure_is_logged_and_request_proceeds(client, auth_headers):
    failure = OperationalError("INSERT INTO users", {}, Exception("connection refused"))
    with patch("app.dependencies.auth.UserService.upsert", AsyncMock(side_effect=failure)):
        resp = await client.get("/trips", headers=auth_headers())

    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_user_sync_failure_can_fail_the_request(app, client, auth_headers):
    app.state.settings = app.state.settings.model_copy(update={"USER_SYNC_FAILURE_POLICY": "fail"})
    failure = OperationalError("INSERT INTO users", {}, Exception("connection refused"))
    with patch("app.dependencies.auth.UserService.upsert", AsyncMock(side_effect=failure)):
        resp = await client.get("/trips", headers=auth_headers())

    assert resp.status_code == 500
    body = resp.json()
    assert body["error"] == "Database error"
    assert "connection refused" in body["details"]


@pytest.mark.asyncio
async def test_unsynced_user_cannot_own_rows(client, auth_headers, japan_trip):
    failure = OperationalError("INSERT INTO users", {}, Exception("connection refused"))
    with patch("app.dependencies.auth.UserService.upsert", AsyncMock(side_effect=failure)):
        resp = await client.post("/trips", json=japan_trip, headers=auth_headers("never-synced"))

    assert resp.status_code == 500
    assert resp.json()["error"] == "Database error"

    # The next successful sync provisions the user and writes go through again
    resp = await client.post("/trips", json=japan_trip, headers=auth_headers("never-synced"))
    assert resp.status_code == 201
