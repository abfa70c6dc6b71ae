import asyncio

import pytest
from sqlalchemy import func, select

from app.models.user.profile import UserProfile


PROFILE = {
    "display_name": "Aiko",
    "location": "Osaka",
    "location_lat": 34.69,
    "location_lng": 135.50,
    "travel_style": "slow",
    "favorite_destinations": "Kyoto, Lisbon",
    "bio": "Trains and temples",
    "profile_picture_url": "https://img/aiko.png",
}


@pytest.mark.asyncio
async def test_profile_missing_until_written(client, auth_headers):
    resp = await client.get("/user/profile", headers=auth_headers())
    assert resp.status_code == 404
    assert resp.json() == {"error": "Profile not found"}


@pytest.mark.asyncio
async def test_put_creates_then_replaces(client, auth_headers):
    headers = auth_headers("user-a")

    resp = await client.put("/user/profile", json=PROFILE, headers=headers)
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Profile created successfully"
    assert body["profile"]["favorite_destinations"] == "Kyoto, Lisbon"
    assert body["profile"]["created_at"] is not None

    resp = await client.put("/user/profile", json={"display_name": "Aiko T.", "location": "Kobe"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "Profile updated successfully"

    profile = (await client.get("/user/profile", headers=headers)).json()
    assert profile["display_name"] == "Aiko T."
    assert profile["location"] == "Kobe"
    assert profile["bio"] is None
    assert profile["travel_style"] is None
    assert profile["location_lat"] is None


@pytest.mark.asyncio
async def test_second_put_refreshes_updated_at_only(client, auth_headers):
    headers = auth_headers("user-a")
    first = (await client.put("/user/profile", json=PROFILE, headers=headers)).json()["profile"]

    # Store timestamps have one-second resolution on SQLite
    await asyncio.sleep(1.1)
    second = (await client.put("/user/profile", json=PROFILE, headers=headers)).json()["profile"]

    assert second["created_at"] == first["created_at"]
    assert second["updated_at"] > first["updated_at"]


@pytest.mark.asyncio
async def test_concurrent_first_puts_create_one_profile(app, client, auth_headers):
    headers = auth_headers("user-a")
    await client.get("/user/profile", headers=headers)

    responses = await asyncio.gather(*[
        client.put("/user/profile", json={**PROFILE, "bio": f"take {n}"}, headers=headers) for n in range(4)
    ])

    assert sorted(r.status_code for r in responses) == [200, 200, 200, 201]
    async with app.state.db.session_factory() as session:
        count = await session.scalar(
            select(func.count()).select_from(UserProfile).where(UserProfile.subject_id == "user-a")
        )
    assert count == 1


@pytest.mark.asyncio
async def test_profiles_are_per_user(client, auth_headers):
    await client.put("/user/profile", json=PROFILE, headers=auth_headers("user-a"))
    resp = await client.get("/user/profile", headers=auth_headers("user-b"))
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_profile_rejects_out_of_range_coordinates(client, auth_headers):
    resp = await client.put("/user/profile", json={"location_lat": 120}, headers=auth_headers())
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_stats_empty(client, auth_headers):
    resp = await client.get("/user/profile/stats", headers=auth_headers())
    assert resp.status_code == 200
    assert resp.json() == {
        "total_trips": 0,
        "highly_rated_trips": 0,
        "total_destinations": 0,
        "completed_destinations": 0,
        "total_photos": 0,
        "countries_visited": 0,
        "completion_rate": 0,
    }


@pytest.mark.asyncio
async def test_stats_aggregate_across_trips(client, auth_headers, create_trip):
    headers = auth_headers("user-a")
    japan = await create_trip("user-a")
    osaka = await create_trip("user-a", title="Osaka", city="Osaka")
    korea = await create_trip("user-a", title="Korea", country="KR", city="Seoul")
    await create_trip("user-b", title="Elsewhere", country="FR")

    await client.patch(f"/trips/{japan['id']}/rating", json={"rating": 5}, headers=headers)
    await client.patch(f"/trips/{osaka['id']}/rating", json={"rating": 4}, headers=headers)
    await client.patch(f"/trips/{korea['id']}/rating", json={"rating": 3}, headers=headers)

    dest_ids = []
    for trip, name in [(japan, "Senso-ji"), (japan, "Ueno"), (osaka, "Dotonbori")]:
        resp = await client.post(f"/trips/{trip['id']}/destinations", json={"name": name}, headers=headers)
        dest_ids.append(resp.json()["id"])
    await client.patch(f"/destinations/{dest_ids[0]}/complete", headers=headers)

    for url in ("https://img/1.jpg", "https://img/2.jpg"):
        await client.post(f"/trips/{japan['id']}/photos", json={"image_url": url}, headers=headers)

    resp = await client.get("/user/profile/stats", headers=headers)
    assert resp.status_code == 200
    assert resp.json() == {
        "total_trips": 3,
        "highly_rated_trips": 2,
        "total_destinations": 3,
        "completed_destinations": 1,
        "total_photos": 2,
        "countries_visited": 2,
        "completion_rate": 33,
    }
