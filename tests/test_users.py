import uuid

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_get_session_user(client: AsyncClient, db_session, make_user):
    token, user_id = await make_user("alice", gender="female", seeking_gender="male")

    response = await client.get(
        "/api/v1/users",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == user_id
    assert data["email"] == "alice@example.com"
    assert data["seeking_gender"] == "male"


@pytest.mark.asyncio
async def test_update_preferences(client: AsyncClient, db_session, make_user):
    token, _ = await make_user("alice", gender="female", seeking_gender="male")

    response = await client.patch(
        "/api/v1/users",
        json={
            "seeking_gender": "any",
            "min_age_preference": 25,
            "max_age_preference": 35,
            "city": "Berlin",
            "country": "Germany",
        },
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["seeking_gender"] == "any"
    assert data["min_age_preference"] == 25
    assert data["max_age_preference"] == 35
    assert data["city"] == "Berlin"
    # Untouched fields keep their values
    assert data["gender"] == "female"
    assert data["username"] == "alice"


@pytest.mark.asyncio
async def test_update_min_age_above_existing_max_fails(
    client: AsyncClient, db_session, make_user
):
    token, _ = await make_user("alice", max_age=40)

    response = await client.patch(
        "/api/v1/users",
        json={"min_age_preference": 45},
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"
    assert response.json()["field"] == "min_age_preference"


@pytest.mark.asyncio
async def test_update_username_taken(client: AsyncClient, db_session, make_user):
    await make_user("alice")
    token_b, _ = await make_user("bob")

    response = await client.patch(
        "/api/v1/users",
        json={"username": "alice"},
        headers={"Authorization": f"Bearer {token_b}"},
    )

    assert response.status_code == 409
    assert response.json()["field"] == "username"


@pytest.mark.asyncio
async def test_get_public_user(client: AsyncClient, db_session, make_user):
    token_a, _ = await make_user("alice", gender="female", seeking_gender="male")
    _, user_b_id = await make_user("bob", age=27, city="Lisbon")

    response = await client.get(
        f"/api/v1/users/{user_b_id}",
        headers={"Authorization": f"Bearer {token_a}"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["username"] == "bob"
    assert data["age"] == 27
    assert data["city"] == "Lisbon"
    # Account details stay private
    assert "email" not in data
    assert "birthday" not in data
    assert "min_age_preference" not in data


@pytest.mark.asyncio
async def test_get_unknown_user(client: AsyncClient, db_session, make_user):
    token, _ = await make_user("alice")

    response = await client.get(
        f"/api/v1/users/{uuid.uuid4()}",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 404
    assert response.json()["code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] in {"healthy", "degraded"}
