from datetime import date

import pytest
from httpx import AsyncClient

from app.core.security import create_access_token


def user_payload(**overrides) -> dict:
    payload = {
        "email": "test@example.com",
        "username": "tester",
        "password": "testpassword123",
        "birthday": "1995-05-17",
        "gender": "female",
        "seeking_gender": "male",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_register(client: AsyncClient, db_session):
    response = await client.post("/api/v1/auth/register", json=user_payload())

    assert response.status_code == 201
    data = response.json()
    assert data["email"] == "test@example.com"
    assert data["username"] == "tester"
    assert data["seeking_gender"] == "male"
    assert data["min_age_preference"] == 18
    assert data["max_age_preference"] == 99
    assert "password" not in data
    assert "password_hash" not in data


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, db_session):
    await client.post("/api/v1/auth/register", json=user_payload())
    response = await client.post(
        "/api/v1/auth/register", json=user_payload(username="someone_else")
    )

    assert response.status_code == 409
    assert response.json()["code"] == "RESOURCE_ALREADY_EXISTS"
    assert response.json()["field"] == "email"


@pytest.mark.asyncio
async def test_register_duplicate_username(client: AsyncClient, db_session):
    await client.post("/api/v1/auth/register", json=user_payload())
    response = await client.post(
        "/api/v1/auth/register", json=user_payload(email="other@example.com")
    )

    assert response.status_code == 409
    assert response.json()["field"] == "username"


@pytest.mark.asyncio
async def test_register_underage_rejected(client: AsyncClient, db_session):
    birthday = date(date.today().year - 16, 1, 1).isoformat()
    response = await client.post(
        "/api/v1/auth/register", json=user_payload(birthday=birthday)
    )

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_register_inverted_age_window_rejected(client: AsyncClient, db_session):
    response = await client.post(
        "/api/v1/auth/register",
        json=user_payload(min_age_preference=40, max_age_preference=30),
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, db_session):
    await client.post("/api/v1/auth/register", json=user_payload())

    response = await client.post(
        "/api/v1/auth/login",
        data={"username": "test@example.com", "password": "testpassword123"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert "access_token=" in response.headers.get("set-cookie", "")


@pytest.mark.asyncio
async def test_login_wrong_password(client: AsyncClient, db_session):
    await client.post("/api/v1/auth/register", json=user_payload())

    response = await client.post(
        "/api/v1/auth/login",
        data={"username": "test@example.com", "password": "wrongpassword"},
    )

    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_INVALID_CREDENTIALS"
    assert "X-Request-ID" in response.headers


@pytest.mark.asyncio
async def test_me_with_bearer_token(client: AsyncClient, db_session):
    await client.post("/api/v1/auth/register", json=user_payload())
    login = await client.post(
        "/api/v1/auth/login",
        data={"username": "test@example.com", "password": "testpassword123"},
    )
    token = login.json()["access_token"]
    client.cookies.clear()

    response = await client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 200
    assert response.json()["email"] == "test@example.com"


@pytest.mark.asyncio
async def test_me_with_cookie(client: AsyncClient, db_session):
    await client.post("/api/v1/auth/register", json=user_payload())
    login = await client.post(
        "/api/v1/auth/login",
        data={"username": "test@example.com", "password": "testpassword123"},
    )
    token = login.json()["access_token"]
    client.cookies.clear()

    response = await client.get(
        "/api/v1/auth/me",
        headers={"Cookie": f"access_token={token}"},
    )

    assert response.status_code == 200
    assert response.json()["username"] == "tester"


@pytest.mark.asyncio
async def test_me_unauthenticated(client: AsyncClient, db_session):
    response = await client.get("/api/v1/auth/me")

    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_NOT_AUTHENTICATED"


@pytest.mark.asyncio
async def test_me_invalid_token(client: AsyncClient, db_session):
    response = await client.get(
        "/api/v1/auth/me",
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    assert response.status_code == 401
    assert response.json()["code"] == "AUTH_TOKEN_INVALID"


@pytest.mark.asyncio
async def test_me_token_for_unknown_user(client: AsyncClient, db_session):
    token, _ = create_access_token("00000000-0000-0000-0000-000000000000")

    response = await client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_cookie(client: AsyncClient, db_session):
    response = await client.post("/api/v1/auth/logout")

    assert response.status_code == 204
    assert "access_token=" in response.headers.get("set-cookie", "")
