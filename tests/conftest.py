import os
from datetime import date, timedelta
from typing import AsyncGenerator, Awaitable, Callable

# Settings are read at import time; provide test defaults before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./vemeet_app.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("COOKIE_SECURE", "false")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.database import Base, get_db, get_serializable_db
from app.main import app
from app.utils.age import years_before

# Point TEST_DATABASE_URL at a PostgreSQL database to run against the production dialect
TEST_DATABASE_URL = os.environ.get(
    "TEST_DATABASE_URL", "sqlite+aiosqlite:///./vemeet_test.db"
)

PASSWORD = "password123"

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
test_async_session_maker = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def birthday_for_age(age: int) -> date:
    """A birthday that makes someone ``age`` years old today."""
    return years_before(date.today(), age) - timedelta(days=30)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_async_session_maker() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_serializable_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def make_user(
    client: AsyncClient,
) -> Callable[..., Awaitable[tuple[str, str]]]:
    """Factory: register + login a user through the API. Returns (token, user_id)."""

    async def _make_user(
        username: str,
        gender: str | None = "male",
        seeking_gender: str = "female",
        age: int = 30,
        min_age: int = 18,
        max_age: int = 99,
        **extra,
    ) -> tuple[str, str]:
        email = f"{username}@example.com"
        payload = {
            "email": email,
            "username": username,
            "password": PASSWORD,
            "birthday": birthday_for_age(age).isoformat(),
            "gender": gender,
            "seeking_gender": seeking_gender,
            "min_age_preference": min_age,
            "max_age_preference": max_age,
            **extra,
        }
        register_response = await client.post("/api/v1/auth/register", json=payload)
        assert register_response.status_code == 201, register_response.text

        login_response = await client.post(
            "/api/v1/auth/login",
            data={"username": email, "password": PASSWORD},
        )
        assert login_response.status_code == 200, login_response.text
        return login_response.json()["access_token"], register_response.json()["id"]

    return _make_user
