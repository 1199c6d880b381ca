"""
Test fixtures for the Courier API test suite.

  - settings: An explicit configuration record (never read from the real env)
  - app: An application built from those settings
  - db_engine / db_session: Fresh in-memory SQLite database for each test
  - client: Async HTTP test client (unauthenticated)
  - authenticated_client: Test client with a registered user and bearer token
  - make_user / token_for: Helpers for inserting users and minting tokens

Each test gets a completely fresh database. FastAPI's get_db dependency is
overridden to hand out sessions bound to that database, so the application
code runs exactly as it does in production.
"""

from datetime import datetime, timezone

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from courier_api.config import Settings
from courier_api.database import Base, get_db
from courier_api.main import create_app
from courier_api.models.user import User, UserRole
from courier_api.security import create_access_token, hash_password


# In-memory SQLite for fast, isolated tests
TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture
def settings():
    """Configuration record for tests; .env files are ignored."""
    return Settings(
        _env_file=None,
        NODE_ENV="test",
        DATABASE_URL=TEST_DATABASE_URL,
        JWT_SECRET="test-secret-key",
        JWT_EXPIRES_IN="1h",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest_asyncio.fixture
async def db_engine():
    """Create a fresh async engine with all tables for each test."""
    engine = create_async_engine(TEST_DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Provide an async session bound to the test engine."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session


@pytest_asyncio.fixture
async def client(app, db_engine):
    """
    Async HTTP test client with the test database injected.

    This overrides the get_db dependency so all requests hit the
    in-memory test database instead of the configured one.
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def authenticated_client(client):
    """
    Test client with a registered user and JWT token.

    Registers via the real endpoint, then sets the Authorization header on
    the client for all subsequent requests.
    """
    response = await client.post(
        "/auth/register",
        json={
            "fullName": "Test User",
            "email": "testuser@example.com",
            "password": "SecurePass123!",
            "phoneNumber": "+91-98765-43210",
        },
    )
    assert response.status_code == 201, f"Register failed: {response.text}"
    token = response.json()["data"]["accessToken"]
    client.headers["Authorization"] = f"Bearer {token}"
    return client


@pytest.fixture
def make_user(db_session):
    """Insert a user directly, bypassing the register endpoint."""

    async def _make_user(**overrides) -> User:
        fields = {
            "id": "u1",
            "full_name": "Ada Lovelace",
            "email": "ada@example.com",
            "phone_number": None,
            "role": UserRole.USER,
            "password_hash": hash_password("AnalyticalEngine1"),
            "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        }
        fields.update(overrides)
        user = User(**fields)
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def token_for(settings):
    """Mint a bearer token for an arbitrary user id."""

    def _token_for(user_id: str, role: str | None = "USER") -> str:
        return create_access_token(settings, subject=user_id, role=role)

    return _token_for
