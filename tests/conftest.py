"""Pytest configuration and fixtures for devfeed tests.

Database handling:
- Every test gets a fresh in-memory SQLite database (aiosqlite, one shared
  connection through StaticPool) with all tables created.
- The application's get_db dependency is overridden to open sessions on it.
"""

import os
from collections.abc import AsyncGenerator

# Set test environment variables before importing app modules
os.environ["JWT_SECRET"] = "test-signing-secret-0123456789-abcdefghij"
os.environ["JWT_EXPIRATION"] = "86400000"
os.environ["BCRYPT_ROUNDS"] = "4"  # Lowest cost bcrypt accepts, keeps tests fast
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "testing"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from devfeed.adapters.configuration.config import Settings
from devfeed.adapters.outbound.persistence.database import get_db
from devfeed.adapters.outbound.persistence.models import Base
from devfeed.application.context import AppContext
from devfeed.main import create_app

STRONG_PASSWORD = "Str0ng!pw"


# --- Database Fixtures ---


@pytest.fixture
async def db_engine():
    """In-memory database with every table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """A session for tests that talk to repositories directly."""
    async with session_factory() as session:
        yield session


# --- Application Fixtures ---


@pytest.fixture
def test_settings() -> Settings:
    return Settings()


@pytest.fixture
def app_context(test_settings) -> AppContext:
    """Fresh context per test, so revocations never leak between tests."""
    return AppContext.from_settings(test_settings)


@pytest.fixture
def app(app_context, session_factory):
    application = create_app(context=app_context)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async test client bound to the application, without a running server."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# --- Helpers ---


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register(client: AsyncClient, email: str, username: str, password: str = STRONG_PASSWORD) -> dict:
    """Register a user through the API and return the AuthResponse body."""
    response = await client.post(
        "/api/auth/register",
        json={"email": email, "username": username, "password": password},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
async def alice(async_client) -> dict:
    return await register(async_client, "alice@example.com", "alice")


@pytest.fixture
async def bob(async_client) -> dict:
    return await register(async_client, "bob@example.com", "bob")


@pytest.fixture
async def theme(async_client, alice) -> dict:
    response = await async_client.post(
        "/api/themes",
        json={"name": "Python", "description": "Everything Python"},
        headers=bearer(alice["token"]),
    )
    assert response.status_code == 201, response.text
    return response.json()
