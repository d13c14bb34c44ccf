"""Pytest configuration and fixtures.

Database tests run against an in-memory SQLite database (aiosqlite) that is
created per test; the application's get_db dependency is overridden to use it.
"""

import os
from collections.abc import AsyncGenerator
from uuid import UUID

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment variables before importing app modules
TEST_SECRET_KEY = "test-signing-secret-4f9c2a71d8e3b6055a1e"
os.environ["JWT_SECRET_KEY"] = TEST_SECRET_KEY
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
# High admission budget so API tests never see 429
os.environ["RATE_LIMIT_PER_SECOND"] = "10000"
os.environ["RATE_LIMIT_BURST"] = "10000"

TEST_PASSWORD = "Passw0rd!"


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create an isolated in-memory database with all tables."""
    import snippetbox.models  # noqa: F401  (registers tables)
    from snippetbox.models.base import BaseModel

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for testing."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


# --- Application Fixtures ---


@pytest.fixture
def app():
    """A fresh application with its own admission budget."""
    from snippetbox.main import create_app

    return create_app()


@pytest.fixture
def token_codec(app):
    """The codec the application verifies tokens with."""
    return app.state.token_codec


@pytest_asyncio.fixture(scope="function")
async def async_client(app, db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database override."""
    from snippetbox.core.database import get_db

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# --- Test Factories ---


@pytest.fixture
def user_factory(db_session):
    """Factory for creating test User objects."""
    from snippetbox.models.user import User
    from snippetbox.services.auth import hash_password

    async def _create_user(
        username: str = "tester",
        email: str = "tester@example.com",
        password: str = TEST_PASSWORD,
    ) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
        )
        db_session.add(user)
        await db_session.flush()
        await db_session.refresh(user)
        return user

    return _create_user


@pytest.fixture
def snippet_factory(db_session):
    """Factory for creating test Snippet objects."""
    from snippetbox.models.snippet import Snippet

    async def _create_snippet(
        owner_id: UUID,
        title: str = "Hello",
        language: str = "python",
        content: str = "print('hello')",
    ) -> Snippet:
        snippet = Snippet(owner_id=owner_id, title=title, language=language, content=content)
        db_session.add(snippet)
        await db_session.flush()
        await db_session.refresh(snippet)
        return snippet

    return _create_snippet


@pytest.fixture
def test_password() -> str:
    """Password used by user_factory by default."""
    return TEST_PASSWORD


@pytest.fixture
def auth_headers(token_codec):
    """Build Authorization headers for an identity."""

    def _headers(identity: UUID) -> dict[str, str]:
        return {"Authorization": f"Bearer {token_codec.issue(identity)}"}

    return _headers


# --- Pytest Hooks for Auto-Marking ---


def pytest_collection_modifyitems(config, items):
    """Mark tests 'integration' when they use the database, 'unit' otherwise."""
    integration_fixtures = {"db_session", "db_engine", "async_client"}

    for item in items:
        if any(mark.name in ("unit", "integration") for mark in item.iter_markers()):
            continue

        if hasattr(item, "fixturenames") and integration_fixtures & set(item.fixturenames):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
