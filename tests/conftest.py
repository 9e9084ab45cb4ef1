"""
Noteful API: Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Environment is pointed at an in-memory SQLite database before any
       noteful module is imported. API tests get a fresh schema per test on
       a StaticPool engine (one shared connection) and an httpx AsyncClient
       talking to the app through ASGITransport.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests
    ├── db_engine: SQLite engine with foreign keys on and the schema created
    ├── session_factory: async_sessionmaker bound to db_engine
    └── test_client: AsyncClient with get_db_session overridden
"""

import os

# Override settings for testing BEFORE any noteful imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["API_PREFIX"] = "/api"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import noteful.models  # noqa: F401  (registers every table on Base.metadata)
from noteful.database import Base, enable_sqlite_foreign_keys, get_db_session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_folder(mock_db_session):
            mock_db_session.get.return_value = None
            with pytest.raises(NotFoundError):
                await folder_service.get(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    """In-memory SQLite engine with the full schema, torn down after each test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Provides an async HTTP test client for endpoint testing.

    The session override keeps the production semantics: commit when the
    route returns, roll back when it raises.

    Usage:
        async def test_list_folders(test_client):
            response = await test_client.get("/api/folders")
            assert response.status_code == 200
    """
    from noteful.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
