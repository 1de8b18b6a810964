"""
Outliner Backend — Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests (no DB)
    ├── app_settings:    Settings pointing at a per-test SQLite file
    ├── database:        Database with the schema created
    └── test_client:     HTTPX AsyncClient bound to a fresh app + database
"""

import os

# Set before any outliner import so the module-level settings never point at
# a real PostgreSQL instance
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from outliner.config import Settings  # noqa: E402
from outliner.database import Database  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_x(mock_db_session):
            mock_db_session.execute.return_value = result
            await outline_service.create_section(mock_db_session, payload)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def app_settings(tmp_path):
    """Settings for a throwaway SQLite database inside pytest's tmp_path."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'outliner_test.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def database(app_settings):
    """A Database with the three tables created; disposed after the test."""
    db = Database(app_settings)
    await db.create_schema()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def test_client(app_settings, database):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan, so the fixture attaches the
    already-initialized database to app.state itself.

    Usage:
        async def test_data(test_client):
            response = await test_client.get("/api/data")
            assert response.status_code == 200
    """
    from outliner.main import create_app

    app = create_app(app_settings)
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
