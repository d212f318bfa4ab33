"""
User Registry Backend — Test Configuration (conftest.py)
==========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_store:       AsyncMock implementing the UserStore contract
    ├── make_user:        Factory for transient User rows
    ├── session_factory:  async_sessionmaker bound to a scratch SQLite file
    ├── sql_store:        SQLUserStore on that scratch database
    └── test_client:      HTTPX AsyncClient wired to the app, using sql_store
"""

import os
import tempfile
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must happen BEFORE any app import: settings and the engine are built at import
os.environ["DATABASE_TYPE"] = "sqlite"
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="user_registry_test_"), "test.db")
)
os.environ["LOG_LEVEL"] = "WARNING"

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402

from app.database import create_tables  # noqa: E402
from app.models.user import User  # noqa: E402
from app.services.store_base import UserStore  # noqa: E402
from app.services.user_store import SQLUserStore  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_store():
    """
    A store double: every primitive is an AsyncMock.

    Usage:
        mock_store.select_by_id.return_value = make_user(id=1)
        result = await UserService(mock_store).get_user("1")
    """
    return AsyncMock(spec=UserStore)


@pytest.fixture
def make_user():
    """Build a transient User row with sensible defaults; override any field."""

    def _make(**overrides) -> User:
        now = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
        fields = {
            "id": 1,
            "name": "John",
            "surname": "Doe",
            "gender": "male",
            "is_trusted": False,
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return User(**fields)

    return _make


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    """Session factory on a fresh SQLite file with the users table created."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
    await create_tables(bind=engine)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
def sql_store(session_factory):
    return SQLUserStore(session_factory)


@pytest_asyncio.fixture
async def test_client(sql_store, monkeypatch):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    The app's handlers are pointed at `sql_store`, so every test starts
    from an empty users table.
    """
    from app.main import app
    from app.services.user_service import user_service

    monkeypatch.setattr(user_service, "store", sql_store)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
