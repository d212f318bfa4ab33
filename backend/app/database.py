"""
User Registry Backend — Database Engine & Session Management
==============================================================

What:  Async SQLAlchemy engine, session factory, and table bootstrap.
Why:   Centralizes all database connection logic in one place.
How:   Creates an async engine for the configured dialect and a session
       factory that the user store opens one session per operation from.
Who:   Used by the user store, the health routes, and the app lifespan.
When:  Engine is created at module import; sessions are created per store call.

Dialect notes:
    PostgreSQL (asyncpg): pooled connections sized from settings, pre-ping
    on checkout, hourly recycle.
    SQLite (aiosqlite): SQLAlchemy picks the pool class itself; passing
    pool_size/max_overflow to it would be rejected, so they are omitted.
"""

from typing import Any, Dict

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class to register with a single shared
    metadata object (used by `create_tables` at startup).
    """
    pass


def build_engine(database_url: str, postgresql: bool) -> AsyncEngine:
    """
    Create an async engine with dialect-appropriate pool options.

    Args:
        database_url: Async SQLAlchemy URL (driver included)
        postgresql:   Whether the URL targets PostgreSQL
    """
    options: Dict[str, Any] = {
        # SQL echo is only useful while developing
        "echo": settings.log_level == "DEBUG",
    }
    if postgresql:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return create_async_engine(database_url, **options)


# ── Engine Configuration ──────────────────────────────────────────────────
engine = build_engine(settings.resolved_database_url, settings.is_postgresql)

# ── Session Factory ───────────────────────────────────────────────────────
# expire_on_commit=False: returned ORM rows stay readable after the
# transaction commits and the session closes
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables(bind: AsyncEngine = engine) -> None:
    """
    What:  Creates every table registered on Base.metadata if it is missing.
    When:  Called during application startup when DB_CREATE_TABLES is on,
           and by the test suite against a scratch SQLite file.
    Note:  Existing tables are left untouched; this is not a migration tool.
    """
    # Import models so they register with Base.metadata
    from app.models import user  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """
    What:  Gracefully closes all connections in the pool.
    When:  Called during application shutdown (lifespan handler).
    """
    await engine.dispose()
