"""
User Registry Backend — SQL User Store
========================================

What:  UserStore implementation on async SQLAlchemy, shared by the SQLite and
       PostgreSQL dialects.
Why:   The dialect is picked once at startup through configuration
       (see app/config.py and app/database.py); this class only sees a session
       factory.
How:   Each primitive opens its own session and transaction, so a handler's
       single store call is committed (or rolled back) before it returns.

Error Handling Strategy:
    SQLAlchemy errors are logged with full detail and re-raised as StoreError
    with a generic message. "No matching row" is returned as None.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.database import async_session_factory
from app.exceptions import StoreError
from app.models.user import User
from app.services.store_base import UserStore

logger = logging.getLogger(__name__)

# Largest value an INTEGER primary key can hold on PostgreSQL.
# Anything above it cannot name an existing row.
MAX_USER_ID = 2**31 - 1

# Columns callers are allowed to write; id and timestamps belong to the store
WRITABLE_FIELDS = frozenset({"name", "surname", "gender", "is_trusted"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _writable(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if key in WRITABLE_FIELDS}


class SQLUserStore(UserStore):
    """
    Relational user store.

    Args:
        session_factory: Where sessions come from. Defaults to the
            application-wide factory; tests pass one bound to a scratch DB.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker[AsyncSession]] = None):
        self._session_factory = session_factory or async_session_factory

    async def insert(self, fields: Dict[str, Any]) -> User:
        now = _utcnow()
        user = User(**_writable(fields), created_at=now, updated_at=now)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(user)
                    await session.flush()  # Assigns the id
        except SQLAlchemyError as e:
            raise self._wrap("insert", e) from e

        logger.debug("Inserted user %s", user.id)
        return user

    async def select_all(self) -> List[User]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(User).order_by(User.id))
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise self._wrap("select_all", e) from e

    async def select_by_id(self, user_id: int) -> Optional[User]:
        if not 0 <= user_id <= MAX_USER_ID:
            return None
        try:
            async with self._session_factory() as session:
                return await session.get(User, user_id)
        except SQLAlchemyError as e:
            raise self._wrap("select_by_id", e, user_id=user_id) from e

    async def update_by_id(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        if not 0 <= user_id <= MAX_USER_ID:
            return None
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    user = await session.get(User, user_id)
                    if user is None:
                        return None
                    for key, value in _writable(changes).items():
                        setattr(user, key, value)
                    # Refreshed even when nothing else changed; never earlier
                    # than created_at, whatever the clock did in between
                    user.updated_at = max(_utcnow(), user.created_at)
        except SQLAlchemyError as e:
            raise self._wrap("update_by_id", e, user_id=user_id) from e

        logger.debug("Updated user %s (%s)", user_id, ", ".join(sorted(changes)) or "no fields")
        return user

    async def delete_by_id(self, user_id: int) -> Optional[User]:
        if not 0 <= user_id <= MAX_USER_ID:
            return None
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    user = await session.get(User, user_id)
                    if user is None:
                        return None
                    await session.delete(user)
        except SQLAlchemyError as e:
            raise self._wrap("delete_by_id", e, user_id=user_id) from e

        logger.debug("Deleted user %s", user_id)
        return user

    @staticmethod
    def _wrap(operation: str, error: SQLAlchemyError, **context: Any) -> StoreError:
        logger.error("Database error in %s: %s", operation, str(error), exc_info=True)
        return StoreError(
            context={"operation": operation, "error_type": type(error).__name__, **context},
        )


# ── Singleton Instance ────────────────────────────────────────────────────
# Bound to the engine chosen at startup by DATABASE_TYPE
user_store = SQLUserStore()
