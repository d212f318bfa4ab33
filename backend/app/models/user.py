"""
User Registry Backend — User SQLAlchemy Model
===============================================

What:  ORM model representing the `users` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; the same mapping serves both
       SQLite and PostgreSQL.
Who:   Used by SQLUserStore for CRUD operations.

Table Design Rationale:
    - Integer primary key: SERIAL on PostgreSQL, AUTOINCREMENT on SQLite
      (AUTOINCREMENT keeps SQLite from reusing the id of a deleted row)
    - gender: VARCHAR(50) plus a CHECK constraint so no value outside
      male/female/other can be persisted even by a direct insert
    - is_trusted: NOT NULL, defaults to false
    - created_at / updated_at: timezone-aware UTC, assigned by the store
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, false
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from app.database import Base

GENDER_VALUES = ("male", "female", "other")


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware DateTime that always comes back in UTC.

    SQLite has no timestamp type and hands back naive datetimes; PostgreSQL
    returns aware ones in the session time zone. Normalizing on load keeps
    `createdAt`/`updatedAt` serialization identical across dialects.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        if value is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class User(Base):
    """
    A persisted user record.

    Lifecycle:
        1. Created by SQLUserStore.insert() (id and both timestamps assigned)
        2. Mutated only by SQLUserStore.update_by_id() (updated_at refreshed)
        3. Hard-deleted by SQLUserStore.delete_by_id()
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    surname: Mapped[str] = mapped_column(String(255), nullable=False)
    gender: Mapped[str] = mapped_column(String(50), nullable=False)

    is_trusted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        CheckConstraint(
            "gender IN ({})".format(", ".join(f"'{g}'" for g in GENDER_VALUES)),
            name="ck_users_gender",
        ),
        CheckConstraint("created_at <= updated_at", name="ck_users_timestamps"),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<User(id={self.id}, name='{self.name}', surname='{self.surname}')>"
