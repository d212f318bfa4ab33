"""
User Registry Backend — Abstract User Store Interface
=======================================================

What:  Abstract base class defining the contract for user persistence.
Why:   Request handlers are written against this contract only, so the
       concrete storage (SQLite, PostgreSQL, a test double) can change
       without touching them.
How:   Concrete implementations inherit from UserStore and implement the five
       primitives below.
Who:   Called by UserService; implemented by SQLUserStore.

Contract:
    - insert() assigns id, created_at and updated_at (both equal)
    - update_by_id() applies only the given fields and always refreshes
      updated_at
    - select_by_id(), update_by_id() and delete_by_id() return None when no
      row matches; "no row" is a normal outcome, not an error
    - Unexpected persistence failures are raised as StoreError
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from app.models.user import User


class UserStore(ABC):
    """Abstract interface over the `users` table."""

    @abstractmethod
    async def insert(self, fields: Dict[str, Any]) -> User:
        """
        Persist a new user.

        Args:
            fields: Validated column values (name, surname, gender, is_trusted)

        Returns:
            The stored row with id and timestamps populated.
        """
        ...

    @abstractmethod
    async def select_all(self) -> List[User]:
        """Every user, in insertion (id) order."""
        ...

    @abstractmethod
    async def select_by_id(self, user_id: int) -> Optional[User]:
        """The user with this id, or None."""
        ...

    @abstractmethod
    async def update_by_id(self, user_id: int, changes: Dict[str, Any]) -> Optional[User]:
        """
        Merge `changes` onto the user and refresh updated_at.

        An empty `changes` dict still refreshes updated_at.

        Returns:
            The updated row, or None when no user has this id.
        """
        ...

    @abstractmethod
    async def delete_by_id(self, user_id: int) -> Optional[User]:
        """Hard-delete the user; returns the removed row, or None."""
        ...
