"""
User Registry Backend — User Service (Request Handlers)
=========================================================

What:  One handler per users operation: list, get, create, update, delete.
Why:   Encapsulates validate → store → serialize → classify-failure in one
       place, independent of HTTP concerns.
How:   Each handler takes raw input, runs it through the validation layer,
       makes exactly one store call, and returns a HandlerResult. Exceptions
       from validation or the store never escape; they become Failure values.
Who:   Called by the /api/users route handlers.

Failure mapping:
    ValidationError → Failure(VALIDATION)   store is never called
    NotFoundError   → Failure(NOT_FOUND)    "User not found"
    anything else   → Failure(STORE)        fixed per-operation message;
                                            exception details stay in the logs
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from app.exceptions import ErrorKind, NotFoundError, StoreError, ValidationError
from app.schemas.user import (
    DeleteResponse,
    UserResponse,
    parse_create_input,
    parse_update_input,
    parse_user_id,
)
from app.services.results import Failure, HandlerResult, Success
from app.services.store_base import UserStore
from app.services.user_store import user_store

logger = logging.getLogger(__name__)

DELETE_MESSAGE = "User deleted successfully"


class UserService:
    """
    Request handlers for the users resource.

    Stateless apart from the store it is given; safe to share across requests.

    Args:
        store: Record store to use. Defaults to the store configured at startup.
    """

    def __init__(self, store: Optional[UserStore] = None):
        self.store = store or user_store

    async def list_users(self) -> HandlerResult:
        """All users in store order. Can only fail with StoreError."""

        async def run() -> Success:
            users = await self.store.select_all()
            return Success([UserResponse.from_record(u).to_wire() for u in users])

        return await self._handle("Failed to fetch users", run)

    async def get_user(self, raw_id: Any) -> HandlerResult:
        """One user by id; NotFound when no row matches."""

        async def run() -> Success:
            user_id = parse_user_id(raw_id)
            user = await self.store.select_by_id(user_id)
            if user is None:
                raise NotFoundError(resource_id=user_id)
            return Success(UserResponse.from_record(user).to_wire())

        return await self._handle("Failed to fetch user", run)

    async def create_user(self, raw_body: Any) -> HandlerResult:
        """
        Validate and insert a new user.

        Defaults (isTrusted=false) come from the schema; id and both
        timestamps come from the store. Succeeds with 201.
        """

        async def run() -> Success:
            data = parse_create_input(raw_body)
            user = await self.store.insert(data.model_dump())
            logger.info("Created user %s", user.id)
            return Success(UserResponse.from_record(user).to_wire(), status_code=201)

        return await self._handle("Failed to create user", run)

    async def update_user(self, raw_id: Any, raw_body: Any) -> HandlerResult:
        """
        Partial update: only fields present in the body are changed.

        The id is validated before the body, so a bad id is reported even when
        the body is also invalid. An empty body still refreshes updatedAt.
        """

        async def run() -> Success:
            user_id = parse_user_id(raw_id)
            changes = parse_update_input(raw_body).changes()
            user = await self.store.update_by_id(user_id, changes)
            if user is None:
                raise NotFoundError(resource_id=user_id)
            logger.info("Updated user %s", user_id)
            return Success(UserResponse.from_record(user).to_wire())

        return await self._handle("Failed to update user", run)

    async def delete_user(self, raw_id: Any) -> HandlerResult:
        """Hard delete; returns an acknowledgment rather than the deleted record."""

        async def run() -> Success:
            user_id = parse_user_id(raw_id)
            user = await self.store.delete_by_id(user_id)
            if user is None:
                raise NotFoundError(resource_id=user_id)
            logger.info("Deleted user %s", user_id)
            return Success(DeleteResponse(success=True, message=DELETE_MESSAGE).to_wire())

        return await self._handle("Failed to delete user", run)

    async def _handle(
        self,
        store_failure_message: str,
        run: Callable[[], Awaitable[Success]],
    ) -> HandlerResult:
        """Run one handler body and classify whatever it raises."""
        try:
            return await run()
        except ValidationError as e:
            logger.warning("Validation error: %s | %s", e.message, e.details)
            return Failure(ErrorKind.VALIDATION, e.message, e.details)
        except NotFoundError as e:
            # Expected outcome, not an error
            logger.info("User not found: %s", e.context.get("resource_id"))
            return Failure(ErrorKind.NOT_FOUND, e.message)
        except StoreError as e:
            # Already logged with traceback by the store
            logger.error("%s | Context: %s", store_failure_message, e.context)
            return Failure(ErrorKind.STORE, store_failure_message)
        except Exception as e:
            logger.error("%s: %s", store_failure_message, str(e), exc_info=True)
            return Failure(ErrorKind.STORE, store_failure_message)


# ── Singleton Instance ────────────────────────────────────────────────────
# Stateless apart from the configured store
user_service = UserService()
