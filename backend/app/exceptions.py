"""
User Registry Backend — Error Kinds & Exception Hierarchy
===========================================================

What:  The three error kinds the core surfaces, and the exceptions that
       carry them inside the core.
Why:   Every failure must land on a stable HTTP status and a stable
       `{error, details?}` body without leaking internal details.
How:   Validation helpers and the store raise these exceptions; request
       handlers catch them at their boundary and return a `Failure` value
       (see app/services/results.py). Routes never see exceptions from the
       core, only results.

Error kinds:
    ErrorKind.VALIDATION  → 400 Bad Request   (client can fix the input)
    ErrorKind.NOT_FOUND   → 404 Not Found     (well-formed id, no record)
    ErrorKind.STORE       → 500 Server Error  (persistence failed)

Exception Hierarchy:
    UserRegistryError (base)
    ├── ValidationError
    ├── NotFoundError
    └── StoreError
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    """Failure categories surfaced by the request handlers."""

    VALIDATION = "validation_error"
    NOT_FOUND = "not_found"
    STORE = "store_error"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE: 500,
}


class UserRegistryError(Exception):
    """
    Base exception for all User Registry application errors.

    Attributes:
        message:  Client-facing error description (safe to return)
        context:  Additional debug info (logged but NOT returned to client)
    """

    kind: ErrorKind = ErrorKind.STORE

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(UserRegistryError):
    """
    Raised when client input fails validation.

    `details` holds every violated constraint as `{field, message, type}`
    and is returned to the client verbatim.
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[List[Dict[str, Any]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = details or []


class NotFoundError(UserRegistryError):
    """
    Raised when a well-formed id matches no record.

    The store signals "no row" with None; handlers turn that into this
    kind. It is an expected outcome and is not logged as an error.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        message: str = "User not found",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class StoreError(UserRegistryError):
    """
    Raised when the persistence collaborator fails unexpectedly.

    The message is generic and fixed per operation; the original exception
    type goes into `context` for server-side logs only.
    """

    kind = ErrorKind.STORE

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
