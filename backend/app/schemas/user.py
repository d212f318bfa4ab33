"""
User Registry Backend — Pydantic Request/Response Schemas (Validation Layer)
==============================================================================

What:  Pydantic models defining the API contract for the users resource, plus
       the parse helpers that turn raw, untrusted input into typed values.
Why:   Strict input validation, consistent serialization, and a single place
       where every violated constraint is collected into `details`.
How:   Request handlers pass raw input (decoded JSON body, path string) to the
       parse_* helpers. On success they get a typed model; on failure a
       ValidationError carrying every violation. Nothing here touches the store.

Wire format:
    Fields are snake_case in Python and camelCase on the wire
    (is_trusted ↔ isTrusted, created_at ↔ createdAt, updated_at ↔ updatedAt).

Strictness:
    Strings and booleans are strict: `"isTrusted": "true"` or `"name": 42`
    are rejected rather than coerced.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    ValidationError as PydanticValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel

from app.exceptions import ValidationError

_ID_PATTERN = re.compile(r"[0-9]+")


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class CamelModel(BaseModel):
    """
    Shared config: camelCase aliases on the wire, enum values stored as plain strings.

    Request bodies are read by alias only, so a snake_case key such as
    `is_trusted` is an unknown field and ignored like any other.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        use_enum_values=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What the client sends
# ══════════════════════════════════════════════════════════════════════════


class UserCreate(CamelModel):
    """
    What:  Body of POST /api/users.
    Rules: name/surname 1-255 chars, gender one of male/female/other,
           isTrusted optional and false when omitted.
    """
    name: StrictStr = Field(min_length=1, max_length=255, description="Given name")
    surname: StrictStr = Field(min_length=1, max_length=255, description="Family name")
    gender: Gender = Field(description="One of: male, female, other")
    is_trusted: StrictBool = Field(default=False, description="Trusted flag (default false)")


class UserUpdate(CamelModel):
    """
    What:  Body of PUT /api/users/{id}; a partial update.
    Rules: Every field is optional, but a field that IS present must be valid
           (explicit null is rejected). An empty object is a valid update.
    """
    name: Optional[StrictStr] = Field(default=None, min_length=1, max_length=255)
    surname: Optional[StrictStr] = Field(default=None, min_length=1, max_length=255)
    gender: Optional[Gender] = None
    is_trusted: Optional[StrictBool] = None

    @field_validator("name", "surname", "gender", "is_trusted")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        # Only runs for values the client actually sent
        if v is None:
            raise ValueError("Field may be omitted but not null")
        return v

    def changes(self) -> Dict[str, Any]:
        """Only the fields present in the request, keyed by column name."""
        return self.model_dump(exclude_unset=True)


class UserIdParam(BaseModel):
    """
    What:  The `{id}` path segment.
    Rules: One or more ASCII digits, converted to int. "12a", "-1", "1.5",
           "" and anything non-string fail.
    """
    id: int

    @field_validator("id", mode="before")
    @classmethod
    def digits_only(cls, v: Any) -> int:
        if not isinstance(v, str) or not _ID_PATTERN.fullmatch(v):
            raise ValueError("ID must be a number")
        return int(v)


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class UserResponse(CamelModel):
    """
    What:  Full representation of a user record.
    Who:   Returned by GET (single and list), POST and PUT.
    """
    # from_record() fills fields by attribute name
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(description="Store-assigned identifier")
    name: str
    surname: str
    gender: Gender
    is_trusted: bool
    created_at: datetime = Field(description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(description="Last update time (UTC ISO 8601)")

    @classmethod
    def from_record(cls, record: Any) -> "UserResponse":
        """Build from an ORM row (or any object exposing the same attributes)."""
        return cls(
            id=record.id,
            name=record.name,
            surname=record.surname,
            gender=record.gender,
            is_trusted=record.is_trusted,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class ErrorResponse(BaseModel):
    """
    What:  Standardized error body for every failure.

    Example:
        {"error": "Validation failed",
         "details": [{"field": "surname", "message": "Field required", "type": "missing"}]}
    """
    error: str = Field(description="Human-readable error description")
    details: Optional[Any] = Field(default=None, description="Violations, when available")

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True, mode="json")


class DeleteResponse(BaseModel):
    """Acknowledgment returned by DELETE; the deleted record is not echoed back."""
    success: bool
    message: str

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class HealthResponse(BaseModel):
    """Liveness probe body for GET /health."""
    status: str = Field(description="Always 'ok' while the process is live")
    timestamp: datetime = Field(description="Server time (UTC ISO 8601)")
    uptime: float = Field(description="Seconds since the service started")


class ReadinessResponse(BaseModel):
    """Readiness probe body for GET /health/ready."""
    status: str = Field(description="ready or not_ready")
    database: str = Field(description="connected or disconnected")


# ══════════════════════════════════════════════════════════════════════════
# Parse Helpers — raw input → typed value | ValidationError
# ══════════════════════════════════════════════════════════════════════════


# Client-facing wording per field and pydantic error type ("*" matches any
# type). Errors not listed keep pydantic's own message.
CREATE_MESSAGES: Dict[str, Dict[str, str]] = {
    "name": {"missing": "Name is required", "string_too_short": "Name is required"},
    "surname": {"missing": "Surname is required", "string_too_short": "Surname is required"},
    "gender": {"*": "Gender must be male, female, or other"},
}
ID_MESSAGES: Dict[str, Dict[str, str]] = {"id": {"*": "ID must be a number"}}


def violation_details(
    exc: PydanticValidationError,
    messages: Optional[Dict[str, Dict[str, str]]] = None,
) -> List[Dict[str, Any]]:
    """
    Flatten pydantic errors into JSON-safe `{field, message, type}` entries.

    Errors on the whole body (e.g. an array instead of an object) have an
    empty location and are reported against "body". `messages` replaces the
    default text for the listed field/type pairs.
    """
    details = []
    for err in exc.errors(include_url=False):
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        overrides = (messages or {}).get(field, {})
        message = overrides.get(err["type"], overrides.get("*", err["msg"]))
        details.append({"field": field, "message": message, "type": err["type"]})
    return details


def parse_create_input(raw: Any) -> UserCreate:
    """Validate a POST body. Raises ValidationError with every violation."""
    try:
        return UserCreate.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(details=violation_details(e, CREATE_MESSAGES)) from e


def parse_update_input(raw: Any) -> UserUpdate:
    """Validate a PUT body. A missing body counts as an empty update."""
    if raw is None:
        raw = {}
    try:
        return UserUpdate.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(details=violation_details(e)) from e


def parse_user_id(raw: Any) -> int:
    """Validate the `{id}` path segment and return it as an int."""
    try:
        return UserIdParam.model_validate({"id": raw}).id
    except PydanticValidationError as e:
        raise ValidationError(message="Invalid user id", details=violation_details(e, ID_MESSAGES)) from e
