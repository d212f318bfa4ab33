"""
User Registry Backend — Users Route Handlers
==============================================

What:  HTTP surface of the users resource, mounted at /api/users.
Why:   Entry point for every CRUD call from the frontend and the API client.
How:   Each route hands raw input (path string, decoded JSON body) to
       UserService and turns the returned HandlerResult into a JSONResponse.

Route Inventory:
    GET    /api/users        → 200 list | 500
    GET    /api/users/{id}   → 200 record | 400 | 404 | 500
    POST   /api/users        → 201 record | 400 | 500
    PUT    /api/users/{id}   → 200 record | 400 | 404 | 500
    DELETE /api/users/{id}   → 200 {success, message} | 400 | 404 | 500

Why raw input:
    The id segment is declared as `str` and the body as `Any` so that the
    service's validation layer, not FastAPI's parameter coercion, decides what
    is valid. Status selection is `to_response()`, a pure function of the
    result.
"""

from typing import Any, List

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from app.schemas.user import DeleteResponse, ErrorResponse, UserCreate, UserResponse, UserUpdate
from app.services.results import HandlerResult
from app.services.user_service import user_service

router = APIRouter(prefix="/api/users", tags=["users"])

_ERRORS = {
    400: {"description": "Invalid id or body", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}
_NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}


def _request_body_doc(model) -> dict:
    """OpenAPI request body for routes that accept the body as raw JSON."""
    schema = model.model_json_schema(by_alias=True, ref_template="#/components/schemas/{model}")
    schema.pop("$defs", None)  # Gender is already a component via UserResponse
    return {"requestBody": {"content": {"application/json": {"schema": schema}}}}


def to_response(result: HandlerResult) -> JSONResponse:
    """Map a handler result to its HTTP response."""
    return JSONResponse(status_code=result.status_code, content=result.body())


@router.get(
    "",
    responses={
        200: {"description": "All users", "model": List[UserResponse]},
        500: _ERRORS[500],
    },
    summary="Get all users",
)
@router.get("/", include_in_schema=False)
async def list_users() -> JSONResponse:
    """Return every user. No pagination: the full table comes back."""
    return to_response(await user_service.list_users())


@router.get(
    "/{user_id}",
    responses={200: {"description": "The user", "model": UserResponse}, **_ERRORS, **_NOT_FOUND},
    summary="Get a user by ID",
)
async def get_user(user_id: str) -> JSONResponse:
    return to_response(await user_service.get_user(user_id))


@router.post(
    "",
    status_code=201,
    responses={201: {"description": "User created", "model": UserResponse}, **_ERRORS},
    summary="Create a new user",
    openapi_extra=_request_body_doc(UserCreate),
)
@router.post("/", status_code=201, include_in_schema=False)
async def create_user(body: Any = Body(default=None)) -> JSONResponse:
    """
    Create a user.

    `isTrusted` defaults to false; `id`, `createdAt` and `updatedAt` are
    assigned by the store and ignored if sent.
    """
    return to_response(await user_service.create_user(body))


@router.put(
    "/{user_id}",
    responses={200: {"description": "Updated user", "model": UserResponse}, **_ERRORS, **_NOT_FOUND},
    summary="Update a user",
    openapi_extra=_request_body_doc(UserUpdate),
)
async def update_user(user_id: str, body: Any = Body(default=None)) -> JSONResponse:
    """Partial update. Omitted fields keep their values; updatedAt is always refreshed."""
    return to_response(await user_service.update_user(user_id, body))


@router.delete(
    "/{user_id}",
    responses={200: {"description": "User deleted", "model": DeleteResponse}, **_ERRORS, **_NOT_FOUND},
    summary="Delete a user",
)
async def delete_user(user_id: str) -> JSONResponse:
    return to_response(await user_service.delete_user(user_id))
