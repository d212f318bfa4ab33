"""
User Registry Backend — User Service Unit Tests
=================================================

What:  Tests for the request handlers in UserService.
Why:   The handlers decide which store call happens and which error kind a
       failure becomes; the HTTP layer only forwards that decision.
How:   Uses a mocked UserStore (no database).

What we test:
    ✅ Success payloads and status codes (200 vs 201)
    ✅ Validation failures never reach the store
    ✅ "No row" becomes NotFound
    ✅ Store failures become a generic StoreError message
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import ErrorKind, StoreError
from app.services.results import Failure, Success
from app.services.user_service import UserService


class TestListUsers:

    @pytest.mark.asyncio
    async def test_list_serializes_every_row(self, mock_store, make_user):
        mock_store.select_all.return_value = [make_user(id=1), make_user(id=2, name="Jane")]

        result = await UserService(mock_store).list_users()

        assert isinstance(result, Success)
        assert result.status_code == 200
        assert [u["id"] for u in result.payload] == [1, 2]
        assert result.payload[1]["name"] == "Jane"

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_store):
        mock_store.select_all.return_value = []
        result = await UserService(mock_store).list_users()
        assert result.payload == []

    @pytest.mark.asyncio
    async def test_list_store_failure(self, mock_store):
        mock_store.select_all.side_effect = StoreError(context={"operation": "select_all"})

        result = await UserService(mock_store).list_users()

        assert isinstance(result, Failure)
        assert result.kind is ErrorKind.STORE
        assert result.status_code == 500
        assert result.body() == {"error": "Failed to fetch users"}


class TestGetUser:

    @pytest.mark.asyncio
    async def test_get_found(self, mock_store, make_user):
        mock_store.select_by_id.return_value = make_user(id=5)

        result = await UserService(mock_store).get_user("5")

        assert result.ok
        assert result.payload["id"] == 5
        mock_store.select_by_id.assert_awaited_once_with(5)

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_store):
        mock_store.select_by_id.return_value = None

        result = await UserService(mock_store).get_user("99999")

        assert result.kind is ErrorKind.NOT_FOUND
        assert result.status_code == 404
        assert result.body() == {"error": "User not found"}

    @pytest.mark.asyncio
    async def test_get_bad_id_never_reaches_store(self, mock_store):
        result = await UserService(mock_store).get_user("invalid")

        assert result.kind is ErrorKind.VALIDATION
        assert result.status_code == 400
        assert result.body()["details"][0]["field"] == "id"
        mock_store.select_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_not_leaked(self, mock_store):
        mock_store.select_by_id.side_effect = RuntimeError("connection reset by peer at 10.0.0.3")

        result = await UserService(mock_store).get_user("1")

        assert result.kind is ErrorKind.STORE
        assert result.body() == {"error": "Failed to fetch user"}


class TestCreateUser:

    @pytest.mark.asyncio
    async def test_create_returns_201_with_defaults(self, mock_store, make_user):
        mock_store.insert.return_value = make_user(id=1)

        result = await UserService(mock_store).create_user(
            {"name": "John", "surname": "Doe", "gender": "male"}
        )

        assert result.status_code == 201
        assert result.payload["isTrusted"] is False
        mock_store.insert.assert_awaited_once_with(
            {"name": "John", "surname": "Doe", "gender": "male", "is_trusted": False}
        )

    @pytest.mark.asyncio
    async def test_create_invalid_body(self, mock_store):
        result = await UserService(mock_store).create_user({"name": "John"})

        assert result.status_code == 400
        assert result.body()["error"] == "Validation failed"
        assert {d["field"] for d in result.details} == {"surname", "gender"}
        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_store_failure(self, mock_store):
        mock_store.insert.side_effect = OperationalError("INSERT", {}, Exception("disk I/O error"))

        result = await UserService(mock_store).create_user(
            {"name": "John", "surname": "Doe", "gender": "male"}
        )

        assert result.status_code == 500
        assert result.body() == {"error": "Failed to create user"}


class TestUpdateUser:

    @pytest.mark.asyncio
    async def test_update_passes_only_present_fields(self, mock_store, make_user):
        mock_store.update_by_id.return_value = make_user(id=1, surname="Smith")

        result = await UserService(mock_store).update_user("1", {"surname": "Smith"})

        assert result.status_code == 200
        assert result.payload["surname"] == "Smith"
        mock_store.update_by_id.assert_awaited_once_with(1, {"surname": "Smith"})

    @pytest.mark.asyncio
    async def test_empty_update_still_calls_store(self, mock_store, make_user):
        later = datetime(2024, 1, 16, tzinfo=timezone.utc)
        mock_store.update_by_id.return_value = make_user(id=1, updated_at=later)

        result = await UserService(mock_store).update_user("1", {})

        assert result.ok
        mock_store.update_by_id.assert_awaited_once_with(1, {})

    @pytest.mark.asyncio
    async def test_update_not_found(self, mock_store):
        mock_store.update_by_id.return_value = None
        result = await UserService(mock_store).update_user("77", {"name": "X"})
        assert result.status_code == 404

    @pytest.mark.asyncio
    async def test_update_bad_id_checked_before_body(self, mock_store):
        result = await UserService(mock_store).update_user("abc", {"name": ""})

        assert result.status_code == 400
        assert result.message == "Invalid user id"
        mock_store.update_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_invalid_body(self, mock_store):
        result = await UserService(mock_store).update_user("1", {"gender": "unknown"})
        assert result.status_code == 400
        mock_store.update_by_id.assert_not_awaited()


class TestDeleteUser:

    @pytest.mark.asyncio
    async def test_delete_returns_acknowledgment(self, mock_store, make_user):
        mock_store.delete_by_id.return_value = make_user(id=4)

        result = await UserService(mock_store).delete_user("4")

        assert result.status_code == 200
        assert result.payload == {"success": True, "message": "User deleted successfully"}

    @pytest.mark.asyncio
    async def test_delete_not_found(self, mock_store):
        mock_store.delete_by_id.return_value = None
        result = await UserService(mock_store).delete_user("4")
        assert result.body() == {"error": "User not found"}

    @pytest.mark.asyncio
    async def test_delete_store_failure(self, mock_store):
        mock_store.delete_by_id.side_effect = StoreError()
        result = await UserService(mock_store).delete_user("4")
        assert result.body() == {"error": "Failed to delete user"}
