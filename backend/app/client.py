"""
User Registry — Async API Client
==================================

What:  Thin httpx client for the /api/users endpoints.
Who:   Frontends, scripts and tests that talk to a running backend.
How:   One method per endpoint. Non-2xx responses raise ApiClientError
       carrying the server's `error` message; connection failures raise
       ApiClientError with a hint about where the backend was expected.

Example:
    async with UserApiClient("http://localhost:3001") as api:
        user = await api.create({"name": "John", "surname": "Doe", "gender": "male"})
        await api.update(user["id"], {"surname": "Smith"})
"""

from typing import Any, Dict, List, Optional

import httpx


class ApiClientError(Exception):
    """
    Raised for any failed API call.

    Attributes:
        message:      Server-provided `error` text when available
        status_code:  HTTP status, or None when the server was unreachable
        details:      Server-provided `details`, if any
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class UserApiClient:
    """
    Args:
        base_url:  Backend origin, e.g. http://localhost:3001
        transport: Optional httpx transport (tests pass an ASGITransport)
        timeout:   Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "UserApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Endpoints ─────────────────────────────────────────────────────────

    async def get_all(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/users")

    async def get_by_id(self, user_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/api/users/{user_id}")

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/api/users", json=data)

    async def update(self, user_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/api/users/{user_id}", json=data)

    async def delete(self, user_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/api/users/{user_id}")

    # ── Internals ─────────────────────────────────────────────────────────

    async def _request(self, method: str, url: str, json: Any = None) -> Any:
        try:
            if json is None:
                response = await self._client.request(method, url)
            else:
                response = await self._client.request(method, url, json=json)
        except httpx.TransportError as e:
            raise ApiClientError(
                f"Cannot connect to API server. Make sure the backend is running at {self.base_url}",
            ) from e

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return None
            return response.json()

        content_type = response.headers.get("content-type", "")
        if "application/json" in content_type:
            body = response.json()
            raise ApiClientError(
                body.get("error", "Request failed") if isinstance(body, dict) else "Request failed",
                status_code=response.status_code,
                details=body.get("details") if isinstance(body, dict) else None,
            )
        raise ApiClientError(
            f"Server error: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
        )
