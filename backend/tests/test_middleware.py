"""
User Registry Backend — Middleware Tests
==========================================

What:  Request ID assignment and access-log levels.
How:   Requests go through the full app via `test_client`; log records are
       captured with pytest's caplog.
"""

import logging

import pytest

ACCESS_LOGGER = "user_registry.access"


def _access_records(caplog, path):
    return [
        r for r in caplog.records
        if r.name == ACCESS_LOGGER and getattr(r, "path", None) == path
    ]


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get("/api/users")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_blank_header_gets_generated_id(self, test_client):
        response = await test_client.get("/api/users", headers={"X-Request-ID": ""})

        rid = response.headers["X-Request-ID"]
        assert rid != ""
        assert len(rid) == 8

    @pytest.mark.asyncio
    async def test_ids_differ_between_requests(self, test_client):
        first = await test_client.get("/api/users")
        second = await test_client.get("/api/users")
        assert first.headers["X-Request-ID"] != second.headers["X-Request-ID"]


class TestAccessLogLevels:

    @pytest.mark.asyncio
    async def test_success_logged_at_info(self, test_client, caplog):
        caplog.set_level(logging.DEBUG, logger=ACCESS_LOGGER)

        await test_client.get("/api/users")

        [record] = _access_records(caplog, "/api/users")
        assert record.levelno == logging.INFO
        assert record.status == 200

    @pytest.mark.asyncio
    async def test_not_found_logged_at_info(self, test_client, caplog):
        caplog.set_level(logging.DEBUG, logger=ACCESS_LOGGER)

        await test_client.get("/api/users/99999")

        [record] = _access_records(caplog, "/api/users/99999")
        assert record.levelno == logging.INFO
        assert record.status == 404

    @pytest.mark.asyncio
    async def test_bad_request_logged_at_warning(self, test_client, caplog):
        caplog.set_level(logging.DEBUG, logger=ACCESS_LOGGER)

        await test_client.get("/api/users/abc")

        [record] = _access_records(caplog, "/api/users/abc")
        assert record.levelno == logging.WARNING
        assert record.status == 400

    @pytest.mark.asyncio
    async def test_health_probes_not_logged(self, test_client, caplog):
        caplog.set_level(logging.DEBUG, logger=ACCESS_LOGGER)

        await test_client.get("/health")

        assert _access_records(caplog, "/health") == []
