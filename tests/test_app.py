"""
Noteful API: Application-Level Tests
====================================

What:  Health endpoint, request id propagation (500s included), error body
       format, the ErrorKind → status mapping and settings defaults.
"""

import logging

import pytest

from noteful.config import Settings
from noteful.database import get_db_session
from noteful.exceptions import (
    STATUS_BY_KIND,
    DatabaseError,
    ErrorKind,
    NotFoundError,
    ValidationError,
)


class TestErrorKinds:

    def test_every_kind_has_a_status(self):
        assert set(STATUS_BY_KIND) == set(ErrorKind)

    def test_status_codes(self):
        assert ValidationError.missing_field("name").status_code == 400
        assert NotFoundError(resource="note", resource_id=1).status_code == 404
        assert DatabaseError().status_code == 500

    def test_missing_field_message_and_context(self):
        error = ValidationError.missing_field("title")

        assert error.message == "Missing `title` in request body"
        assert error.context == {"field": "title"}

    def test_not_found_message_includes_id(self):
        error = NotFoundError(resource="folder", resource_id=0)

        assert error.message == "folder with ID '0' was not found"
        assert error.context["resource_id"] == 0


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0


class TestRequestId:

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, test_client):
        response = await test_client.get("/api/folders")

        assert response.headers.get("x-request-id")

    @pytest.mark.asyncio
    async def test_client_request_id_is_echoed_in_errors(self, test_client):
        response = await test_client.post(
            "/api/tags", json={}, headers={"X-Request-ID": "trace-123"}
        )

        assert response.status_code == 400
        assert response.headers["x-request-id"] == "trace-123"
        assert response.json()["request_id"] == "trace-123"
        assert response.json()["details"] == {"field": "name"}

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id(self, test_client):
        from noteful.main import app

        async def broken_session():
            raise RuntimeError("connection pool exhausted")

        app.dependency_overrides[get_db_session] = broken_session

        response = await test_client.get(
            "/api/folders", headers={"X-Request-ID": "trace-500"}
        )

        assert response.status_code == 500
        assert response.headers["x-request-id"] == "trace-500"
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "trace-500"
        assert "connection pool" not in body["message"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_access_logged(self, test_client, caplog):
        from noteful.main import app

        async def broken_session():
            raise RuntimeError("boom")

        app.dependency_overrides[get_db_session] = broken_session

        with caplog.at_level(logging.INFO, logger="noteful.access"):
            await test_client.get("/api/tags", headers={"X-Request-ID": "trace-log"})

        access = [r for r in caplog.records if r.name == "noteful.access"]
        assert len(access) == 1
        assert access[0].status == 500
        assert access[0].levelno == logging.ERROR
        assert access[0].request_id == "trace-log"


class TestSettings:

    def test_routes_are_unprefixed_by_default(self, monkeypatch):
        monkeypatch.delenv("API_PREFIX", raising=False)

        assert Settings(_env_file=None).api_prefix == ""

    @pytest.mark.parametrize(
        "raw, expected",
        [("api", "/api"), ("/api/", "/api"), ("/v1/api", "/v1/api"), ("", "")],
    )
    def test_api_prefix_is_normalized(self, raw, expected):
        assert Settings(_env_file=None, api_prefix=raw).api_prefix == expected
