"""
Tests for API error handling.

Tests validate:
- Storage failures become a generic 500 per operation
- No exception text leaks to the client
- Failures are logged with the traceback
- Unknown routes and methods use the same error format
- Request logging middleware
"""

import logging
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from tasklist.core.api.app import ErrorCode, create_app
from tasklist.core.config.models import LoggingConfig, TasklistConfig

SECRET = "connection string postgres://admin:hunter2@db"


class TestStorageFailures:
    """Unexpected storage errors map to 500 with a fixed message."""

    @pytest.mark.parametrize(
        "method_name, call, message",
        [
            ("list_tasks", lambda c: c.get("/api/tasks"), "Failed to fetch tasks"),
            ("get_task", lambda c: c.get("/api/tasks/x"), "Failed to fetch task"),
            (
                "create_task",
                lambda c: c.post("/api/tasks", json={"text": "a"}),
                "Failed to create task",
            ),
            (
                "update_task",
                lambda c: c.put("/api/tasks/x", json={"completed": True}),
                "Failed to update task",
            ),
            ("delete_task", lambda c: c.delete("/api/tasks/x"), "Failed to delete task"),
        ],
    )
    def test_storage_error_is_generic_500(self, client, storage, method_name, call, message):
        with patch.object(storage, method_name, AsyncMock(side_effect=RuntimeError(SECRET))):
            response = call(client)

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == message
        assert data["error_code"] == ErrorCode.INTERNAL_ERROR
        assert SECRET not in response.text

    def test_storage_error_logged_with_traceback(self, client, storage, caplog):
        with patch.object(storage, "list_tasks", AsyncMock(side_effect=RuntimeError("boom"))):
            with caplog.at_level(logging.ERROR):
                client.get("/api/tasks")

        failures = [r for r in caplog.records if r.getMessage() == "Listing tasks failed"]
        assert failures
        assert failures[0].exc_info is not None

    def test_validation_happens_before_storage(self, client, storage):
        """Invalid input never reaches the backend."""
        create = AsyncMock()
        with patch.object(storage, "create_task", create):
            response = client.post("/api/tasks", json={"text": "   "})

        assert response.status_code == 400
        create.assert_not_called()


class TestUnhandledExceptions:
    """Anything escaping a route is rendered by the catch-all handler."""

    def test_generic_handler_hides_detail(self, storage, config):
        app = create_app(storage=storage, config=config)

        @app.get("/boom")
        async def boom() -> None:
            raise RuntimeError(SECRET)

        client = TestClient(app, raise_server_exceptions=False)
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json() == {
            "error": "Internal server error",
            "error_code": "INTERNAL_ERROR",
        }
        assert SECRET not in response.text


class TestErrorFormat:
    """Framework-level errors share the error format."""

    def test_unknown_route(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.json()["error_code"] == ErrorCode.NOT_FOUND

    def test_method_not_allowed(self, client):
        response = client.patch("/api/tasks/x", json={"completed": True})
        assert response.status_code == 405
        assert response.json()["error_code"] == ErrorCode.METHOD_NOT_ALLOWED

    def test_method_not_allowed_keeps_allow_header(self, client):
        response = client.patch("/api/tasks/x", json={"completed": True})
        allowed = {m.strip() for m in response.headers["allow"].split(",")}
        assert {"GET", "PUT", "DELETE"} <= allowed

    def test_not_found_has_no_details(self, client):
        response = client.delete("/api/tasks/x")
        assert response.json() == {"error": "Task not found", "error_code": "NOT_FOUND"}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestRequestLogging:
    """Tests for the /api request logging middleware."""

    def test_api_requests_logged(self, storage, caplog):
        app = create_app(storage=storage, config=TasklistConfig())
        client = TestClient(app)

        with caplog.at_level(logging.INFO, logger="tasklist.core.api.app"):
            client.get("/api/tasks")
            client.get("/health")

        lines = [r.getMessage() for r in caplog.records if r.name == "tasklist.core.api.app"]
        assert any(line.startswith("GET /api/tasks 200 in ") for line in lines)
        assert not any("/health" in line for line in lines)

    def test_request_logging_disabled(self, storage, caplog):
        config = TasklistConfig(logging=LoggingConfig(log_requests=False))
        client = TestClient(create_app(storage=storage, config=config))

        with caplog.at_level(logging.INFO, logger="tasklist.core.api.app"):
            client.get("/api/tasks")

        assert not any(
            r.getMessage().startswith("GET /api/tasks") for r in caplog.records
        )


class TestCorsConfig:
    def test_cors_headers_for_allowed_origin(self, storage):
        config = TasklistConfig.model_validate(
            {"server": {"cors_origins": ["http://localhost:5173"]}}
        )
        client = TestClient(create_app(storage=storage, config=config))

        response = client.get("/api/tasks", headers={"Origin": "http://localhost:5173"})

        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_default_config_from_loader(self, storage):
        """create_app without a config loads one."""
        client = TestClient(create_app(storage=storage))
        assert client.get("/api/tasks").status_code == 200
