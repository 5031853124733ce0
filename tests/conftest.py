"""
Pytest configuration and shared fixtures.

Provides a fresh in-memory backend, app, and test client per test, and
keeps config loading away from the real user/project config files.
"""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from tasklist.core.api.app import create_app
from tasklist.core.config.loader import clear_cache
from tasklist.core.config.models import LoggingConfig, TasklistConfig
from tasklist.core.tasks.memory import MemoryBackend

# ==============================================================================
# Environment Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config lookups at an empty temp directory and clear the cache.

    The whole environment is restored afterwards, so tests may load .env
    files freely.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for var in ("TASKLIST_HOST", "TASKLIST_PORT", "TASKLIST_LOG_LEVEL", "TASKLIST_BACKEND"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_cache()
    with patch.dict(os.environ):
        yield
    clear_cache()


# ==============================================================================
# API Fixtures
# ==============================================================================


@pytest.fixture
def storage():
    """Provide an empty in-memory backend."""
    return MemoryBackend()


@pytest.fixture
def config():
    """Provide default configuration with request logging off."""
    return TasklistConfig(logging=LoggingConfig(log_requests=False))


@pytest.fixture
def app(storage, config):
    """Provide an app bound to the test's own backend."""
    return create_app(storage=storage, config=config)


@pytest.fixture
def client(app):
    """Provide a test client for the app."""
    return TestClient(app)


@pytest.fixture
def sample_task(client):
    """Create a task through the API and return its JSON."""
    response = client.post("/api/tasks", json={"text": "Buy milk"})
    assert response.status_code == 201
    return response.json()
