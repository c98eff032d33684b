"""Shared fixtures: a live backend on a temporary SQLite file and a
requests-shaped adapter so the dashboard client can talk to it."""

import pytest
from fastapi.testclient import TestClient

from todo_backend import db, settings
from todo_backend.main import create_app
from todo_dashboard.data.api_client import TaskStoreClient

BACKEND_TOKEN = "test-backend-token"
ALICE = "alice@example.com"
BOB = "bob@example.com"


def auth_headers(user_id=ALICE, token=BACKEND_TOKEN):
    headers = {"X-Backend-Token": token}
    if user_id is not None:
        headers["X-User-Id"] = user_id
    return headers


@pytest.fixture
def backend_env(tmp_path, monkeypatch):
    """Point the backend at a fresh SQLite database."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'todo.db'}")
    monkeypatch.setenv("BACKEND_SESSION_SECRET", BACKEND_TOKEN)
    monkeypatch.delenv("ALLOWED_EMAILS", raising=False)
    settings.reset_settings()
    monkeypatch.setattr(db, "_engine", None)
    monkeypatch.setattr(db, "_session_factory", None)
    yield tmp_path
    settings.reset_settings()


@pytest.fixture
def api(backend_env):
    """FastAPI test client with startup (schema creation) and shutdown run."""
    with TestClient(create_app()) as client:
        yield client


class _AdaptedResponse:
    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.reason = response.reason_phrase
        self.ok = response.is_success
        self.text = response.text

    def json(self):
        return self._response.json()


class InProcessSession:
    """Expose a TestClient through the subset of requests.Session the client uses."""

    def __init__(self, client):
        self.client = client
        self.calls = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append((method, url))
        response = self.client.request(method, url, params=params, json=json, headers=headers)
        return _AdaptedResponse(response)


@pytest.fixture
def store(api):
    """Dashboard client wired to the in-process backend."""
    return TaskStoreClient("http://testserver", BACKEND_TOKEN, session=InProcessSession(api))
