import logging
import os
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from todo_dashboard.errors import AuthError, NotFoundError, TransportError, ValidationError
from todo_dashboard.models import DailyAggregate, Task

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


def _build_session():
    session = requests.Session()
    retry = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=(502, 503, 504),
        allowed_methods=("GET", "DELETE"),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _clean_title(title):
    value = str(title or "").strip()
    if not value:
        raise ValidationError("Task title must not be empty")
    return value


def _error_detail(response):
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict) and "detail" in payload:
        return payload["detail"]
    return payload


def _raise_for_status(response):
    if response.ok:
        return
    status = response.status_code
    detail = _error_detail(response)
    message = f"API error {status} {response.reason}: {detail}"
    if status in (400, 422):
        raise ValidationError(message, status_code=status, detail=detail)
    if status in (401, 403):
        raise AuthError(message, status_code=status, detail=detail)
    if status == 404:
        raise NotFoundError(message, status_code=status, detail=detail)
    raise TransportError(message, status_code=status, detail=detail)


class TaskStoreClient:
    """HTTP client for the task backend.

    Every operation takes the authenticated user id explicitly; the backend
    scopes reads and writes to that owner.
    """

    def __init__(self, base_url, token, session=None, timeout=DEFAULT_TIMEOUT):
        self.base_url = str(base_url or "").rstrip("/")
        self.token = token
        self.session = session or _build_session()
        self.timeout = timeout

    def _request(self, method: str, path: str, user_id, params: dict | None = None, json: dict | None = None) -> Any:
        if not user_id:
            raise AuthError("No authenticated user")
        headers = {
            "X-User-Id": str(user_id),
            "X-Backend-Token": self.token,
        }
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method, url, params=params, json=json, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(f"Request to {path} failed: {exc}") from exc
        if not response.ok:
            logger.warning("%s %s returned %s", method, path, response.status_code)
        _raise_for_status(response)
        if response.status_code == 204:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"Invalid JSON from {path}", status_code=response.status_code) from exc

    def list_for_date(self, user_id, date_key) -> list[Task]:
        payload = self._request("GET", "/v1/tasks", user_id, params={"date": date_key})
        return [Task.from_payload(item) for item in (payload or {}).get("items", [])]

    def create(self, user_id, title, date_key) -> Task:
        clean = _clean_title(title)
        payload = self._request("POST", "/v1/tasks", user_id, json={"title": clean, "task_date": date_key})
        return Task.from_payload(payload)

    def toggle_completion(self, user_id, task_id) -> Task:
        payload = self._request("POST", f"/v1/tasks/{task_id}/toggle", user_id)
        return Task.from_payload(payload)

    def rename(self, user_id, task_id, new_title) -> Task:
        clean = _clean_title(new_title)
        payload = self._request("PATCH", f"/v1/tasks/{task_id}", user_id, json={"title": clean})
        return Task.from_payload(payload)

    def delete(self, user_id, task_id) -> None:
        self._request("DELETE", f"/v1/tasks/{task_id}", user_id)

    def list_aggregates(self, user_id) -> list[DailyAggregate]:
        payload = self._request("GET", "/v1/progress", user_id)
        return [DailyAggregate.from_payload(item) for item in (payload or {}).get("items", [])]


def api_base_url(secret_getter=None):
    getter = secret_getter or (lambda path, default=None: default)
    return (
        getter(("app", "API_BASE_URL"))
        or getter(("API_BASE_URL",))
        or os.getenv("API_BASE_URL")
        or ""
    )


def backend_token(secret_getter=None):
    getter = secret_getter or (lambda path, default=None: default)
    return (
        getter(("app", "BACKEND_SESSION_SECRET"))
        or getter(("BACKEND_SESSION_SECRET",))
        or os.getenv("BACKEND_SESSION_SECRET")
        or ""
    )


def build_client(secret_getter=None, session=None):
    base = api_base_url(secret_getter)
    token = backend_token(secret_getter)
    if not (base and token):
        return None
    return TaskStoreClient(base, token, session=session)
