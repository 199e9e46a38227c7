"""HTTP-backed collaborators for the calendar screen.

Each class wraps ``api_client`` and turns transport or API failures into the
error types the screen understands. Rejected credentials become
``IdentityError`` so the screen can block instead of retrying.
"""
from __future__ import annotations

import logging
from datetime import datetime

from dashboard.data import api_client
from lent.errors import IdentityError, StoreError
from lent.models import Task

logger = logging.getLogger(__name__)


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


def _call(operation, method, path, entity_id=None, **kwargs):
    try:
        return api_client.request(method, path, **kwargs)
    except api_client.ApiError as exc:
        if exc.is_auth_error:
            raise IdentityError(str(exc), operation=operation, entity_id=entity_id) from exc
        raise StoreError(str(exc), operation=operation, entity_id=entity_id) from exc


class ApiTaskStore:
    def list_tasks_visible_to(self, user_id: str) -> list[Task]:
        payload = _call("fetch_tasks", "GET", "/v1/lent/tasks")
        return [Task.from_row(row) for row in (payload or {}).get("items", [])]

    def create_task(self, owner_id: str, title: str, description: str, date: datetime) -> Task:
        body = {"title": title, "description": description, "date": _iso(date)}
        return Task.from_row(_call("create_task", "POST", "/v1/lent/tasks", json=body))

    def update_task(self, task_id: str, title: str, description: str, date: datetime) -> None:
        body = {"title": title, "description": description, "date": _iso(date)}
        _call("update_task", "PATCH", f"/v1/lent/tasks/{task_id}", entity_id=task_id, json=body)

    def set_completed(self, task_id: str, completed: bool) -> None:
        body = {"completed": bool(completed)}
        _call("toggle_complete", "PATCH", f"/v1/lent/tasks/{task_id}", entity_id=task_id, json=body)

    def delete_task(self, task_id: str) -> None:
        _call("delete_task", "DELETE", f"/v1/lent/tasks/{task_id}", entity_id=task_id)


class ApiConnectionDirectory:
    def list_accepted_connections(self, user_id: str) -> list[str]:
        payload = _call("list_connections", "GET", "/v1/connections")
        return [str(item) for item in (payload or {}).get("items", [])]

    def request_connection(self, email: str) -> dict:
        return _call("request_connection", "POST", "/v1/connections", json={"email": email}) or {}

    def list_pending(self) -> list[dict]:
        payload = _call("list_pending", "GET", "/v1/connections/pending")
        return list((payload or {}).get("items", []))

    def accept(self, connection_id: str) -> dict:
        return _call("accept_connection", "POST", f"/v1/connections/{connection_id}/accept", entity_id=connection_id)


class ApiIdentitySession:
    def __init__(self):
        self._profile = None

    def profile(self) -> dict:
        if self._profile is None:
            try:
                self._profile = api_client.request("GET", "/v1/me")
            except api_client.ApiError as exc:
                logger.error("Could not resolve current user: %s", exc)
                raise IdentityError(str(exc), operation="current_user") from exc
        return self._profile

    def current_user_id(self) -> str:
        user_id = (self.profile() or {}).get("id")
        if not user_id:
            raise IdentityError("Backend returned no user id", operation="current_user")
        return str(user_id)
