from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, List, Optional, Protocol, Tuple

from lent import view_model
from lent.constants import DEFAULT_CELL_HEIGHT, NOTIFICATION_SECONDS
from lent.dates import parse_picked_date, task_for_display, to_storage_date
from lent.errors import IdentityError, ValidationError
from lent.grid import classify_viewport, shift_month
from lent.models import CalendarRender, Task, TaskFilter, ViewMode, ViewportClass

logger = logging.getLogger(__name__)

FAILURE_MESSAGES = {
    "fetch_tasks": "Error fetching tasks",
    "create_task": "Error creating task",
    "update_task": "Error updating task",
    "toggle_complete": "Error updating task",
    "delete_task": "Error deleting task",
}


class TaskStore(Protocol):
    def list_tasks_visible_to(self, user_id: str) -> List[Task]: ...

    def create_task(self, owner_id: str, title: str, description: str, date: datetime) -> Task: ...

    def update_task(self, task_id: str, title: str, description: str, date: datetime) -> None: ...

    def set_completed(self, task_id: str, completed: bool) -> None: ...

    def delete_task(self, task_id: str) -> None: ...


class ConnectionDirectory(Protocol):
    def list_accepted_connections(self, user_id: str) -> List[str]: ...


class IdentitySession(Protocol):
    def current_user_id(self) -> str: ...


@dataclass(frozen=True)
class Notification:
    message: str
    kind: str = "error"
    expires_at: Optional[float] = None

    @property
    def transient(self) -> bool:
        return self.expires_at is not None


def validate_task_fields(title, description, picked, operation: str, entity_id: str | None = None):
    if not str(title or "").strip() or not str(description or "").strip() or not str(picked or "").strip():
        raise ValidationError("Please fill in all fields.", operation=operation, entity_id=entity_id)
    try:
        day = parse_picked_date(picked)
    except ValidationError as exc:
        exc.operation = operation
        exc.entity_id = entity_id
        raise
    return str(title).strip(), str(description).strip(), day


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class CalendarScreen:
    """State behind the Lent calendar screen.

    Holds the last fetched tasks and the last good render. Every mutation
    goes to the store first and is followed by a full re-fetch; nothing is
    applied locally.
    """

    def __init__(
        self,
        task_store: TaskStore,
        connections: ConnectionDirectory,
        session: IdentitySession,
        clock: Callable[[], float] = time.monotonic,
        today_provider: Callable[[], date] = _utc_today,
        cell_height: float = DEFAULT_CELL_HEIGHT,
    ):
        self.task_store = task_store
        self.connections = connections
        self.session = session
        self.clock = clock
        self.today_provider = today_provider
        self.cell_height = cell_height

        today = today_provider()
        self.month = today.month
        self.year = today.year
        self.viewport = ViewportClass.WIDE
        self.mode = ViewMode.GRID
        self.task_filter = TaskFilter.ALL

        self.current_user_id: Optional[str] = None
        self.tasks: Tuple[Task, ...] = ()
        self.connection_ids: frozenset = frozenset()
        self.last_render: Optional[CalendarRender] = None
        self.notification: Optional[Notification] = None
        self.blocking_error: Optional[str] = None

        self._lock = threading.Lock()
        self._generation = 0
        self._closed = False

    # --- lifecycle -------------------------------------------------------

    def load(self) -> bool:
        try:
            user_id = self.session.current_user_id()
            if not user_id:
                raise IdentityError("No signed-in user", operation="current_user")
        except IdentityError as exc:
            self._fail_identity(exc)
            return False
        except Exception as exc:
            self._fail_identity(IdentityError(str(exc), operation="current_user"))
            return False
        self.current_user_id = str(user_id)
        self.blocking_error = None
        return self.refresh()

    def close(self) -> None:
        with self._lock:
            self._closed = True
            self._generation += 1

    def refresh(self) -> bool:
        if self.current_user_id is None:
            return False
        with self._lock:
            self._generation += 1
            generation = self._generation
        user_id = self.current_user_id
        try:
            connection_ids = frozenset(self.connections.list_accepted_connections(user_id))
            rows = self.task_store.list_tasks_visible_to(user_id)
            tasks = tuple(task_for_display(task) for task in rows)
        except IdentityError as exc:
            self._fail_identity(exc)
            return False
        except Exception as exc:
            self._fail_store("fetch_tasks", exc)
            return False
        with self._lock:
            if self._closed or generation != self._generation:
                logger.debug("Discarding stale task fetch for user %s", user_id)
                return False
            self.connection_ids = connection_ids
            self.tasks = tasks
        logger.info("Fetched %s tasks for user %s", len(tasks), user_id)
        return True

    # --- view state ------------------------------------------------------

    def set_mode(self, mode) -> None:
        self.mode = ViewMode(mode)

    def toggle_mode(self) -> ViewMode:
        self.mode = ViewMode.LIST if self.mode == ViewMode.GRID else ViewMode.GRID
        return self.mode

    def set_task_filter(self, task_filter) -> None:
        self.task_filter = TaskFilter(task_filter)

    def set_viewport(self, viewport) -> None:
        if isinstance(viewport, (int, float)):
            self.viewport = classify_viewport(viewport)
        else:
            self.viewport = ViewportClass(viewport)

    def go_to(self, month: int, year: int) -> None:
        if not 1 <= int(month) <= 12:
            raise ValueError(f"month must be in 1..12, got {month}")
        self.month, self.year = int(month), int(year)

    def previous_month(self) -> None:
        self.month, self.year = shift_month(self.month, self.year, -1)

    def next_month(self) -> None:
        self.month, self.year = shift_month(self.month, self.year, 1)

    def render(self, today=None) -> Optional[CalendarRender]:
        if self.current_user_id is None:
            return self.last_render
        try:
            if self.mode == ViewMode.LIST:
                result = view_model.render_list(
                    self.month,
                    self.year,
                    self.viewport,
                    self.current_user_id,
                    self.tasks,
                    connections=self.connection_ids,
                    task_filter=self.task_filter,
                )
            else:
                result = view_model.render(
                    self.month,
                    self.year,
                    self.viewport,
                    self.current_user_id,
                    self.tasks,
                    today or self.today_provider(),
                    cell_height=self.cell_height,
                    connections=self.connection_ids,
                )
        except Exception:
            logger.exception("Failed to render calendar for %s-%s", self.year, self.month)
            return self.last_render
        self.last_render = result
        return result

    # --- mutation intents ------------------------------------------------

    def request_create(self, title, description, picked) -> Optional[Task]:
        try:
            title, description, day = validate_task_fields(title, description, picked, "create_task")
        except ValidationError as exc:
            self._fail_validation(exc)
            return None
        if self.current_user_id is None:
            self._fail_identity(IdentityError("No signed-in user", operation="create_task"))
            return None
        try:
            record = self.task_store.create_task(self.current_user_id, title, description, to_storage_date(day))
        except IdentityError as exc:
            self._fail_identity(exc)
            return None
        except Exception as exc:
            self._fail_store("create_task", exc)
            return None
        self._notify("Task created successfully!", "success")
        self.refresh()
        return record

    def request_update(self, task_id: str, title, description, picked) -> bool:
        try:
            title, description, day = validate_task_fields(title, description, picked, "update_task", task_id)
        except ValidationError as exc:
            self._fail_validation(exc)
            return False
        try:
            self.task_store.update_task(task_id, title, description, to_storage_date(day))
        except IdentityError as exc:
            self._fail_identity(exc)
            return False
        except Exception as exc:
            self._fail_store("update_task", exc, task_id)
            return False
        self._notify("Task updated successfully!", "success")
        self.refresh()
        return True

    def request_toggle_complete(self, task_id: str) -> bool:
        """Flip the completed flag on one of the signed-in user's tasks."""
        task = next((item for item in self.tasks if item.id == task_id), None)
        if task is None:
            self._fail_validation(ValidationError("Task not found", operation="toggle_complete", entity_id=task_id))
            return False
        if task.owner_id != self.current_user_id:
            self._fail_validation(
                ValidationError("Only your own tasks can be completed.", operation="toggle_complete", entity_id=task_id)
            )
            return False
        completed = not task.completed
        try:
            self.task_store.set_completed(task_id, completed)
        except IdentityError as exc:
            self._fail_identity(exc)
            return False
        except Exception as exc:
            self._fail_store("toggle_complete", exc, task_id)
            return False
        self._notify("Task marked complete!" if completed else "Task marked incomplete!", "success")
        self.refresh()
        return True

    def request_delete(self, task_id: str) -> bool:
        if not str(task_id or "").strip():
            self._fail_validation(ValidationError("Missing task id", operation="delete_task"))
            return False
        try:
            self.task_store.delete_task(task_id)
        except IdentityError as exc:
            self._fail_identity(exc)
            return False
        except Exception as exc:
            self._fail_store("delete_task", exc, task_id)
            return False
        self._notify("Task deleted successfully!", "success")
        self.refresh()
        return True

    # --- notifications ---------------------------------------------------

    def active_notification(self) -> Optional[Notification]:
        current = self.notification
        if current is not None and current.expires_at is not None and self.clock() >= current.expires_at:
            self.notification = None
            return None
        return current

    def dismiss_notification(self) -> None:
        self.notification = None

    def _notify(self, message: str, kind: str, transient: bool = True) -> None:
        expires_at = self.clock() + NOTIFICATION_SECONDS if transient else None
        self.notification = Notification(message=message, kind=kind, expires_at=expires_at)

    def _fail_validation(self, exc: ValidationError) -> None:
        logger.warning("%s rejected (task=%s): %s", exc.operation, exc.entity_id, exc)
        self._notify(str(exc), "error", transient=False)

    def _fail_store(self, operation: str, exc: Exception, entity_id: str | None = None) -> None:
        logger.warning("%s failed (task=%s): %s", operation, entity_id, exc)
        self._notify(f"{FAILURE_MESSAGES.get(operation, 'Error')}: {exc}", "error")

    def _fail_identity(self, exc: IdentityError) -> None:
        logger.error("%s failed: %s", exc.operation, exc)
        self.blocking_error = "Authentication error. Please log in again."
        self.notification = Notification(message=self.blocking_error, kind="error", expires_at=None)

