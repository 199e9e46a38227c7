from dataclasses import replace
from datetime import date, datetime, timezone

import pytest

from lent.models import Task


def make_task(task_id, owner_id, day, title=None, created_at=None, owner_name="", description="desc", completed=False):
    """Build a task whose ``date`` is already the display day (UTC midnight)."""
    if isinstance(day, str):
        day = date.fromisoformat(day)
    when = datetime(day.year, day.month, day.day, tzinfo=timezone.utc)
    return Task(
        id=task_id,
        owner_id=owner_id,
        title=title or f"task {task_id}",
        description=description,
        date=when,
        created_at=created_at or when,
        owner_name=owner_name,
        completed=completed,
    )


class FakeTaskStore:
    """In-memory store. Keeps tasks with their stored (shifted) dates."""

    def __init__(self, tasks=None):
        self.tasks = list(tasks or [])
        self.calls = []
        self.fail_on = set()
        self.before_list = None

    def _check(self, operation):
        self.calls.append(operation)
        if operation in self.fail_on:
            raise RuntimeError(f"{operation} exploded")

    def list_tasks_visible_to(self, user_id):
        self._check("list")
        if self.before_list is not None:
            self.before_list()
        return list(self.tasks)

    def create_task(self, owner_id, title, description, date):
        self._check("create")
        task = Task(
            id=f"t{len(self.tasks) + 1}",
            owner_id=owner_id,
            title=title,
            description=description,
            date=date,
            created_at=datetime.now(timezone.utc),
        )
        self.tasks.append(task)
        return task

    def update_task(self, task_id, title, description, date):
        self._check("update")
        self.tasks = [
            replace(task, title=title, description=description, date=date)
            if task.id == task_id
            else task
            for task in self.tasks
        ]

    def set_completed(self, task_id, completed):
        self._check("toggle")
        self.tasks = [replace(task, completed=completed) if task.id == task_id else task for task in self.tasks]

    def delete_task(self, task_id):
        self._check("delete")
        self.tasks = [task for task in self.tasks if task.id != task_id]


class FakeConnections:
    def __init__(self, identities=()):
        self.identities = list(identities)

    def list_accepted_connections(self, user_id):
        return list(self.identities)


class FakeSession:
    def __init__(self, user_id="me", error=None):
        self.user_id = user_id
        self.error = error

    def current_user_id(self):
        if self.error is not None:
            raise self.error
        return self.user_id


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return FakeTaskStore()
