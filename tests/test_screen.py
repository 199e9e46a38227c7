from datetime import date, datetime, timezone

import pytest

from lent.errors import IdentityError, ValidationError
from lent.models import TaskFilter, ViewMode, ViewportClass
from lent.screen import CalendarScreen, validate_task_fields

from tests.conftest import FakeConnections, FakeSession, FakeTaskStore, make_task


def _screen(store, clock, session=None, connections=None, today=date(2025, 3, 10)):
    return CalendarScreen(
        store,
        connections or FakeConnections(["friend"]),
        session or FakeSession("me"),
        clock=clock,
        today_provider=lambda: today,
    )


class TestLoad:
    def test_load_fetches_and_shifts_dates_for_display(self, store, clock):
        store.tasks = [make_task("1", "me", "2025-03-09", title="Fast from sweets")]
        screen = _screen(store, clock)
        assert screen.load()
        assert screen.current_user_id == "me"
        assert screen.tasks[0].date == datetime(2025, 3, 10, tzinfo=timezone.utc)
        assert screen.connection_ids == frozenset({"friend"})
        assert (screen.month, screen.year) == (3, 2025)

    def test_identity_failure_blocks_the_screen(self, store, clock):
        screen = _screen(store, clock, session=FakeSession(error=IdentityError("expired")))
        assert not screen.load()
        assert screen.blocking_error == "Authentication error. Please log in again."
        assert store.calls == []
        assert screen.render() is None

    def test_stale_fetch_is_discarded_after_close(self, store, clock):
        store.tasks = [make_task("1", "me", "2025-03-09")]
        screen = _screen(store, clock)
        screen.current_user_id = "me"
        store.before_list = screen.close
        assert not screen.refresh()
        assert screen.tasks == ()

    def test_fetch_failure_keeps_previous_tasks(self, store, clock):
        store.tasks = [make_task("1", "me", "2025-03-09")]
        screen = _screen(store, clock)
        screen.load()
        store.fail_on.add("list")
        assert not screen.refresh()
        assert len(screen.tasks) == 1
        assert screen.active_notification().message.startswith("Error fetching tasks")


class TestMutations:
    def test_create_stores_shifted_date_and_displays_picked_day(self, store, clock):
        screen = _screen(store, clock)
        screen.load()
        record = screen.request_create("Fast from sweets", "No sugar", date(2025, 3, 10))

        assert record is not None
        assert store.tasks[0].date == datetime(2025, 3, 9, tzinfo=timezone.utc)
        result = screen.render()
        cell = next(c for c in result.cells if c is not None and c.date == date(2025, 3, 10))
        assert [task.title for task in cell.own_tasks] == ["Fast from sweets"]
        notification = screen.active_notification()
        assert notification.kind == "success"
        assert notification.message == "Task created successfully!"

    @pytest.mark.parametrize(
        "title, description, picked",
        [("", "desc", "2025-03-10"), ("Pray", "   ", "2025-03-10"), ("Pray", "desc", "")],
    )
    def test_validation_never_reaches_the_store(self, store, clock, title, description, picked):
        screen = _screen(store, clock)
        screen.load()
        store.calls.clear()
        assert screen.request_create(title, description, picked) is None
        assert store.calls == []
        notification = screen.active_notification()
        assert notification.message == "Please fill in all fields."
        assert not notification.transient

    def test_store_failure_keeps_snapshot_and_notifies(self, store, clock):
        store.tasks = [make_task("1", "me", "2025-03-09")]
        screen = _screen(store, clock)
        screen.load()
        before = screen.render()
        store.fail_on.add("create")

        assert screen.request_create("Pray", "Rosary", "2025-03-11") is None
        assert screen.tasks == before.own_tasks
        notification = screen.active_notification()
        assert notification.message == "Error creating task: create exploded"
        assert notification.transient

    def test_update_and_delete_refetch(self, store, clock):
        store.tasks = [make_task("1", "me", "2025-03-09", title="Old")]
        screen = _screen(store, clock)
        screen.load()

        assert screen.request_update("1", "New", "desc", "2025-03-20")
        assert screen.tasks[0].title == "New"
        assert screen.tasks[0].date == datetime(2025, 3, 20, tzinfo=timezone.utc)

        assert screen.request_delete("1")
        assert screen.tasks == ()
        assert screen.active_notification().message == "Task deleted successfully!"

    def test_delete_failure_reports_operation(self, store, clock):
        screen = _screen(store, clock)
        screen.load()
        store.fail_on.add("delete")
        assert not screen.request_delete("42")
        assert screen.active_notification().message.startswith("Error deleting task")


class TestCompletion:
    def test_toggle_flips_own_task_and_refetches(self, store, clock):
        store.tasks = [make_task("1", "me", "2025-03-09")]
        screen = _screen(store, clock)
        screen.load()

        assert screen.request_toggle_complete("1")
        assert store.calls == ["list", "toggle", "list"]
        assert screen.tasks[0].completed
        assert screen.active_notification().message == "Task marked complete!"

        assert screen.request_toggle_complete("1")
        assert not screen.tasks[0].completed
        assert screen.active_notification().message == "Task marked incomplete!"

    def test_friends_tasks_cannot_be_toggled(self, store, clock):
        store.tasks = [make_task("2", "friend", "2025-03-09")]
        screen = _screen(store, clock)
        screen.load()

        assert not screen.request_toggle_complete("2")
        assert "toggle" not in store.calls
        assert not screen.tasks[0].completed
        assert screen.active_notification().message == "Only your own tasks can be completed."

    def test_unknown_task_is_rejected(self, store, clock):
        screen = _screen(store, clock)
        screen.load()
        assert not screen.request_toggle_complete("missing")
        assert "toggle" not in store.calls

    def test_toggle_failure_keeps_state_and_notifies(self, store, clock):
        store.tasks = [make_task("1", "me", "2025-03-09")]
        screen = _screen(store, clock)
        screen.load()
        store.fail_on.add("toggle")

        assert not screen.request_toggle_complete("1")
        assert not screen.tasks[0].completed
        notification = screen.active_notification()
        assert notification.message == "Error updating task: toggle exploded"
        assert notification.transient


class TestViewState:
    def test_toggle_mode_switches_between_grid_and_list(self, store, clock):
        screen = _screen(store, clock)
        screen.load()
        assert screen.mode == ViewMode.GRID
        assert screen.toggle_mode() == ViewMode.LIST
        assert screen.render().cells == ()
        assert screen.toggle_mode() == ViewMode.GRID

    def test_viewport_from_width(self, store, clock):
        screen = _screen(store, clock)
        screen.set_viewport(400)
        assert screen.viewport == ViewportClass.NARROW
        screen.set_viewport("wide")
        assert screen.viewport == ViewportClass.WIDE

    def test_month_navigation_wraps_years(self, store, clock):
        screen = _screen(store, clock, today=date(2025, 1, 15))
        screen.previous_month()
        assert (screen.month, screen.year) == (12, 2024)
        screen.next_month()
        screen.next_month()
        assert (screen.month, screen.year) == (2, 2025)
        with pytest.raises(ValueError):
            screen.go_to(13, 2025)

    def test_friends_filter_hides_own_tasks_in_list_mode(self, store, clock):
        store.tasks = [make_task("1", "me", "2025-03-09"), make_task("2", "friend", "2025-03-11")]
        screen = _screen(store, clock)
        screen.load()
        screen.set_mode("list")

        everything = screen.render()
        assert [task.id for task in everything.own_tasks] == ["1"]
        assert [task.id for task in everything.peer_tasks] == ["2"]

        screen.set_task_filter("friends")
        assert screen.task_filter == TaskFilter.FRIENDS
        friends_only = screen.render()
        assert friends_only.own_tasks == ()
        assert [task.id for task in friends_only.peer_tasks] == ["2"]

        # the grid still shows everyone
        screen.set_mode("grid")
        assert [task.id for task in screen.render().own_tasks] == ["1"]

    def test_transient_notification_expires(self, store, clock):
        screen = _screen(store, clock)
        screen.load()
        screen.request_delete("missing")
        assert screen.active_notification() is not None
        clock.now += 3.0
        assert screen.active_notification() is None


def test_validate_task_fields_strips_and_parses():
    assert validate_task_fields(" Pray ", " Rosary ", "2025-03-10", "create_task") == (
        "Pray",
        "Rosary",
        date(2025, 3, 10),
    )


def test_validate_task_fields_tags_operation():
    with pytest.raises(ValidationError) as excinfo:
        validate_task_fields("Pray", "Rosary", "garbage", "update_task", "t1")
    assert excinfo.value.operation == "update_task"
    assert excinfo.value.entity_id == "t1"


def test_rejected_credentials_during_create_block_the_screen(store, clock):
    class ExpiredStore(FakeTaskStore):
        def create_task(self, owner_id, title, description, date):
            raise IdentityError("token expired", operation="create_task")

    screen = _screen(ExpiredStore(), clock)
    screen.load()
    assert screen.request_create("Pray", "Rosary", "2025-03-10") is None
    assert screen.blocking_error == "Authentication error. Please log in again."
