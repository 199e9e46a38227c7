from datetime import date
from types import SimpleNamespace

from dashboard.tabs.calendar_tab import _cell_html, default_day
from dashboard.tabs.list_tab import tasks_frame
from dashboard.tabs.task_forms import title_html
from lent.models import DayCell

from tests.conftest import make_task


def _screen(today):
    return SimpleNamespace(today_provider=lambda: today)


def test_default_day_follows_the_screen_clock():
    march = SimpleNamespace(month=3, year=2025)
    assert default_day(_screen(date(2025, 3, 10)), march) == date(2025, 3, 10)
    assert default_day(_screen(date(2025, 4, 2)), march) == date(2025, 3, 1)


def test_completed_titles_are_struck_through_and_escaped():
    assert title_html(make_task("1", "me", "2025-03-10", title="Pray <daily>")) == "Pray &lt;daily&gt;"
    done = make_task("1", "me", "2025-03-10", title="Pray", completed=True)
    assert title_html(done) == "<s>Pray</s>"


def test_grid_cell_marks_completed_tasks():
    done = make_task("1", "me", "2025-03-10", title="Fast", completed=True)
    cell = DayCell(date=date(2025, 3, 10), own_tasks=(done,), peer_tasks=(), guide_event=None, is_today=False)
    assert "<s>Fast</s>" in _cell_html(cell)


def test_tasks_frame_has_done_column():
    tasks = [
        make_task("1", "bob", "2025-03-10", owner_name="Bob", completed=True),
        make_task("2", "amy", "2025-03-11"),
    ]
    frame = tasks_frame(tasks, {"bob": "#111111"})
    assert list(frame["Done"]) == [True, False]
    assert list(frame["By"]) == ["Bob", "amy"]
    assert list(frame["Color"]) == ["#111111", ""]
