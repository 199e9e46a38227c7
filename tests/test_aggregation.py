from datetime import date, datetime, timezone

from lent.aggregation import TaskAggregator, aggregate
from lent.models import Task

from tests.conftest import make_task


def test_aggregate_splits_by_owner():
    tasks = [make_task("1", "me", "2025-03-10"), make_task("2", "friend", "2025-03-10")]
    own, peer = aggregate("me", tasks)
    assert [task.id for task in own] == ["1"]
    assert [task.id for task in peer] == ["2"]


def test_day_match_uses_utc_components():
    late = Task(
        id="late",
        owner_id="me",
        title="Vigil",
        description="",
        date=datetime(2025, 3, 4, 23, 59, 59, tzinfo=timezone.utc),
        created_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
    )
    aggregator = TaskAggregator("me", [late])
    assert aggregator.tasks_for_day(date(2025, 3, 4)) == (late,)
    assert aggregator.tasks_for_day(date(2025, 3, 5)) == ()


def test_tasks_ordered_newest_first_with_stable_ties():
    older = make_task("old", "me", "2025-03-10", created_at=datetime(2025, 3, 1, tzinfo=timezone.utc))
    tie_a = make_task("a", "me", "2025-03-10", created_at=datetime(2025, 3, 2, tzinfo=timezone.utc))
    tie_b = make_task("b", "me", "2025-03-10", created_at=datetime(2025, 3, 2, tzinfo=timezone.utc))
    aggregator = TaskAggregator("me", [older, tie_a, tie_b])
    assert [task.id for task in aggregator.own_for_day(date(2025, 3, 10))] == ["a", "b", "old"]


def test_connections_filter_drops_unknown_owners():
    tasks = [
        make_task("1", "me", "2025-03-10"),
        make_task("2", "friend", "2025-03-10"),
        make_task("3", "stranger", "2025-03-10"),
    ]
    aggregator = TaskAggregator("me", tasks, connections=["friend"])
    assert {task.owner_id for task in aggregator.tasks} == {"me", "friend"}


def test_contributors_exclude_self_and_keep_first_seen_order():
    tasks = [
        make_task("1", "bob", "2025-03-10", owner_name="Bob", created_at=datetime(2025, 3, 3, tzinfo=timezone.utc)),
        make_task("2", "me", "2025-03-10", created_at=datetime(2025, 3, 2, tzinfo=timezone.utc)),
        make_task("3", "ann", "2025-03-11", created_at=datetime(2025, 3, 1, tzinfo=timezone.utc)),
        make_task("4", "bob", "2025-03-12", owner_name="Bob", created_at=datetime(2025, 2, 1, tzinfo=timezone.utc)),
    ]
    contributors = TaskAggregator("me", tasks).contributors()
    assert [item.identity for item in contributors] == ["bob", "ann"]
    assert contributors[0].display_name == "Bob"
    assert contributors[1].display_name == "ann"
