from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from lent.dates import utc_day_key
from lent.models import Contributor, Task, TaskFilter


def aggregate(current_user_id: str, visible_tasks: Iterable[Task]) -> Tuple[Tuple[Task, ...], Tuple[Task, ...]]:
    own: List[Task] = []
    peer: List[Task] = []
    for task in visible_tasks:
        if task.owner_id == current_user_id:
            own.append(task)
        else:
            peer.append(task)
    return tuple(own), tuple(peer)


class TaskAggregator:
    """Splits one fetch worth of tasks into own/peer and indexes them by day.

    The day index is built once here and reused for every grid cell in a
    render pass.
    """

    def __init__(
        self,
        current_user_id: str,
        visible_tasks: Iterable[Task],
        connections: Optional[Iterable[str]] = None,
    ):
        self.current_user_id = current_user_id
        tasks = list(visible_tasks)
        if connections is not None:
            allowed = {current_user_id, *connections}
            tasks = [task for task in tasks if task.owner_id in allowed]
        # sorted() is stable, so equal timestamps keep fetch order
        tasks = sorted(tasks, key=lambda task: task.created_at, reverse=True)
        self.tasks: Tuple[Task, ...] = tuple(tasks)
        self.own_tasks, self.peer_tasks = aggregate(current_user_id, self.tasks)

        self._by_day: Dict[Tuple[int, int, int], List[Task]] = {}
        for task in self.tasks:
            self._by_day.setdefault(utc_day_key(task.date), []).append(task)

    def filtered(self, task_filter=TaskFilter.ALL) -> Tuple[Tuple[Task, ...], Tuple[Task, ...]]:
        """Own and peer tasks under a list filter; FRIENDS hides the user's own."""
        if TaskFilter(task_filter) == TaskFilter.FRIENDS:
            return (), self.peer_tasks
        return self.own_tasks, self.peer_tasks

    def tasks_for_day(self, day) -> Tuple[Task, ...]:
        return tuple(self._by_day.get(utc_day_key(day), ()))

    def own_for_day(self, day) -> Tuple[Task, ...]:
        return tuple(task for task in self.tasks_for_day(day) if task.owner_id == self.current_user_id)

    def peer_for_day(self, day) -> Tuple[Task, ...]:
        return tuple(task for task in self.tasks_for_day(day) if task.owner_id != self.current_user_id)

    def peer_identities(self) -> Tuple[str, ...]:
        seen = {}
        for task in self.peer_tasks:
            seen.setdefault(task.owner_id, None)
        return tuple(seen)

    def contributors(self) -> Tuple[Contributor, ...]:
        names: Dict[str, str] = {}
        for task in self.peer_tasks:
            if task.owner_id not in names:
                names[task.owner_id] = task.owner_name or task.owner_id
        return tuple(
            Contributor(identity=identity, display_name=names[identity], is_self=False)
            for identity in self.peer_identities()
        )
