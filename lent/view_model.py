from __future__ import annotations

from typing import Iterable, List, Optional

from lent.aggregation import TaskAggregator
from lent.constants import DEFAULT_CELL_HEIGHT
from lent.dates import same_utc_day
from lent.grid import build_grid, columns_for
from lent.guide import DEFAULT_INDEX, GuideEventIndex
from lent.models import CalendarRender, DayCell, Task, TaskFilter, ViewportClass
from lent.palette import assign_colors
from lent.scroll import plan_scroll


def render(
    month: int,
    year: int,
    viewport,
    current_user_id: str,
    visible_tasks: Iterable[Task],
    today,
    cell_height: float = DEFAULT_CELL_HEIGHT,
    connections: Optional[Iterable[str]] = None,
    guide_index: GuideEventIndex = DEFAULT_INDEX,
) -> CalendarRender:
    viewport = ViewportClass(viewport)
    aggregator = TaskAggregator(current_user_id, visible_tasks, connections)
    contributors = aggregator.contributors()
    colors = assign_colors(item.identity for item in contributors)

    grid = build_grid(month, year, viewport)
    columns = columns_for(viewport)
    cells: List[Optional[DayCell]] = []
    for day in grid:
        if day is None:
            cells.append(None)
            continue
        cells.append(
            DayCell(
                date=day,
                own_tasks=aggregator.own_for_day(day),
                peer_tasks=tuple((task, colors[task.owner_id]) for task in aggregator.peer_for_day(day)),
                guide_event=guide_index.first(day),
                is_today=same_utc_day(day, today),
            )
        )

    return CalendarRender(
        month=int(month),
        year=int(year),
        viewport=viewport,
        columns=columns,
        cells=tuple(cells),
        own_tasks=aggregator.own_tasks,
        peer_tasks=aggregator.peer_tasks,
        contributors=contributors,
        colors=colors,
        scroll_target=plan_scroll(grid, today, columns, cell_height),
    )


def render_list(
    month: int,
    year: int,
    viewport,
    current_user_id: str,
    visible_tasks: Iterable[Task],
    connections: Optional[Iterable[str]] = None,
    task_filter=TaskFilter.ALL,
) -> CalendarRender:
    """Flat-list variant: same aggregation, no grid and no scroll target."""
    viewport = ViewportClass(viewport)
    aggregator = TaskAggregator(current_user_id, visible_tasks, connections)
    contributors = aggregator.contributors()
    own_tasks, peer_tasks = aggregator.filtered(task_filter)
    return CalendarRender(
        month=int(month),
        year=int(year),
        viewport=viewport,
        columns=columns_for(viewport),
        cells=(),
        own_tasks=own_tasks,
        peer_tasks=peer_tasks,
        contributors=contributors,
        colors=assign_colors(item.identity for item in contributors),
        scroll_target=None,
    )
