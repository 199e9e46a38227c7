from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from lent.constants import DAY_CELL_MARGIN
from lent.dates import utc_day_key


def plan_scroll(
    grid: Sequence[Optional[date]],
    today,
    columns_per_row: int,
    cell_height: float,
    margin: float = DAY_CELL_MARGIN,
) -> Optional[float]:
    if columns_per_row <= 0:
        raise ValueError("columns_per_row must be positive")
    days = [cell for cell in grid if cell is not None]
    if not days:
        return None
    today_key = utc_day_key(today)
    shown = days[0]
    if (today_key[0], today_key[1]) != (shown.year, shown.month):
        return None
    for index, cell in enumerate(grid):
        if cell is not None and utc_day_key(cell) == today_key:
            row = index // columns_per_row
            # rough target, only needs to bring the row into view
            return row * (cell_height * 1.5 + margin)
    return None
