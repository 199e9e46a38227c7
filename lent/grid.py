from __future__ import annotations

import calendar
from datetime import date
from typing import Optional, Tuple

from lent.constants import NARROW_COLUMNS, NARROW_VIEWPORT_WIDTH, WIDE_COLUMNS
from lent.models import ViewportClass

Grid = Tuple[Optional[date], ...]


def classify_viewport(width, threshold: int = NARROW_VIEWPORT_WIDTH) -> ViewportClass:
    if width is None:
        return ViewportClass.WIDE
    return ViewportClass.NARROW if float(width) < threshold else ViewportClass.WIDE


def columns_for(viewport: ViewportClass) -> int:
    return NARROW_COLUMNS if ViewportClass(viewport) == ViewportClass.NARROW else WIDE_COLUMNS


def days_in_month(month: int, year: int) -> int:
    if not 1 <= int(month) <= 12:
        raise ValueError(f"month must be in 1..12, got {month}")
    return calendar.monthrange(int(year), int(month))[1]


def weekday_of(day: date) -> int:
    # 0 = Sunday
    return (day.weekday() + 1) % 7


def month_days(month: int, year: int) -> Tuple[date, ...]:
    total = days_in_month(month, year)
    return tuple(date(int(year), int(month), day) for day in range(1, total + 1))


def build_grid(month: int, year: int, viewport) -> Grid:
    """Return the cell sequence for one month.

    Wide grids start with ``weekday_of(first)`` empty cells so each day sits
    under its weekday header; narrow grids are a plain two-column flow with
    no padding.
    """
    days = month_days(month, year)
    if ViewportClass(viewport) == ViewportClass.NARROW:
        return tuple(days)
    offset = weekday_of(days[0])
    return (None,) * offset + tuple(days)


def shift_month(month: int, year: int, delta: int) -> Tuple[int, int]:
    index = (int(year) * 12 + int(month) - 1) + int(delta)
    return index % 12 + 1, index // 12
