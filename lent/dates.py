"""Date handling for Lent tasks.

Every comparison goes through UTC year/month/day components. A naive
``datetime`` is read as UTC, never as host-local time, so a task cannot slide
across midnight because of the machine's offset.

Stored dates are shifted back one day relative to the day the user picked
(``to_storage_date``) and shifted forward again when read back
(``to_display_date``). The pair must always be used together.
"""
from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, time, timezone
from typing import Tuple

from lent.constants import STORAGE_DAY_SHIFT
from lent.errors import DateParseError


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_picked_date(value) -> date:
    if isinstance(value, datetime):
        return _as_utc(value).date()
    if isinstance(value, date):
        return value
    raw = str(value or "").strip()
    if not raw:
        raise DateParseError("Date is required", operation="parse_date")
    date_part = raw.split("T", 1)[0]
    try:
        return date.fromisoformat(date_part)
    except ValueError as exc:
        raise DateParseError(f"Invalid date: {raw!r}", operation="parse_date") from exc


def utc_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def to_storage_date(picked) -> datetime:
    day = parse_picked_date(picked)
    return utc_midnight(day - STORAGE_DAY_SHIFT)


def to_display_date(stored) -> date:
    if isinstance(stored, str):
        stored = datetime.fromisoformat(stored.strip().replace("Z", "+00:00"))
    if isinstance(stored, datetime):
        day = _as_utc(stored).date()
    else:
        day = stored
    return day + STORAGE_DAY_SHIFT


def to_display_instant(stored) -> datetime:
    return utc_midnight(to_display_date(stored))


def utc_day_key(value) -> Tuple[int, int, int]:
    if isinstance(value, datetime):
        value = _as_utc(value)
    return (value.year, value.month, value.day)


def same_utc_day(a, b) -> bool:
    return utc_day_key(a) == utc_day_key(b)


def format_day(value) -> str:
    year, month, day = utc_day_key(value)
    return f"{month}/{day}/{year}"


def task_for_display(task):
    """Copy of a stored task with its date moved onto the picked day."""
    return replace(task, date=to_display_instant(task.date))
