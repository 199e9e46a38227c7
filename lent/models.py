from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ViewportClass(str, Enum):
    NARROW = "narrow"
    WIDE = "wide"


class ViewMode(str, Enum):
    GRID = "grid"
    LIST = "list"


class TaskFilter(str, Enum):
    ALL = "all"
    FRIENDS = "friends"


def _parse_instant(value) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        raw = str(value or "").strip()
        if not raw:
            raise ValueError("empty timestamp")
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class Task:
    id: str
    owner_id: str
    title: str
    description: str
    date: datetime
    created_at: datetime
    owner_name: str = ""
    completed: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Task":
        return cls(
            id=str(row["id"]),
            owner_id=str(row.get("owner_id") or row.get("user_id") or ""),
            title=str(row.get("title") or ""),
            description=str(row.get("description") or ""),
            date=_parse_instant(row["date"]),
            created_at=_parse_instant(row.get("created_at") or row["date"]),
            owner_name=str(row.get("owner_name") or ""),
            completed=bool(int(row.get("completed") or 0)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "owner_name": self.owner_name,
            "title": self.title,
            "description": self.description,
            "date": self.date.isoformat().replace("+00:00", "Z"),
            "created_at": self.created_at.isoformat().replace("+00:00", "Z"),
            "completed": self.completed,
        }


@dataclass(frozen=True)
class Contributor:
    identity: str
    display_name: str
    is_self: bool = False


@dataclass(frozen=True)
class GuideEvent:
    month_day: str
    title: str
    description: str


@dataclass(frozen=True)
class DayCell:
    date: date
    own_tasks: Tuple[Task, ...] = ()
    peer_tasks: Tuple[Tuple[Task, str], ...] = ()
    guide_event: Optional[GuideEvent] = None
    is_today: bool = False


@dataclass(frozen=True)
class CalendarRender:
    month: int
    year: int
    viewport: ViewportClass
    columns: int
    cells: Tuple[Optional[DayCell], ...]
    own_tasks: Tuple[Task, ...]
    peer_tasks: Tuple[Task, ...]
    contributors: Tuple[Contributor, ...] = ()
    colors: Dict[str, str] = field(default_factory=dict)
    scroll_target: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        def _cell(cell: Optional[DayCell]):
            if cell is None:
                return None
            guide = cell.guide_event
            return {
                "date": cell.date.isoformat(),
                "is_today": cell.is_today,
                "own_tasks": [task.to_dict() for task in cell.own_tasks],
                "peer_tasks": [{**task.to_dict(), "color": color} for task, color in cell.peer_tasks],
                "guide_event": (
                    {"month_day": guide.month_day, "title": guide.title, "description": guide.description}
                    if guide
                    else None
                ),
            }

        return {
            "month": self.month,
            "year": self.year,
            "viewport": self.viewport.value,
            "columns": self.columns,
            "cells": [_cell(cell) for cell in self.cells],
            "own_tasks": [task.to_dict() for task in self.own_tasks],
            "peer_tasks": [task.to_dict() for task in self.peer_tasks],
            "contributors": [
                {
                    "identity": item.identity,
                    "display_name": item.display_name,
                    "color": self.colors.get(item.identity),
                }
                for item in self.contributors
            ],
            "scroll_target": self.scroll_target,
        }
