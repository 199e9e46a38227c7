from __future__ import annotations

import logging
from datetime import date, datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import require_user_id
from backend.schemas import CalendarResponse
from backend import repositories
from backend.settings import get_settings
from lent import view_model
from lent.dates import task_for_display
from lent.grid import classify_viewport
from lent.models import Task, ViewportClass

logger = logging.getLogger(__name__)

router = APIRouter()


def _display_task(row: dict) -> Task:
    return task_for_display(Task.from_row(row))


@router.get("/v1/lent/calendar", response_model=CalendarResponse)
async def lent_calendar(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1, le=9999),
    viewport: ViewportClass = Query(ViewportClass.WIDE),
    width: int | None = Query(None, ge=0),
    today: date | None = Query(None),
    user_id: str = Depends(require_user_id),
):
    settings = get_settings()
    if width is not None:
        viewport = classify_viewport(width, settings.narrow_viewport_width)
    connections = await repositories.list_accepted_connections(user_id)
    rows = await repositories.list_tasks_visible_to(user_id)
    try:
        tasks = [_display_task(row) for row in rows]
    except (KeyError, ValueError) as exc:
        logger.exception("Malformed task row for user %s: %s", user_id, exc)
        raise HTTPException(status_code=500, detail="Internal error")
    result = view_model.render(
        month,
        year,
        viewport,
        user_id,
        tasks,
        today or datetime.now(timezone.utc).date(),
        cell_height=settings.calendar_cell_height,
        connections=connections,
    )
    return result.to_dict()
