from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from backend.auth import require_user_id
from backend.schemas import LentTaskCreate, LentTaskListResponse, LentTaskPatch, LentTaskResponse
from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/lent/tasks", response_model=LentTaskListResponse)
async def list_tasks(user_id: str = Depends(require_user_id)):
    items = await repositories.list_tasks_visible_to(user_id)
    return {"items": jsonable_encoder(items)}


@router.post("/v1/lent/tasks", status_code=201, response_model=LentTaskResponse)
async def create_task(payload: LentTaskCreate, user_id: str = Depends(require_user_id)):
    try:
        record = await repositories.create_task(user_id, payload.model_dump())
        logger.info("Created lent task %s for user %s", record.get("id"), user_id)
        return jsonable_encoder(record)
    except Exception as exc:
        logger.exception("Failed to create task: %s", exc)
        raise HTTPException(status_code=500, detail="Internal error")


@router.patch("/v1/lent/tasks/{task_id}", response_model=LentTaskResponse)
async def patch_task(task_id: str, payload: LentTaskPatch, user_id: str = Depends(require_user_id)):
    try:
        record = await repositories.update_task(user_id, task_id, payload.model_dump(exclude_unset=True))
    except Exception as exc:
        logger.exception("Failed to update task %s: %s", task_id, exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if not record:
        raise HTTPException(status_code=404, detail="Task not found")
    return jsonable_encoder(record)


@router.delete("/v1/lent/tasks/{task_id}")
async def delete_task(task_id: str, user_id: str = Depends(require_user_id)):
    try:
        deleted = await repositories.delete_task(user_id, task_id)
    except Exception as exc:
        logger.exception("Failed to delete task %s: %s", task_id, exc)
        raise HTTPException(status_code=500, detail="Internal error")
    if not deleted:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"ok": True}
