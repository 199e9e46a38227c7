from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.auth import require_user_id
from backend.schemas import (
    ConnectionCreate,
    ConnectionListResponse,
    ConnectionResponse,
    PendingConnectionListResponse,
)
from backend import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/v1/connections", response_model=ConnectionListResponse)
async def list_connections(user_id: str = Depends(require_user_id)):
    items = await repositories.list_accepted_connections(user_id)
    return {"items": items}


@router.get("/v1/connections/pending", response_model=PendingConnectionListResponse)
async def list_pending(user_id: str = Depends(require_user_id)):
    items = await repositories.list_pending_requests(user_id)
    return {"items": items}


@router.post("/v1/connections", status_code=201, response_model=ConnectionResponse)
async def request_connection(payload: ConnectionCreate, user_id: str = Depends(require_user_id)):
    other = await repositories.ensure_user(payload.email.strip().lower())
    try:
        return await repositories.request_connection(user_id, str(other["id"]))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.post("/v1/connections/{connection_id}/accept", response_model=ConnectionResponse)
async def accept_connection(connection_id: str, user_id: str = Depends(require_user_id)):
    record = await repositories.accept_connection(user_id, connection_id)
    if not record:
        logger.warning("Connection %s not found for addressee %s", connection_id, user_id)
        raise HTTPException(status_code=404, detail="Connection not found")
    return record
