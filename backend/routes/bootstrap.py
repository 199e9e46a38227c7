from __future__ import annotations

from fastapi import APIRouter, Depends

from backend.auth import require_user
from backend.schemas import MeResponse

router = APIRouter()


@router.get("/v1/me", response_model=MeResponse)
async def me(user: dict = Depends(require_user)):
    return {
        "id": user["id"],
        "email": user["email"],
        "display_name": user.get("display_name") or user["email"].split("@")[0].title(),
    }
