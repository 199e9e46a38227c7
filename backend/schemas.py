from __future__ import annotations

from datetime import datetime
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, ConfigDict, Field


class LentTaskCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    date: datetime


class LentTaskPatch(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    date: Optional[datetime] = None
    completed: Optional[bool] = None


class LentTaskResponse(BaseModel):
    id: str
    owner_id: str
    owner_name: str = ""
    title: str
    description: str
    date: str
    completed: bool = False
    created_at: str
    updated_at: Optional[str] = None


class LentTaskListResponse(BaseModel):
    items: List[LentTaskResponse]


class ConnectionCreate(BaseModel):
    email: str = Field(..., min_length=3)


class ConnectionResponse(BaseModel):
    id: str
    requester_id: str
    addressee_id: str
    status: str
    created_at: Optional[str] = None


class ConnectionListResponse(BaseModel):
    items: List[str]


class PendingConnection(BaseModel):
    id: str
    requester_id: str
    requester_email: Optional[str] = None
    requester_name: Optional[str] = None
    created_at: Optional[str] = None


class PendingConnectionListResponse(BaseModel):
    items: List[PendingConnection]


class MeResponse(BaseModel):
    id: str
    email: str
    display_name: str


class CalendarResponse(BaseModel):
    month: int
    year: int
    viewport: str
    columns: int
    cells: List[Optional[Dict[str, Any]]]
    own_tasks: List[Dict[str, Any]]
    peer_tasks: List[Dict[str, Any]]
    contributors: List[Dict[str, Any]]
    scroll_target: Optional[float] = None
