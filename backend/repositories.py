from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import text as sql_text, bindparam

from backend.db import get_sessionmaker
from backend.db_init import CONNECTIONS_TABLE, TASKS_TABLE, USERS_TABLE

TASK_SELECT = f"""
    SELECT
        t.id, t.user_id, t.title, t.description, t.date, t.completed, t.created_at, t.updated_at,
        u.display_name AS owner_name
    FROM {TASKS_TABLE} t
    LEFT JOIN {USERS_TABLE} u ON u.id = t.user_id
"""


def _new_id() -> str:
    return uuid4().hex


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _normalize_instant(value) -> str:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    return str(value)


def _normalize_task_row(row) -> dict:
    if not row:
        return {}
    payload = dict(row)
    for key in ("date", "created_at", "updated_at"):
        value = payload.get(key)
        if value is not None and hasattr(value, "isoformat"):
            payload[key] = _normalize_instant(value)
    payload["completed"] = bool(payload.get("completed") or 0)
    payload["owner_id"] = payload.get("user_id")
    payload["owner_name"] = payload.get("owner_name") or ""
    return payload


def _display_name_from_email(email: str) -> str:
    local = (email or "").split("@")[0].replace(".", " ").strip()
    return local.title() if local else "User"


# --- users ---------------------------------------------------------------


async def get_user_by_email(email: str) -> dict | None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(f"SELECT id, email, display_name, created_at FROM {USERS_TABLE} WHERE email = :email"),
            {"email": email.lower()},
        )).mappings().fetchone()
    return dict(row) if row else None


async def ensure_user(email: str, display_name: str | None = None) -> dict:
    existing = await get_user_by_email(email)
    if existing:
        return existing
    record = {
        "id": _new_id(),
        "email": email.lower(),
        "display_name": display_name or _display_name_from_email(email),
        "created_at": _now_iso(),
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"INSERT INTO {USERS_TABLE} (id, email, display_name, created_at) "
                "VALUES (:id, :email, :display_name, :created_at) "
                "ON CONFLICT(email) DO NOTHING"
            ),
            record,
        )
        await session.commit()
    return await get_user_by_email(email) or record


# --- connections ---------------------------------------------------------


async def list_accepted_connections(user_id: str) -> list[str]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT requester_id, addressee_id
                FROM {CONNECTIONS_TABLE}
                WHERE status = 'accepted'
                  AND (requester_id = :user_id OR addressee_id = :user_id)
                ORDER BY created_at
                """
            ),
            {"user_id": user_id},
        )).mappings().all()
    dedup = []
    seen = set()
    for row in rows:
        other = row["addressee_id"] if row["requester_id"] == user_id else row["requester_id"]
        if other in seen:
            continue
        seen.add(other)
        dedup.append(other)
    return dedup


async def list_pending_requests(user_id: str) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(
                f"""
                SELECT c.id, c.requester_id, c.created_at,
                       u.email AS requester_email, u.display_name AS requester_name
                FROM {CONNECTIONS_TABLE} c
                LEFT JOIN {USERS_TABLE} u ON u.id = c.requester_id
                WHERE c.status = 'pending' AND c.addressee_id = :user_id
                ORDER BY c.created_at
                """
            ),
            {"user_id": user_id},
        )).mappings().all()
    return [dict(row) for row in rows]


async def request_connection(requester_id: str, addressee_id: str) -> dict:
    if requester_id == addressee_id:
        raise ValueError("Cannot connect to yourself")
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        existing = (await session.execute(
            sql_text(
                f"""
                SELECT id, requester_id, addressee_id, status, created_at
                FROM {CONNECTIONS_TABLE}
                WHERE (requester_id = :a AND addressee_id = :b)
                   OR (requester_id = :b AND addressee_id = :a)
                LIMIT 1
                """
            ),
            {"a": requester_id, "b": addressee_id},
        )).mappings().fetchone()
        if existing:
            return dict(existing)
        record = {
            "id": _new_id(),
            "requester_id": requester_id,
            "addressee_id": addressee_id,
            "status": "pending",
            "created_at": _now_iso(),
        }
        await session.execute(
            sql_text(
                f"INSERT INTO {CONNECTIONS_TABLE} (id, requester_id, addressee_id, status, created_at) "
                "VALUES (:id, :requester_id, :addressee_id, :status, :created_at)"
            ),
            record,
        )
        await session.commit()
    return record


async def accept_connection(user_id: str, connection_id: str) -> dict | None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"UPDATE {CONNECTIONS_TABLE} SET status = 'accepted' "
                "WHERE id = :id AND addressee_id = :user_id"
            ),
            {"id": connection_id, "user_id": user_id},
        )
        await session.commit()
        if not result.rowcount:
            return None
        row = (await session.execute(
            sql_text(
                f"SELECT id, requester_id, addressee_id, status, created_at FROM {CONNECTIONS_TABLE} WHERE id = :id"
            ),
            {"id": connection_id},
        )).mappings().fetchone()
    return dict(row) if row else None


# --- tasks ---------------------------------------------------------------


async def list_tasks_visible_to(user_id: str) -> list[dict]:
    owner_ids = [user_id] + await list_accepted_connections(user_id)
    session_factory = get_sessionmaker()
    stmt = sql_text(
        TASK_SELECT
        + """
        WHERE t.user_id IN :owner_ids
        ORDER BY t.created_at DESC
        """
    ).bindparams(bindparam("owner_ids", expanding=True))
    async with session_factory() as session:
        rows = (await session.execute(stmt, {"owner_ids": owner_ids})).mappings().all()
    return [_normalize_task_row(row) for row in rows]


async def get_task(task_id: str) -> dict:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(TASK_SELECT + " WHERE t.id = :id"),
            {"id": task_id},
        )).mappings().fetchone()
    return _normalize_task_row(row) if row else {}


async def create_task(user_id: str, payload: dict) -> dict:
    now = _now_iso()
    record = {
        "id": _new_id(),
        "user_id": user_id,
        "title": str(payload.get("title") or "").strip(),
        "description": str(payload.get("description") or "").strip(),
        "date": _normalize_instant(payload.get("date")),
        "completed": 0,
        "created_at": now,
        "updated_at": now,
    }
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        await session.execute(
            sql_text(
                f"""
                INSERT INTO {TASKS_TABLE}
                (id, user_id, title, description, date, completed, created_at, updated_at)
                VALUES
                (:id, :user_id, :title, :description, :date, :completed, :created_at, :updated_at)
                """
            ),
            record,
        )
        await session.commit()
    return await get_task(record["id"])


async def update_task(user_id: str, task_id: str, patch: dict) -> dict:
    allowed = {"title", "description", "date", "completed"}
    updates = []
    params = {"id": task_id, "user_id": user_id}
    for key, value in patch.items():
        if key not in allowed or value is None:
            continue
        updates.append(f"{key} = :{key}")
        if key == "date":
            params[key] = _normalize_instant(value)
        elif key == "completed":
            params[key] = 1 if value else 0
        else:
            params[key] = str(value).strip()
    if not updates:
        task = await get_task(task_id)
        return task if task.get("user_id") == user_id else {}
    updates.append("updated_at = :updated_at")
    params["updated_at"] = _now_iso()
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(
                f"UPDATE {TASKS_TABLE} SET {', '.join(updates)} WHERE id = :id AND user_id = :user_id"
            ),
            params,
        )
        await session.commit()
    if not result.rowcount:
        return {}
    return await get_task(task_id)


async def delete_task(user_id: str, task_id: str) -> bool:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        result = await session.execute(
            sql_text(f"DELETE FROM {TASKS_TABLE} WHERE user_id = :user_id AND id = :task_id"),
            {"user_id": user_id, "task_id": task_id},
        )
        await session.commit()
    return bool(result.rowcount)
