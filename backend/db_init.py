from __future__ import annotations

import logging

from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from backend.db import get_engine


USERS_TABLE = "lent_users"
TASKS_TABLE = "lent_tasks"
CONNECTIONS_TABLE = "lent_connections"

logger = logging.getLogger(__name__)

# columns added after the first release; older databases get them on startup
ADDED_COLUMNS = (
    (TASKS_TABLE, "completed", "INTEGER NOT NULL DEFAULT 0"),
)


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {USERS_TABLE} (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    display_name TEXT,
                    created_at TEXT
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {TASKS_TABLE} (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL,
                    date TEXT NOT NULL,
                    completed INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL,
                    updated_at TEXT
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {CONNECTIONS_TABLE} (
                    id TEXT PRIMARY KEY,
                    requester_id TEXT NOT NULL,
                    addressee_id TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'pending',
                    created_at TEXT,
                    UNIQUE (requester_id, addressee_id)
                )
                """
            )
        )
        await conn.execute(
            sql_text(f"CREATE INDEX IF NOT EXISTS idx_{TASKS_TABLE}_user_created ON {TASKS_TABLE} (user_id, created_at)")
        )
        await conn.execute(
            sql_text(
                f"CREATE INDEX IF NOT EXISTS idx_{CONNECTIONS_TABLE}_status "
                f"ON {CONNECTIONS_TABLE} (status, requester_id, addressee_id)"
            )
        )

    for table_name, column_name, column_ddl in ADDED_COLUMNS:
        await ensure_column(engine, table_name, column_name, column_ddl)


async def ensure_column(engine, table_name: str, column_name: str, column_ddl: str) -> None:
    try:
        async with engine.begin() as conn:
            await conn.execute(sql_text(f"ALTER TABLE {table_name} ADD COLUMN {column_name} {column_ddl}"))
    except SQLAlchemyError:
        logger.debug("Column %s.%s already present", table_name, column_name)
