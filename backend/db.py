from __future__ import annotations

import logging

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from backend.settings import get_settings

logger = logging.getLogger(__name__)

LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}
SSL_OFF_MODES = {"disable", "allow"}
SSL_ON_MODES = {"prefer", "require", "verify-ca", "verify-full"}
# libpq-only options that asyncpg rejects
_DROPPED_QUERY_KEYS = ("sslmode", "channel_binding", "ssl")


def normalize_database_url(database_url: str) -> URL:
    """Point any sqlite or postgres URL at its asyncio driver."""
    raw = str(database_url or "").strip()
    if not raw:
        raise ValueError("DATABASE_URL is empty")
    if raw.startswith("postgres://"):
        raw = "postgresql://" + raw[len("postgres://") :]
    url = make_url(raw)
    backend = url.get_backend_name()
    if backend == "sqlite":
        return url.set(drivername="sqlite+aiosqlite")
    if backend != "postgresql":
        raise ValueError(f"Unsupported database backend: {backend}")
    query = {key: value for key, value in url.query.items() if key not in _DROPPED_QUERY_KEYS}
    return url.set(drivername="postgresql+asyncpg", query=query)


def _wants_ssl(raw_url: str, url: URL) -> bool:
    mode = make_url(str(raw_url).strip()).query.get("sslmode")
    if isinstance(mode, tuple):
        mode = mode[-1]
    mode = str(mode or "").strip().lower()
    if mode in SSL_OFF_MODES:
        return False
    if mode in SSL_ON_MODES:
        return True
    host = url.host or ""
    return bool(host) and host not in LOCAL_HOSTS


def engine_options(database_url: str) -> tuple[URL, dict]:
    settings = get_settings()
    url = normalize_database_url(database_url)
    if url.get_backend_name() == "sqlite":
        return url, {}
    options = {
        "pool_pre_ping": True,
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
    }
    if _wants_ssl(database_url, url):
        options["connect_args"] = {"ssl": True}
    return url, options


_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        url, options = engine_options(get_settings().database_url)
        logger.info("Creating database engine for %s", url.render_as_string(hide_password=True))
        _engine = create_async_engine(url, **options)
    return _engine


def get_sessionmaker() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def dispose_engine() -> None:
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
