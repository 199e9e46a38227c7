import pytest

from backend.db import engine_options, normalize_database_url
from backend.settings import reset_settings


@pytest.mark.parametrize(
    "raw, driver",
    [
        ("sqlite:///lent.db", "sqlite+aiosqlite"),
        ("sqlite+aiosqlite:///lent.db", "sqlite+aiosqlite"),
        ("postgres://u:p@db.example.com/lent", "postgresql+asyncpg"),
        ("postgresql+psycopg2://u:p@localhost/lent", "postgresql+asyncpg"),
    ],
)
def test_normalize_picks_async_driver(raw, driver):
    assert normalize_database_url(raw).drivername == driver


def test_normalize_drops_libpq_query_options():
    url = normalize_database_url("postgresql://u:p@db.example.com/lent?sslmode=require&channel_binding=require&application_name=lent")
    assert dict(url.query) == {"application_name": "lent"}


@pytest.mark.parametrize("raw", ["", "mysql://u:p@localhost/lent"])
def test_normalize_rejects_unusable_urls(raw):
    with pytest.raises(ValueError):
        normalize_database_url(raw)


@pytest.fixture
def settings_env(monkeypatch):
    monkeypatch.setenv("BACKEND_SESSION_SECRET", "x")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///unused.db")
    monkeypatch.setenv("DB_POOL_SIZE", "5")
    reset_settings()
    yield
    reset_settings()


def test_remote_postgres_gets_pool_and_ssl(settings_env):
    _, options = engine_options("postgresql://u:p@db.example.com/lent")
    assert options["pool_size"] == 5
    assert options["max_overflow"] == 10
    assert options["connect_args"] == {"ssl": True}


def test_local_postgres_skips_ssl(settings_env):
    _, options = engine_options("postgresql://u:p@localhost/lent")
    assert "connect_args" not in options


@pytest.mark.parametrize(
    "raw, wants_ssl",
    [
        ("postgresql://u:p@db.example.com/lent?sslmode=disable", False),
        ("postgres://u:p@db.example.com/lent?sslmode=allow", False),
        ("postgresql://u:p@db.example.com/lent?sslmode=require", True),
        ("postgresql://u:p@localhost/lent?sslmode=require", True),
        ("postgresql://u:p@localhost/lent?sslmode=verify-full", True),
        ("postgresql://u:p@localhost/lent?sslmode=disable", False),
    ],
)
def test_explicit_sslmode_decides_ssl(settings_env, raw, wants_ssl):
    _, options = engine_options(raw)
    assert ("connect_args" in options) is wants_ssl
    assert dict(normalize_database_url(raw).query) == {}


def test_sqlite_has_no_pool_options(settings_env):
    url, options = engine_options("sqlite:///lent.db")
    assert url.drivername == "sqlite+aiosqlite"
    assert options == {}
