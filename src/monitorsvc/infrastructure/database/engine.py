"""Async database engine setup.

SQLAlchemy Core over the asyncio extension; every store round-trip is an
``await``. SQLite (via ``aiosqlite``) is the default backend; any async
dialect URL works. For SQLite, foreign keys are switched on per connection
so tag rows follow their monitor.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from monitorsvc.infrastructure.database.schema import metadata


def resolve_database_url(url: str, root: Path) -> str:
    """Resolve a relative SQLite database path against *root*.

    Non-SQLite URLs, absolute paths and in-memory databases are returned
    unchanged.
    """
    parsed = make_url(url)
    if not parsed.drivername.startswith("sqlite"):
        return url
    database = parsed.database
    if not database or database == ":memory:" or Path(database).is_absolute():
        return url
    resolved = (root / database).resolve()
    return parsed.set(database=str(resolved)).render_as_string(hide_password=False)


def create_db_engine(url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an async engine; SQLite connections get foreign keys enabled."""
    engine = create_async_engine(url, echo=echo)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


async def init_database(engine: AsyncEngine) -> None:
    """Create all tables from :data:`schema.metadata`.

    Idempotent: safe to call on an existing database.
    """
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def drop_database(engine: AsyncEngine) -> None:
    """Drop all monitorsvc tables (tags first, via metadata ordering)."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
