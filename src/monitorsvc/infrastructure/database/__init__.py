"""Async database engine and schema via SQLAlchemy Core."""

from monitorsvc.infrastructure.database.engine import (
    create_db_engine,
    drop_database,
    init_database,
    resolve_database_url,
)
from monitorsvc.infrastructure.database.schema import metadata, monitor, tag

__all__ = [
    "create_db_engine",
    "drop_database",
    "init_database",
    "metadata",
    "monitor",
    "resolve_database_url",
    "tag",
]
