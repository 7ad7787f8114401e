"""Store: async engine ownership and scoped transactions.

The Store is the single persistence dependency injected into every
service. Write operations run inside :meth:`Store.transaction`, which
commits when the block exits normally and rolls back on any exception.
Reads use :meth:`Store.connect` and never hold a write transaction open.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from monitorsvc.infrastructure.database.engine import (
    create_db_engine,
    drop_database,
    init_database,
)

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

    from monitorsvc.config.settings import MonitorSettings


class Store:
    """Repository boundary around one :class:`AsyncEngine`.

    Constructed once per process (CLI invocation or application lifespan)
    and shared by the services.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: MonitorSettings) -> Store:
        """Build a store from resolved settings."""
        engine = create_db_engine(settings.database_url, echo=settings.database.echo)
        return cls(engine)

    @property
    def engine(self) -> AsyncEngine:
        """The underlying async engine (for direct access when needed)."""
        return self._engine

    async def init(self) -> None:
        """Create any missing tables."""
        await init_database(self._engine)

    async def reset(self) -> None:
        """Drop and recreate all tables."""
        await drop_database(self._engine)
        await init_database(self._engine)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        """Scoped write transaction.

        Usage::

            async with store.transaction() as conn:
                await conn.execute(insert(monitor).values(...))
                # Commits on success, rolls back if the block raises.
        """
        async with self._engine.begin() as conn:
            yield conn

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[AsyncConnection]:
        """Read-only connection; nothing is committed."""
        async with self._engine.connect() as conn:
            yield conn

    async def dispose(self) -> None:
        """Close pooled connections."""
        await self._engine.dispose()
