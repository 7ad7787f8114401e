"""BaseService: foundation for the monitorsvc services.

Every service receives a :class:`Store` at construction time and owns its
transaction boundaries via ``self._store.transaction()``. Loggers are
injected so tests and the REST layer can bind their own context.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from monitorsvc.infrastructure.store import Store


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class MonitorWriteService(BaseService):
            async def delete(self, monitor_id: str) -> bool:
                async with self._store.transaction() as conn:
                    ...
    """

    def __init__(self, store: Store, *, logger: Any | None = None) -> None:
        self._store = store
        self._log = logger or structlog.get_logger(type(self).__module__)

    async def _notify(self, event: str, send: Awaitable[None], warnings: list[str]) -> None:
        """Await an outbound notification.

        INVARIANT: Notification failures are warnings, never errors.
        """
        try:
            await send
        except Exception:
            self._log.warning("notify.failed", notify_event=event, exc_info=True)
            warnings.append(f"Notification failed for {event}")
