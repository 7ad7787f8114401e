"""MonitorReadService: lookup by id and criteria search.

Reads never fail with an error value: malformed ids, unknown criteria
and uncoercible criterion values all come back as "nothing found".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from monitorsvc.domain.ids import validate_id
from monitorsvc.domain.monitor import SEARCHABLE_FIELDS, Monitor
from monitorsvc.domain.types import TagFlag
from monitorsvc.infrastructure.repositories import MonitorRepository
from monitorsvc.services.base import BaseService
from monitorsvc.services.query_builder import CriteriaResolver

if TYPE_CHECKING:
    from monitorsvc.infrastructure.store import Store

CRITERIA_KEYS: frozenset[str] = SEARCHABLE_FIELDS | {flag.value for flag in TagFlag}


class MonitorReadService(BaseService):
    """Read access to monitor records."""

    def __init__(
        self,
        store: Store,
        *,
        resolver: CriteriaResolver | None = None,
        repository: MonitorRepository | None = None,
        logger: Any | None = None,
    ) -> None:
        super().__init__(store, logger=logger)
        self._resolver = resolver or CriteriaResolver()
        self._repo = repository or MonitorRepository()

    async def find_by_id(self, monitor_id: str | None) -> Monitor | None:
        """Return the record with *monitor_id*, or None.

        A malformed id returns None without querying the store.
        """
        log = self._log.bind(monitor_id=monitor_id)
        if not validate_id(monitor_id):
            log.debug("find_by_id.invalid_id")
            return None

        assert monitor_id is not None
        async with self._store.connect() as conn:
            records = await self._repo.fetch(conn, self._resolver.build_by_id(monitor_id))
        if not records:
            log.debug("find_by_id.not_found")
            return None
        return records[0]

    async def find(self, criteria: Mapping[str, Any] | None = None) -> list[Monitor]:
        """Return all records matching *criteria*, ordered by id.

        ``None`` or an empty mapping returns every record. Unknown keys or
        values that cannot be converted to the column type yield ``[]``.
        """
        criteria = dict(criteria or {})
        unknown = sorted(key for key in criteria if key not in CRITERIA_KEYS)
        if unknown:
            self._log.debug("find.unknown_criteria", keys=unknown)
            return []

        try:
            stmt = self._resolver.build(criteria)
        except ValueError as exc:
            self._log.debug("find.bad_criterion", error=str(exc))
            return []

        async with self._store.connect() as conn:
            records = await self._repo.fetch(conn, stmt)
        self._log.debug("find.done", count=len(records))
        return records
