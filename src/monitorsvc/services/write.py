"""MonitorWriteService: create, update and delete monitor records.

Pipelines:

- create: VALIDATE → CHECK NAME → CHECK MANUFACTURER → PERSIST → NOTIFY
- update: CHECK ID → CHECK VERSION TOKEN → VALIDATE → CHECK NAME → LOAD →
  CHECK VERSION → MERGE → PERSIST
- delete: CHECK ID → DELETE TAGS + RECORD

Expected failures come back as tagged errors in ``ServiceResult.error``;
store failures propagate as exceptions.

The version check on update is permissive: a token *greater* than the
stored version is accepted, only an older one is rejected. The same guard
is repeated in the UPDATE's WHERE clause so that of two concurrent writers
holding the same version, the second one loses with ``VersionOutdated``.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from monitorsvc.domain.ids import generate_id, parse_version_token
from monitorsvc.domain.monitor import Monitor
from monitorsvc.infrastructure.repositories import MonitorRepository
from monitorsvc.services.base import BaseService
from monitorsvc.services.errors import (
    ConstraintViolations,
    CreateError,
    ManufacturerExists,
    MonitorNotExists,
    NameExists,
    UpdateError,
    VersionInvalid,
    VersionOutdated,
)
from monitorsvc.services.result import ServiceResult
from monitorsvc.services.telemetry import trace_span, traced
from monitorsvc.services.validation import Validator

if TYPE_CHECKING:
    from monitorsvc.infrastructure.mail import MailNotifier
    from monitorsvc.infrastructure.store import Store
    from monitorsvc.services.read import MonitorReadService


class MonitorWriteService(BaseService):
    """Write access to monitor records."""

    def __init__(
        self,
        store: Store,
        reader: MonitorReadService,
        *,
        validator: Validator | None = None,
        repository: MonitorRepository | None = None,
        notifier: MailNotifier | None = None,
        logger: Any | None = None,
    ) -> None:
        super().__init__(store, logger=logger)
        self._reader = reader
        self._validator = validator or Validator()
        self._repo = repository or MonitorRepository()
        self._notifier = notifier

    # ── create ────────────────────────────────────────────────────────

    @traced
    async def create(self, record: Monitor | Mapping[str, Any]) -> ServiceResult[CreateError]:
        """Create a new monitor. Returns ``data={"id": ...}`` on success.

        *record* may also be the raw JSON-shaped body; it is validated
        before being turned into a :class:`Monitor`.
        """
        op = "create_monitor"
        warnings: list[str] = []
        log = self._log.bind(op=op)

        # ── VALIDATE ──
        messages = self._validator.validate(record)
        if messages:
            log.debug("create.invalid", messages=messages)
            return ServiceResult(
                ok=False, op=op, error=ConstraintViolations(messages=messages)
            )
        record = _as_record(record)
        log = log.bind(name=record.name)

        # ── CHECK NAME / MANUFACTURER ──
        with trace_span("check_unique"):
            if await self._name_taken(record.name):
                return ServiceResult(ok=False, op=op, error=NameExists(name=record.name))
            if await self._manufacturer_taken(record.manufacturer):
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ManufacturerExists(manufacturer=record.manufacturer),
                )

        # ── PERSIST ──
        now = datetime.now(UTC)
        new_record = record.model_copy(
            update={
                "id": generate_id(),
                "version": 0,
                "created": now,
                "modified": now,
                "tags": [
                    t.model_copy(update={"id": generate_id(), "monitor_id": None})
                    for t in record.tags
                ],
            }
        )
        with trace_span("persist"):
            async with self._store.transaction() as conn:
                await self._repo.insert(conn, new_record)
        log.info("create.done", monitor_id=new_record.id)

        # ── NOTIFY ──
        if self._notifier is not None:
            await self._notify(
                "create_monitor", self._notifier.notify_created(new_record), warnings
            )

        return ServiceResult(ok=True, op=op, data={"id": new_record.id}, warnings=warnings)

    async def _name_taken(self, name: str | None, *, exclude_id: str | None = None) -> bool:
        # The name criterion is a substring match; uniqueness needs equality.
        matches = await self._reader.find({"name": name})
        return any(m.name == name and m.id != exclude_id for m in matches)

    async def _manufacturer_taken(self, manufacturer: str | None) -> bool:
        matches = await self._reader.find({"manufacturer": manufacturer})
        return any(m.manufacturer == manufacturer for m in matches)

    # ── update ────────────────────────────────────────────────────────

    @traced
    async def update(
        self,
        monitor_id: str | None,
        record: Monitor | Mapping[str, Any],
        version_token: str | None,
    ) -> ServiceResult[UpdateError]:
        """Update an existing monitor guarded by *version_token* (``"<n>"``).

        Only the fields present in *record* replace stored values; the
        rest of the stored record is kept.

        Returns ``data={"id": ..., "version": <new version>}`` on success.
        """
        op = "update_monitor"
        log = self._log.bind(op=op, monitor_id=monitor_id, version=version_token)

        if monitor_id is None or not self._validator.validate_id(monitor_id):
            log.debug("update.invalid_id")
            return ServiceResult(ok=False, op=op, error=MonitorNotExists(id=monitor_id))

        version = parse_version_token(version_token)
        if version is None:
            log.debug("update.invalid_version")
            return ServiceResult(ok=False, op=op, error=VersionInvalid(version=version_token))

        messages = self._validator.validate(record)
        if messages:
            log.debug("update.invalid", messages=messages)
            return ServiceResult(
                ok=False, op=op, error=ConstraintViolations(messages=messages)
            )
        record = _as_record(record)

        if await self._name_taken(record.name, exclude_id=monitor_id):
            return ServiceResult(ok=False, op=op, error=NameExists(name=record.name))

        async with self._store.transaction() as conn:
            current = await self._repo.get(conn, monitor_id)
            if current is None:
                log.debug("update.not_found")
                return ServiceResult(ok=False, op=op, error=MonitorNotExists(id=monitor_id))

            assert current.version is not None
            if version < current.version:
                log.debug("update.outdated", stored=current.version)
                return ServiceResult(
                    ok=False, op=op, error=VersionOutdated(id=monitor_id, version=version)
                )

            merged = current.merged_with(record)
            new_version = await self._repo.update(
                conn, merged, expected_version=version, modified=datetime.now(UTC)
            )
            if new_version is None:
                log.info("update.lost_race")
                return ServiceResult(
                    ok=False, op=op, error=VersionOutdated(id=monitor_id, version=version)
                )

        log.info("update.done", new_version=new_version)
        return ServiceResult(ok=True, op=op, data={"id": monitor_id, "version": new_version})

    # ── delete ────────────────────────────────────────────────────────

    async def delete(self, monitor_id: str | None) -> bool:
        """Delete a record and its tags. False for a malformed or unknown id."""
        log = self._log.bind(op="delete_monitor", monitor_id=monitor_id)
        if monitor_id is None or not self._validator.validate_id(monitor_id):
            log.debug("delete.invalid_id")
            return False

        async with self._store.transaction() as conn:
            deleted = await self._repo.delete(conn, monitor_id)
        log.info("delete.done", deleted=deleted)
        return deleted


def _as_record(record: Monitor | Mapping[str, Any]) -> Monitor:
    return record if isinstance(record, Monitor) else Monitor.model_validate(record)
