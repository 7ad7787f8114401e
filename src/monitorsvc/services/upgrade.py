"""UpgradeService: database migration with Alembic.

Pipeline: CHECK → MIGRATE (or STAMP) → REPORT

Alembic drives a synchronous connection, so its commands run on a worker
thread while the revision lookup goes through the async engine.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import inspect

from monitorsvc.infrastructure.database.migrations import build_config
from monitorsvc.services.base import BaseService
from monitorsvc.services.errors import OperationFailed
from monitorsvc.services.result import ServiceResult
from monitorsvc.services.telemetry import traced

if TYPE_CHECKING:
    from sqlalchemy import Connection


def _current_revision(conn: Connection) -> str | None:
    return MigrationContext.configure(conn).get_current_revision()


def _has_monitor_table(conn: Connection) -> bool:
    return "monitor" in inspect(conn).get_table_names()


class UpgradeService(BaseService):
    """Handles database schema migrations via Alembic."""

    def _db_url(self) -> str:
        return self._store.engine.url.render_as_string(hide_password=False)

    @traced
    async def check_pending(self) -> ServiceResult[OperationFailed]:
        """List pending migrations without applying."""
        op = "upgrade"

        try:
            cfg = build_config(self._db_url())
            script = ScriptDirectory.from_config(cfg)
            head = script.get_current_head()

            async with self._store.connect() as conn:
                current = await conn.run_sync(_current_revision)

            # Walk from head down to current
            pending: list[dict[str, Any]] = []
            if current != head and head is not None:
                rev_obj = script.get_revision(head)
                while rev_obj is not None and rev_obj.revision != current:
                    pending.append(
                        {"revision": rev_obj.revision, "description": rev_obj.doc or ""}
                    )
                    down = rev_obj.down_revision
                    if down is None:
                        break
                    rev_obj = script.get_revision(str(down))

            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "pending_count": len(pending),
                    "pending": pending,
                    "current": current,
                    "head": head,
                },
            )
        except Exception as exc:
            self._log.warning("upgrade.check_failed", exc_info=True)
            return ServiceResult(
                ok=False,
                op=op,
                error=OperationFailed(
                    code="CHECK_FAILED", detail=f"Failed to check migrations: {exc}"
                ),
            )

    @traced
    async def apply(self) -> ServiceResult[OperationFailed]:
        """CHECK → MIGRATE → REPORT pipeline."""
        op = "upgrade"

        check_result = await self.check_pending()
        if not check_result.ok:
            return check_result

        pending_count = check_result.data["pending_count"]
        if pending_count == 0:
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "applied_count": 0,
                    "current": check_result.data["head"],
                    "message": "Database is already up to date",
                },
            )

        warnings: list[str] = []
        try:
            cfg = build_config(self._db_url())
            async with self._store.connect() as conn:
                tables_exist = await conn.run_sync(_has_monitor_table)
            await self._store.dispose()
            if check_result.data["current"] is None and tables_exist:
                # Tables created by init_database without version tracking:
                # stamp at head instead of running CREATE TABLE migrations.
                await asyncio.to_thread(command.stamp, cfg, "head")
                warnings.append("Existing tables stamped at head without migrating")
            else:
                await asyncio.to_thread(command.upgrade, cfg, "head")
        except Exception as exc:
            self._log.warning("upgrade.migrate_failed", exc_info=True)
            return ServiceResult(
                ok=False,
                op=op,
                error=OperationFailed(code="MIGRATION_FAILED", detail=f"Migration failed: {exc}"),
            )

        self._log.info("upgrade.done", applied=pending_count)
        return ServiceResult(
            ok=True,
            op=op,
            data={"applied_count": pending_count, "current": check_result.data["head"]},
            warnings=warnings,
        )
