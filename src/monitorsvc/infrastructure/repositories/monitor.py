"""MonitorRepository: data mapper between table rows and record models.

All methods take an open :class:`AsyncConnection` so the caller decides
the transaction scope (``Store.transaction()`` for writes,
``Store.connect()`` for reads).
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from monitorsvc.domain.monitor import MUTABLE_FIELDS, Monitor, Tag
from monitorsvc.infrastructure.database.schema import monitor, tag

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from sqlalchemy import Select
    from sqlalchemy.engine import RowMapping
    from sqlalchemy.ext.asyncio import AsyncConnection


def _row_to_monitor(row: RowMapping, tags: list[Tag]) -> Monitor:
    return Monitor(
        id=row["id"],
        version=row["version"],
        name=row["name"],
        manufacturer=row["manufacturer"],
        price=row["price"],
        stock=row["stock"],
        curved=row["curved"],
        refresh_rate=row["refresh_rate"],
        release=row["release"],
        tags=tags,
        created=row["created"],
        modified=row["modified"],
    )


def _column_values(record: Monitor) -> dict[str, Any]:
    values = {key: getattr(record, key) for key in MUTABLE_FIELDS}
    if isinstance(values["release"], str):
        values["release"] = date.fromisoformat(values["release"])
    return values


class MonitorRepository:
    """Row <-> model mapping for the ``monitor`` and ``tag`` tables."""

    async def fetch(self, conn: AsyncConnection, stmt: Select[Any]) -> list[Monitor]:
        """Run a monitor SELECT and attach each record's tags."""
        rows = (await conn.execute(stmt)).mappings().all()
        tags_by_monitor = await self.load_tags(conn, [row["id"] for row in rows])
        return [_row_to_monitor(row, tags_by_monitor.get(row["id"], [])) for row in rows]

    async def get(self, conn: AsyncConnection, monitor_id: str) -> Monitor | None:
        """Load one record by id, or None."""
        records = await self.fetch(conn, select(monitor).where(monitor.c.id == monitor_id))
        return records[0] if records else None

    async def load_tags(
        self, conn: AsyncConnection, monitor_ids: Sequence[str]
    ) -> dict[str, list[Tag]]:
        """Tags for *monitor_ids*, grouped by owner in insertion order."""
        if not monitor_ids:
            return {}
        rows = (
            await conn.execute(
                select(tag.c.id, tag.c.monitor_id, tag.c.label)
                .where(tag.c.monitor_id.in_(monitor_ids))
                .order_by(tag.c.monitor_id, tag.c.position)
            )
        ).all()
        grouped: dict[str, list[Tag]] = defaultdict(list)
        for row in rows:
            grouped[row.monitor_id].append(
                Tag(id=row.id, label=row.label, monitor_id=row.monitor_id)
            )
        return grouped

    async def insert(self, conn: AsyncConnection, record: Monitor) -> None:
        """Insert *record* and its tags. Ids and timestamps must be set."""
        values = _column_values(record)
        if values["stock"] is None:
            values["stock"] = 0
        await conn.execute(
            insert(monitor).values(
                id=record.id,
                version=record.version or 0,
                created=record.created,
                modified=record.modified,
                **values,
            )
        )
        await self._insert_tags(conn, record.id, record.tags)

    async def _insert_tags(
        self, conn: AsyncConnection, monitor_id: str | None, tags: Iterable[Tag]
    ) -> None:
        rows = [
            {"id": t.id, "monitor_id": monitor_id, "label": t.label, "position": i}
            for i, t in enumerate(tags)
        ]
        if rows:
            await conn.execute(insert(tag), rows)

    async def update(
        self,
        conn: AsyncConnection,
        record: Monitor,
        *,
        expected_version: int,
        modified: datetime,
    ) -> int | None:
        """Write the mutable fields of *record* and bump its version.

        The row is only touched while its stored version is at most
        *expected_version*. Returns the new version, or None when no row
        qualified (missing record or a newer concurrent write).
        """
        values = _column_values(record)
        result = await conn.execute(
            update(monitor)
            .where(monitor.c.id == record.id, monitor.c.version <= expected_version)
            .values(version=monitor.c.version + 1, modified=modified, **values)
        )
        if result.rowcount == 0:
            return None
        new_version = await conn.scalar(
            select(monitor.c.version).where(monitor.c.id == record.id)
        )
        return int(new_version) if new_version is not None else None

    async def delete(self, conn: AsyncConnection, monitor_id: str) -> bool:
        """Delete the record's tags, then the record. True if a record went."""
        await conn.execute(delete(tag).where(tag.c.monitor_id == monitor_id))
        result = await conn.execute(delete(monitor).where(monitor.c.id == monitor_id))
        return result.rowcount > 0
