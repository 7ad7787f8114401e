"""PopulateService: reset the database and load the development records.

Used by ``monitorsvc populate`` and, with ``[database] populate = true``,
at application start-up. The records have fixed ids so that local
requests and tests can address them directly.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any

from monitorsvc.domain.monitor import Monitor, Tag
from monitorsvc.infrastructure.repositories import MonitorRepository
from monitorsvc.services.base import BaseService
from monitorsvc.services.errors import OperationFailed
from monitorsvc.services.result import ServiceResult
from monitorsvc.services.telemetry import traced

if TYPE_CHECKING:
    from monitorsvc.infrastructure.store import Store


def _dev_monitor(
    suffix: str,
    name: str,
    manufacturer: str,
    price: float,
    stock: int,
    curved: bool,
    refresh_rate: str,
    day: int,
    tags: list[tuple[str, str]],
) -> Monitor:
    monitor_id = f"00000000-0000-0000-0000-{suffix:0>12}"
    stamp = datetime(2022, 2, day, tzinfo=UTC)
    return Monitor(
        id=monitor_id,
        version=0,
        name=name,
        manufacturer=manufacturer,
        price=price,
        stock=stock,
        curved=curved,
        refresh_rate=refresh_rate,
        release=date(2022, 2, day),
        tags=[Tag(id=tag_id, label=label, monitor_id=monitor_id) for tag_id, label in tags],
        created=stamp,
        modified=stamp,
    )


# Reading: 1-3, updating: 40, deleting: 500 and 600.
DEV_MONITORS: tuple[Monitor, ...] = (
    _dev_monitor(
        "1", "Alpha", "Torvalds", 499.99, 12, False, "Hz60", 1,
        [("00000000-0000-0000-0000-010000000001", "highres")],
    ),
    _dev_monitor(
        "2", "Beta", "Gosloing", 1999.99, 24, True, "Hz144", 2,
        [("00000000-0000-0000-0000-020000000001", "slim")],
    ),
    _dev_monitor(
        "3", "Gamma", "Turing", 99.79, 48, True, "Hz144", 3,
        [
            ("00000000-0000-0000-0000-030000000001", "highres"),
            ("00000000-0000-0000-0000-030000000002", "slim"),
        ],
    ),
    _dev_monitor("40", "Delta", "Neumann", 100, 96, True, "Hz240", 4, []),
    _dev_monitor(
        "500", "Epsilon", "Stallman", 100, 192, True, "Hz60", 5,
        [("00000000-0000-0000-0000-500000000001", "slim")],
    ),
    _dev_monitor(
        "600", "Phi", "Turing", 2.99, 384, False, "Hz120", 6,
        [("00000000-0000-0000-0000-600000000001", "slim")],
    ),
)  # fmt: skip


class PopulateService(BaseService):
    """Drops, recreates and seeds the monitor tables."""

    def __init__(
        self,
        store: Store,
        *,
        repository: MonitorRepository | None = None,
        logger: Any | None = None,
    ) -> None:
        super().__init__(store, logger=logger)
        self._repo = repository or MonitorRepository()

    @traced
    async def populate(self) -> ServiceResult[OperationFailed]:
        """RESET → INSERT pipeline."""
        op = "populate"
        try:
            await self._store.reset()
            async with self._store.transaction() as conn:
                for record in DEV_MONITORS:
                    await self._repo.insert(conn, record)
        except Exception as exc:
            self._log.warning("populate.failed", exc_info=True)
            return ServiceResult(
                ok=False,
                op=op,
                error=OperationFailed(code="POPULATE_FAILED", detail=f"Populate failed: {exc}"),
            )

        self._log.info("populate.done", count=len(DEV_MONITORS))
        return ServiceResult(
            ok=True,
            op=op,
            data={"count": len(DEV_MONITORS), "ids": [m.id for m in DEV_MONITORS]},
        )
