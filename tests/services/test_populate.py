"""Tests for PopulateService and the development records."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

from monitorsvc.infrastructure.repositories import MonitorRepository
from monitorsvc.infrastructure.store import Store
from monitorsvc.services.populate import DEV_MONITORS, PopulateService
from monitorsvc.services.read import MonitorReadService
from monitorsvc.services.validation import Validator
from tests.conftest import ALPHA_ID, PHI_ID, make_monitor


class TestDevMonitors:
    def test_records_are_valid(self) -> None:
        validator = Validator()
        for record in DEV_MONITORS:
            assert validator.validate(record) is None, record.name

    def test_names_unique(self) -> None:
        names = [m.name for m in DEV_MONITORS]
        assert len(names) == len(set(names))


class TestPopulate:
    async def test_loads_all_records(self, store: Store) -> None:
        result = await PopulateService(store).populate()
        assert result.ok
        assert result.op == "populate"
        assert result.data["count"] == 6
        assert result.data["ids"][0] == ALPHA_ID
        assert result.data["ids"][-1] == PHI_ID
        assert len(await MonitorReadService(store).find()) == 6

    async def test_success_logged_at_info(self, store: Store) -> None:
        logger = MagicMock()
        assert (await PopulateService(store, logger=logger).populate()).ok
        logger.info.assert_called_once_with("populate.done", count=6)
        logger.warning.assert_not_called()

    async def test_replaces_existing_rows(self, seeded_store: Store) -> None:
        extra = make_monitor(id="11111111-2222-3333-4444-555555555555", version=0)
        async with seeded_store.transaction() as conn:
            await MonitorRepository().insert(conn, extra)
        assert len(await MonitorReadService(seeded_store).find()) == 7

        assert (await PopulateService(seeded_store).populate()).ok
        assert len(await MonitorReadService(seeded_store).find()) == 6

    async def test_reset_failure(self, store: Store) -> None:
        with patch.object(store, "reset", AsyncMock(side_effect=RuntimeError("locked"))):
            result = await PopulateService(store).populate()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "POPULATE_FAILED"
