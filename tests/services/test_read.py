"""Tests for MonitorReadService lookups and criteria search."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from monitorsvc.services.read import MonitorReadService
from tests.conftest import (
    ALPHA_ID,
    BETA_ID,
    DELTA_ID,
    EPSILON_ID,
    GAMMA_ID,
    MISSING_ID,
    PHI_ID,
)

ALL_IDS = [ALPHA_ID, BETA_ID, GAMMA_ID, DELTA_ID, EPSILON_ID, PHI_ID]


class TestFindById:
    async def test_existing(self, reader: MonitorReadService) -> None:
        record = await reader.find_by_id(ALPHA_ID)
        assert record is not None
        assert record.name == "Alpha"
        assert record.version == 0
        assert record.tag_labels == ["highres"]

    async def test_unknown(self, reader: MonitorReadService) -> None:
        assert await reader.find_by_id(MISSING_ID) is None

    @pytest.mark.parametrize("bad_id", [None, "", "1", "not-a-uuid"])
    async def test_malformed_never_queries(self, bad_id: str | None) -> None:
        store = MagicMock()
        reader = MonitorReadService(store)
        assert await reader.find_by_id(bad_id) is None
        store.connect.assert_not_called()


class TestFind:
    async def test_no_criteria_returns_all(self, reader: MonitorReadService) -> None:
        assert [m.id for m in await reader.find()] == ALL_IDS
        assert [m.id for m in await reader.find({})] == ALL_IDS

    async def test_unknown_key_returns_empty(self, reader: MonitorReadService) -> None:
        assert await reader.find({"colour": "black"}) == []

    async def test_bad_value_returns_empty(self, reader: MonitorReadService) -> None:
        assert await reader.find({"stock": "many"}) == []

    async def test_name_substring_case_insensitive(self, reader: MonitorReadService) -> None:
        assert [m.name for m in await reader.find({"name": "ALP"})] == ["Alpha"]

    async def test_manufacturer_exact(self, reader: MonitorReadService) -> None:
        found = await reader.find({"manufacturer": "Turing"})
        assert [m.id for m in found] == [GAMMA_ID, PHI_ID]

    async def test_coerced_column_values(self, reader: MonitorReadService) -> None:
        assert [m.id for m in await reader.find({"curved": "false"})] == [ALPHA_ID, PHI_ID]
        assert [m.id for m in await reader.find({"stock": "96"})] == [DELTA_ID]
        assert [m.id for m in await reader.find({"release": "2022-02-02"})] == [BETA_ID]

    async def test_highres_flag(self, reader: MonitorReadService) -> None:
        assert [m.id for m in await reader.find({"highres": "true"})] == [ALPHA_ID, GAMMA_ID]

    async def test_combined_flags(self, reader: MonitorReadService) -> None:
        found = await reader.find({"highres": "true", "slim": "true"})
        assert [m.id for m in found] == [GAMMA_ID]

    async def test_flag_keeps_all_tags(self, reader: MonitorReadService) -> None:
        (gamma,) = await reader.find({"slim": "true", "name": "Gamma"})
        assert gamma.tag_labels == ["highres", "slim"]

    async def test_no_match(self, reader: MonitorReadService) -> None:
        assert await reader.find({"refresh_rate": "Hz75"}) == []
