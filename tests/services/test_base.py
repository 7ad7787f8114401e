"""Tests for BaseService notification handling."""

from __future__ import annotations

from unittest.mock import MagicMock

from monitorsvc.infrastructure.store import Store
from monitorsvc.services.base import BaseService


async def _ok() -> None:
    return None


async def _fail() -> None:
    raise ConnectionRefusedError("smtp down")


class TestNotify:
    async def test_success_adds_no_warning(self, store: Store) -> None:
        warnings: list[str] = []
        await BaseService(store)._notify("create_monitor", _ok(), warnings)
        assert warnings == []

    async def test_failure_becomes_warning(self, store: Store) -> None:
        logger = MagicMock()
        warnings: list[str] = []
        await BaseService(store, logger=logger)._notify("create_monitor", _fail(), warnings)
        assert warnings == ["Notification failed for create_monitor"]
        logger.warning.assert_called_once()
        assert logger.warning.call_args.kwargs["notify_event"] == "create_monitor"
