"""Shared pytest fixtures and test helpers for monitorsvc tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from fastapi.testclient import TestClient

from monitorsvc.api.app import create_app
from monitorsvc.api.security import create_access_token
from monitorsvc.config.models import DatabaseConfig
from monitorsvc.config.settings import MonitorSettings
from monitorsvc.domain.monitor import Monitor, Tag
from monitorsvc.infrastructure.store import Store
from monitorsvc.services.populate import PopulateService
from monitorsvc.services.read import MonitorReadService
from monitorsvc.services.write import MonitorWriteService

# Fixed ids of the development records.
ALPHA_ID = "00000000-0000-0000-0000-000000000001"
BETA_ID = "00000000-0000-0000-0000-000000000002"
GAMMA_ID = "00000000-0000-0000-0000-000000000003"
DELTA_ID = "00000000-0000-0000-0000-000000000040"
EPSILON_ID = "00000000-0000-0000-0000-000000000500"
PHI_ID = "00000000-0000-0000-0000-000000000600"
MISSING_ID = "99999999-9999-9999-9999-999999999999"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> MonitorSettings:
    """Settings bound to a SQLite file in a temp directory."""
    monkeypatch.delenv("MONITORSVC_CONFIG", raising=False)
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'monitors.db'}"
    return MonitorSettings.from_cli(root=tmp_path, database=DatabaseConfig(url=db_url))


@pytest.fixture
async def store(settings: MonitorSettings) -> AsyncIterator[Store]:
    """Store with all tables created and no rows."""
    s = Store.from_settings(settings)
    await s.init()
    try:
        yield s
    finally:
        await s.dispose()


@pytest.fixture
async def seeded_store(store: Store) -> Store:
    """Store loaded with the six development records."""
    result = await PopulateService(store).populate()
    assert result.ok, result.error
    return store


@pytest.fixture
def reader(seeded_store: Store) -> MonitorReadService:
    return MonitorReadService(seeded_store)


@pytest.fixture
def writer(seeded_store: Store, reader: MonitorReadService) -> MonitorWriteService:
    return MonitorWriteService(seeded_store, reader)


@pytest.fixture
def client(settings: MonitorSettings) -> Iterator[TestClient]:
    """REST client against a freshly populated database."""
    populated = settings.model_copy(
        update={"database": settings.database.model_copy(update={"populate": True})}
    )
    with TestClient(create_app(populated)) as c:
        yield c


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_monitor(**overrides: Any) -> Monitor:
    """A valid record that collides with none of the development records."""
    fields: dict[str, Any] = {
        "name": "Omega",
        "manufacturer": "Hopper",
        "price": 249.5,
        "stock": 3,
        "curved": False,
        "refresh_rate": "Hz120",
        "release": "2023-05-17",
        "tags": [Tag(label="slim")],
    }
    fields.update(overrides)
    return Monitor(**fields)


def auth_header(settings: MonitorSettings, *roles: str, subject: str = "tester") -> dict[str, str]:
    """Authorization header carrying a freshly signed token."""
    token = create_access_token(subject, roles, settings.auth)
    return {"Authorization": f"Bearer {token}"}
