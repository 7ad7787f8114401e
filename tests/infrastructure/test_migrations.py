"""Tests for the programmatic Alembic configuration."""

from __future__ import annotations

from alembic.script import ScriptDirectory

from monitorsvc.infrastructure.database.migrations import SCRIPT_LOCATION, build_config


class TestBuildConfig:
    def test_points_at_bundled_scripts(self) -> None:
        cfg = build_config("sqlite+aiosqlite:///m.db")
        assert cfg.get_main_option("script_location") == str(SCRIPT_LOCATION)
        assert (SCRIPT_LOCATION / "env.py").is_file()

    def test_keeps_async_driver(self) -> None:
        cfg = build_config("sqlite+aiosqlite:///m.db")
        assert cfg.get_main_option("sqlalchemy.url") == "sqlite+aiosqlite:///m.db"

    def test_percent_in_password_survives_interpolation(self) -> None:
        url = "postgresql+asyncpg://user:p%40ss@db/monitors"
        assert build_config(url).get_main_option("sqlalchemy.url") == url

    def test_single_head(self) -> None:
        script = ScriptDirectory.from_config(build_config("sqlite+aiosqlite:///m.db"))
        assert script.get_heads() == ["001_baseline"]
