"""Tests for the root CLI group and its commands."""

from __future__ import annotations

import json
import re
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from monitorsvc import __version__
from monitorsvc.cli import cli
from monitorsvc.services.telemetry import disable_telemetry
from tests.conftest import ALPHA_ID


@pytest.fixture(autouse=True)
def _telemetry_off() -> Generator[None]:
    yield
    disable_telemetry()


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A config file pointing at a database next to it."""
    monkeypatch.delenv("MONITORSVC_CONFIG", raising=False)
    path = tmp_path / "monitorsvc.toml"
    path.write_text('[database]\nurl = "sqlite+aiosqlite:///cli.db"\n', encoding="utf-8")
    return path


class TestRootGroup:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("serve", "upgrade", "populate"):
            assert command in result.output

    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_command_shows_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, [])
        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["populate", "--examples"])
        assert result.exit_code == 0
        assert "monitorsvc populate --yes" in result.output


class TestPopulate:
    def test_populate_yes(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-c", str(config_file), "populate", "--yes"])
        assert result.exit_code == 0, result.output
        assert "populate" in result.output
        assert ALPHA_ID in result.output
        assert (config_file.parent / "cli.db").is_file()

    def test_populate_aborts_without_confirmation(
        self, cli_runner: CliRunner, config_file: Path
    ) -> None:
        result = cli_runner.invoke(cli, ["-c", str(config_file), "populate"], input="n\n")
        assert result.exit_code == 1
        assert not (config_file.parent / "cli.db").exists()

    def test_populate_json(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "-c", str(config_file), "populate", "--yes"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["ok"] is True
        assert data["data"]["count"] == 6


class TestUpgrade:
    def test_check_json(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(
            cli, ["--json", "-c", str(config_file), "upgrade", "--check"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["op"] == "upgrade"
        assert data["data"]["current"] is None
        assert data["data"]["pending_count"] == 1

    def test_apply_then_check(self, cli_runner: CliRunner, config_file: Path) -> None:
        applied = cli_runner.invoke(cli, ["-c", str(config_file), "upgrade"])
        assert applied.exit_code == 0, applied.output
        checked = cli_runner.invoke(cli, ["-c", str(config_file), "upgrade", "--check"])
        assert re.search(r"pending_count:\s+0\b", checked.output)

    def test_verbose_shows_telemetry(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-v", "-c", str(config_file), "upgrade", "--check"])
        assert result.exit_code == 0, result.output
        assert "UpgradeService.check_pending" in result.output

    def test_failure_exits_nonzero(self, cli_runner: CliRunner, config_file: Path) -> None:
        with patch(
            "monitorsvc.services.upgrade.command.upgrade", side_effect=RuntimeError("boom")
        ):
            result = cli_runner.invoke(cli, ["-c", str(config_file), "upgrade"])
        assert result.exit_code == 1
        assert "Migration failed: boom" in result.output


class TestServe:
    def test_uses_configured_address(self, cli_runner: CliRunner, config_file: Path) -> None:
        with patch("uvicorn.run") as run:
            result = cli_runner.invoke(cli, ["-c", str(config_file), "serve", "--port", "8081"])
        assert result.exit_code == 0, result.output
        kwargs = run.call_args.kwargs
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["port"] == 8081


class TestDatabaseOverride:
    def test_db_flag_beats_config(
        self, cli_runner: CliRunner, config_file: Path, tmp_path: Path
    ) -> None:
        other = tmp_path / "other.db"
        result = cli_runner.invoke(
            cli,
            ["-c", str(config_file), "--db", f"sqlite+aiosqlite:///{other}", "populate", "--yes"],
        )
        assert result.exit_code == 0, result.output
        assert other.is_file()
        assert not (config_file.parent / "cli.db").exists()


class TestConfigErrors:
    def test_malformed_toml_is_a_clean_error(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("MONITORSVC_CONFIG", raising=False)
        path = tmp_path / "monitorsvc.toml"
        path.write_text("[database\nurl = 1\n", encoding="utf-8")
        result = cli_runner.invoke(cli, ["-c", str(path), "upgrade", "--check"])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_invalid_setting_is_a_clean_error(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("MONITORSVC_CONFIG", raising=False)
        path = tmp_path / "monitorsvc.toml"
        path.write_text('[auth]\nalgorithm = "RS256"\n', encoding="utf-8")
        result = cli_runner.invoke(cli, ["-c", str(path), "upgrade", "--check"])
        assert result.exit_code == 1
        assert "algorithm" in result.output
