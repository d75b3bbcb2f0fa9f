# tests/test_cli.py
"""
Tests for the hwkiosk command-line interface (CLI).

Scope
-----
These tests verify the interaction layer provided by Typer:
1.  **Command Registration**: `--help` lists every command.
2.  **Rendering**: `info` and `probes` render without touching real tools.
3.  **Actions**: `run` maps options onto dispatcher parameters and exit codes.
4.  **Export**: `export` writes into the configured directory.

We use `typer.testing.CliRunner` and patch `hwkiosk.cli._service` so the
commands operate on a context backed by the scripted `FakeRunner`.
"""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from conftest import FakeRunner
from hwkiosk.cli import app
from hwkiosk.core.context import AppContext
from hwkiosk.core.settings import Settings
from hwkiosk.service import KioskService


@pytest.fixture  # type: ignore[misc]
def cli() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)  # type: ignore[misc]
def fake_service(context: AppContext) -> Generator[KioskService, None, None]:
    service = KioskService(context)
    with patch("hwkiosk.cli._service", return_value=service):
        yield service


def test_help_lists_commands(cli: CliRunner) -> None:
    result = cli.invoke(app, ["--help"])
    assert result.exit_code == 0, result.output
    for command in ("info", "probes", "run", "export", "serve"):
        assert command in result.output


def test_info_json_dumps_snapshot(cli: CliRunner) -> None:
    result = cli.invoke(app, ["info", "--json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["host"]["hostname"] == "kiosk-test"


def test_info_renders_tables(cli: CliRunner, context: AppContext, runner: FakeRunner) -> None:
    runner.ok("lsusb", "Bus 001 Device 001: hub\n")
    context.refresh()
    result = cli.invoke(app, ["info"])
    assert result.exit_code == 0, result.output
    assert "usbDevices" in result.output
    assert "1 entries" in result.output


def test_probes_lists_catalogue(cli: CliRunner) -> None:
    result = cli.invoke(app, ["probes"])
    assert result.exit_code == 0
    assert "smartAttributes" in result.output
    assert "lsusb" in result.output


def test_run_memory_passes_size(cli: CliRunner, runner: FakeRunner) -> None:
    runner.ok("memtester 8M 1", "Done.\n")
    result = cli.invoke(app, ["run", "memory", "--size", "8M"])
    assert result.exit_code == 0, result.output
    assert runner.calls[-1] == "memtester 8M 1"
    assert "memory complete" in result.output


def test_run_failure_exits_1(cli: CliRunner) -> None:
    result = cli.invoke(app, ["run", "network"])
    assert result.exit_code == 1
    assert "network failed" in result.output


def test_run_unknown_action(cli: CliRunner) -> None:
    result = cli.invoke(app, ["run", "defrag"])
    assert result.exit_code == 2
    assert "Unknown action" in result.output


def test_reboot_requires_confirmation(cli: CliRunner, runner: FakeRunner) -> None:
    result = cli.invoke(app, ["run", "reboot"], input="n\n")
    assert result.exit_code == 1
    assert "reboot" not in runner.calls


def test_export_with_results_file(
    cli: CliRunner, tmp_path: Path, kiosk_settings: Settings
) -> None:
    results = tmp_path / "results.json"
    results.write_text(json.dumps({"cpu": "pass"}), encoding="utf-8")

    result = cli.invoke(app, ["export", "--results", str(results)])

    assert result.exit_code == 0, result.output
    files = list(kiosk_settings.export_dir.glob("hardware-test-results-*.json"))
    assert len(files) == 1
    assert json.loads(files[0].read_text(encoding="utf-8"))["testResults"] == {"cpu": "pass"}


def test_run_exit_returns_cleanly(cli: CliRunner, exit_calls: list[str]) -> None:
    """`run exit` reports and returns instead of signalling the CLI process."""
    result = cli.invoke(app, ["run", "exit"])
    assert result.exit_code == 0, result.output
    assert "exit complete" in result.output
    assert "returning to the console" in result.output
    assert exit_calls == []
