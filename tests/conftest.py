"""Shared fixtures: a scripted command runner and an isolated AppContext.

The fake runner maps exact command lines to canned outcomes so action and
snapshot tests never touch real hardware tools. Unknown commands fail the way
a missing executable does under ``sh`` (exit 127).
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from hwkiosk.core.context import AppContext
from hwkiosk.core.contracts.probe import CommandOutcome, ProbeStatus
from hwkiosk.core.contracts.snapshot import CpuInfo, HostFacts, Snapshot
from hwkiosk.core.settings import Settings, load_settings


def ok_outcome(command: str, stdout: str, stderr: str = "") -> CommandOutcome:
    status = ProbeStatus.WARNING if stderr else ProbeStatus.OK
    return CommandOutcome(
        command=command, status=status, stdout=stdout, error=stderr or None, exit_code=0
    )


def failed_outcome(command: str, message: str = "not found", code: int = 127) -> CommandOutcome:
    return CommandOutcome(
        command=command,
        status=ProbeStatus.FAILED,
        error=f"Command failed (exit {code}): {command}\n{message}",
        exit_code=code,
    )


class FakeRunner:
    """Scripted :class:`CommandRunner` that records every command it is given."""

    def __init__(self, responses: dict[str, CommandOutcome | Exception] | None = None) -> None:
        self.responses: dict[str, CommandOutcome | Exception] = dict(responses or {})
        self.calls: list[str] = []

    def ok(self, command: str, stdout: str, stderr: str = "") -> None:
        self.responses[command] = ok_outcome(command, stdout, stderr)

    def fail(self, command: str, message: str = "not found", code: int = 1) -> None:
        self.responses[command] = failed_outcome(command, message, code)

    def raise_on(self, command: str, exc: Exception) -> None:
        self.responses[command] = exc

    def run(self, command: str) -> CommandOutcome:
        self.calls.append(command)
        response = self.responses.get(command)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return failed_outcome(command, f"sh: 1: {command.split()[0]}: not found")
        return response


def make_host_facts(cores: int = 4) -> HostFacts:
    return HostFacts(
        platform="linux",
        arch="x86_64",
        release="6.1.0",
        hostname="kiosk-test",
        uptime=120.0,
        total_memory=8 * 1024**3,
        free_memory=6 * 1024**3,
        cpus=[CpuInfo(model="Test CPU", speed_mhz=2400.0) for _ in range(cores)],
        network_interfaces={},
        load_average=(0.1, 0.2, 0.3),
    )


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _fresh_settings() -> Generator[None, None, None]:
    """Rebuild settings after each test so env tweaks never leak."""
    yield
    load_settings.cache_clear()
    AppContext.set_instance(None)


@pytest.fixture  # type: ignore[misc]
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture  # type: ignore[misc]
def kiosk_settings(tmp_path: Path) -> Settings:
    """Settings pointing export and mirror roots into the test's tmp dir."""
    return Settings(
        HWKIOSK_ENV="test",
        HWKIOSK_EXPORT_DIR=tmp_path / "export",
        HWKIOSK_MIRROR_ROOTS=[tmp_path / "media", tmp_path / "mnt"],
    )


@pytest.fixture  # type: ignore[misc]
def exit_calls() -> list[str]:
    return []


@pytest.fixture  # type: ignore[misc]
def context(runner: FakeRunner, kiosk_settings: Settings, exit_calls: list[str]) -> AppContext:
    """AppContext with a fake runner and a pre-installed 4-core snapshot."""
    ctx = AppContext(
        settings=kiosk_settings,
        runner=runner,
        exit_hook=lambda: exit_calls.append("exit"),
    )
    ctx.replace_snapshot(Snapshot(host=make_host_facts(cores=4)))
    return ctx
