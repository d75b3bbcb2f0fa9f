"""Process Runner: execute one command line and classify the outcome.

Classification
--------------
- exit 0, empty stderr       -> ``OK``
- exit 0, non-empty stderr   -> ``WARNING`` (stdout kept, stderr in ``error``)
- non-zero exit              -> ``FAILED`` (no stdout)
- spawn failure (``OSError``) -> ``FAILED`` (no stdout)

Commands run through the system shell so probes can use globs such as
``/proc/acpi/thermal_zone/*/temperature``. Callers are trusted; the kiosk runs
as root on its own boot image. No timeout is applied: long actions carry their
duration inside the command line (``stress --timeout 30s``).
"""

from __future__ import annotations

import subprocess
from typing import Protocol

from hwkiosk.core.contracts.probe import CommandOutcome, ProbeStatus
from hwkiosk.core.settings import get_logger

log = get_logger(__name__)


class CommandRunner(Protocol):
    """Anything that can turn a command line into a :class:`CommandOutcome`."""

    def run(self, command: str) -> CommandOutcome: ...


def _failure_message(command: str, code: int, stderr: str) -> str:
    msg = f"Command failed (exit {code}): {command}"
    detail = stderr.strip()
    return f"{msg}\n{detail}" if detail else msg


class ProcessRunner:
    """Default :class:`CommandRunner` backed by :func:`subprocess.run`."""

    def __init__(self, shell: str | None = None) -> None:
        self.shell = shell

    def run(self, command: str) -> CommandOutcome:
        log.debug("RUN: %s", command)
        try:
            proc = subprocess.run(
                command,
                shell=True,
                executable=self.shell,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            log.warning("Could not spawn %r: %s", command, exc)
            return CommandOutcome(
                command=command,
                status=ProbeStatus.FAILED,
                error=f"Failed to start command: {exc}",
            )

        if proc.returncode != 0:
            message = _failure_message(command, proc.returncode, proc.stderr or "")
            log.warning("%s", message.splitlines()[0])
            return CommandOutcome(
                command=command,
                status=ProbeStatus.FAILED,
                error=message,
                exit_code=proc.returncode,
            )

        stderr = (proc.stderr or "").strip()
        if stderr:
            log.warning("Warning from %r: %s", command, stderr)
            return CommandOutcome(
                command=command,
                status=ProbeStatus.WARNING,
                stdout=proc.stdout,
                error=stderr,
                exit_code=0,
            )
        return CommandOutcome(
            command=command,
            status=ProbeStatus.OK,
            stdout=proc.stdout,
            exit_code=0,
        )


__all__ = ["CommandRunner", "ProcessRunner"]
