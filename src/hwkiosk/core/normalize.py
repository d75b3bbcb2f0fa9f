"""Shape-driven normalization of raw command output into a ProbeResult.

- ``RAW_TEXT``        -> stdout unchanged.
- ``LINE_LIST``       -> non-blank lines, order preserved.
- ``STRUCTURED_JSON`` -> parsed document; a parse failure or a bare ``null``
  downgrades the status to ``WARNING`` with no value. A malformed or missing
  tool never raises out of here.
"""

from __future__ import annotations

import json
from typing import Any

from hwkiosk.core.contracts.probe import (
    CommandOutcome,
    OutputShape,
    Probe,
    ProbeResult,
    ProbeStatus,
)


def split_lines(text: str) -> list[str]:
    """Split on line boundaries, dropping whitespace-only lines."""
    return [line for line in text.splitlines() if line.strip()]


def parse_json(text: str) -> Any:
    """Parse ``text`` as JSON; raises ``ValueError`` on malformed input."""
    return json.loads(text)


def normalize(probe: Probe, outcome: CommandOutcome) -> ProbeResult:
    """Convert a runner outcome into the shape ``probe`` declares."""
    if not outcome.succeeded or outcome.stdout is None:
        return ProbeResult(
            probe=probe,
            status=ProbeStatus.FAILED,
            error=outcome.error or "Command produced no output",
        )

    text = outcome.stdout
    if probe.shape is OutputShape.RAW_TEXT:
        value: Any = text
    elif probe.shape is OutputShape.LINE_LIST:
        value = split_lines(text)
    else:
        try:
            value = parse_json(text)
        except ValueError as exc:
            return ProbeResult(
                probe=probe,
                status=ProbeStatus.WARNING,
                error=f"Failed to parse {probe.name} output as JSON: {exc}",
            )
        if value is None:
            return ProbeResult(
                probe=probe,
                status=ProbeStatus.WARNING,
                error=f"{probe.name} output was JSON null",
            )

    return ProbeResult(probe=probe, status=outcome.status, value=value, error=outcome.error)


__all__ = ["normalize", "parse_json", "split_lines"]
