"""Probe contracts: what to run, what came back, and how it was normalized.

A :class:`Probe` pairs a capability name with a shell command line and a
declared :class:`OutputShape`. The shape is a tagged variant: normalization in
:mod:`hwkiosk.core.normalize` switches on it explicitly instead of guessing
from the parsed value.

Lifecycle
---------
- ``Probe`` is frozen and defined once in the registry.
- ``CommandOutcome`` is the raw Process Runner result (stdout text or error).
- ``ProbeResult`` is the normalized value stored in a snapshot or consumed by
  an action; ``value`` is ``None`` whenever status is ``FAILED`` or a
  structured parse failed.
"""

from __future__ import annotations

import string
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OutputShape(str, Enum):
    """Declared shape of a probe's standard output."""

    RAW_TEXT = "raw_text"
    LINE_LIST = "line_list"
    STRUCTURED_JSON = "structured_json"


class ProbeStatus(str, Enum):
    """Outcome classification shared by commands and normalized results."""

    OK = "ok"
    WARNING = "warning"
    FAILED = "failed"


class Probe(BaseModel):
    """A named external command plus its expected output shape."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Capability key, e.g. 'usbDevices'.")
    command: str = Field(min_length=1, description="Command line, may hold {placeholders}.")
    shape: OutputShape = Field(default=OutputShape.RAW_TEXT)
    description: str = Field(default="", description="Human-readable capability label.")

    @field_validator("command")
    @classmethod
    def _strip_command(cls, v: str) -> str:
        return v.strip()

    @property
    def placeholders(self) -> set[str]:
        """Names of the ``{field}`` placeholders in the command template."""
        return {field for _, field, _, _ in string.Formatter().parse(self.command) if field}

    def bind(self, **params: Any) -> Probe:
        """Return a copy whose command template is filled with ``params``.

        Raises
        ------
        KeyError
            If a placeholder in the template has no matching parameter.
        """
        missing = self.placeholders - params.keys()
        if missing:
            raise KeyError(f"Probe '{self.name}' needs parameters: {sorted(missing)}")
        return self.model_copy(update={"command": self.command.format(**params)})


class CommandOutcome(BaseModel):
    """Raw result of one command invocation, before shape normalization."""

    command: str
    status: ProbeStatus
    stdout: str | None = None
    error: str | None = None
    exit_code: int | None = None

    @property
    def succeeded(self) -> bool:
        """True for ``OK`` and ``WARNING``; a warning never discards output."""
        return self.status is not ProbeStatus.FAILED


class ProbeResult(BaseModel):
    """Normalized result of running one probe."""

    probe: Probe
    status: ProbeStatus
    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True when a usable value is present."""
        return self.status is not ProbeStatus.FAILED and self.value is not None


__all__ = ["CommandOutcome", "OutputShape", "Probe", "ProbeResult", "ProbeStatus"]
