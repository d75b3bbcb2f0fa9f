"""Export contracts.

`ExportRecord` is the persisted document; its JSON keys (``timestamp``,
``systemInfo``, ``testResults``, ``bootableVersion``) are the on-disk format
read by existing report tooling, so the Python field names map to them
through aliases.

`ExportResult` separates the primary write (which alone decides ``success``)
from the best-effort `MirrorOutcome`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .snapshot import Snapshot


class ExportRecord(BaseModel):
    """One exported results document."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: str = Field(description="ISO-8601 UTC timestamp with trailing 'Z'.")
    system_info: Snapshot = Field(alias="systemInfo")
    test_results: Any = Field(default=None, alias="testResults")
    bootable_version: bool = Field(default=True, alias="bootableVersion")


class MirrorOutcome(BaseModel):
    """What happened while copying the export onto removable media."""

    attempted: bool = False
    path: Path | None = None
    errors: list[str] = Field(default_factory=list)


class ExportResult(BaseModel):
    """Return value of an export call."""

    success: bool
    filepath: Path | None = None
    error: str | None = None
    mirror: MirrorOutcome = Field(default_factory=MirrorOutcome)


__all__ = ["ExportRecord", "ExportResult", "MirrorOutcome"]
