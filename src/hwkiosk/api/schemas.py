"""
Request/response schemas for the kiosk HTTP API.

Response bodies reuse the core contracts (`Snapshot`, `ActionOutcome`,
`ExportResult`) directly; only request payloads are defined here. Field
names are camelCase on the wire to match what the panel already sends.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class StressRequest(_Request):
    """Body for `POST /diagnostics/cpu-stress`."""

    duration_seconds: int | None = Field(
        default=None, ge=1, le=24 * 3600, alias="durationSeconds"
    )


class MemoryTestRequest(_Request):
    """Body for `POST /diagnostics/memory`; size as memtester understands it."""

    size_spec: str | None = Field(
        default=None, pattern=r"^\d+[BKMGT]?$", alias="sizeSpec", examples=["100M"]
    )


class SaveResultsRequest(_Request):
    """Body for `POST /results`; the test results are opaque to the core."""

    test_results: Any = Field(default=None, alias="testResults")


class HealthPayload(BaseModel):
    status: str
    environment: str
    version: str
    snapshot_ready: bool


__all__ = ["HealthPayload", "MemoryTestRequest", "SaveResultsRequest", "StressRequest"]
