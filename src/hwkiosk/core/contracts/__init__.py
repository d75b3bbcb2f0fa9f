"""Pydantic contracts shared by the collector, the actions and the API."""

from __future__ import annotations

from .action import ActionOutcome
from .export import ExportRecord, ExportResult, MirrorOutcome
from .probe import CommandOutcome, OutputShape, Probe, ProbeResult, ProbeStatus
from .snapshot import CpuInfo, HostFacts, InterfaceAddress, Snapshot

__all__ = [
    "ActionOutcome",
    "CommandOutcome",
    "CpuInfo",
    "ExportRecord",
    "ExportResult",
    "HostFacts",
    "InterfaceAddress",
    "MirrorOutcome",
    "OutputShape",
    "Probe",
    "ProbeResult",
    "ProbeStatus",
    "Snapshot",
]
