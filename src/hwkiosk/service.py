"""
Front-end boundary for the kiosk panel.

`KioskService` is the one object the panel (through the HTTP API) or the CLI
talks to. Every method returns a value; none raises for an operational
failure, so callers render ``success: false`` inline instead of crashing.
"""

from __future__ import annotations

from typing import Any

from hwkiosk.actions.dispatcher import DiagnosticDispatcher
from hwkiosk.core.context import AppContext, get_context
from hwkiosk.core.contracts.action import ActionOutcome
from hwkiosk.core.contracts.export import ExportResult
from hwkiosk.core.contracts.snapshot import Snapshot
from hwkiosk.export.exporter import ResultExporter


class KioskService:
    """Boundary operations over a shared :class:`AppContext`."""

    def __init__(self, context: AppContext | None = None) -> None:
        self.context = context if context is not None else get_context()
        self.dispatcher = DiagnosticDispatcher(self.context)
        self.exporter = ResultExporter.from_settings(self.context.settings)

    # ----- Inventory ---------------------------------------------------------
    def get_system_info(self) -> Snapshot:
        """Return the last collected snapshot (collecting it on first use)."""
        return self.context.snapshot

    def refresh_system_info(self) -> Snapshot:
        return self.context.refresh()

    # ----- Reads -------------------------------------------------------------
    def get_battery_info(self) -> ActionOutcome:
        return self.dispatcher.battery_read()

    def get_temperature_info(self) -> ActionOutcome:
        return self.dispatcher.temperature_read()

    def get_display_info(self) -> ActionOutcome:
        return self.dispatcher.display_read()

    # ----- Diagnostics -------------------------------------------------------
    def run_cpu_stress_test(self, duration_seconds: int | None = None) -> ActionOutcome:
        return self.dispatcher.stress_test(duration_seconds)

    def run_memory_test(self, size_spec: str | None = None) -> ActionOutcome:
        return self.dispatcher.memory_test(size_spec)

    def test_storage_devices(self) -> ActionOutcome:
        return self.dispatcher.storage_sweep()

    def test_network_interfaces(self) -> ActionOutcome:
        return self.dispatcher.network_test()

    # ----- Export ------------------------------------------------------------
    def save_test_results(self, test_results: Any) -> ExportResult:
        return self.exporter.export(self.context.snapshot, test_results)

    # ----- Control -----------------------------------------------------------
    def system_shutdown(self) -> ActionOutcome:
        return self.dispatcher.control_shutdown()

    def system_reboot(self) -> ActionOutcome:
        return self.dispatcher.control_reboot()

    def exit_to_console(self) -> ActionOutcome:
        return self.dispatcher.exit_to_console()


__all__ = ["KioskService"]
