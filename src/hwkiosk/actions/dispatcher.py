"""
Diagnostic Action Dispatcher.

Each action is a thin composition of registry probes plus light
post-processing, and each returns an :class:`ActionOutcome`. Nothing here
raises to the caller: probe failures either become ``success=False`` or are
replaced by a sentinel, and any unexpected exception is logged and turned
into a failed outcome by :func:`_guarded`.

Sentinel substitution
---------------------
- wireless probe           -> ``"No wireless interfaces"``
- sensors JSON             -> ``{}``
- thermal / display / power text -> ``"N/A"``
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from hwkiosk.core.context import AppContext
from hwkiosk.core.contracts.action import ActionOutcome
from hwkiosk.core.contracts.probe import Probe
from hwkiosk.core.result import Result, err, ok
from hwkiosk.core.settings import get_logger

log = get_logger(__name__)

NO_WIRELESS = "No wireless interfaces"
NOT_AVAILABLE = "N/A"

F = TypeVar("F", bound=Callable[..., ActionOutcome])


def _guarded(action: str) -> Callable[[F], F]:
    """Turn any exception escaping an action into a failed ActionOutcome."""

    def decorate(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> ActionOutcome:
            try:
                return fn(*args, **kwargs)
            except Exception as exc:
                log.exception("Action %s crashed", action)
                return ActionOutcome.failed(action, str(exc))

        return wrapper  # type: ignore[return-value]

    return decorate


def smart_candidates(listing: str, prefixes: list[str] | tuple[str, ...]) -> list[str]:
    """Extract device names from ``lsblk -d -o NAME,...`` output.

    The header line is skipped; the first column of every non-blank line is
    kept when it starts with one of ``prefixes``.
    """
    names: list[str] = []
    for line in listing.splitlines()[1:]:
        if not line.strip():
            continue
        name = line.split()[0]
        if name.startswith(tuple(prefixes)):
            names.append(name)
    return names


class DiagnosticDispatcher:
    """Named diagnostic and control actions over one :class:`AppContext`."""

    def __init__(self, context: AppContext) -> None:
        self.context = context
        self._actions: dict[str, Callable[..., ActionOutcome]] = {
            "cpu-stress": self.stress_test,
            "memory": self.memory_test,
            "storage": self.storage_sweep,
            "network": self.network_test,
            "temperature": self.temperature_read,
            "display": self.display_read,
            "battery": self.battery_read,
            "shutdown": self.control_shutdown,
            "reboot": self.control_reboot,
            "exit": self.exit_to_console,
        }

    # ----- Helpers -----------------------------------------------------------
    def _probe(self, name: str, **params: Any) -> Probe:
        registry = self.context.registry
        return registry.bind(name, **params) if params else registry.get(name)

    def _value(self, name: str, **params: Any) -> Result[Any, str]:
        """Run one probe and return its normalized value, or its error text."""
        result = self.context.assembler.run_probe(self._probe(name, **params))
        if result.ok:
            return ok(result.value)
        return err(result.error or f"{name} produced no data")

    def _single(self, action: str, name: str, **params: Any) -> ActionOutcome:
        value = self._value(name, **params)
        if value.is_ok():
            return ActionOutcome.succeeded(action, value.unwrap())
        return ActionOutcome.failed(action, value.unwrap_err())

    @property
    def actions(self) -> list[str]:
        return list(self._actions)

    def dispatch(self, action: str, **params: Any) -> ActionOutcome:
        """Invoke an action by its boundary name."""
        handler = self._actions.get(action)
        if handler is None:
            return ActionOutcome.failed(action, f"Unknown action: {action}")
        return handler(**params)

    # ----- Stress ------------------------------------------------------------
    @_guarded("cpu-stress")
    def stress_test(self, duration_seconds: int | None = None) -> ActionOutcome:
        """Load every logical core for ``duration_seconds``."""
        duration = duration_seconds or self.context.settings.stress_seconds
        cores = self.context.snapshot.logical_cores
        log.info("CPU stress: %d workers for %ds", cores, duration)
        return self._single("cpu-stress", "cpuStress", cores=cores, duration=duration)

    @_guarded("memory")
    def memory_test(self, size_spec: str | None = None) -> ActionOutcome:
        size = size_spec or self.context.settings.memtest_size
        log.info("Memory test: %s, single pass", size)
        return self._single("memory", "memoryTest", size=size)

    # ----- Storage -----------------------------------------------------------
    @_guarded("storage")
    def storage_sweep(self) -> ActionOutcome:
        """SMART sweep over every sd*/nvme* whole disk.

        One failing device never hides the others: every matching device
        gets an entry, either the smartctl report or ``"Error: <message>"``.
        """
        listing = self._value("blockDevices")
        if listing.is_err():
            return ActionOutcome.failed("storage", listing.unwrap_err())

        devices_text: str = listing.unwrap()
        smart: dict[str, str] = {}
        for device in smart_candidates(devices_text, self.context.settings.smart_prefixes):
            report = (
                self._value("smartAttributes", device=device)
                .map(str)
                .map_err(lambda e: f"Error: {e}")
            )
            smart[device] = report.unwrap() if report.is_ok() else report.unwrap_err()
        return ActionOutcome.succeeded("storage", {"devices": devices_text, "smartData": smart})

    # ----- Network -----------------------------------------------------------
    @_guarded("network")
    def network_test(self) -> ActionOutcome:
        links = self._value("linkStatus")
        if links.is_err():
            return ActionOutcome.failed("network", links.unwrap_err())
        wireless = self._value("wireless").get_or(NO_WIRELESS)
        return ActionOutcome.succeeded(
            "network", {"interfaces": links.unwrap(), "wireless": wireless}
        )

    # ----- Sensors, display, power -------------------------------------------
    @_guarded("temperature")
    def temperature_read(self) -> ActionOutcome:
        sensors = self._value("sensors").get_or({})
        thermal = self._value("thermalZones").get_or(NOT_AVAILABLE)
        return ActionOutcome.succeeded("temperature", {"sensors": sensors, "thermal": thermal})

    @_guarded("display")
    def display_read(self) -> ActionOutcome:
        xrandr = self._value("xrandr").get_or(NOT_AVAILABLE)
        fbset = self._value("framebuffer").get_or(NOT_AVAILABLE)
        return ActionOutcome.succeeded("display", {"xrandr": xrandr, "fbset": fbset})

    @_guarded("battery")
    def battery_read(self) -> ActionOutcome:
        acpi = self._value("battery").get_or(NOT_AVAILABLE)
        uptime = self._value("uptime").get_or(NOT_AVAILABLE)
        return ActionOutcome.succeeded(
            "battery",
            {"acpi": acpi, "uptime": uptime, "timestamp": int(time.time() * 1000)},
        )

    # ----- Control -----------------------------------------------------------
    @_guarded("shutdown")
    def control_shutdown(self) -> ActionOutcome:
        log.warning("System shutdown requested")
        return self._single("shutdown", "shutdown")

    @_guarded("reboot")
    def control_reboot(self) -> ActionOutcome:
        log.warning("System reboot requested")
        return self._single("reboot", "reboot")

    @_guarded("exit")
    def exit_to_console(self) -> ActionOutcome:
        self.context.request_exit()
        return ActionOutcome.succeeded("exit")


__all__ = ["NOT_AVAILABLE", "NO_WIRELESS", "DiagnosticDispatcher", "smart_candidates"]
