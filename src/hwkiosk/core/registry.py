"""Probe Registry: the fixed catalogue of probes the kiosk knows how to run.

The catalogue is static for the process lifetime. Parameterized probes keep
their placeholders (``{device}``, ``{cores}``, ``{duration}``, ``{size}``)
and are bound per call through :meth:`ProbeRegistry.bind`.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import lru_cache
from typing import Any

from hwkiosk.core.contracts.probe import OutputShape, Probe

RAW = OutputShape.RAW_TEXT
LINES = OutputShape.LINE_LIST
JSON = OutputShape.STRUCTURED_JSON

DEFAULT_PROBES: tuple[Probe, ...] = (
    # Boot-time inventory
    Probe(name="detailedHardware", command="lshw -json", shape=JSON, description="Hardware tree"),
    Probe(name="usbDevices", command="lsusb", shape=LINES, description="USB devices"),
    Probe(name="pciDevices", command="lspci", shape=LINES, description="PCI devices"),
    Probe(name="storageDevices", command="lsblk -J", shape=JSON, description="Storage devices"),
    Probe(name="networkDetails", command="ip addr show", shape=RAW, description="Network addresses"),
    # Storage
    Probe(
        name="blockDevices",
        command="lsblk -d -o NAME,SIZE,TYPE,MODEL",
        shape=RAW,
        description="Whole-disk block devices",
    ),
    Probe(
        name="smartAttributes",
        command="smartctl -a /dev/{device}",
        shape=RAW,
        description="SMART attributes",
    ),
    # Stress
    Probe(
        name="cpuStress",
        command="stress --cpu {cores} --timeout {duration}s --verbose",
        shape=RAW,
        description="CPU load generator",
    ),
    Probe(name="memoryTest", command="memtester {size} 1", shape=RAW, description="Memory exerciser"),
    # Network
    Probe(name="linkStatus", command="ip link show", shape=RAW, description="Link status"),
    Probe(name="wireless", command="iwconfig", shape=RAW, description="Wireless interfaces"),
    # Sensors, display, power
    Probe(name="sensors", command="sensors -A -j", shape=JSON, description="Thermal sensors"),
    Probe(
        name="thermalZones",
        command="cat /proc/acpi/thermal_zone/*/temperature",
        shape=RAW,
        description="Legacy ACPI thermal zones",
    ),
    Probe(name="xrandr", command="xrandr --verbose", shape=RAW, description="Display outputs"),
    Probe(name="framebuffer", command="fbset -s", shape=RAW, description="Framebuffer mode"),
    Probe(name="battery", command="acpi -b", shape=RAW, description="Battery status"),
    Probe(name="uptime", command="cat /proc/uptime", shape=RAW, description="Kernel uptime"),
    # Control
    Probe(name="shutdown", command="shutdown -h now", shape=RAW, description="Power off"),
    Probe(name="reboot", command="reboot", shape=RAW, description="Reboot"),
)

SNAPSHOT_PROBES: tuple[str, ...] = (
    "detailedHardware",
    "usbDevices",
    "pciDevices",
    "storageDevices",
    "networkDetails",
)


class ProbeRegistry:
    """Name-indexed, read-only collection of probes."""

    def __init__(self, probes: Iterable[Probe]) -> None:
        self._probes: dict[str, Probe] = {}
        for probe in probes:
            if probe.name in self._probes:
                raise ValueError(f"Duplicate probe name: {probe.name}")
            self._probes[probe.name] = probe

    def get(self, name: str) -> Probe:
        try:
            return self._probes[name]
        except KeyError:
            raise KeyError(f"Unknown probe: {name}") from None

    def bind(self, name: str, **params: Any) -> Probe:
        """Look up ``name`` and fill its command template."""
        return self.get(name).bind(**params)

    def select(self, names: Iterable[str]) -> list[Probe]:
        """Return probes for ``names`` in the given order."""
        return [self.get(n) for n in names]

    def names(self) -> list[str]:
        return list(self._probes)

    def snapshot_probes(self) -> list[Probe]:
        """The ordered boot inventory batch."""
        return self.select(n for n in SNAPSHOT_PROBES if n in self._probes)

    def __contains__(self, name: object) -> bool:
        return name in self._probes

    def __iter__(self) -> Iterator[Probe]:
        return iter(self._probes.values())

    def __len__(self) -> int:
        return len(self._probes)


@lru_cache(maxsize=1)
def default_registry() -> ProbeRegistry:
    """Return the shared catalogue of built-in probes."""
    return ProbeRegistry(DEFAULT_PROBES)


__all__ = ["DEFAULT_PROBES", "SNAPSHOT_PROBES", "ProbeRegistry", "default_registry"]
