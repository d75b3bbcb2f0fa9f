"""Snapshot contracts: host facts plus extended probe results.

`HostFacts` comes only from in-process introspection and is always fully
populated. `Snapshot.extended` holds one :class:`ProbeResult` per probe that
was actually run, keyed by probe name; failed probes are present with status
``FAILED`` rather than missing.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from .probe import ProbeResult


class CpuInfo(BaseModel):
    """Per logical core information."""

    model_config = ConfigDict(frozen=True)

    model: str = ""
    speed_mhz: float = 0.0
    user_seconds: float = 0.0
    system_seconds: float = 0.0
    idle_seconds: float = 0.0


class InterfaceAddress(BaseModel):
    """One address bound to a network interface."""

    model_config = ConfigDict(frozen=True)

    family: str
    address: str
    netmask: str | None = None
    broadcast: str | None = None


class HostFacts(BaseModel):
    """Fixed system facts gathered without spawning any process."""

    model_config = ConfigDict(frozen=True)

    platform: str
    arch: str
    release: str
    hostname: str
    uptime: float = Field(ge=0.0, description="Seconds since boot.")
    total_memory: int = Field(ge=0, description="Bytes.")
    free_memory: int = Field(ge=0, description="Bytes available.")
    cpus: tuple[CpuInfo, ...] = ()
    network_interfaces: dict[str, tuple[InterfaceAddress, ...]] = Field(default_factory=dict)
    load_average: tuple[float, float, float] = (0.0, 0.0, 0.0)


class Snapshot(BaseModel):
    """The full inventory at one point in time; immutable once assembled."""

    model_config = ConfigDict(frozen=True)

    host: HostFacts
    captured_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    extended: dict[str, ProbeResult] = Field(default_factory=dict)

    @property
    def logical_cores(self) -> int:
        """Logical core count, at least 1 so load generators always get a worker."""
        return max(len(self.host.cpus), 1)

    def failed_probes(self) -> list[str]:
        """Names of extended probes that did not yield a value."""
        return [name for name, res in self.extended.items() if not res.ok]


__all__ = ["CpuInfo", "HostFacts", "InterfaceAddress", "Snapshot"]
