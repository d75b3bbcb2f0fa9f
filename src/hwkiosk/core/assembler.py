"""
Snapshot Assembler: host facts plus a batch of probes into one Snapshot.

Ordering
--------
Host facts are gathered first and use only in-process introspection
(``platform``, ``socket``, ``psutil`` and a read of ``/proc/cpuinfo``), so a
snapshot always has a usable baseline even when every external tool is
missing. Extended probes then run one after another; they are independent and
a failing probe never stops the batch.

Atomicity
---------
The snapshot is built privately and returned whole. Callers swap it into the
application context in one assignment, so a partially collected snapshot is
never observable.
"""

from __future__ import annotations

import platform
import socket
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TypeVar

import psutil

from hwkiosk.core.contracts.probe import Probe, ProbeResult, ProbeStatus
from hwkiosk.core.contracts.snapshot import CpuInfo, HostFacts, InterfaceAddress, Snapshot
from hwkiosk.core.normalize import normalize
from hwkiosk.core.runner import CommandRunner, ProcessRunner
from hwkiosk.core.settings import get_logger

log = get_logger(__name__)

T = TypeVar("T")

_FAMILY_NAMES = {
    socket.AF_INET: "IPv4",
    socket.AF_INET6: "IPv6",
}


# --------------------------------------------------------------------------- #
# Host facts
# --------------------------------------------------------------------------- #


def _safe(query: Callable[[], T], default: T) -> T:
    """Run one introspection query, falling back to ``default`` on OS errors."""
    try:
        return query()
    except (OSError, RuntimeError, AttributeError, NotImplementedError, psutil.Error) as exc:
        log.debug("Host query %s unavailable: %s", getattr(query, "__name__", query), exc)
        return default


def _cpu_model() -> str:
    cpuinfo = Path("/proc/cpuinfo")
    if cpuinfo.exists():
        for line in cpuinfo.read_text(encoding="utf-8", errors="replace").splitlines():
            key, _, value = line.partition(":")
            if key.strip() in ("model name", "Model", "Hardware"):
                return value.strip()
    return platform.processor()


def _cpus() -> tuple[CpuInfo, ...]:
    count = psutil.cpu_count(logical=True) or 1
    model = _safe(_cpu_model, "")
    freqs = _safe(lambda: psutil.cpu_freq(percpu=True), []) or []
    times = _safe(lambda: psutil.cpu_times(percpu=True), []) or []

    cpus: list[CpuInfo] = []
    for idx in range(count):
        freq = freqs[idx] if idx < len(freqs) else (freqs[0] if freqs else None)
        t = times[idx] if idx < len(times) else None
        cpus.append(
            CpuInfo(
                model=model,
                speed_mhz=float(freq.current) if freq else 0.0,
                user_seconds=float(t.user) if t else 0.0,
                system_seconds=float(t.system) if t else 0.0,
                idle_seconds=float(t.idle) if t else 0.0,
            )
        )
    return tuple(cpus)


def _family(family: int) -> str:
    if family == psutil.AF_LINK:
        return "MAC"
    return _FAMILY_NAMES.get(family, str(family))


def _interfaces() -> dict[str, tuple[InterfaceAddress, ...]]:
    out: dict[str, tuple[InterfaceAddress, ...]] = {}
    for name, addrs in psutil.net_if_addrs().items():
        out[name] = tuple(
            InterfaceAddress(
                family=_family(a.family),
                address=a.address,
                netmask=a.netmask,
                broadcast=a.broadcast,
            )
            for a in addrs
        )
    return out


def _uptime() -> float:
    return max(time.time() - psutil.boot_time(), 0.0)


def _load_average() -> tuple[float, float, float]:
    one, five, fifteen = psutil.getloadavg()
    return (float(one), float(five), float(fifteen))


def collect_host_facts() -> HostFacts:
    """Gather fixed host facts without spawning any subprocess."""
    mem = _safe(psutil.virtual_memory, None)
    return HostFacts(
        platform=platform.system().lower(),
        arch=platform.machine(),
        release=platform.release(),
        hostname=socket.gethostname(),
        uptime=_safe(_uptime, 0.0),
        total_memory=int(mem.total) if mem else 0,
        free_memory=int(mem.available) if mem else 0,
        cpus=_safe(_cpus, ()),
        network_interfaces=_safe(_interfaces, {}),
        load_average=_safe(_load_average, (0.0, 0.0, 0.0)),
    )


# --------------------------------------------------------------------------- #
# Assembler
# --------------------------------------------------------------------------- #


class SnapshotAssembler:
    """Run probes through a :class:`CommandRunner` and assemble a Snapshot."""

    def __init__(
        self,
        runner: CommandRunner | None = None,
        host_facts: Callable[[], HostFacts] = collect_host_facts,
    ) -> None:
        self.runner: CommandRunner = runner if runner is not None else ProcessRunner()
        self._host_facts = host_facts

    def run_probe(self, probe: Probe) -> ProbeResult:
        """Run and normalize a single probe; never raises."""
        try:
            outcome = self.runner.run(probe.command)
        except Exception as exc:  # runners are pluggable
            log.warning("Probe %s raised: %s", probe.name, exc)
            return ProbeResult(probe=probe, status=ProbeStatus.FAILED, error=str(exc))
        result = normalize(probe, outcome)
        if result.status is ProbeStatus.WARNING and result.value is None:
            log.warning("Probe %s: %s", probe.name, result.error)
        return result

    def collect(self, probes: Iterable[Probe]) -> Snapshot:
        """Collect host facts, then every probe in order; always returns a Snapshot."""
        host = self._host_facts()
        extended: dict[str, ProbeResult] = {}
        for probe in probes:
            extended[probe.name] = self.run_probe(probe)

        snapshot = Snapshot(host=host, extended=extended)
        failed = snapshot.failed_probes()
        log.info(
            "Snapshot collected: %d probes, %d without data%s",
            len(extended),
            len(failed),
            f" ({', '.join(failed)})" if failed else "",
        )
        return snapshot


__all__ = ["SnapshotAssembler", "collect_host_facts"]
