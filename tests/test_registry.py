"""Probe Registry catalogue tests."""

from __future__ import annotations

import pytest

from hwkiosk.core.contracts.probe import OutputShape, Probe
from hwkiosk.core.registry import SNAPSHOT_PROBES, ProbeRegistry, default_registry


def test_default_catalogue_shapes() -> None:
    reg = default_registry()
    assert reg.get("usbDevices").shape is OutputShape.LINE_LIST
    assert reg.get("storageDevices").shape is OutputShape.STRUCTURED_JSON
    assert reg.get("sensors").command == "sensors -A -j"
    assert reg.get("networkDetails").shape is OutputShape.RAW_TEXT


def test_snapshot_batch_order() -> None:
    names = [p.name for p in default_registry().snapshot_probes()]
    assert names == list(SNAPSHOT_PROBES)


def test_bind_parameterized_probe() -> None:
    probe = default_registry().bind("cpuStress", cores=8, duration=30)
    assert probe.command == "stress --cpu 8 --timeout 30s --verbose"


def test_unknown_probe_raises() -> None:
    with pytest.raises(KeyError, match="Unknown probe"):
        default_registry().get("floppyDrives")


def test_duplicate_names_rejected() -> None:
    p = Probe(name="x", command="true")
    with pytest.raises(ValueError):
        ProbeRegistry([p, p])


def test_membership_and_len() -> None:
    reg = ProbeRegistry([Probe(name="a", command="true"), Probe(name="b", command="false")])
    assert "a" in reg and "c" not in reg
    assert len(reg) == 2
    assert reg.names() == ["a", "b"]
