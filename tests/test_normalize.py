"""Shape-driven normalization tests."""

from __future__ import annotations

from conftest import failed_outcome, ok_outcome
from hwkiosk.core.contracts.probe import OutputShape, Probe, ProbeStatus
from hwkiosk.core.normalize import normalize, split_lines

LSUSB = Probe(name="usbDevices", command="lsusb", shape=OutputShape.LINE_LIST)
LSBLK = Probe(name="storageDevices", command="lsblk -J", shape=OutputShape.STRUCTURED_JSON)
IPADDR = Probe(name="networkDetails", command="ip addr show", shape=OutputShape.RAW_TEXT)


def test_line_list_drops_blank_lines() -> None:
    raw = "Bus 001 Device 001: ...\n\nBus 002 Device 003: ...\n"
    res = normalize(LSUSB, ok_outcome("lsusb", raw))
    assert res.status is ProbeStatus.OK
    assert res.value == ["Bus 001 Device 001: ...", "Bus 002 Device 003: ..."]


def test_split_lines_drops_whitespace_only() -> None:
    assert split_lines("a\n   \n\tb\n\n") == ["a", "\tb"]


def test_raw_text_is_unchanged() -> None:
    raw = "1: lo: <LOOPBACK,UP>\n    inet 127.0.0.1/8\n"
    assert normalize(IPADDR, ok_outcome("ip addr show", raw)).value == raw


def test_json_parsed() -> None:
    res = normalize(LSBLK, ok_outcome("lsblk -J", '{"blockdevices": [{"name": "sda"}]}'))
    assert res.status is ProbeStatus.OK
    assert res.value == {"blockdevices": [{"name": "sda"}]}


def test_malformed_json_downgrades_to_warning() -> None:
    res = normalize(LSBLK, ok_outcome("lsblk -J", "lsblk: unknown column"))
    assert res.status is ProbeStatus.WARNING
    assert res.value is None
    assert "JSON" in (res.error or "")


def test_failed_command_has_no_value() -> None:
    res = normalize(LSUSB, failed_outcome("lsusb", "lsusb: not found"))
    assert res.status is ProbeStatus.FAILED
    assert res.value is None
    assert "lsusb: not found" in (res.error or "")


def test_warning_keeps_value_and_stderr() -> None:
    res = normalize(IPADDR, ok_outcome("ip addr show", "eth0\n", stderr="deprecated"))
    assert res.status is ProbeStatus.WARNING
    assert res.value == "eth0\n"
    assert res.error == "deprecated"


def test_json_null_is_a_warning() -> None:
    res = normalize(LSBLK, ok_outcome("lsblk -J", "null\n"))
    assert res.status is ProbeStatus.WARNING
    assert res.value is None
    assert "null" in (res.error or "")
    assert not res.ok
