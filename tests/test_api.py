# tests/test_api.py
"""
Integration Tests for the hwkiosk HTTP API.

Focus
-----
These tests verify the HTTP contract the kiosk panel relies on. The app is
built around an `AppContext` with the scripted `FakeRunner`, so no hardware
tool or power command is ever executed.

Scenarios
---------
1. **Health & Snapshot**: boot snapshot is collected by the lifespan.
2. **Actions**: outcomes come back as HTTP 200 bodies, failures included.
3. **Validation**: malformed request bodies are rejected with 422.
4. **Export & Control**: results land in the configured directory; exit
   reaches the context hook.
"""

from __future__ import annotations

import json
from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from conftest import FakeRunner
from hwkiosk import __version__
from hwkiosk.api.app import create_app
from hwkiosk.core.context import AppContext
from hwkiosk.core.settings import Settings


@pytest.fixture  # type: ignore[misc]
def fresh_context(
    runner: FakeRunner, kiosk_settings: Settings, exit_calls: list[str]
) -> AppContext:
    """Context without a snapshot, so startup collection is observable."""
    return AppContext(
        settings=kiosk_settings, runner=runner, exit_hook=lambda: exit_calls.append("exit")
    )


@pytest.fixture  # type: ignore[misc]
def client(fresh_context: AppContext) -> Generator[TestClient, None, None]:
    with TestClient(create_app(fresh_context)) as c:
        yield c


def test_health_reports_snapshot_ready(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data == {
        "status": "ok",
        "environment": "test",
        "version": __version__,
        "snapshot_ready": True,
    }


def test_system_info_collected_at_startup(client: TestClient, runner: FakeRunner) -> None:
    boot_calls = list(runner.calls)
    assert "lsusb" in boot_calls

    data = client.get("/system-info").json()

    assert runner.calls == boot_calls, "GET /system-info must not re-run probes"
    assert data["host"]["hostname"]
    assert data["extended"]["usbDevices"]["status"] == "failed"
    assert data["extended"]["usbDevices"]["value"] is None


def test_refresh_reruns_probes(client: TestClient, runner: FakeRunner) -> None:
    runner.ok("lsusb", "Bus 001 Device 002: mouse\n")
    data = client.post("/system-info/refresh").json()
    assert data["extended"]["usbDevices"]["value"] == ["Bus 001 Device 002: mouse"]


def test_sensor_reads_always_succeed(client: TestClient) -> None:
    for path in ("/battery", "/temperature", "/display"):
        resp = client.get(path)
        assert resp.status_code == 200
        assert resp.json()["success"] is True, path


def test_cpu_stress_with_body(client: TestClient, runner: FakeRunner) -> None:
    resp = client.post("/diagnostics/cpu-stress", json={"durationSeconds": 5})
    assert resp.status_code == 200
    assert resp.json()["success"] is False  # stress not scripted -> missing tool
    assert runner.calls[-1].startswith("stress --cpu ")
    assert runner.calls[-1].endswith("--timeout 5s --verbose")


def test_cpu_stress_rejects_bad_duration(client: TestClient) -> None:
    resp = client.post("/diagnostics/cpu-stress", json={"durationSeconds": 0})
    assert resp.status_code == 422


def test_memory_size_validated(client: TestClient, runner: FakeRunner) -> None:
    assert client.post("/diagnostics/memory", json={"sizeSpec": "1M; reboot"}).status_code == 422
    runner.ok("memtester 64M 1", "Done.\n")
    body = client.post("/diagnostics/memory", json={"sizeSpec": "64M"}).json()
    assert body == {"action": "memory", "success": True, "output": "Done.\n", "error": None}


def test_storage_sweep_over_http(client: TestClient, runner: FakeRunner) -> None:
    listing = "NAME SIZE TYPE MODEL\nsda 100G disk ModelX\n"
    runner.ok("lsblk -d -o NAME,SIZE,TYPE,MODEL", listing)
    runner.fail("smartctl -a /dev/sda", "smartctl: not found", code=127)

    body = client.post("/diagnostics/storage").json()

    assert body["success"] is True
    assert body["output"]["devices"] == listing
    assert body["output"]["smartData"]["sda"].startswith("Error: ")


def test_network_route(client: TestClient, runner: FakeRunner) -> None:
    runner.ok("ip link show", "2: eth0: <UP>\n")
    body = client.post("/diagnostics/network").json()
    assert body["output"]["wireless"] == "No wireless interfaces"


def test_save_results(client: TestClient, kiosk_settings: Settings) -> None:
    resp = client.post("/results", json={"testResults": {"memory": "pass"}})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True

    path = Path(body["filepath"])
    assert path.parent == kiosk_settings.export_dir
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["testResults"] == {"memory": "pass"}
    assert saved["bootableVersion"] is True


def test_control_routes(client: TestClient, runner: FakeRunner, exit_calls: list[str]) -> None:
    runner.ok("shutdown -h now", "")
    assert client.post("/control/shutdown").json()["success"] is True
    assert client.post("/control/reboot").json()["success"] is False
    assert client.post("/control/exit").json()["success"] is True
    assert exit_calls == ["exit"]
