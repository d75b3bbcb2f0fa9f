"""
Diagnostic action routes.

Endpoints
---------
- `POST /diagnostics/cpu-stress` `{durationSeconds}`
- `POST /diagnostics/memory`     `{sizeSpec}`
- `POST /diagnostics/storage`
- `POST /diagnostics/network`

Design Decisions
----------------
- **Synchronous handlers**: stress and memory tests block for their whole
  duration. Plain ``def`` routes run in FastAPI's thread pool, so a long test
  does not stall sensor reads issued meanwhile.
- **Failures are data**: handlers always answer 200 with an `ActionOutcome`;
  only malformed requests are rejected (422).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends

from hwkiosk.api.deps import get_service
from hwkiosk.api.schemas import MemoryTestRequest, StressRequest
from hwkiosk.core.contracts.action import ActionOutcome
from hwkiosk.service import KioskService

router = APIRouter(prefix="/diagnostics", tags=["Diagnostics"])

Service = Annotated[KioskService, Depends(get_service)]


@router.post("/cpu-stress", response_model=ActionOutcome, summary="Run a CPU stress test")
def run_cpu_stress_test(
    service: Service,
    request: Annotated[StressRequest, Body()] = StressRequest(),
) -> ActionOutcome:
    return service.run_cpu_stress_test(request.duration_seconds)


@router.post("/memory", response_model=ActionOutcome, summary="Run a single memtester pass")
def run_memory_test(
    service: Service,
    request: Annotated[MemoryTestRequest, Body()] = MemoryTestRequest(),
) -> ActionOutcome:
    return service.run_memory_test(request.size_spec)


@router.post("/storage", response_model=ActionOutcome, summary="SMART sweep of all disks")
def test_storage_devices(service: Service) -> ActionOutcome:
    return service.test_storage_devices()


@router.post("/network", response_model=ActionOutcome, summary="Link and wireless status")
def test_network_interfaces(service: Service) -> ActionOutcome:
    return service.test_network_interfaces()


__all__ = ["router"]
