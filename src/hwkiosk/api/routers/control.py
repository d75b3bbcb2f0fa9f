"""
Results export and power-control routes.

Endpoints
---------
- `POST /results`          save test results (primary file + USB mirror).
- `POST /control/shutdown` power off the host.
- `POST /control/reboot`   reboot the host.
- `POST /control/exit`     leave the kiosk and return to the console.

Control outcomes report whether the command could be issued; the resulting
power state cannot be observed from here.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from hwkiosk.api.deps import get_service
from hwkiosk.api.schemas import SaveResultsRequest
from hwkiosk.core.contracts.action import ActionOutcome
from hwkiosk.core.contracts.export import ExportResult
from hwkiosk.service import KioskService

router = APIRouter(tags=["Control"])

Service = Annotated[KioskService, Depends(get_service)]


@router.post("/results", response_model=ExportResult, summary="Save test results")
def save_test_results(request: SaveResultsRequest, service: Service) -> ExportResult:
    return service.save_test_results(request.test_results)


@router.post("/control/shutdown", response_model=ActionOutcome)
def system_shutdown(service: Service) -> ActionOutcome:
    return service.system_shutdown()


@router.post("/control/reboot", response_model=ActionOutcome)
def system_reboot(service: Service) -> ActionOutcome:
    return service.system_reboot()


@router.post("/control/exit", response_model=ActionOutcome)
def exit_to_console(service: Service) -> ActionOutcome:
    return service.exit_to_console()


__all__ = ["router"]
