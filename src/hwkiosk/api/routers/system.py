"""
Inventory and sensor read routes.

Endpoints
---------
- `GET /system-info`          last collected snapshot.
- `POST /system-info/refresh` re-collect and return the new snapshot.
- `GET /battery`, `GET /temperature`, `GET /display` sensor reads.

The reads substitute ``{}`` / ``"N/A"`` for missing tools, so they always
return ``success: true``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from hwkiosk.api.deps import get_service
from hwkiosk.core.contracts.action import ActionOutcome
from hwkiosk.core.contracts.snapshot import Snapshot
from hwkiosk.service import KioskService

router = APIRouter(tags=["System"])

Service = Annotated[KioskService, Depends(get_service)]


@router.get("/system-info", response_model=Snapshot, summary="Current hardware snapshot")
def get_system_info(service: Service) -> Snapshot:
    return service.get_system_info()


@router.post("/system-info/refresh", response_model=Snapshot, summary="Re-collect the snapshot")
def refresh_system_info(service: Service) -> Snapshot:
    return service.refresh_system_info()


@router.get("/battery", response_model=ActionOutcome)
def get_battery_info(service: Service) -> ActionOutcome:
    return service.get_battery_info()


@router.get("/temperature", response_model=ActionOutcome)
def get_temperature_info(service: Service) -> ActionOutcome:
    return service.get_temperature_info()


@router.get("/display", response_model=ActionOutcome)
def get_display_info(service: Service) -> ActionOutcome:
    return service.get_display_info()


__all__ = ["router"]
