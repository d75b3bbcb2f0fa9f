"""FastAPI dependencies: resolve the service bound to the app's context."""

from __future__ import annotations

from fastapi import Request

from hwkiosk.core.context import AppContext
from hwkiosk.service import KioskService


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context


def get_service(request: Request) -> KioskService:
    return KioskService(get_app_context(request))


__all__ = ["get_app_context", "get_service"]
