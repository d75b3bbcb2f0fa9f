"""On-demand diagnostic and control actions."""

from __future__ import annotations

from .dispatcher import DiagnosticDispatcher

__all__ = ["DiagnosticDispatcher"]
