"""ActionOutcome: the value every diagnostic or control action returns."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ActionOutcome(BaseModel):
    """Result of one dispatcher call. Failures are data, never exceptions."""

    action: str
    success: bool
    output: Any = Field(default=None, description="Captured text or a structured mapping.")
    error: str | None = None

    @classmethod
    def succeeded(cls, action: str, output: Any = None) -> ActionOutcome:
        return cls(action=action, success=True, output=output)

    @classmethod
    def failed(cls, action: str, error: str) -> ActionOutcome:
        return cls(action=action, success=False, error=error)


__all__ = ["ActionOutcome"]
