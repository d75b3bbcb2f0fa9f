"""Core package initializer for hwkiosk.

Downstream code imports the pieces it needs directly, e.g.:
    from hwkiosk.core.settings import get_logger, load_settings
    from hwkiosk.core.assembler import SnapshotAssembler
"""

from __future__ import annotations

__all__ = ["__doc__"]
