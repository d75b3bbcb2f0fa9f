"""Results export to the primary directory and removable media."""

from __future__ import annotations

from .exporter import ResultExporter, export_filename

__all__ = ["ResultExporter", "export_filename"]
