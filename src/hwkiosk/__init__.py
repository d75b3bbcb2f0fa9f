"""hwkiosk: hardware inventory and diagnostics core for a boot-time kiosk panel.

The package gathers a machine snapshot by invoking OS utilities, runs on-demand
diagnostic actions, and exports results to disk and removable media. The panel
itself talks to this core over the HTTP API in :mod:`hwkiosk.api`.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.3.0"
