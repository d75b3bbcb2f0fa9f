"""
Process-wide application context.

The context is the single owner of mutable kiosk state: the current
:class:`Snapshot` and the exit hook used by the "exit to console" action.
Everything else (settings, runner, registry) is fixed at construction.

Lifecycle
---------
- ``initialize()``       collect the boot snapshot once.
- ``refresh()``          re-collect and swap the snapshot in.
- ``replace_snapshot()`` atomic reference swap; no field-by-field edits.

First-time collection is serialised so concurrent readers share one
boot snapshot. Later swaps are plain reference assignments.

A process-wide instance is available through :func:`get_context`, following
the same lazily-created singleton accessor the API uses for its dependencies.
"""

from __future__ import annotations

import os
import signal
import threading
from collections.abc import Callable
from typing import ClassVar

from hwkiosk.core.assembler import SnapshotAssembler
from hwkiosk.core.contracts.snapshot import Snapshot
from hwkiosk.core.registry import ProbeRegistry, default_registry
from hwkiosk.core.runner import CommandRunner, ProcessRunner
from hwkiosk.core.settings import Settings, get_logger, load_settings

log = get_logger(__name__)

ExitHook = Callable[[], None]


def _terminate_process() -> None:
    """Ask the hosting server process to shut down cleanly."""
    os.kill(os.getpid(), signal.SIGTERM)


class AppContext:
    """Owns settings, the runner, the probe registry and the current snapshot."""

    _instance: ClassVar[AppContext | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(
        self,
        settings: Settings | None = None,
        runner: CommandRunner | None = None,
        registry: ProbeRegistry | None = None,
        exit_hook: ExitHook | None = None,
    ) -> None:
        self.settings = settings if settings is not None else load_settings()
        self.runner: CommandRunner = runner if runner is not None else ProcessRunner()
        self.registry = registry if registry is not None else default_registry()
        self.assembler = SnapshotAssembler(self.runner)
        self._exit_hook: ExitHook = exit_hook if exit_hook is not None else _terminate_process
        self._snapshot: Snapshot | None = None
        self._init_lock = threading.Lock()

    # ----- Singleton ---------------------------------------------------------
    @classmethod
    def get_instance(cls) -> AppContext:
        """Accessor for the process-wide instance."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def set_instance(cls, context: AppContext | None) -> None:
        """Install (or clear, with ``None``) the process-wide instance."""
        cls._instance = context

    # ----- Snapshot lifecycle ------------------------------------------------
    @property
    def initialized(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> Snapshot:
        """Current snapshot; collected on first access if needed."""
        current = self._snapshot
        if current is None:
            return self.initialize()
        return current

    def collect(self) -> Snapshot:
        """Collect a fresh snapshot without installing it."""
        return self.assembler.collect(self.registry.snapshot_probes())

    def initialize(self) -> Snapshot:
        """Collect the boot snapshot unless one is already installed.

        Concurrent first callers wait for a single collection.
        """
        current = self._snapshot
        if current is not None:
            return current
        with self._init_lock:
            current = self._snapshot
            if current is None:
                log.info("Collecting boot snapshot")
                current = self.collect()
                self.replace_snapshot(current)
        return current

    def refresh(self) -> Snapshot:
        """Re-collect and replace the snapshot wholesale."""
        snapshot = self.collect()
        self.replace_snapshot(snapshot)
        return snapshot

    def replace_snapshot(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot

    # ----- Exit --------------------------------------------------------------
    def set_exit_hook(self, hook: ExitHook) -> None:
        self._exit_hook = hook

    def request_exit(self) -> None:
        log.info("Exit to console requested")
        self._exit_hook()


def get_context() -> AppContext:
    """FastAPI dependency / module-level accessor for the shared context."""
    return AppContext.get_instance()


__all__ = ["AppContext", "ExitHook", "get_context"]
