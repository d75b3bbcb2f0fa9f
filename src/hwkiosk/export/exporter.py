"""Result Exporter: persist a snapshot plus test results as one JSON document.

- Filename pattern: ``hardware-test-results-<ISO timestamp>.json`` with ``:``
  and ``.`` replaced by ``-`` (``2026-10-19T08-15-02-123Z``).
- Primary directory: ``HWKIOSK_EXPORT_DIR`` (``/tmp`` by default). This write
  alone decides ``success``.
- Mirror: the first immediate subdirectory of the first usable mount root
  (``/media``, ``/mnt``, ``/run/media``) receives a copy. Mirroring is
  opportunistic: its failures are recorded in ``MirrorOutcome.errors`` and
  never change the result. Only one mirror copy is made, even when several
  removable drives are mounted.
"""

from __future__ import annotations

import json
import shutil
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from hwkiosk.core.contracts.export import ExportRecord, ExportResult, MirrorOutcome
from hwkiosk.core.contracts.snapshot import Snapshot
from hwkiosk.core.result import Result, err, ok
from hwkiosk.core.settings import Settings, get_logger

log = get_logger(__name__)

FILENAME_PREFIX = "hardware-test-results-"


def iso_timestamp(moment: datetime | None = None) -> str:
    """Return ``moment`` (default: now) as UTC ISO-8601 with ms and a trailing Z."""
    moment = (moment or datetime.now(UTC)).astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def export_filename(timestamp: str) -> str:
    """Build the export filename, replacing characters unsafe in filenames."""
    safe_ts = timestamp.replace(":", "-").replace(".", "-")
    return f"{FILENAME_PREFIX}{safe_ts}.json"


def _unique_path(directory: Path, filename: str) -> Path:
    path = directory / filename
    stem, suffix = path.stem, path.suffix
    counter = 1
    while path.exists():
        path = directory / f"{stem}-{counter}{suffix}"
        counter += 1
    return path


def _first_subdirectory(root: Path) -> Path | None:
    for entry in sorted(root.iterdir()):
        if entry.is_dir():
            return entry
    return None


class ResultExporter:
    """Write export records to a primary directory and mirror them once."""

    def __init__(
        self,
        export_dir: Path,
        mirror_roots: Sequence[Path] = (),
        kiosk_mode: bool = True,
    ) -> None:
        self.export_dir = Path(export_dir)
        self.mirror_roots = [Path(p) for p in mirror_roots]
        self.kiosk_mode = kiosk_mode

    @classmethod
    def from_settings(cls, settings: Settings) -> ResultExporter:
        return cls(settings.export_dir, settings.mirror_roots, settings.kiosk_mode)

    def build_record(self, snapshot: Snapshot, test_results: Any) -> ExportRecord:
        return ExportRecord(
            timestamp=iso_timestamp(),
            system_info=snapshot,
            test_results=test_results,
            bootable_version=self.kiosk_mode,
        )

    def export(self, snapshot: Snapshot, test_results: Any) -> ExportResult:
        """Write the record; mirror it only if the primary write succeeded."""
        written = self._write_primary(self.build_record(snapshot, test_results))
        if written.is_err():
            error = written.unwrap_err()
            log.error("Export failed: %s", error)
            return ExportResult(success=False, error=error)

        filepath = written.unwrap()
        log.info("Results saved to %s", filepath)
        return ExportResult(success=True, filepath=filepath, mirror=self.mirror(filepath))

    def _write_primary(self, record: ExportRecord) -> Result[Path, str]:
        try:
            payload = record.model_dump(mode="json", by_alias=True)
            text = json.dumps(payload, ensure_ascii=False, indent=2)
            self.export_dir.mkdir(parents=True, exist_ok=True)
            path = _unique_path(self.export_dir, export_filename(record.timestamp))
            with path.open("x", encoding="utf-8") as f:
                f.write(text)
                f.write("\n")
        except (OSError, TypeError, ValueError) as exc:
            return err(f"{type(exc).__name__}: {exc}")
        return ok(path)

    def mirror(self, filepath: Path) -> MirrorOutcome:
        """Copy ``filepath`` into the first removable-media directory found.

        Roots that are missing or unreadable are skipped. Once a directory is
        found exactly one copy is attempted there, successful or not.
        """
        outcome = MirrorOutcome()
        for root in self.mirror_roots:
            try:
                target_dir = _first_subdirectory(root)
            except OSError as exc:
                log.debug("Mirror root %s skipped: %s", root, exc)
                outcome.errors.append(f"{root}: {exc}")
                continue
            if target_dir is None:
                continue

            outcome.attempted = True
            target = target_dir / filepath.name
            try:
                shutil.copyfile(filepath, target)
            except OSError as exc:
                log.debug("Mirror copy to %s failed: %s", target, exc)
                outcome.errors.append(f"{target}: {exc}")
            else:
                log.info("Results saved to USB: %s", target)
                outcome.path = target
            break
        return outcome


__all__ = ["FILENAME_PREFIX", "ResultExporter", "export_filename", "iso_timestamp"]
