"""
services.import_wizard - Upload → map columns → import flow.

Step 1 (stage_upload): sanity-check the picked file and park it in the
staging store.  Step 2 (ImportWizard): parse the staged file, suggest a
column mapping, let the user adjust it, show a short preview, and run
the import.  The staged file is removed after an import or a cancel.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from sqlalchemy.orm import Session

import config
from db.engine import get_session
from import_engine.csv_parser import parse_table, ParsedTable, CsvParseError
from import_engine.field_map import TargetField, FIELD_LABELS
from import_engine.importer import run_import
from import_engine.mapping import ColumnMapping
from import_engine.report import ImportReport
from services.notifications import NotificationChannel, CONTACT_CHANGED
from services.staging_store import (
    StagingStore, StagedUpload, StagingError, StagingQuotaExceeded,
)

logger = logging.getLogger(__name__)


class UploadRejected(ValueError):
    """The picked file cannot be staged.  ``reason`` is a short machine tag."""

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class ImportNotAllowed(RuntimeError):
    """Import was requested while the wizard is not ready for it."""


def stage_upload(
    store: StagingStore,
    file_name: str,
    blob: bytes,
    *,
    max_bytes: int = config.MAX_UPLOAD_BYTES,
    preview_rows: int = config.VALIDATION_PREVIEW_ROWS,
) -> StagedUpload:
    """
    Validate a freshly picked file and stage it.

    Only the first ``preview_rows`` data rows are parsed here; the full
    parse happens on the mapping page.  Raises UploadRejected with the
    message to show the user.
    """
    if not file_name or not file_name.lower().endswith(".csv"):
        raise UploadRejected("Please upload a CSV file", "invalid_type")

    if len(blob) > max_bytes:
        raise UploadRejected(
            f"File size must be less than {max_bytes / 1024 / 1024:.0f}MB. "
            f"Current size: {len(blob) / 1024 / 1024:.2f}MB",
            "too_large",
        )

    try:
        table = parse_table(blob, preview=preview_rows)
    except CsvParseError as exc:
        raise UploadRejected(f"Error parsing CSV file: {exc}", "parse") from exc
    if table.data_row_count == 0:
        raise UploadRejected("CSV file is empty", "empty")

    try:
        return store.put(file_name, blob)
    except StagingQuotaExceeded as exc:
        logger.error(f"Staging quota exceeded for {file_name!r}: {exc}")
        raise UploadRejected(
            "Storage quota exceeded. Try a smaller CSV file or clear pending uploads.",
            "quota",
        ) from exc
    except StagingError as exc:
        logger.error(f"Staging failed for {file_name!r}: {exc}")
        raise UploadRejected(f"Failed to store file: {exc}", "storage") from exc


class ImportWizard:
    """
    Mapping & preview controller for the staged upload.

    State lives only while the mapping page is in use; reset() drops it.
    """

    def __init__(
        self,
        store: StagingStore,
        channel: NotificationChannel,
        *,
        dry_run: bool = False,
        delay: float = 0.0,
        preview_rows: int = config.PREVIEW_ROWS,
        session_factory: Callable[[], Session] = get_session,
    ):
        self.store = store
        self.channel = channel
        self.dry_run = dry_run
        self.delay = delay
        self.preview_rows = preview_rows
        self.session_factory = session_factory
        self._run_lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        self.file_name: Optional[str] = None
        self.table: Optional[ParsedTable] = None
        self.mapping: Optional[ColumnMapping] = None
        self.in_flight = False

    # ── Step 1 ─────────────────────────────────────────────────────────

    def stage(self, file_name: str, blob: bytes, **limits) -> StagedUpload:
        """Stage a new upload, discarding any mapping of the previous one."""
        upload = stage_upload(self.store, file_name, blob, **limits)
        self.reset()
        return upload

    # ── Step 2 ─────────────────────────────────────────────────────────

    @property
    def loaded(self) -> bool:
        return self.table is not None

    def load(self) -> bool:
        """
        Parse the staged upload and suggest a mapping.
        Returns False when nothing is staged.  CsvParseError propagates.
        """
        staged = self.store.get()
        if staged is None:
            self.reset()
            return False
        table = parse_table(staged.blob)
        self.file_name = staged.file_name
        self.table = table
        self.mapping = ColumnMapping.suggested(table.headers)
        self.in_flight = False
        return True

    def ensure_loaded(self) -> bool:
        return self.loaded or self.load()

    def set_mapping(self, header: str, target: TargetField | str) -> None:
        self._require_loaded()
        self.mapping.set_mapping(header, target)

    def update_mapping(self, changes: dict) -> None:
        """Apply several column changes; none are applied if one is invalid."""
        self._require_loaded()
        self.mapping.update(changes)

    @property
    def is_valid_mapping(self) -> bool:
        return self.mapping is not None and self.mapping.is_valid

    @property
    def can_import(self) -> bool:
        return self.loaded and self.is_valid_mapping and not self.in_flight

    def preview(self) -> dict:
        """First rows of the file with blank cells replaced by a placeholder."""
        self._require_loaded()
        rows = [
            [cell if cell else config.EMPTY_CELL_PLACEHOLDER for cell in row]
            for row in self.table.rows[:self.preview_rows]
        ]
        return {
            "headers": list(self.table.headers),
            "rows": rows,
            "total_rows": self.table.total_row_count,
            "data_rows": self.table.data_row_count,
        }

    def state(self) -> dict:
        self._require_loaded()
        return {
            "file_name": self.file_name,
            "mapping": self.mapping.to_dict(),
            "is_valid_mapping": self.is_valid_mapping,
            "can_import": self.can_import,
            "in_flight": self.in_flight,
            "fields": [{"value": f.value, "label": label}
                       for f, label in FIELD_LABELS.items()],
            "preview": self.preview(),
        }

    # ── Step 3 ─────────────────────────────────────────────────────────

    def run_import(self) -> ImportReport:
        # Guards and the in_flight claim are one atomic step
        with self._run_lock:
            if not self.loaded:
                raise ImportNotAllowed("No CSV file is staged")
            if self.in_flight:
                raise ImportNotAllowed("An import is already running")
            if not self.is_valid_mapping:
                raise ImportNotAllowed("Email field required")
            self.in_flight = True

        try:
            report = run_import(
                self.table, self.mapping,
                dry_run=self.dry_run, delay=self.delay,
                session_factory=self.session_factory,
            )
            logger.info(f"Import of {self.file_name!r} complete: {report.to_dict()}")
            self.store.delete()
            self.reset()
        finally:
            self.in_flight = False

        self.channel.publish(CONTACT_CHANGED)
        return report

    def cancel(self) -> None:
        self.store.delete()
        self.reset()

    def _require_loaded(self) -> None:
        if not self.loaded:
            raise ImportNotAllowed("No CSV file is staged")
