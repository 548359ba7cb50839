"""
services.staging_store - Single-slot on-disk staging for CSV uploads.

An uploaded file is parked here between "pick a file" and "confirm the
column mapping".  There is only ever one pending upload: put() replaces
whatever was staged before.  The slot survives page reloads and server
restarts but is cleared after a successful import or a cancel.

Layout:
    <base_dir>/current_upload/blob.bin
    <base_dir>/current_upload/_metadata.json
"""

from __future__ import annotations

import errno
import json
import logging
import os
import shutil
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SLOT_ID = "current_upload"
_BLOB_NAME = "blob.bin"
_META_NAME = "_metadata.json"

_QUOTA_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC)}


class StagingError(Exception):
    """Staging store could not complete an operation."""


class StagingQuotaExceeded(StagingError):
    """The file does not fit in the staging area."""


class StagingUnavailable(StagingError):
    """The staging area cannot be read or written (permissions, I/O)."""


@dataclass(frozen=True)
class StagedUpload:
    id: str
    blob: bytes
    file_name: str
    stored_at_ms: int


class StagingStore:

    def __init__(self, base_dir: str | Path, quota_bytes: Optional[int] = None):
        self.base_dir = Path(base_dir)
        self.quota_bytes = quota_bytes

    @property
    def _slot_dir(self) -> Path:
        return self.base_dir / SLOT_ID

    # ── Write ──────────────────────────────────────────────────────────

    def put(self, file_name: str, blob: bytes) -> StagedUpload:
        """Stage ``blob``, replacing any previously staged upload."""
        if self.quota_bytes is not None and len(blob) > self.quota_bytes:
            raise StagingQuotaExceeded(
                f"QuotaExceededError: {len(blob)} bytes exceeds the "
                f"{self.quota_bytes} byte staging quota"
            )

        upload = StagedUpload(
            id=SLOT_ID,
            blob=blob,
            file_name=file_name,
            stored_at_ms=int(time.time() * 1000),
        )
        meta = {
            "id": upload.id,
            "file_name": upload.file_name,
            "stored_at_ms": upload.stored_at_ms,
            "size": len(blob),
        }

        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            # Both files go into a fresh directory that replaces the slot whole
            tmp_dir = Path(tempfile.mkdtemp(dir=self.base_dir, prefix=".tmp_"))
            try:
                self._write_file(tmp_dir / _BLOB_NAME, blob)
                self._write_file(tmp_dir / _META_NAME,
                                 json.dumps(meta, indent=2).encode("utf-8"))
                self._swap_in(tmp_dir)
            finally:
                if tmp_dir.exists():
                    shutil.rmtree(tmp_dir, ignore_errors=True)
        except OSError as exc:
            raise self._translate(exc, "store file") from exc

        logger.info(f"Staged upload {file_name!r} ({len(blob)} bytes)")
        return upload

    # ── Read ───────────────────────────────────────────────────────────

    def get(self) -> Optional[StagedUpload]:
        """Return the staged upload, or None if nothing is staged."""
        meta_path = self._slot_dir / _META_NAME
        blob_path = self._slot_dir / _BLOB_NAME
        try:
            if not meta_path.exists() or not blob_path.exists():
                return None
            meta = json.loads(meta_path.read_text(encoding="utf-8"))
            blob = blob_path.read_bytes()
        except OSError as exc:
            raise self._translate(exc, "read staged file") from exc
        except json.JSONDecodeError as exc:
            raise StagingUnavailable(f"Corrupt staging metadata: {exc}") from exc

        return StagedUpload(
            id=meta.get("id", SLOT_ID),
            blob=blob,
            file_name=meta["file_name"],
            stored_at_ms=int(meta["stored_at_ms"]),
        )

    # ── Delete ─────────────────────────────────────────────────────────

    def delete(self) -> None:
        """Remove the staged upload.  No-op when nothing is staged."""
        if not self._slot_dir.exists():
            return
        try:
            shutil.rmtree(self._slot_dir)
        except OSError as exc:
            raise self._translate(exc, "delete staged file") from exc
        logger.info("Staged upload removed")

    def clear(self) -> None:
        """Remove everything under the staging directory."""
        if not self.base_dir.exists():
            return
        try:
            for item in self.base_dir.iterdir():
                if item.is_dir():
                    shutil.rmtree(item)
                else:
                    item.unlink()
        except OSError as exc:
            raise self._translate(exc, "clear staging area") from exc

    # ── Private helpers ────────────────────────────────────────────────

    def _write_file(self, target: Path, data: bytes) -> None:
        with open(target, "wb") as fh:
            fh.write(data)

    def _swap_in(self, tmp_dir: Path) -> None:
        """Move ``tmp_dir`` into the slot.  On failure the previous upload is kept."""
        old_dir = self.base_dir / f".old_{SLOT_ID}"
        if old_dir.exists():
            shutil.rmtree(old_dir)
        if self._slot_dir.exists():
            os.replace(self._slot_dir, old_dir)
        try:
            os.replace(tmp_dir, self._slot_dir)
        except OSError:
            if old_dir.exists():
                os.replace(old_dir, self._slot_dir)
            raise
        if old_dir.exists():
            shutil.rmtree(old_dir)

    @staticmethod
    def _translate(exc: OSError, action: str) -> StagingError:
        if exc.errno in _QUOTA_ERRNOS:
            return StagingQuotaExceeded(f"QuotaExceededError: {exc}")
        return StagingUnavailable(f"Failed to {action}: {exc}")
