"""
import_engine.report - Structured result of a CSV import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    total_rows: int = 0
    inserted: int = 0
    dry_run: bool = False
    failed_rows: list[dict] = field(default_factory=list)   # [{row, reason}]

    @property
    def failed(self) -> int:
        return len(self.failed_rows)

    def add_failure(self, row: int, reason: str):
        self.failed_rows.append({"row": row, "reason": reason})

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "inserted": self.inserted,
            "failed": self.failed,
            "dry_run": self.dry_run,
            "failed_rows": self.failed_rows,
        }
