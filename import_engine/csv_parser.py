"""
import_engine.csv_parser - Low-level CSV reading and cleaning.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Header whitespace stripping
  • Rejecting duplicate headers and ragged rows
  • Returns an immutable ParsedTable (header row + string matrix)
"""

from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from typing import Optional


class CsvParseError(ValueError):
    """Raised when the file cannot be turned into a header + rows table."""


@dataclass(frozen=True)
class ParsedTable:
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    @property
    def data_row_count(self) -> int:
        return len(self.rows)

    @property
    def total_row_count(self) -> int:
        """Data rows plus the header row."""
        return len(self.rows) + 1


def parse_table(raw: str | bytes, preview: Optional[int] = None) -> ParsedTable:
    """
    Parse raw CSV content.  The first non-blank line is the header row.

    ``preview`` caps the number of data rows read, so a large file can
    be sanity-checked without walking all of it.  A header-only file is
    returned with no rows; callers decide whether that is an error.
    """
    text = _decode(raw)
    if not text or not text.strip():
        raise CsvParseError("CSV file is empty")

    reader = csv.reader(io.StringIO(text))
    headers: list[str] | None = None
    rows: list[tuple[str, ...]] = []

    try:
        for line_no, record in enumerate(reader, start=1):
            if not record:
                continue                                  # blank line
            if headers is None:
                headers = [h.strip() for h in record]
                _check_unique(headers)
                continue
            if preview is not None and len(rows) >= preview:
                break
            if len(record) != len(headers):
                raise CsvParseError(
                    f"Row {line_no} has {len(record)} fields, "
                    f"expected {len(headers)}"
                )
            rows.append(tuple(record))
    except csv.Error as exc:
        raise CsvParseError(f"Malformed CSV: {exc}") from exc

    if headers is None:
        raise CsvParseError("CSV file is empty")

    return ParsedTable(headers=tuple(headers), rows=tuple(rows))


def _check_unique(headers: list[str]) -> None:
    seen: set[str] = set()
    for h in headers:
        if h in seen:
            raise CsvParseError(f"Duplicate column header: {h!r}")
        seen.add(h)


def _decode(raw: str | bytes) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode("utf-8", errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw
