"""
import_engine.importer - Top-level orchestrator.

Coordinates mapping projection → row_processor → DB commit and
produces a structured ImportReport.

Rows are committed one at a time: a bad row is recorded in the report
and the run carries on (partial success, no batch rollback).
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.engine import get_session
from import_engine.csv_parser import ParsedTable
from import_engine.mapping import ColumnMapping, project_row
from import_engine.row_processor import RowProcessor, RowError
from import_engine.report import ImportReport

logger = logging.getLogger(__name__)


def run_import(
    table: ParsedTable,
    mapping: ColumnMapping,
    *,
    dry_run: bool = False,
    delay: float = 0.0,
    session_factory: Callable[[], Session] = get_session,
) -> ImportReport:
    """
    Insert every row of ``table`` as a contact.

    Parameters
    ----------
    table : parsed CSV (header + rows)
    mapping : column → target assignment; must be valid
    dry_run : if True, wait ``delay`` seconds and write nothing
    session_factory : returns a new Session (tests inject their own)

    Returns
    -------
    ImportReport with per-row failure details.  Row numbers count the
    header as row 1.
    """
    if not mapping.is_valid:
        raise ValueError("Column mapping has no email column")

    report = ImportReport(dry_run=dry_run)

    if dry_run:
        time.sleep(delay)
        report.total_rows = table.data_row_count
        logger.info(f"Dry-run import: {report.total_rows} rows, "
                    f"mapping={mapping.to_dict()}")
        return report

    session = session_factory()
    processor = RowProcessor()

    try:
        for row_idx, row in enumerate(table.rows, start=2):   # row 1 = header
            report.total_rows += 1
            try:
                contact = processor.process(project_row(row, mapping))
            except RowError as exc:
                report.add_failure(row_idx, str(exc))
                continue

            session.add(contact)
            try:
                session.commit()
                report.inserted += 1
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error(f"Import row {row_idx} failed: {exc}")
                report.add_failure(row_idx, f"Insert failed: {exc}")
    finally:
        session.close()

    logger.info(f"Import finished: {report.inserted} inserted, "
                f"{report.failed} failed / {report.total_rows} rows")
    return report
