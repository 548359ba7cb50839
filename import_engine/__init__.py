"""
import_engine - CSV import pipeline.

Public API:
    parse_table(raw, preview=None)     → ParsedTable
    auto_map(headers)                  → {header: TargetField}
    ColumnMapping                      → user-adjustable mapping
    run_import(table, mapping, …)      → ImportReport
"""

from import_engine.csv_parser import parse_table, ParsedTable, CsvParseError   # noqa: F401
from import_engine.field_map import TargetField, FIELD_LABELS, auto_map       # noqa: F401
from import_engine.mapping import ColumnMapping, ContactDraft, project_row     # noqa: F401
from import_engine.importer import run_import                                  # noqa: F401
from import_engine.report import ImportReport                                  # noqa: F401
