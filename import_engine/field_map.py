"""
import_engine.field_map - CSV header → contact column mapping rules.

TargetField enumerates every column an import can write to, plus SKIP
for columns the user wants ignored.  auto_map() produces the default
suggestion shown on the mapping page.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class TargetField(str, Enum):
    EMAIL        = "email"
    FIRST_NAME   = "first_name"
    LAST_NAME    = "last_name"
    COMPANY_NAME = "company_name"
    INDUSTRY     = "industry"
    STATE        = "state"
    STATUS       = "status"
    JOB_TITLE    = "job_title"
    PHONE        = "phone"
    WEBSITE      = "website"
    NOTES        = "notes"
    SKIP         = "skip"

    @classmethod
    def parse(cls, value: str) -> "TargetField":
        """Look up by tag; raises ValueError for unknown tags."""
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown target field: {value!r}") from None


REQUIRED_FIELD = TargetField.EMAIL

# Dropdown labels, in display order
FIELD_LABELS: dict[TargetField, str] = {
    TargetField.EMAIL:        "Email *",
    TargetField.FIRST_NAME:   "First Name",
    TargetField.LAST_NAME:    "Last Name",
    TargetField.COMPANY_NAME: "Company Name",
    TargetField.INDUSTRY:     "Industry",
    TargetField.STATE:        "State",
    TargetField.STATUS:       "Status",
    TargetField.JOB_TITLE:    "Job Title",
    TargetField.PHONE:        "Phone",
    TargetField.WEBSITE:      "Website",
    TargetField.NOTES:        "Notes",
    TargetField.SKIP:         "— Skip Column —",
}

# (all-of keywords, any-of keywords, target).  Evaluated in order against
# the lower-cased header; first rule that matches wins.
AUTO_MAP_RULES: list[tuple[tuple[str, ...], tuple[str, ...], TargetField]] = [
    (("email",),          (), TargetField.EMAIL),
    (("first", "name"),   (), TargetField.FIRST_NAME),
    (("last", "name"),    (), TargetField.LAST_NAME),
    (("company",),        (), TargetField.COMPANY_NAME),
    (("industry",),       (), TargetField.INDUSTRY),
    (("state",),          (), TargetField.STATE),
    (("status",),         (), TargetField.STATUS),
    ((),      ("job", "title"), TargetField.JOB_TITLE),
    (("phone",),          (), TargetField.PHONE),
    (("website",),        (), TargetField.WEBSITE),
    (("note",),           (), TargetField.NOTES),
]


def guess_field(header: str) -> TargetField:
    """Suggest a target for one header, or SKIP."""
    h = header.lower().strip()
    for all_of, any_of, target in AUTO_MAP_RULES:
        if all_of and not all(k in h for k in all_of):
            continue
        if any_of and not any(k in h for k in any_of):
            continue
        return target
    return TargetField.SKIP


def auto_map(headers: Iterable[str]) -> dict[str, TargetField]:
    """Suggest a target for every header.  Pure; same input → same output."""
    return {h: guess_field(h) for h in headers}
