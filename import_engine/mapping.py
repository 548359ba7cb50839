"""
import_engine.mapping - User-adjustable column mapping and row projection.

A ColumnMapping assigns every CSV header of one file to a TargetField.
Several headers may point at the same target; when a row is projected,
columns are applied left to right so the rightmost one wins.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Iterable, Mapping, Optional, Sequence

from import_engine.field_map import TargetField, REQUIRED_FIELD, auto_map


class ColumnMapping:

    def __init__(
        self,
        headers: Iterable[str],
        initial: Optional[Mapping[str, TargetField | str]] = None,
    ):
        self._headers = tuple(headers)
        self._targets: dict[str, TargetField] = {
            h: TargetField.SKIP for h in self._headers
        }
        if initial:
            self.update(initial)

    @classmethod
    def suggested(cls, headers: Iterable[str]) -> "ColumnMapping":
        """Mapping pre-filled by the auto-map heuristic."""
        headers = tuple(headers)
        return cls(headers, auto_map(headers))

    # ── Read ───────────────────────────────────────────────────────────

    @property
    def headers(self) -> tuple[str, ...]:
        return self._headers

    def get(self, header: str) -> TargetField:
        return self._targets.get(header, TargetField.SKIP)

    def targets(self) -> list[TargetField]:
        """Target per column, in header order."""
        return [self._targets[h] for h in self._headers]

    @property
    def is_valid(self) -> bool:
        """True when at least one column feeds the required email field."""
        return REQUIRED_FIELD in self._targets.values()

    def to_dict(self) -> dict[str, str]:
        return {h: self._targets[h].value for h in self._headers}

    # ── Write ──────────────────────────────────────────────────────────

    def set_mapping(self, header: str, target: TargetField | str) -> None:
        self.update({header: target})

    def update(self, changes: Mapping[str, TargetField | str]) -> None:
        """Apply several changes at once.  Nothing is applied if any entry is bad."""
        checked: dict[str, TargetField] = {}
        for header, target in changes.items():
            if header not in self._targets:
                raise KeyError(f"Unknown column: {header!r}")
            if not isinstance(target, TargetField):
                target = TargetField.parse(target)
            checked[header] = target
        self._targets.update(checked)


@dataclass
class ContactDraft:
    """One CSV row projected onto contact columns.  None = not mapped."""

    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    industry: Optional[str] = None
    state: Optional[str] = None
    status: Optional[str] = None
    job_title: Optional[str] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    notes: Optional[str] = None

    def as_dict(self) -> dict[str, Optional[str]]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def project_row(row: Sequence[str], mapping: ColumnMapping) -> ContactDraft:
    """Build a ContactDraft from one row; skipped columns are dropped."""
    draft = ContactDraft()
    for cell, target in zip(row, mapping.targets()):
        if target is TargetField.SKIP:
            continue
        setattr(draft, target.value, (cell or "").strip())
    return draft
