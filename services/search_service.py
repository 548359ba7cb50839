"""
services.search_service - Client-side search and filtering of contacts.

The dashboard fetches the whole active contact set once and narrows it
in memory.  Every step of the pipeline is a pure, order-preserving
predicate, so the steps commute and the result never depends on which
filter the user touched first.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, Optional

from db.models import Contact

VALID_STATUS = "Valid"


class DateRange(str, Enum):
    TODAY        = "today"
    LAST_7_DAYS  = "last_7_days"
    LAST_30_DAYS = "last_30_days"
    LAST_90_DAYS = "last_90_days"
    THIS_YEAR    = "this_year"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["DateRange"]:
        """'' / None → no date filter; unknown values raise ValueError."""
        if not value:
            return None
        return cls(value)


# Rolling windows.  THIS_YEAR is a calendar check instead (see _in_range).
_WINDOWS: dict[DateRange, timedelta] = {
    DateRange.TODAY:        timedelta(days=1),
    DateRange.LAST_7_DAYS:  timedelta(days=7),
    DateRange.LAST_30_DAYS: timedelta(days=30),
    DateRange.LAST_90_DAYS: timedelta(days=90),
}


@dataclass(frozen=True)
class ContactRow:
    """Flattened contact as shown in the dashboard table."""

    id: str
    email: str
    name: Optional[str]
    company: Optional[str]
    industry: Optional[str]
    state: Optional[str]
    status: Optional[str]
    created_at: datetime

    @classmethod
    def from_contact(cls, c: Contact) -> "ContactRow":
        return cls(
            id=c.id,
            email=c.email,
            name=c.full_name,
            company=c.company_name,
            industry=c.industry,
            state=c.state,
            status=c.status,
            created_at=_as_utc(c.created_at),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "company": self.company,
            "industry": self.industry,
            "state": self.state,
            "status": self.status,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class FilterState:
    selected_industries: frozenset[str] = field(default_factory=frozenset)
    selected_states: frozenset[str] = field(default_factory=frozenset)
    selected_statuses: frozenset[str] = field(default_factory=frozenset)
    selected_date_range: Optional[DateRange] = None
    search_query: str = ""

    @classmethod
    def build(
        cls,
        *,
        industries: Iterable[str] = (),
        states: Iterable[str] = (),
        statuses: Iterable[str] = (),
        date_range: Optional[str] = None,
        q: str = "",
    ) -> "FilterState":
        return cls(
            selected_industries=frozenset(v for v in industries if v),
            selected_states=frozenset(v for v in states if v),
            selected_statuses=frozenset(v for v in statuses if v),
            selected_date_range=DateRange.parse(date_range),
            search_query=q or "",
        )

    @classmethod
    def from_args(cls, args) -> "FilterState":
        """Build from query-string args (werkzeug MultiDict)."""
        return cls.build(
            industries=args.getlist("industry"),
            states=args.getlist("state"),
            statuses=args.getlist("status"),
            date_range=args.get("date_range", "").strip(),
            q=args.get("q", ""),
        )

    @property
    def active_count(self) -> int:
        """Number of active filter chips (search box not included)."""
        return (len(self.selected_industries) + len(self.selected_states)
                + len(self.selected_statuses)
                + (1 if self.selected_date_range else 0))


@dataclass(frozen=True)
class Stats:
    total: int
    valid: int

    def to_dict(self) -> dict:
        return {"total": self.total, "valid": self.valid}


# ── Predicates ─────────────────────────────────────────────────────────

def matches_search(row: ContactRow, query: str) -> bool:
    if not query:
        return True
    q = query.lower()
    return any(
        value and q in value.lower()
        for value in (row.name, row.email, row.company)
    )


def _in_selection(value: Optional[str], selected: frozenset[str]) -> bool:
    if not selected:
        return True
    return bool(value) and value in selected


def _in_range(row: ContactRow, date_range: Optional[DateRange], now: datetime) -> bool:
    if date_range is None:
        return True
    created = _as_utc(row.created_at)
    if date_range is DateRange.THIS_YEAR:
        return created.year == now.year
    return now - created < _WINDOWS[date_range]


def filter_contacts(
    rows: Iterable[ContactRow],
    state: FilterState,
    now: Optional[datetime] = None,
) -> list[ContactRow]:
    """Apply search, multi-select and date filters; input order is kept."""
    now = _as_utc(now) if now else datetime.now(timezone.utc)
    return [
        r for r in rows
        if matches_search(r, state.search_query)
        and _in_selection(r.industry, state.selected_industries)
        and _in_selection(r.state, state.selected_states)
        and _in_selection(r.status, state.selected_statuses)
        and _in_range(r, state.selected_date_range, now)
    ]


def compute_stats(rows: Iterable[ContactRow]) -> Stats:
    rows = list(rows)
    return Stats(
        total=len(rows),
        valid=sum(1 for r in rows if r.status == VALID_STATUS),
    )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
