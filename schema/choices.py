"""
schema.choices - Enumerated values for contact fields and filters.

The add/edit form only accepts values listed here.  Imported rows are
stored as-is, so the dashboard filters must tolerate values outside
these lists.
"""

from __future__ import annotations

# Alphabetical
INDUSTRIES: list[str] = [
    "Federal Government",
    "Financial/Insurance",
    "School District",
    "State Government",
    "University",
]

STATUSES: list[str] = [
    "Valid",
    "Hard Bounce",
    "Soft Bounce",
    "Unsubscribe",
    "Do Not Contact",
]

DEFAULT_STATUS = "Valid"

US_STATES: list[str] = [
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
]

# value → label, in display order
DATE_RANGES: list[dict] = [
    {"value": "today",        "label": "Today"},
    {"value": "last_7_days",  "label": "Last 7 days"},
    {"value": "last_30_days", "label": "Last 30 days"},
    {"value": "last_90_days", "label": "Last 90 days"},
    {"value": "this_year",    "label": "This year"},
]


def as_dict() -> dict:
    """All choice lists in one JSON-friendly dict."""
    return {
        "industries": INDUSTRIES,
        "states": US_STATES,
        "statuses": STATUSES,
        "date_ranges": DATE_RANGES,
    }
