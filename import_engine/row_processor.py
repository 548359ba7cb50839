"""
import_engine.row_processor - Validate and transform one projected row into a Contact.

Single-responsibility: given a ContactDraft, either return a Contact
object ready to be added, or raise RowError.
"""

from __future__ import annotations

import re

from db.models import Contact
from import_engine.mapping import ContactDraft
from schema.choices import DEFAULT_STATUS

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

OPTIONAL_COLUMNS = ("first_name", "last_name", "job_title", "phone", "website", "notes")


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value or ""))


class RowError(Exception):
    """Raised when a row cannot be imported."""
    pass


class RowProcessor:

    def process(self, draft: ContactDraft) -> Contact:
        """
        Validate one draft and build a Contact.
        Raises RowError on any problem.
        """
        email = (draft.email or "").strip()
        if not email:
            raise RowError("Missing email")
        if not is_valid_email(email):
            raise RowError(f"Invalid email address: {email}")

        contact = Contact(
            email=email,
            # Required by the table but not by the import; store blanks
            company_name=draft.company_name or "",
            industry=draft.industry or "",
            state=draft.state or "",
            status=draft.status or DEFAULT_STATUS,
        )
        for col in OPTIONAL_COLUMNS:
            setattr(contact, col, getattr(draft, col) or None)
        return contact
