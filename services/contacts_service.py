"""
services.contacts_service - CRUD operations on Contact records.

All session management is the caller's responsibility (open before,
close/commit after).  This keeps the service testable and allows
the caller to batch multiple operations in one transaction.

Soft-deleted contacts (deleted_at set) are invisible to every read here.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from db.models import Contact
from import_engine.row_processor import is_valid_email
from schema.choices import INDUSTRIES, STATUSES, US_STATES, DEFAULT_STATUS

REQUIRED_FIELDS = ("email", "company_name", "industry", "state", "status")
OPTIONAL_FIELDS = ("first_name", "last_name", "job_title", "phone", "website", "notes")


class ContactValidationError(ValueError):
    """Form data failed validation; message is shown to the user as-is."""


def clean_form(data: dict) -> dict:
    """
    Validate add/edit form data and return the column values to write.
    Blank optional fields become None.
    """
    values = {k: str(data.get(k) or "").strip() for k in REQUIRED_FIELDS + OPTIONAL_FIELDS}
    if "status" not in data:
        values["status"] = DEFAULT_STATUS

    if not all(values[k] for k in REQUIRED_FIELDS):
        raise ContactValidationError(
            "Email, Industry, State, Company Name, and Status are required"
        )
    if not is_valid_email(values["email"]):
        raise ContactValidationError("Please enter a valid email address")
    if values["industry"] not in INDUSTRIES:
        raise ContactValidationError(f"Unknown industry: {values['industry']}")
    if values["state"] not in US_STATES:
        raise ContactValidationError(f"Unknown state: {values['state']}")
    if values["status"] not in STATUSES:
        raise ContactValidationError(f"Unknown status: {values['status']}")

    for k in OPTIONAL_FIELDS:
        values[k] = values[k] or None
    return values


class ContactsService:

    # ── Create ─────────────────────────────────────────────────────────

    @staticmethod
    def create(session: Session, data: dict) -> Contact:
        """Validate form data and add a new Contact.  Raises ContactValidationError."""
        contact = Contact(**clean_form(data))
        session.add(contact)
        session.flush()
        return contact

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def get(session: Session, contact_id: str) -> Contact | None:
        return (
            session.query(Contact)
            .filter(Contact.id == contact_id, Contact.deleted_at.is_(None))
            .one_or_none()
        )

    @staticmethod
    def list_active(session: Session) -> list[Contact]:
        """All non-deleted contacts, newest first."""
        return (
            session.query(Contact)
            .filter(Contact.deleted_at.is_(None))
            .order_by(Contact.created_at.desc())
            .all()
        )

    # ── Update ─────────────────────────────────────────────────────────

    @staticmethod
    def update(session: Session, contact: Contact, data: dict) -> Contact:
        """Replace the editable columns of ``contact`` with validated form data."""
        for k, v in clean_form(data).items():
            # The edit form has no notes field; keep notes unless sent
            if k == "notes" and "notes" not in data:
                continue
            setattr(contact, k, v)
        session.flush()
        return contact
