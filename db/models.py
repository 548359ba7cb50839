"""
db.models - SQLAlchemy ORM declarations.

Tables
------
contacts - one row per cold-email lead.  Rows are never physically
           removed by the dashboard; ``deleted_at`` marks a soft delete
           and every listing query filters on it.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Text, Index
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class Base(DeclarativeBase):
    pass


class Contact(Base):
    __tablename__ = "contacts"

    # ── Primary key ────────────────────────────────────────────────────
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # ── Required columns ───────────────────────────────────────────────
    email        = Column(String(320), nullable=False, index=True)
    company_name = Column(String(300), nullable=False, default="")
    industry     = Column(String(100), nullable=False, default="", index=True)
    state        = Column(String(2), nullable=False, default="", index=True)
    status       = Column(String(50), nullable=False, default="Valid", index=True)

    # ── Optional columns ───────────────────────────────────────────────
    first_name = Column(String(200), nullable=True)
    last_name  = Column(String(200), nullable=True)
    job_title  = Column(String(300), nullable=True)
    phone      = Column(String(100), nullable=True)
    website    = Column(String(500), nullable=True)
    notes      = Column(Text, nullable=True)

    # ── Timestamps ─────────────────────────────────────────────────────
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow,
                        onupdate=_utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_contacts_active_created", "deleted_at", "created_at"),
    )

    @property
    def full_name(self) -> str | None:
        return " ".join(p for p in (self.first_name, self.last_name) if p) or None

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "company_name": self.company_name,
            "industry": self.industry,
            "state": self.state,
            "status": self.status,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "job_title": self.job_title,
            "phone": self.phone,
            "website": self.website,
            "notes": self.notes,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "deleted_at": _iso(self.deleted_at),
        }
