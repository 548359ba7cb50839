"""
services.contact_list - In-memory contact list behind the dashboard.

Holds the full active contact set and re-fetches it whenever the
notification channel reports a contact change.  Filtering is delegated
to services.search_service and never touches the database.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.engine import get_session
from services.contacts_service import ContactsService
from services.notifications import NotificationChannel, CONTACT_CHANGED
from services.search_service import (
    ContactRow, FilterState, Stats, filter_contacts, compute_stats,
)

logger = logging.getLogger(__name__)


class ContactListView:

    def __init__(
        self,
        channel: NotificationChannel,
        session_factory: Callable[[], Session] = get_session,
    ):
        self._channel = channel
        self._session_factory = session_factory
        self.rows: list[ContactRow] = []
        self.refresh_trigger = 0
        self.error: Optional[str] = None
        self.loaded = False
        channel.subscribe(CONTACT_CHANGED, self._on_contact_changed)

    def _on_contact_changed(self) -> None:
        self.refresh_trigger += 1
        logger.info("Contact changed event received, refreshing data...")
        self.refresh()

    def refresh(self) -> bool:
        """Re-fetch the base set.  On failure the previous set is kept and error is set."""
        session = self._session_factory()
        try:
            contacts = ContactsService.list_active(session)
            self.rows = [ContactRow.from_contact(c) for c in contacts]
            self.error = None
            self.loaded = True
            return True
        except SQLAlchemyError as exc:
            logger.error(f"Failed to fetch contacts: {exc}")
            self.error = str(exc)
            return False
        finally:
            session.close()

    def ensure_loaded(self) -> None:
        if not self.loaded:
            self.refresh()

    def filtered(self, state: FilterState, now: Optional[datetime] = None) -> list[ContactRow]:
        self.ensure_loaded()
        return filter_contacts(self.rows, state, now)

    def view(self, state: FilterState, now: Optional[datetime] = None) -> tuple[list[ContactRow], Stats]:
        """Filtered rows plus stats computed over those rows."""
        rows = self.filtered(state, now)
        return rows, compute_stats(rows)

    def close(self) -> None:
        self._channel.unsubscribe(CONTACT_CHANGED, self._on_contact_changed)
