from datetime import datetime, timezone

from sqlalchemy.exc import OperationalError

from services.contact_list import ContactListView
from services.notifications import NotificationChannel, CONTACT_CHANGED
from services.search_service import FilterState
from tests.factories import ContactFactory


def test_loads_lazily_and_skips_deleted(app):
    channel = NotificationChannel()
    view = ContactListView(channel)
    live = ContactFactory(company_name="Acme Corp")
    ContactFactory(company_name="Acme Gone", deleted_at=datetime.now(timezone.utc))

    rows, stats = view.view(FilterState.build(q="acme"))
    assert [r.id for r in rows] == [live.id]
    assert stats.total == 1
    view.close()


def test_refetches_on_every_contact_changed(app):
    channel = NotificationChannel()
    view = ContactListView(channel)
    view.ensure_loaded()
    assert view.rows == []

    ContactFactory()
    channel.publish(CONTACT_CHANGED)
    channel.publish(CONTACT_CHANGED)
    assert view.refresh_trigger == 2
    assert len(view.rows) == 1
    view.close()


def test_close_unsubscribes(app):
    channel = NotificationChannel()
    view = ContactListView(channel)
    view.close()
    view.close()        # second removal is ignored
    assert channel.publish(CONTACT_CHANGED) == 0


def test_fetch_failure_keeps_rows_and_sets_error(app):
    channel = NotificationChannel()
    view = ContactListView(channel)
    ContactFactory()
    view.refresh()
    assert len(view.rows) == 1

    class _Broken:
        def query(self, *_a, **_kw):
            raise OperationalError("SELECT", {}, Exception("connection refused"))

        def close(self):
            pass

    view._session_factory = _Broken
    assert view.refresh() is False
    assert "connection refused" in view.error
    assert len(view.rows) == 1
    view.close()
