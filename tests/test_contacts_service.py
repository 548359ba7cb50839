from datetime import datetime, timedelta, timezone

import pytest

from services.contacts_service import ContactsService, ContactValidationError, clean_form
from tests.factories import ContactFactory

FORM = {
    "email": "ann@acme.com",
    "company_name": "Acme Corp",
    "industry": "University",
    "state": "CA",
    "status": "Valid",
    "first_name": "Ann",
    "last_name": "",
}


def test_clean_form_blanks_optional_fields():
    values = clean_form(FORM)
    assert values["first_name"] == "Ann"
    assert values["last_name"] is None
    assert values["phone"] is None


def test_status_defaults_to_valid_when_absent():
    form = {k: v for k, v in FORM.items() if k != "status"}
    assert clean_form(form)["status"] == "Valid"


@pytest.mark.parametrize("missing", ["email", "company_name", "industry", "state", "status"])
def test_required_fields(missing):
    with pytest.raises(ContactValidationError, match="are required"):
        clean_form({**FORM, missing: "  "})


@pytest.mark.parametrize("email", ["plain", "a@b", "a b@c.com", "@c.com"])
def test_email_shape(email):
    with pytest.raises(ContactValidationError, match="valid email"):
        clean_form({**FORM, "email": email})


def test_choices_enforced():
    with pytest.raises(ContactValidationError, match="industry"):
        clean_form({**FORM, "industry": "Retail"})
    with pytest.raises(ContactValidationError, match="state"):
        clean_form({**FORM, "state": "ZZ"})


def test_create_and_get(session):
    contact = ContactsService.create(session, FORM)
    session.commit()
    fetched = ContactsService.get(session, contact.id)
    assert fetched.email == "ann@acme.com"
    assert fetched.status == "Valid"
    assert fetched.created_at is not None


def test_update_keeps_notes_when_not_sent(session):
    contact = ContactFactory(notes="met at expo")
    contact = ContactsService.get(session, contact.id)
    ContactsService.update(session, contact, {**FORM, "company_name": "New Co"})
    session.commit()
    assert contact.company_name == "New Co"
    assert contact.notes == "met at expo"


def test_list_active_excludes_deleted_newest_first(session):
    now = datetime.now(timezone.utc)
    old = ContactFactory(created_at=now - timedelta(days=2))
    new = ContactFactory(created_at=now)
    ContactFactory(deleted_at=now)
    ids = [c.id for c in ContactsService.list_active(session)]
    assert ids == [new.id, old.id]


def test_get_hides_deleted(session):
    gone = ContactFactory(deleted_at=datetime.now(timezone.utc))
    assert ContactsService.get(session, gone.id) is None
