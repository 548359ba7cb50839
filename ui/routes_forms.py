"""
ui.routes_forms - Add / Edit contact forms.
"""

import logging

from flask import request, render_template, redirect, url_for, flash, abort
from sqlalchemy.exc import SQLAlchemyError

from ui import ui_bp
from db import get_session
from services.contacts_service import ContactsService, ContactValidationError
from services.notifications import CONTACT_CHANGED
from services.registry import get_services
from schema.choices import INDUSTRIES, US_STATES, STATUSES, DEFAULT_STATUS

logger = logging.getLogger(__name__)


def _render_form(mode: str, values: dict, contact_id: str | None = None,
                 error: str | None = None, status_code: int = 200):
    return render_template(
        "contact_form.html",
        mode=mode, values=values, contact_id=contact_id, error=error,
        industries=INDUSTRIES, states=US_STATES, statuses=STATUSES,
    ), status_code


# ── Add ────────────────────────────────────────────────────────────────

@ui_bp.route("/contacts/add", methods=["GET", "POST"])
def contact_add():
    if request.method == "GET":
        return _render_form("add", {"status": DEFAULT_STATUS})

    data = dict(request.form)
    session = get_session()
    try:
        contact = ContactsService.create(session, data)
        session.commit()
        logger.info(f"Contact added: {contact.id} <{contact.email}>")
    except ContactValidationError as exc:
        session.rollback()
        return _render_form("add", data, error=str(exc), status_code=400)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f"Insert failed: {exc}")
        return _render_form("add", data, error=str(exc) or "Database insert failed",
                            status_code=500)
    finally:
        session.close()

    get_services().channel.publish(CONTACT_CHANGED)
    flash(f"Contact {contact.email} added", "success")
    return redirect(url_for("ui.index"))


# ── Edit ───────────────────────────────────────────────────────────────

@ui_bp.route("/contacts/<contact_id>/edit", methods=["GET", "POST"])
def contact_edit(contact_id: str):
    session = get_session()
    try:
        contact = ContactsService.get(session, contact_id)
        if not contact:
            abort(404)

        if request.method == "GET":
            return _render_form("edit", contact.to_dict(), contact_id=contact_id)

        data = dict(request.form)
        try:
            ContactsService.update(session, contact, data)
            session.commit()
            logger.info(f"Contact updated: {contact_id}")
        except ContactValidationError as exc:
            session.rollback()
            return _render_form("edit", data, contact_id=contact_id,
                                error=str(exc), status_code=400)
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error(f"Update failed: {exc}")
            return _render_form("edit", data, contact_id=contact_id,
                                error=str(exc) or "Database update failed",
                                status_code=500)
    finally:
        session.close()

    get_services().channel.publish(CONTACT_CHANGED)
    flash("Contact updated", "success")
    return redirect(url_for("ui.index"))
