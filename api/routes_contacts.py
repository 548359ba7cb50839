"""
api.routes_contacts - /api/v1/contacts list + add/edit endpoints.
"""

import logging

from flask import request, jsonify
from sqlalchemy.exc import SQLAlchemyError

from api import api_bp
from db import get_session
from services.contacts_service import ContactsService, ContactValidationError
from services.notifications import CONTACT_CHANGED
from services.registry import get_services
from services.search_service import FilterState

logger = logging.getLogger(__name__)


@api_bp.route("/contacts")
def list_contacts():
    """
    GET /api/v1/contacts?q=&industry=&state=&status=&date_range=

    industry / state / status may repeat; values within one dimension
    are OR-ed.  Stats are computed over the filtered set.
    """
    try:
        state = FilterState.from_args(request.args)
    except ValueError:
        return jsonify({"error": f"unknown date_range: {request.args.get('date_range')}"}), 400

    contact_list = get_services().contact_list
    rows, stats = contact_list.view(state)
    body = {
        **stats.to_dict(),
        "contacts": [r.to_dict() for r in rows],
    }
    if contact_list.error:
        body["error"] = contact_list.error
    return jsonify(body)


@api_bp.route("/contacts/refresh", methods=["POST"])
def refresh_contacts():
    """POST /api/v1/contacts/refresh - re-fetch the dashboard's base set."""
    contact_list = get_services().contact_list
    if not contact_list.refresh():
        return jsonify({"error": contact_list.error}), 500
    return jsonify({"total": len(contact_list.rows)})


@api_bp.route("/contacts/<contact_id>")
def get_contact(contact_id: str):
    """GET /api/v1/contacts/{id}"""
    session = get_session()
    try:
        contact = ContactsService.get(session, contact_id)
        if not contact:
            return jsonify({"error": "not found"}), 404
        return jsonify(contact.to_dict())
    finally:
        session.close()


@api_bp.route("/contacts", methods=["POST"])
def create_contact():
    """
    POST /api/v1/contacts

    JSON body: {email, company_name, industry, state, status, …optional}.
    """
    data = request.get_json(force=True) or {}
    session = get_session()
    try:
        contact = ContactsService.create(session, data)
        session.commit()
        logger.info(f"Contact added: {contact.id} <{contact.email}>")
    except ContactValidationError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f"Insert failed: {exc}")
        return jsonify({"error": str(exc) or "Database insert failed"}), 400
    finally:
        session.close()

    get_services().channel.publish(CONTACT_CHANGED)
    return jsonify(contact.to_dict()), 201


@api_bp.route("/contacts/<contact_id>", methods=["PUT"])
def update_contact(contact_id: str):
    """PUT /api/v1/contacts/{id}  (JSON body with the full form)"""
    data = request.get_json(force=True) or {}
    session = get_session()
    try:
        contact = ContactsService.get(session, contact_id)
        if not contact:
            return jsonify({"error": "not found"}), 404
        ContactsService.update(session, contact, data)
        session.commit()
        logger.info(f"Contact updated: {contact.id}")
    except ContactValidationError as exc:
        session.rollback()
        return jsonify({"error": str(exc)}), 400
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(f"Update failed: {exc}")
        return jsonify({"error": str(exc) or "Database update failed"}), 400
    finally:
        session.close()

    get_services().channel.publish(CONTACT_CHANGED)
    return jsonify(contact.to_dict())
