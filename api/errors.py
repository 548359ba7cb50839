"""
api.errors - JSON error handlers for the API blueprint.
"""

import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from api import api_bp
from import_engine.csv_parser import CsvParseError
from services.contacts_service import ContactValidationError
from services.import_wizard import UploadRejected, ImportNotAllowed
from services.staging_store import StagingError

logger = logging.getLogger(__name__)


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500


@api_bp.errorhandler(ContactValidationError)
def api_validation_error(e):
    return jsonify({"error": str(e)}), 400


@api_bp.errorhandler(UploadRejected)
def api_upload_rejected(e):
    return jsonify({"error": str(e), "reason": e.reason}), 400


@api_bp.errorhandler(CsvParseError)
def api_parse_error(e):
    return jsonify({"error": f"Error parsing CSV file: {e}"}), 400


@api_bp.errorhandler(ImportNotAllowed)
def api_import_not_allowed(e):
    return jsonify({"error": str(e)}), 409


@api_bp.errorhandler(StagingError)
def api_staging_error(e):
    return jsonify({"error": str(e)}), 500


@api_bp.errorhandler(SQLAlchemyError)
def api_database_error(e):
    logger.error(f"Database error: {e}")
    return jsonify({"error": str(e)}), 500
