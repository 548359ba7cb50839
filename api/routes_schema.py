"""
api.routes_schema - /api/v1/schema/* endpoints.

Expose the fixed value sets so external tools can build forms and
filters without hard-coding them.
"""

from flask import jsonify

from api import api_bp
from import_engine.field_map import FIELD_LABELS
from schema.choices import as_dict


@api_bp.route("/schema/choices")
def schema_choices():
    """Industries, states, statuses and date-range buckets."""
    return jsonify(as_dict())


@api_bp.route("/schema/import_fields")
def schema_import_fields():
    """Target fields a CSV column can be mapped to."""
    return jsonify([
        {"value": f.value, "label": label}
        for f, label in FIELD_LABELS.items()
    ])
