"""
api.routes_import - /api/v1/import wizard endpoints.

    POST   /import/upload   stage a CSV (multipart 'csv_file' or raw body + ?name=)
    GET    /import/mapping  parsed headers, suggested/current mapping, preview
    PUT    /import/mapping  JSON {header: target, …}
    POST   /import/run      import the staged file with the current mapping
    DELETE /import          cancel: drop the staged file
"""

from flask import request, jsonify

from api import api_bp
from services.registry import get_services


@api_bp.route("/import/upload", methods=["POST"])
def api_import_upload():
    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            return jsonify({"error": "no csv_file in upload"}), 400
        name, content = f.filename or "", f.read()
    else:
        name, content = request.args.get("name", "upload.csv"), request.get_data()

    if not content:
        return jsonify({"error": "empty body"}), 400

    upload = get_services().wizard.stage(name, content)
    return jsonify({
        "file_name": upload.file_name,
        "size": len(upload.blob),
        "stored_at_ms": upload.stored_at_ms,
    }), 201


@api_bp.route("/import/mapping")
def api_import_mapping():
    wizard = get_services().wizard
    if not wizard.ensure_loaded():
        return jsonify({"error": "no staged upload"}), 404
    return jsonify(wizard.state())


@api_bp.route("/import/mapping", methods=["PUT"])
def api_import_set_mapping():
    wizard = get_services().wizard
    if not wizard.ensure_loaded():
        return jsonify({"error": "no staged upload"}), 404

    changes = request.get_json(force=True) or {}
    if not isinstance(changes, dict):
        return jsonify({"error": "expected a JSON object"}), 400
    try:
        wizard.update_mapping(changes)
    except (KeyError, ValueError) as exc:
        return jsonify({"error": str(exc.args[0]) if exc.args else str(exc)}), 400
    return jsonify(wizard.state())


@api_bp.route("/import/run", methods=["POST"])
def api_import_run():
    wizard = get_services().wizard
    if not wizard.ensure_loaded():
        return jsonify({"error": "no staged upload"}), 404
    report = wizard.run_import()
    return jsonify(report.to_dict())


@api_bp.route("/import", methods=["DELETE"])
def api_import_cancel():
    get_services().wizard.cancel()
    return jsonify({"cancelled": True})
