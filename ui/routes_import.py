"""
ui.routes_import - CSV upload dialog and column-mapping page.
"""

from flask import request, render_template, redirect, url_for, flash

from ui import ui_bp
from import_engine.csv_parser import CsvParseError
from services.import_wizard import UploadRejected, ImportNotAllowed
from services.registry import get_services
from services.staging_store import StagingError


@ui_bp.route("/import", methods=["GET", "POST"])
def import_page():
    if request.method == "GET":
        return render_template("import.html", error=None)

    f = request.files.get("csv_file")
    if not f or not f.filename:
        return render_template("import.html", error="No file selected"), 400

    try:
        get_services().wizard.stage(f.filename, f.read())
    except UploadRejected as exc:
        return render_template("import.html", error=str(exc)), 400
    return redirect(url_for("ui.import_mapping"))


@ui_bp.route("/import/mapping", methods=["GET", "POST"])
def import_mapping():
    wizard = get_services().wizard
    try:
        if not wizard.ensure_loaded():
            return redirect(url_for("ui.index"))
    except (CsvParseError, StagingError) as exc:
        flash(f"Could not open the uploaded file: {exc}", "danger")
        return redirect(url_for("ui.index"))

    if request.method == "POST":
        changes = {
            header: request.form[f"map_{i}"]
            for i, header in enumerate(wizard.mapping.headers)
            if request.form.get(f"map_{i}")
        }
        try:
            wizard.update_mapping(changes)
        except ValueError as exc:
            flash(str(exc), "danger")

        if request.form.get("action") == "import":
            try:
                report = wizard.run_import()
            except ImportNotAllowed as exc:
                flash(str(exc), "danger")
            else:
                flash(f"Import complete: {report.inserted} imported, "
                      f"{report.failed} failed / {report.total_rows} rows",
                      "success" if not report.failed else "warning")
                for err in report.failed_rows[:10]:
                    flash(f"Row {err['row']}: {err['reason']}", "warning")
                return redirect(url_for("ui.index"))

    return render_template("import_mapping.html", wizard=wizard.state())


@ui_bp.route("/import/cancel", methods=["POST"])
def import_cancel():
    get_services().wizard.cancel()
    return redirect(url_for("ui.index"))
