"""
ui.routes_dashboard - Main contacts table with search, filters and stats.
"""

from flask import request, render_template, redirect, url_for, flash

from ui import ui_bp
from services.registry import get_services
from services.search_service import FilterState
from schema.choices import INDUSTRIES, US_STATES, STATUSES, DATE_RANGES


@ui_bp.route("/")
def index():
    try:
        state = FilterState.from_args(request.args)
    except ValueError:
        flash("Unknown date range ignored", "warning")
        args = request.args.copy()
        args.pop("date_range", None)
        state = FilterState.from_args(args)

    contact_list = get_services().contact_list
    rows, stats = contact_list.view(state)
    return render_template(
        "dashboard.html",
        contacts=rows, stats=stats, filters=state,
        error=contact_list.error,
        industries=INDUSTRIES, states=US_STATES,
        statuses=STATUSES, date_ranges=DATE_RANGES,
    )


@ui_bp.route("/refresh", methods=["POST"])
def refresh():
    contact_list = get_services().contact_list
    if not contact_list.refresh():
        flash(f"Failed to load contacts: {contact_list.error}", "danger")
    return redirect(url_for("ui.index"))
