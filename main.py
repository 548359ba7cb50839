#!/usr/bin/env python3
"""
CEDB - Cold-Email Contacts Dashboard
====================================

Single-command run:  CEDB_DB_URL=... python main.py

See config.py for all environment-variable tunables.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from flask import Flask, render_template

import config
from db import init_db, safe_url, ConfigError
from api import api_bp
from ui import ui_bp
from services.registry import build_registry, EXTENSION_KEY


def create_app(
    db_url: Optional[str] = None,
    staging_dir: Optional[str | Path] = None,
    *,
    import_dry_run: Optional[bool] = None,
) -> Flask:
    """Flask application factory.  Raises ConfigError without a database URL."""

    app = Flask(
        __name__,
        template_folder=str(config.TEMPLATES_DIR),
    )
    app.secret_key = config.SECRET

    db_url = db_url if db_url is not None else config.DB_URL
    app.config["CEDB_DB_URL"] = db_url
    app.config["CEDB_MAX_UPLOAD_MB"] = config.MAX_UPLOAD_BYTES // (1024 * 1024)

    # ── Initialise database ─────────────────────────────────────────
    init_db(db_url)

    # ── Staging store, notification channel, contact list, wizard ───
    app.extensions[EXTENSION_KEY] = build_registry(
        staging_dir or config.STAGING_DIR,
        quota_bytes=config.STAGING_QUOTA_BYTES,
        dry_run=config.IMPORT_DRY_RUN if import_dry_run is None else import_dry_run,
        delay=config.IMPORT_DELAY,
    )

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)
    app.register_blueprint(ui_bp)

    # ── Error handlers ──────────────────────────────────────────────
    @app.errorhandler(404)
    def _404(e):
        return render_template("error.html", code=404,
                               message="Page not found"), 404

    @app.errorhandler(500)
    def _500(e):
        return render_template("error.html", code=500,
                               message="Internal server error"), 500

    return app


def main():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    print("=" * 56)
    print("  CEDB - Cold-Email Contacts Dashboard")
    print("=" * 56)

    try:
        app = create_app()
    except ConfigError as exc:
        print(f"FATAL: {exc}")
        sys.exit(1)

    print(f"  Database: {safe_url(config.DB_URL)}")
    print(f"  Staging:  {config.STAGING_DIR}")
    if config.IMPORT_DRY_RUN:
        print("  Import:   dry-run (nothing is written)")
    print(f"\n  http://{config.HOST}:{config.PORT}")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
