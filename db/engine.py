"""
db.engine - Engine bootstrap and session factory.

The connection string comes from config.DB_URL.  Any SQLAlchemy URL
works; production points it at the hosted Postgres instance and the
tests use a throwaway SQLite file.
"""

from __future__ import annotations

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from db.models import Base

_engine = None
_SessionLocal: sessionmaker | None = None


class ConfigError(RuntimeError):
    """Required connection settings are missing."""


def init_db(db_url: str | None) -> None:
    """Create the engine, apply SQLite pragmas, and emit CREATE TABLE."""
    global _engine, _SessionLocal

    if not db_url:
        raise ConfigError(
            "Missing database connection settings. "
            "Please set CEDB_DB_URL in the environment."
        )

    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(db_url, echo=False, future=True)

    if db_url.startswith("sqlite"):
        @event.listens_for(_engine, "connect")
        def _sqlite_pragmas(dbapi_conn, _rec):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA journal_mode=WAL")
            cur.execute("PRAGMA synchronous=NORMAL")
            cur.close()

    Base.metadata.create_all(_engine)
    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)


def get_session() -> Session:
    """Return a new session.  Caller is responsible for .close()."""
    if _SessionLocal is None:
        raise RuntimeError("Database not initialised - call init_db() first")
    return _SessionLocal()


def check_connection() -> tuple[bool, str | None]:
    """Round-trip a trivial query.  Returns (connected, error_message)."""
    if _engine is None:
        return False, "Database not initialised"
    try:
        with _engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True, None
    except SQLAlchemyError as exc:
        return False, str(exc)


def safe_url(db_url: str) -> str:
    """Connection URL with the password masked, safe to log or return."""
    try:
        return make_url(db_url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable URL>"
