"""
db - Database layer.

Public API:
    init_db()          → create engine + tables
    get_session()      → new Session
    check_connection() → (connected, error)
    safe_url(url)      → URL with the password masked
    Contact            → ORM model
"""

from db.engine import init_db, get_session, check_connection, safe_url, ConfigError   # noqa: F401
from db.models import Base, Contact                                          # noqa: F401
