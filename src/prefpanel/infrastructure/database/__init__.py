"""SQLite preference storage via SQLAlchemy Core."""

from prefpanel.infrastructure.database.engine import create_db_engine, init_database
from prefpanel.infrastructure.database.schema import metadata, prefs
from prefpanel.infrastructure.database.store import SqlPreferenceService

__all__ = [
    "SqlPreferenceService",
    "create_db_engine",
    "init_database",
    "metadata",
    "prefs",
]
