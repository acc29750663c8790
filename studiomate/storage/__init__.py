"""Storage module for SQLite database operations."""

from studiomate.storage.database import init_db, get_session, get_engine, reset_engine
from studiomate.storage.models import OpportunityRecord, SavedMatch

__all__ = [
    "init_db",
    "get_session",
    "get_engine",
    "reset_engine",
    "OpportunityRecord",
    "SavedMatch",
]
