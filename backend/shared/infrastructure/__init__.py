"""
Infrastructure module: Database, request correlation and file storage.

Provides:
- Database sessions and transactions (db.py)
- Correlation IDs for request tracing (correlation.py)
- Local storage for uploaded photos (storage.py)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    safe_commit,
    unit_of_work,
)
from shared.infrastructure.storage import PhotoStorage, get_photo_storage

__all__ = [
    # db
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "safe_commit",
    "unit_of_work",
    # storage
    "PhotoStorage",
    "get_photo_storage",
]
