# control-plane/store/__init__.py
"""
Object store modules
"""

from .session import init_db, db_manager, SessionLocal, engine
from .models import Base, StoredObject
from .object_store import ObjectStore, SQLObjectStore, get_object_store, canonical_json

__all__ = [
    # Session
    "init_db",
    "db_manager",
    "SessionLocal",
    "engine",
    # Models
    "Base",
    "StoredObject",
    # Store
    "ObjectStore",
    "SQLObjectStore",
    "get_object_store",
    "canonical_json",
]
