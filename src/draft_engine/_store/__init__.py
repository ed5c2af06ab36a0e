# Area: Store
"""
Persistence for the draft engine.

This package contains:
- SQLite connection, schema and transaction management
- One repository per table
- DraftStore, which opens a transaction and hands out the repositories
"""

from .database import BaseRepository, get_connection, init_database, transaction
from .store import DraftStore, StoreSession

__all__ = [
    "BaseRepository",
    "get_connection",
    "init_database",
    "transaction",
    "DraftStore",
    "StoreSession",
]
