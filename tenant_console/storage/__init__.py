# tenant_console/storage/__init__.py

"""Storage module initialization.

This module provides the key-value blob stores that hold console state,
backed by SQLite on disk or a plain dict in memory.
"""

from .storage_interfaces import AbstractBlobStore
from .sqlite_blob_store import SQLiteBlobStore, get_sqlite_blob_store
from .memory_blob_store import InMemoryBlobStore
from .sqlite_base import (
    get_sqlite_db_connection,
    init_sqlite_db,
    close_sqlite_db_connection
)

__all__ = [
    "AbstractBlobStore",
    "SQLiteBlobStore",
    "get_sqlite_blob_store",
    "InMemoryBlobStore",
    "get_sqlite_db_connection",
    "init_sqlite_db",
    "close_sqlite_db_connection"
]
