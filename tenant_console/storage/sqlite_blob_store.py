# tenant_console/storage/sqlite_blob_store.py
import sqlite3
import logging
from typing import Optional
from datetime import datetime, timezone

from .storage_interfaces import AbstractBlobStore
from .sqlite_base import get_sqlite_db_connection, open_sqlite_db_connection

logger = logging.getLogger(__name__)


class SQLiteBlobStore(AbstractBlobStore):
    """
    SQLite implementation of the key-value blob store.

    Without a db_path the store shares the application-wide connection;
    with one it owns a private connection (used by tests and tooling).
    """

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    async def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            if self.db_path:
                self._conn = open_sqlite_db_connection(self.db_path)
            else:
                self._conn = await get_sqlite_db_connection()
        return self._conn

    async def initialize(self) -> None:
        """Open the connection and make sure the blob table exists."""
        await self._connection()
        logger.info("SQLiteBlobStore initialized.")

    async def teardown(self) -> None:
        """Close a privately owned connection. The shared one is closed at app shutdown."""
        if self.db_path and self._conn is not None:
            self._conn.close()
            logger.info(f"SQLiteBlobStore closed private connection to {self.db_path}.")
        self._conn = None

    async def _execute_query(self, query: str, params: tuple = (), commit: bool = True) -> sqlite3.Cursor:
        """
        Execute a SQL query with transaction management.

        A failed write is rolled back, so the previously committed row survives.

        Raises:
            sqlite3.Error: If query execution fails
        """
        conn = await self._connection()
        cursor = conn.cursor()
        try:
            cursor.execute(query, params)
            if commit:
                conn.commit()
        except sqlite3.Error as e:
            logger.error(f"SQLite error executing query '{query}': {e}", exc_info=True)
            if commit:
                conn.rollback()
            raise
        return cursor

    async def get(self, key: str) -> Optional[str]:
        cursor = await self._execute_query(
            "SELECT value FROM console_kv_blobs WHERE key = ?", (key,), commit=False
        )
        row = cursor.fetchone()
        return row["value"] if row else None

    async def put(self, key: str, value: str) -> None:
        """Upsert the value in a single statement and commit it as one transaction."""
        query = """
            INSERT INTO console_kv_blobs (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
        """
        updated_at = datetime.now(timezone.utc).isoformat()
        await self._execute_query(query, (key, value, updated_at))
        logger.debug(f"SQLiteBlobStore: wrote {len(value)} chars under key '{key}'.")

    async def delete(self, key: str) -> bool:
        cursor = await self._execute_query("DELETE FROM console_kv_blobs WHERE key = ?", (key,))
        return cursor.rowcount > 0


# Singleton instance management
_sqlite_blob_store_instance: Optional[SQLiteBlobStore] = None


async def get_sqlite_blob_store() -> SQLiteBlobStore:
    """Get or create the singleton SQLiteBlobStore bound to the shared connection."""
    global _sqlite_blob_store_instance
    if _sqlite_blob_store_instance is None:
        _sqlite_blob_store_instance = SQLiteBlobStore()
        await _sqlite_blob_store_instance.initialize()
    return _sqlite_blob_store_instance
