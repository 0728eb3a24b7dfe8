# tenant_console/storage/sqlite_base.py
import sqlite3
import logging
from pathlib import Path
from typing import Optional

from ..settings import settings

logger = logging.getLogger(__name__)

# Global connection instance to ensure single connection per application lifecycle
_db_connection: Optional[sqlite3.Connection] = None


def open_sqlite_db_connection(db_path: str) -> sqlite3.Connection:
    """
    Open a SQLite connection for the given path and make sure the schema exists.

    Creates the parent directory when needed. The connection uses
    sqlite3.Row so columns can be accessed by name.

    Raises:
        sqlite3.Error: If the database cannot be opened or initialized
    """
    resolved_path = Path(db_path).resolve()
    resolved_path.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Attempting to connect to SQLite DB at: {resolved_path}")
    # Enable thread-safe access for async/FastAPI compatibility
    conn = sqlite3.connect(str(resolved_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    logger.info(f"Successfully connected to SQLite DB: {resolved_path}")

    init_sqlite_db(conn)
    return conn


async def get_sqlite_db_connection() -> sqlite3.Connection:
    """
    Get or create the shared SQLite database connection.

    Uses a singleton pattern to maintain a single connection throughout
    the application lifecycle, pointed at settings.sqlite_db_path.
    """
    global _db_connection
    if _db_connection is None:
        try:
            _db_connection = open_sqlite_db_connection(settings.sqlite_db_path)
        except sqlite3.Error as e:
            logger.error(
                f"Error connecting to SQLite database at {settings.sqlite_db_path}: {e}",
                exc_info=True
            )
            raise
    return _db_connection


def init_sqlite_db(conn: sqlite3.Connection) -> None:
    """
    Create the key-value blob table used for console state.

    Uses IF NOT EXISTS to safely handle repeated initialization calls.
    """
    cursor = conn.cursor()
    cursor.execute('''
    CREATE TABLE IF NOT EXISTS console_kv_blobs (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    ''')
    conn.commit()
    logger.info("Ensured 'console_kv_blobs' table exists.")


async def close_sqlite_db_connection():
    """Close the shared SQLite connection during application shutdown."""
    global _db_connection
    if _db_connection is not None:
        logger.info("Closing SQLite DB connection.")
        _db_connection.close()
        _db_connection = None
        logger.info("SQLite DB connection closed.")
