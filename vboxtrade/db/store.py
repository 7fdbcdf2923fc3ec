"""SQLite key-value store for VBOX Trade."""

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Durable blob storage keyed by name.

    Implementations hold one serialized value per key. Callers must not
    assume either operation succeeds.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Read the blob stored under a key.

        Args:
            key: Storage key.

        Returns:
            Stored bytes, or None if nothing is stored.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: bytes) -> bool:
        """Replace the blob stored under a key.

        Args:
            key: Storage key.
            value: Serialized value.

        Returns:
            True if the write succeeded, False otherwise.
        """
        pass


class DataStore(KeyValueStore):
    """SQLite-based key-value store for VBOX Trade."""

    REQUIRED_TABLES = ["kv"]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value BLOB NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)
            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def get(self, key: str) -> Optional[bytes]:
        """Read the blob stored under a key.

        Args:
            key: Storage key.

        Returns:
            Stored bytes, or None if the key is absent.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
            row = cursor.fetchone()
            if row:
                return bytes(row["value"])
            return None
        finally:
            conn.close()

    def set(self, key: str, value: bytes) -> bool:
        """Replace the blob stored under a key.

        Args:
            key: Storage key.
            value: Serialized value.

        Returns:
            True if committed, False if SQLite refused the write.
        """
        try:
            conn = self._get_connection()
        except sqlite3.Error as e:
            logger.warning("Could not open %s: %s", self.db_path, e)
            return False
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO kv (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, sqlite3.Binary(value), datetime.now().isoformat()),
            )
            conn.commit()
            return True
        except sqlite3.Error as e:
            logger.warning("Failed to write key %r: %s", key, e)
            return False
        finally:
            conn.close()

