"""SQLite key-value storage."""

import logging
import sqlite3
from pathlib import Path

from tablebook.errors import StorageError
from tablebook.storage.base import DEFAULT_STORAGE_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


class SQLiteStorage(KeyValueStorage):
    """Stores string values in a single ``kv_store`` table."""

    def __init__(self, db_path: str | Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        super().__init__(key)
        self.db_path = Path(db_path)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open {self.db_path}: {e}") from e

    def _init_db(self) -> None:
        """Create the key-value table if it does not exist."""
        conn = self._connect()
        try:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialize {self.db_path}: {e}") from e
        finally:
            conn.close()
        logger.info(f"Reservation database initialized at {self.db_path}")

    def get_item(self, key: str) -> str | None:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot read '{key}' from {self.db_path}: {e}") from e
        finally:
            conn.close()
        return row[0] if row else None

    def set_item(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(
                """
                INSERT INTO kv_store (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
            """,
                (key, value),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot write '{key}' to {self.db_path}: {e}") from e
        finally:
            conn.close()
