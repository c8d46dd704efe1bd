"""SQLite-backed key-value store for hubstate.

One table, one row per key. Connections are opened per operation and
closed again, so the store holds no open handles between calls.
"""

import contextlib
import logging
import os
import sqlite3
import tempfile
from pathlib import Path
from typing import Dict, Optional

from ..errors import StoreError
from .base import KeyValueStore, utc_now, validate_key

logger = logging.getLogger(__name__)

# Schema version for the store table itself (not the data envelope)
STORE_SCHEMA_VERSION = 1

SCHEMA = """
CREATE TABLE IF NOT EXISTS store_schema_version (
    version INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


class SQLiteStore(KeyValueStore):
    """Local file-backed store.

    Args:
        db_path: Database file. Defaults to the configured ``db_path``.
    """

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = self._resolve_db_path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _resolve_db_path(self, db_path: Optional[Path]) -> Path:
        """Resolve the database path, falling back to temp dir if home is not writable."""
        if db_path is not None:
            return Path(db_path).expanduser().resolve()

        from ..config import get_settings

        default_path = get_settings().resolved_db_path()
        try:
            default_path.parent.mkdir(parents=True, exist_ok=True)
            return default_path
        except OSError as e:
            fallback_dir = Path(tempfile.gettempdir()) / ".hubstate"
            logger.warning(
                f"Cannot write to {default_path.parent} ({e}), falling back to {fallback_dir}"
            )
            return fallback_dir / default_path.name

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA busy_timeout=5000")
        return conn

    @contextlib.contextmanager
    def _connect(self):
        """Context manager that commits on success, rolls back on failure, always closes.

        sqlite3 errors are re-raised as StoreError.
        """
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot open {self.db_path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            logger.debug(f"Transaction failed, rolling back: {e}")
            conn.rollback()
            raise StoreError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_db(self) -> None:
        with self._connect() as conn:
            conn.executescript(SCHEMA)
            row = conn.execute("SELECT version FROM store_schema_version LIMIT 1").fetchone()
            if row is None:
                conn.execute(
                    "INSERT INTO store_schema_version (version) VALUES (?)",
                    (STORE_SCHEMA_VERSION,),
                )
            elif row["version"] > STORE_SCHEMA_VERSION:
                raise StoreError(
                    f"{self.db_path} uses store schema v{row['version']}, "
                    f"newer than supported v{STORE_SCHEMA_VERSION}"
                )

        # Owner read/write only
        try:
            os.chmod(self.db_path, 0o600)
            os.chmod(self.db_path.parent, 0o700)
        except OSError as e:
            logger.warning(f"Could not set secure permissions: {e}")

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else default

    def set(self, key: str, value: str) -> None:
        key = validate_key(key)
        if not isinstance(value, str):
            raise ValueError("Store value must be a string")

        now = utc_now()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, created_at, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, value, now, now),
            )
        logger.debug(f"Stored {len(value)} chars under {key!r}")

    def delete(self, key: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
        return cursor.rowcount > 0

    def keys(self) -> Dict[str, int]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT key, length(CAST(value AS BLOB)) AS size FROM kv_store ORDER BY key"
            ).fetchall()
        return {row["key"]: row["size"] for row in rows}
