"""
SQLite session storage implementation.

Provides persistent session storage using a small SQLite database,
one file per profile.
"""
import sqlite3
import threading
from pathlib import Path
from datetime import datetime
from typing import Optional, Union
from contextlib import contextmanager

from .protocols import SessionStorage


class SQLiteSession(SessionStorage):
    """
    SQLite-based session storage.

    Stores session keys in a local SQLite database file.
    Thread-safe; the connection is opened lazily and reused.

    Example:
        >>> storage = SQLiteSession("work")
        >>> # Creates work.session file
        >>>
        >>> storage.set('region', 'mypurecloud.ie')
        >>> storage.get('region')
        'mypurecloud.ie'
    """

    EXTENSION = '.session'
    SCHEMA_VERSION = 1

    def __init__(
        self,
        session_name: Union[str, Path],
        base_path: Optional[Path] = None
    ):
        """
        Initialize SQLite session storage.

        Args:
            session_name: Session name (without extension) or full path
            base_path: Optional base directory for session files
        """
        self._lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None

        if isinstance(session_name, Path) or session_name.endswith(self.EXTENSION):
            self._path = Path(session_name)
        else:
            if base_path:
                self._path = Path(base_path) / f"{session_name}{self.EXTENSION}"
            else:
                self._path = Path(f"{session_name}{self.EXTENSION}")

        self._path.parent.mkdir(parents=True, exist_ok=True)

        self._init_db()

    @property
    def path(self) -> Path:
        """Get session file path."""
        return self._path

    @contextmanager
    def _get_connection(self):
        """Get thread-safe database connection."""
        with self._lock:
            if self._conn is None:
                self._conn = sqlite3.connect(
                    str(self._path),
                    check_same_thread=False
                )
                self._conn.row_factory = sqlite3.Row
            yield self._conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS version (
                    version INTEGER PRIMARY KEY
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS entries (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            ''')

            cursor.execute('SELECT version FROM version LIMIT 1')
            row = cursor.fetchone()
            if row is None:
                cursor.execute(
                    'INSERT INTO version (version) VALUES (?)',
                    (self.SCHEMA_VERSION,)
                )

            conn.commit()

    def get(self, key: str) -> Optional[str]:
        """
        Read a value from the database.

        Args:
            key: Storage key

        Returns:
            Stored value, or None if absent
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT value FROM entries WHERE key = ?', (key,))
            row = cursor.fetchone()
            if row is None:
                return None
            return row['value']

    def set(self, key: str, value: str) -> None:
        """
        Write a value to the database.

        Args:
            key: Storage key
            value: Value to store
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('''
                INSERT OR REPLACE INTO entries (key, value, updated_at)
                VALUES (?, ?, ?)
            ''', (key, value, datetime.now().isoformat()))
            conn.commit()

    def delete(self, key: str) -> None:
        """Remove a key from the database."""
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('DELETE FROM entries WHERE key = ?', (key,))
            conn.commit()

    def exists(self) -> bool:
        """
        Check if any entry is stored.

        Returns:
            True if the session file holds at least one key
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT COUNT(*) FROM entries')
            count = cursor.fetchone()[0]
            return count > 0

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def delete_file(self) -> None:
        """Delete the session file completely."""
        self.close()
        if self._path.exists():
            self._path.unlink()

    def __enter__(self) -> 'SQLiteSession':
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def __del__(self):
        """Destructor - ensure connection is closed."""
        try:
            self.close()
        except Exception:
            pass
