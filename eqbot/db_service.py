"""
Database Service (DAL - Data Access Layer)
==========================================

Centralized SQLite access shared by the user record store, the assistant
conversation log and the OwlAI exchange log.
"""

import sqlite3
import logging
import threading
from typing import Optional, List, Dict, Any, Tuple
from contextlib import contextmanager

logger = logging.getLogger("DB_SERVICE")


DB_SCHEMA = """
CREATE TABLE IF NOT EXISTS user_records (
    user_id INTEGER PRIMARY KEY,
    payload TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS chat_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    chat_id TEXT NOT NULL,
    role TEXT NOT NULL CHECK(role IN ('user', 'model')),
    content TEXT NOT NULL,
    timestamp TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_chat_id ON chat_history (chat_id);

CREATE TABLE IF NOT EXISTS owl_history (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    chat_id TEXT NOT NULL,
    user_id TEXT NOT NULL,
    username TEXT,
    message TEXT,
    response TEXT,
    timestamp INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_owl_chat_user ON owl_history (chat_id, user_id);
"""


class DatabaseConnectionPool:
    """Simple connection pool for SQLite"""

    def __init__(self, db_path: str = "eqbot.db"):
        self.db_path = db_path
        self._connections: Dict[int, sqlite3.Connection] = {}

    def get_connection(self) -> sqlite3.Connection:
        """Get thread-local connection"""
        thread_id = threading.get_ident()

        if thread_id not in self._connections:
            conn = sqlite3.connect(self.db_path, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            if self.db_path != ":memory:":
                conn.execute("PRAGMA journal_mode = WAL;")
            conn.executescript(DB_SCHEMA)
            conn.commit()
            self._connections[thread_id] = conn
            logger.info(f"✅ Database schema initialized ({self.db_path})")

        return self._connections[thread_id]

    def close_all(self):
        """Close all connections"""
        for conn in self._connections.values():
            try:
                conn.close()
            except sqlite3.Error as e:
                logger.warning(f"⚠️ Error closing connection: {e}")
        self._connections.clear()


class BaseRepository:
    """
    Base repository for all tables (SRP)

    Implements the common query plumbing so stores only hold their SQL.
    """

    def __init__(self, table_name: str, pool: DatabaseConnectionPool, key_column: str = "id"):
        self.table_name = table_name
        self.pool = pool
        self.key_column = key_column

    @contextmanager
    def _get_cursor(self):
        """Context manager for database cursor"""
        conn = self.pool.get_connection()
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Database error in {self.table_name}: {e}")
            raise

    def get_by_key(self, key: Any) -> Optional[Dict[str, Any]]:
        """Get record by key column"""
        with self._get_cursor() as cursor:
            cursor.execute(
                f"SELECT * FROM {self.table_name} WHERE {self.key_column} = ?",
                (key,)
            )
            row = cursor.fetchone()
            return dict(row) if row else None

    def count(self, **where_clause) -> int:
        """Count records, optionally filtered"""
        query = f"SELECT COUNT(*) FROM {self.table_name}"
        if where_clause:
            query += " WHERE " + " AND ".join(f"{k} = ?" for k in where_clause)
        with self._get_cursor() as cursor:
            cursor.execute(query, tuple(where_clause.values()))
            return cursor.fetchone()[0]

    def insert(self, **kwargs) -> int:
        """Insert a new row and return its rowid"""
        columns = ", ".join(kwargs.keys())
        placeholders = ", ".join(["?"] * len(kwargs))

        with self._get_cursor() as cursor:
            cursor.execute(
                f"INSERT INTO {self.table_name} ({columns}) VALUES ({placeholders})",
                tuple(kwargs.values())
            )
            return cursor.lastrowid

    def upsert(self, **kwargs) -> None:
        """Insert or fully replace the row identified by the key column"""
        columns = ", ".join(kwargs.keys())
        placeholders = ", ".join(["?"] * len(kwargs))
        updates = ", ".join(
            f"{k} = excluded.{k}" for k in kwargs if k != self.key_column
        )

        with self._get_cursor() as cursor:
            cursor.execute(
                f"INSERT INTO {self.table_name} ({columns}) VALUES ({placeholders}) "
                f"ON CONFLICT({self.key_column}) DO UPDATE SET {updates}",
                tuple(kwargs.values())
            )

    def delete_where(self, **where_clause) -> int:
        """Delete rows matching criteria, return the number removed"""
        where_sql = " AND ".join(f"{k} = ?" for k in where_clause)
        with self._get_cursor() as cursor:
            cursor.execute(
                f"DELETE FROM {self.table_name} WHERE {where_sql}",
                tuple(where_clause.values())
            )
            return cursor.rowcount

    def fetch(self, query: str, params: Tuple = ()) -> List[Dict[str, Any]]:
        """Run a SELECT and return rows as dicts"""
        with self._get_cursor() as cursor:
            cursor.execute(query, params)
            return [dict(row) for row in cursor.fetchall()]


# Global pool instance
_pool: Optional[DatabaseConnectionPool] = None


def init_pool(db_path: str = "eqbot.db") -> DatabaseConnectionPool:
    """Initialize global connection pool"""
    global _pool
    _pool = DatabaseConnectionPool(db_path)
    return _pool


def get_pool() -> DatabaseConnectionPool:
    """Get global connection pool"""
    global _pool
    if _pool is None:
        from . import config
        init_pool(config.DATABASE_PATH)
    return _pool


def close_pool():
    """Close global connection pool"""
    global _pool
    if _pool:
        _pool.close_all()
        _pool = None
