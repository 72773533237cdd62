"""
SQLite storage for persisted excuses, ratings, shares and favorites.
"""

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator

from . import config

REQUIRED_TABLES = ["excuses", "excuse_ratings", "excuse_shares", "favorites"]


def utc_now() -> str:
    """Timestamp format used for every created_at column."""
    return datetime.now(timezone.utc).isoformat()


@contextmanager
def get_db() -> Generator[sqlite3.Connection, None, None]:
    """Get a SQLite database connection."""
    conn = sqlite3.connect(config.DB_PATH)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    try:
        yield conn
    finally:
        conn.close()


def init_db():
    """Initialize the database with required tables."""
    config.ensure_db_directory(config.DB_PATH)

    with get_db() as conn:
        cursor = conn.cursor()

        # Append-only: rows are never updated or deleted
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS excuses (
                id TEXT PRIMARY KEY,
                situation TEXT NOT NULL,
                tone TEXT NOT NULL,
                length TEXT NOT NULL,
                excuse TEXT NOT NULL,
                believability_rating INTEGER NOT NULL,
                created_at TEXT NOT NULL
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS excuse_ratings (
                id TEXT PRIMARY KEY,
                excuse_id TEXT NOT NULL REFERENCES excuses(id),
                rating INTEGER NOT NULL CHECK (rating BETWEEN 1 AND 5),
                created_at TEXT NOT NULL
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS excuse_shares (
                id TEXT PRIMARY KEY,
                excuse_id TEXT NOT NULL REFERENCES excuses(id),
                share_method TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        ''')

        cursor.execute('''
            CREATE TABLE IF NOT EXISTS favorites (
                id TEXT PRIMARY KEY,
                excuse_id TEXT NOT NULL REFERENCES excuses(id),
                device_id TEXT NOT NULL,
                created_at TEXT NOT NULL,
                UNIQUE (excuse_id, device_id)
            )
        ''')

        # Create indexes for performance
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_excuses_situation ON excuses(situation)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_ratings_excuse_id ON excuse_ratings(excuse_id)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_shares_excuse_id ON excuse_shares(excuse_id)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_favorites_device_created ON favorites(device_id, created_at DESC)')

        conn.commit()


def health_check():
    """Check database health."""
    try:
        with get_db() as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table';")
            table_names = [row[0] for row in cursor.fetchall()]
            return all(table in table_names for table in REQUIRED_TABLES)
    except sqlite3.Error:
        return False
