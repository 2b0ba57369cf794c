"""Database schema and connection management for SQLite."""

import sqlite3
from contextlib import contextmanager
from typing import Generator

from fileserve.config import StoreConfig


def init_database(config: StoreConfig) -> None:
    """
    Create the store directory and the files table if they don't exist.
    """
    config.database_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection(config) as conn:
        cursor = conn.cursor()

        cursor.execute("PRAGMA journal_mode=WAL")

        cursor.execute(f"""
            CREATE TABLE IF NOT EXISTS {config.table_name} (
                hash CHAR(64) NOT NULL PRIMARY KEY,
                size BIGINT NOT NULL,
                name VARCHAR(512) NOT NULL,
                contentType VARCHAR(128) NOT NULL,
                data BLOB
            )
        """)

        conn.commit()


@contextmanager
def get_db_connection(config: StoreConfig) -> Generator[sqlite3.Connection, None, None]:
    """
    Context manager for database connections.
    """
    conn = sqlite3.connect(str(config.database_path), timeout=config.busy_timeout)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def reset_database(config: StoreConfig) -> None:
    """
    Remove the database file and its WAL side files.
    """
    path = config.database_path
    for candidate in (path, path.with_name(path.name + "-wal"), path.with_name(path.name + "-shm")):
        candidate.unlink(missing_ok=True)
