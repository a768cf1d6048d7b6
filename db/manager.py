"""Database manager for SQLite connections, transactions and path management."""

import sqlite3
from contextlib import contextmanager
from config import Config, get_migrations_dir


def _open(db_path) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


class DatabaseManager:
    """Manages database connections and paths.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Callers are responsible for committing their own writes.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = _open(db_path)
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self):
        """Run a unit of work atomically.

        Everything executed on the yielded connection is committed when the
        block exits normally and rolled back if it raises. The exception is
        re-raised after the rollback.

        Yields:
            sqlite3.Connection: Database connection with an open transaction.
        """
        with self.connect() as conn:
            try:
                yield conn
            except BaseException:
                conn.rollback()
                raise
            else:
                conn.commit()

    def get_db_path(self):
        """Get the current database path.

        Returns:
            Path: Path to the database file.
        """
        return self.config.db_path

    def get_migrations_dir(self):
        """Get the migrations directory path.

        Returns:
            Path: Path to the migrations directory.
        """
        return get_migrations_dir()
