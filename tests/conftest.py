"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest
from contextlib import contextmanager
from pathlib import Path

from config import Config, get_migrations_dir
from db.migrator import apply_pending
from services.base import Services


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    conn.execute("PRAGMA foreign_keys = ON")
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary directory.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        base_dir=tmp_path / "famfin",
        db_data_dir=tmp_path / "famfin" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "famfin" / "logs",
        import_max_row_count=100,
    )


class TestDatabaseManager:
    """Database manager that hands out one shared in-memory connection."""

    def __init__(self, conn):
        self.conn = conn

    @contextmanager
    def connect(self):
        # Don't close the connection - the fixture owns it
        yield self.conn

    @contextmanager
    def transaction(self):
        try:
            yield self.conn
        except BaseException:
            self.conn.rollback()
            raise
        else:
            self.conn.commit()

    def get_db_path(self):
        return Path(":memory:")

    def get_migrations_dir(self):
        return get_migrations_dir()


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a database manager backed by an in-memory database with all
    migrations applied.

    Args:
        test_db: In-memory database connection fixture.

    Returns:
        TestDatabaseManager: Database manager with schema ready.
    """
    apply_pending(test_db, get_migrations_dir())
    return TestDatabaseManager(test_db)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container with test database.

    Args:
        test_config: Test configuration fixture.
        db_manager_with_schema: Database manager with schema set up.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def family(services):
    """A family to scope categories and imports to."""
    return services.families.create("Smith")
