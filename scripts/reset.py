#!/usr/bin/env python3
"""Reset script for famfin.

Deletes the data directory (database and logs) and re-runs all migrations.
Only allowed when [reset] enabled = true in ~/.config/famfin.toml.
"""

import shutil
import sys

from config import load_config
from db.manager import DatabaseManager
from db.migrator import apply_pending


def reset():
    """Reset the application state."""
    print("famfin Reset Script")
    print("=" * 50)

    # Load configuration
    config = load_config()

    # Check if reset is enabled
    if not config.enable_reset:
        print("\nReset is disabled in configuration.")
        print("To enable reset, set enabled = true under [reset] in ~/.config/famfin.toml")
        sys.exit(1)

    # Show what will be deleted
    print(f"\nData directory: {config.base_dir}")
    print(f"Database: {config.db_path}")
    print(f"Logs: {config.log_dir}")

    # Confirm with user
    response = input("\nThis will delete ALL data. Continue? (yes/no): ")
    if response.lower() != "yes":
        print("Reset cancelled.")
        sys.exit(0)

    # Delete the data directory
    if config.base_dir.exists():
        print(f"\nDeleting {config.base_dir}...")
        shutil.rmtree(config.base_dir)
        print("✓ Data directory deleted")
    else:
        print(f"\n✓ Data directory does not exist: {config.base_dir}")

    # Run migrations to create database
    print("\nRunning migrations...")
    db_manager = DatabaseManager(config)
    with db_manager.connect() as conn:
        applied = apply_pending(conn, db_manager.get_migrations_dir())

    print("\n" + "=" * 50)
    print(f"Reset complete! Applied {len(applied)} migration(s).")
    print(f"Database location: {config.db_path}")


if __name__ == "__main__":
    reset()
