#!/usr/bin/env python3
"""
famfin CLI - command-line interface for families and category imports.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    families     Manage families
    categories   List and import categories
    migrate      Database migrations

Examples:
    python -m cli migrate apply
    python -m cli families create "Smith"
    python -m cli categories template > categories.csv
    python -m cli categories import categories.csv --family Smith --dry-run
    python -m cli categories import categories.csv --family Smith
"""

import sys
import argparse
from cli import families, categories, migrate
from config import load_config
from services.base import Services
from db.manager import DatabaseManager
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="famfin - Family finance category management",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Create subparsers for each command
    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    families.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    # Parse arguments and execute
    args = parser.parse_args()

    # Call the appropriate handler function
    if hasattr(args, "func"):
        try:
            # Load configuration
            config = load_config()

            # Set up logging
            setup_logging(config)

            # migrate works on raw connections, everything else on services
            if args.command == "migrate":
                args.func(args, DatabaseManager(config))
            else:
                args.func(args, Services(config))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
