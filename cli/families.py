#!/usr/bin/env python3

import sys
import sqlite3
from logger import get_logger

logger = get_logger()


def cmd_list(args, services):
    """List all families."""
    families = services.families.find_all()

    if not families:
        logger.info("No families found.")
        return

    logger.info("\nFamilies:")
    logger.info("=" * 80)
    for family in families:
        category_count = services.categories.count(family.id)
        logger.info(
            f"ID: {family.id}  Name: {family.name}  Currency: {family.currency}  "
            f"Categories: {category_count}"
        )

    logger.info(f"\nTotal families: {len(families)}")


def cmd_create(args, services):
    """Create a new family."""
    try:
        family = services.families.create(args.name, args.currency)
    except sqlite3.IntegrityError:
        logger.error(f"Family '{args.name}' already exists.")
        sys.exit(1)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"✓ Family '{family.name}' created with ID: {family.id}")


def setup_parser(subparsers):
    """Setup families subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "families",
        help="Manage families",
        description="Create and list families",
    )

    families_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available family commands",
        dest="subcommand",
        required=True,
    )

    list_parser = families_subparsers.add_parser("list", help="List all families")
    list_parser.set_defaults(func=cmd_list)

    create_parser = families_subparsers.add_parser("create", help="Create a family")
    create_parser.add_argument("name", help="Family name (unique)")
    create_parser.add_argument(
        "--currency",
        default="USD",
        help="ISO currency code (default: USD)",
    )
    create_parser.set_defaults(func=cmd_create)
