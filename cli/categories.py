#!/usr/bin/env python3

import sys
from pathlib import Path
from category_import import csv_template
from services.imports import MaxRowCountExceededError
from logger import get_logger

logger = get_logger()


def _require_family(services, family_name):
    family = services.families.find_by_name(family_name)
    if not family:
        logger.error(f"Family '{family_name}' not found.")
        logger.info("Use 'python -m cli families list' to see available families.")
        sys.exit(1)
    return family


def cmd_list(args, services):
    """List the categories of a family as a tree."""
    family = _require_family(services, args.family)
    categories = services.categories.find_all(family.id)

    if not categories:
        logger.info(f"No categories found for family '{family.name}'.")
        return

    children = {}
    for category in categories:
        children.setdefault(category.parent_id, []).append(category)

    logger.info(f"\nCategories for {family.name}:")
    logger.info("=" * 80)
    for root in children.get(None, []):
        logger.info(f"{root.name}  [{root.classification}] {root.color}")
        for child in children.get(root.id, []):
            logger.info(f"  └─ {child.name}  [{child.classification}] {child.color}")

    logger.info(f"\nTotal categories: {len(categories)}")


def cmd_import(args, services):
    """Import categories for a family from a CSV file.

    Args:
        args: Parsed command-line arguments with csv_file, family and dry_run
        services: Services container
    """
    csv_path = Path(args.csv_file)
    if not csv_path.exists():
        logger.error(f"File not found: {args.csv_file}")
        sys.exit(1)

    family = _require_family(services, args.family)

    data_import = services.imports.create(
        family.id,
        name_col_label=args.name_col,
        notes_col_label=args.color_col,
        category_col_label=args.parent_col,
        entity_type_col_label=args.classification_col,
    )
    logger.info(f"Created category import (ID: {data_import.id}) for {family.name}")

    try:
        with open(csv_path, "r", newline="") as f:
            row_count = services.imports.generate_rows_from_csv(data_import.id, f)
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    logger.info(f"Read {row_count} rows from {csv_path.name}")

    if args.dry_run:
        summary = services.imports.dry_run(data_import.id)
        logger.info(f"Dry run: {summary['categories']} categories would be imported")
        return

    try:
        result = services.imports.publish(data_import.id)
    except MaxRowCountExceededError as e:
        logger.error(str(e))
        sys.exit(1)

    if result is None:
        failed = services.imports.find(data_import.id)
        logger.error(f"Import failed: {failed.error}")
        sys.exit(1)

    logger.info(f"✓ Imported {result.row_count} categories")
    if result.warnings:
        logger.info(f"  ({len(result.warnings)} warning(s), see log)")


def cmd_template(args, services):
    """Print an example CSV file."""
    print(csv_template(), end="")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="List and import categories",
        description="List a family's categories and import them from CSV",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser(
        "list", help="List the categories of a family"
    )
    list_parser.add_argument("--family", required=True, help="Family name")
    list_parser.set_defaults(func=cmd_list)

    # categories import
    import_parser = categories_subparsers.add_parser(
        "import", help="Import categories from a CSV file"
    )
    import_parser.add_argument("csv_file", help="Path to the CSV file")
    import_parser.add_argument("--family", required=True, help="Family name")
    import_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report how many categories would be imported without writing",
    )
    import_parser.add_argument("--name-col", default="name", help="Name column header")
    import_parser.add_argument(
        "--color-col", default="color", help="Color column header"
    )
    import_parser.add_argument(
        "--parent-col", default="parent_category", help="Parent category column header"
    )
    import_parser.add_argument(
        "--classification-col",
        default="classification",
        help="Classification column header",
    )
    import_parser.set_defaults(func=cmd_import)

    # categories template
    template_parser = categories_subparsers.add_parser(
        "template", help="Print an example CSV file"
    )
    template_parser.set_defaults(func=cmd_template)
