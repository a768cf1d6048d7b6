"""Category import: build a family's category hierarchy from flat rows.

Each row names a category and, optionally, its parent category by name. The
parent may be defined earlier in the file, later in the file, in the family's
existing categories, or nowhere at all. Rows are resolved in two passes:

1. Root rows (blank parent, or the literal string "null") are created first.
2. Subcategory rows are then created in file order, each looking up its parent
   by exact name. The lookup sees the roots from pass 1 and anything already in
   the store. An unknown parent is not an error: the row is created as a root
   category and a warning is recorded.

Only one level of forward reference is resolved. A subcategory whose parent is
another subcategory appearing later in the file falls back to root, because
pass 2 is a single in-order scan.

Existing categories are matched by name and returned untouched, so importing
the same file twice is a no-op the second time.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
from models.category import Category, CLASSIFICATIONS, COLORS, DEFAULT_ICON, EXPENSE
from models.data_import import ImportRow
from logger import get_logger

logger = get_logger("imports")

NULL_PARENT = "null"

REQUIRED_COLUMN_KEYS = ["name"]
COLUMN_KEYS = ["name", "notes", "category", "entity_type"]
MAX_ROW_COUNT = 100

CSV_TEMPLATE = """name*,color,parent_category,classification
Food & Drink,#f97316,,expense
Groceries,#407706,Food & Drink,expense
"""

_default_rng = random.Random()


class CategoryStore(ABC):
    """Family-scoped category storage used by the importer."""

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[Category]:
        """Return the category with exactly this name, or None."""

    @abstractmethod
    def create(
        self,
        name: str,
        color: str,
        classification: str = EXPENSE,
        lucide_icon: str = DEFAULT_ICON,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Validate and persist a new category.

        Raises:
            Exception: Any validation or uniqueness failure. The importer does
                not catch it.
        """


@dataclass
class ImportResult:
    """Outcome of a successful category import.

    Attributes:
        categories: One entry per input row, created or matched, in the order
            the rows were resolved (roots first).
        warnings: Human readable messages for parents that could not be found.
    """

    categories: List[Category] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.categories)


def is_root_row(row: ImportRow) -> bool:
    """True if the row has no parent: blank, or exactly "null" (case-sensitive)."""
    parent_name = row.category or ""
    return not parent_name.strip() or parent_name == NULL_PARENT


def partition_rows(rows: Sequence[ImportRow]) -> Tuple[List[ImportRow], List[ImportRow]]:
    """Split rows into (root rows, subcategory rows), keeping file order in each."""
    root_rows = [row for row in rows if is_root_row(row)]
    subcategory_rows = [row for row in rows if not is_root_row(row)]
    return root_rows, subcategory_rows


def normalize_classification(value: Optional[str]) -> str:
    """Lower-case the classification and coerce anything unknown to expense."""
    if not value or not value.strip():
        return EXPENSE

    classification = value.lower()
    if classification not in CLASSIFICATIONS:
        return EXPENSE
    return classification


def pick_color(value: Optional[str], rng=None) -> str:
    """Use the given color, or a random palette color when blank."""
    if value and value.strip():
        return value
    return (rng or _default_rng).choice(COLORS)


def upsert_category(
    store: CategoryStore,
    row: ImportRow,
    parent: Optional[Category] = None,
    rng=None,
) -> Category:
    """Find the row's category by name, or create it.

    An existing category is returned as is. Its color, classification and
    parent are never overwritten.

    Args:
        store: Family-scoped category store.
        row: Input row.
        parent: Parent category for a new record, or None for a root.
        rng: Object with a choice() method used for the default color.

    Returns:
        The existing or newly created category.
    """
    existing = store.find_by_name(row.name)
    if existing is not None:
        logger.debug(f"Category '{row.name}' already exists (ID: {existing.id})")
        return existing

    category = store.create(
        row.name,
        pick_color(row.notes, rng),
        classification=normalize_classification(row.entity_type),
        lucide_icon=DEFAULT_ICON,
        parent_id=parent.id if parent else None,
    )
    logger.debug(f"Created category '{category.name}' (ID: {category.id})")
    return category


def import_categories(
    store: CategoryStore, rows: Sequence[ImportRow], rng=None
) -> ImportResult:
    """Create or match a category for every row and link subcategories.

    The caller owns the transaction: any exception raised by the store
    propagates unchanged and the caller is expected to roll back.

    Args:
        store: Family-scoped category store.
        rows: Input rows in file order.
        rng: Optional randomness source for default colors.

    Returns:
        ImportResult with the resolved categories and any warnings.
    """
    result = ImportResult()
    root_rows, subcategory_rows = partition_rows(rows)

    logger.info(
        f"Importing {len(rows)} categories "
        f"({len(root_rows)} root, {len(subcategory_rows)} subcategories)"
    )

    for row in root_rows:
        result.categories.append(upsert_category(store, row, parent=None, rng=rng))

    for row in subcategory_rows:
        parent = store.find_by_name(row.category)
        if parent is None:
            warning = (
                f"Parent category '{row.category}' not found for category "
                f"'{row.name}', creating as root category"
            )
            logger.warning(warning)
            result.warnings.append(warning)
        result.categories.append(upsert_category(store, row, parent=parent, rng=rng))

    return result


def dry_run(rows: Sequence[ImportRow]) -> dict:
    """Summarize what an import would touch without writing anything."""
    return {"categories": len(rows)}


def csv_template() -> str:
    """Example CSV showing the expected headers, one root and one subcategory."""
    return CSV_TEMPLATE
