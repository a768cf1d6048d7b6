"""Category service for database operations."""

import sqlite3
from typing import List, Optional
from category_import import CategoryStore
from models.category import Category, CLASSIFICATIONS, DEFAULT_ICON, EXPENSE

_CATEGORY_SELECT_FIELDS = (
    "id, family_id, name, color, classification, lucide_icon, parent_id"
)


class CategoryValidationError(ValueError):
    """Raised when a category fails validation before insert."""


def _row_to_category(row: tuple) -> Category:
    return Category(
        id=row[0],
        family_id=row[1],
        name=row[2],
        color=row[3],
        classification=row[4],
        lucide_icon=row[5],
        parent_id=row[6],
    )


class FamilyCategoryStore(CategoryStore):
    """Category lookups and inserts for one family on a caller-owned connection.

    The store never commits. It is meant to be used inside
    DatabaseManager.transaction() so that a batch of creates can be rolled
    back as a whole, and so that later lookups see earlier inserts.

    Args:
        conn: Open SQLite connection.
        family_id: ID of the family all lookups and inserts are scoped to.
    """

    def __init__(self, conn: sqlite3.Connection, family_id: int):
        self.conn = conn
        self.family_id = family_id

    def find(self, category_id: int) -> Optional[Category]:
        cursor = self.conn.execute(
            f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories "
            "WHERE id = ? AND family_id = ?",
            (category_id, self.family_id),
        )
        row = cursor.fetchone()
        return _row_to_category(row) if row else None

    def find_by_name(self, name: str) -> Optional[Category]:
        """Find a category of this family by exact (case-sensitive) name."""
        cursor = self.conn.execute(
            f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories "
            "WHERE family_id = ? AND name = ?",
            (self.family_id, name),
        )
        row = cursor.fetchone()
        return _row_to_category(row) if row else None

    def find_all(self) -> List[Category]:
        cursor = self.conn.execute(
            f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories "
            "WHERE family_id = ? ORDER BY name",
            (self.family_id,),
        )
        return [_row_to_category(row) for row in cursor.fetchall()]

    def create(
        self,
        name: str,
        color: str,
        classification: str = EXPENSE,
        lucide_icon: str = DEFAULT_ICON,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Validate and insert a new category.

        Returns:
            The created Category object with id populated.

        Raises:
            CategoryValidationError: If a field is missing or out of range,
                or the parent does not belong to this family.
            sqlite3.IntegrityError: If the name already exists in the family.
        """
        self._validate(name, color, classification, parent_id)

        cursor = self.conn.execute(
            """
            INSERT INTO categories (family_id, name, color, classification, lucide_icon, parent_id)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (self.family_id, name, color, classification, lucide_icon, parent_id),
        )

        return Category(
            id=cursor.lastrowid,
            family_id=self.family_id,
            name=name,
            color=color,
            classification=classification,
            lucide_icon=lucide_icon,
            parent_id=parent_id,
        )

    def _validate(
        self,
        name: str,
        color: str,
        classification: str,
        parent_id: Optional[int],
    ) -> None:
        if not name or not name.strip():
            raise CategoryValidationError("Name can't be blank")
        if not color or not color.strip():
            raise CategoryValidationError(f"Color can't be blank for category '{name}'")
        if classification not in CLASSIFICATIONS:
            raise CategoryValidationError(
                f"Classification must be one of {', '.join(CLASSIFICATIONS)}, "
                f"got '{classification}'"
            )
        if parent_id is not None and self.find(parent_id) is None:
            raise CategoryValidationError(
                f"Parent category {parent_id} does not belong to family {self.family_id}"
            )


class CategoryService:
    """Service for managing categories."""

    def __init__(self, db_manager):
        """Initialize the category service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self, family_id: int) -> List[Category]:
        """Get all categories of a family.

        Args:
            family_id: The owning family ID.

        Returns:
            List of Category objects, ordered by name.
        """
        with self.db_manager.connect() as conn:
            return FamilyCategoryStore(conn, family_id).find_all()

    def find(self, category_id: int) -> Optional[Category]:
        """Get a single category by ID.

        Args:
            category_id: The category ID to find.

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_CATEGORY_SELECT_FIELDS} FROM categories WHERE id = ?",
                (category_id,),
            )
            row = cursor.fetchone()

            if row:
                return _row_to_category(row)
            return None

    def find_by_name(self, family_id: int, name: str) -> Optional[Category]:
        """Get a single category of a family by exact name.

        Args:
            family_id: The owning family ID.
            name: The category name to find (case-sensitive).

        Returns:
            Category object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            return FamilyCategoryStore(conn, family_id).find_by_name(name)

    def create(
        self,
        family_id: int,
        name: str,
        color: str,
        classification: str = EXPENSE,
        lucide_icon: str = DEFAULT_ICON,
        parent_id: Optional[int] = None,
    ) -> Category:
        """Create a new category.

        Args:
            family_id: The owning family ID.
            name: Category name (unique within the family).
            color: Hex color code.
            classification: "income" or "expense".
            lucide_icon: Icon name.
            parent_id: Optional parent category ID.

        Returns:
            The created Category object with id populated.

        Raises:
            CategoryValidationError: If validation fails.
            sqlite3.IntegrityError: If the name already exists in the family.
        """
        with self.db_manager.connect() as conn:
            category = FamilyCategoryStore(conn, family_id).create(
                name,
                color,
                classification=classification,
                lucide_icon=lucide_icon,
                parent_id=parent_id,
            )
            conn.commit()
            return category

    def count(self, family_id: int) -> int:
        """Count the categories of a family."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM categories WHERE family_id = ?", (family_id,)
            )
            return cursor.fetchone()[0]

