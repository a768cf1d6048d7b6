"""Family service for database operations."""

from typing import List, Optional
from models.family import Family


class FamilyService:
    """Service for managing families."""

    def __init__(self, db_manager):
        """Initialize the family service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Family]:
        """Get all families, ordered by id."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute("SELECT id, name, currency FROM families ORDER BY id")
            return [
                Family(id=row[0], name=row[1], currency=row[2])
                for row in cursor.fetchall()
            ]

    def find(self, family_id: int) -> Optional[Family]:
        """Get a single family by ID.

        Args:
            family_id: The family ID to find.

        Returns:
            Family object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, currency FROM families WHERE id = ?", (family_id,)
            )
            row = cursor.fetchone()

            if row:
                return Family(id=row[0], name=row[1], currency=row[2])
            return None

    def find_by_name(self, name: str) -> Optional[Family]:
        """Get a single family by name.

        Args:
            name: The family name to find.

        Returns:
            Family object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT id, name, currency FROM families WHERE name = ?", (name,)
            )
            row = cursor.fetchone()

            if row:
                return Family(id=row[0], name=row[1], currency=row[2])
            return None

    def create(self, name: str, currency: str = "USD") -> Family:
        """Create a new family.

        Args:
            name: Family name (should be unique).
            currency: ISO currency code.

        Returns:
            The created Family object with id populated.

        Raises:
            ValueError: If the name is blank.
            sqlite3.IntegrityError: If the name already exists.
        """
        if not name or not name.strip():
            raise ValueError("Family name can't be blank")

        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "INSERT INTO families (name, currency) VALUES (?, ?)",
                (name, currency.upper()),
            )
            conn.commit()

            return Family(id=cursor.lastrowid, name=name, currency=currency.upper())
