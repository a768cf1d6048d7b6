"""Import service: category import records, their rows, and publishing."""

import csv
from datetime import datetime
from typing import Iterable, List, Optional, TextIO

import category_import
from category_import import ImportResult
from models.data_import import (
    CategoryImport,
    ImportRow,
    PENDING,
    IMPORTING,
    COMPLETE,
    FAILED,
)
from services.categories import FamilyCategoryStore
from logger import get_logger

logger = get_logger("imports")

_IMPORT_SELECT_FIELDS = """id, family_id, status, error, name_col_label, notes_col_label,
       category_col_label, entity_type_col_label, created_at"""


class MaxRowCountExceededError(ValueError):
    """Raised when an import has more rows than the configured maximum."""

    def __init__(self, row_count: int, max_row_count: int):
        super().__init__(
            f"Import has {row_count} rows, more than the maximum of {max_row_count}"
        )
        self.row_count = row_count
        self.max_row_count = max_row_count


def _header_key(label: str) -> str:
    # Template headers mark required columns with a trailing "*"
    return (label or "").strip().rstrip("*").strip()


def _row_params(import_id: int, rows: Iterable[ImportRow]) -> List[tuple]:
    return [
        (
            import_id,
            row.name or "",
            row.notes or "",
            row.category or "",
            row.entity_type or "",
        )
        for row in rows
    ]


def _insert_rows(conn, data: List[tuple]) -> None:
    conn.executemany(
        """
        INSERT INTO import_rows (import_id, name, notes, category, entity_type)
        VALUES (?, ?, ?, ?, ?)
        """,
        data,
    )


class ImportService:
    """Service for managing category imports.

    Args:
        db_manager: Database manager instance for database operations.
        max_row_count: Largest number of rows a single import may publish.
    """

    def __init__(self, db_manager, max_row_count: int = category_import.MAX_ROW_COUNT):
        self.db_manager = db_manager
        self.max_row_count = max_row_count

    def create(
        self,
        family_id: int,
        name_col_label: str = "name",
        notes_col_label: str = "color",
        category_col_label: str = "parent_category",
        entity_type_col_label: str = "classification",
    ) -> CategoryImport:
        """Create a new pending category import.

        Args:
            family_id: ID of the family to import into.
            name_col_label: CSV header for the category name.
            notes_col_label: CSV header for the color.
            category_col_label: CSV header for the parent category name.
            entity_type_col_label: CSV header for the classification.

        Returns:
            The created CategoryImport with id and created_at populated.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO imports (family_id, status, name_col_label, notes_col_label,
                                     category_col_label, entity_type_col_label)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    family_id,
                    PENDING,
                    name_col_label,
                    notes_col_label,
                    category_col_label,
                    entity_type_col_label,
                ),
            )
            conn.commit()
            import_id = cursor.lastrowid

        return self.find(import_id)

    def find(self, import_id: int) -> Optional[CategoryImport]:
        """Get a single import by ID.

        Args:
            import_id: The import ID to find.

        Returns:
            CategoryImport object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"SELECT {_IMPORT_SELECT_FIELDS} FROM imports WHERE id = ?",
                (import_id,),
            )
            row = cursor.fetchone()

            if row:
                return self._row_to_import(row)
            return None

    def add_rows(self, import_id: int, rows: Iterable[ImportRow]) -> int:
        """Append rows to an import.

        Returns:
            Number of rows added.
        """
        data = _row_params(import_id, rows)
        if not data:
            return 0

        with self.db_manager.connect() as conn:
            _insert_rows(conn, data)
            conn.commit()

        return len(data)

    def find_rows(self, import_id: int) -> List[ImportRow]:
        """Get the rows of an import in the order they were added."""
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                """
                SELECT id, import_id, name, notes, category, entity_type
                FROM import_rows
                WHERE import_id = ?
                ORDER BY id
                """,
                (import_id,),
            )
            return [
                ImportRow(
                    id=row[0],
                    import_id=row[1],
                    name=row[2] or "",
                    notes=row[3] or "",
                    category=row[4] or "",
                    entity_type=row[5] or "",
                )
                for row in cursor.fetchall()
            ]

    def count_rows(self, import_id: int) -> int:
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM import_rows WHERE import_id = ?", (import_id,)
            )
            return cursor.fetchone()[0]

    def generate_rows_from_csv(self, import_id: int, source: TextIO) -> int:
        """Replace the rows of an import with rows read from CSV text.

        Header labels are matched against the import's column labels. Columns
        that are not mapped are ignored, and a missing optional column reads
        as blank.

        Args:
            import_id: The import to fill.
            source: Open text stream with a header row.

        Returns:
            Number of rows stored.

        Raises:
            ValueError: If the import does not exist or a required column is
                missing from the header. A missing column also marks the
                import failed, and its existing rows are kept.
        """
        data_import = self.find(import_id)
        if data_import is None:
            raise ValueError(f"Import with ID {import_id} not found")

        reader = csv.DictReader(source)
        headers = {_header_key(h): h for h in (reader.fieldnames or [])}
        labels = data_import.column_labels

        for key in category_import.REQUIRED_COLUMN_KEYS:
            if _header_key(labels[key]) not in headers:
                error = f"Missing required column '{labels[key]}' for '{key}'"
                self._update_status(import_id, FAILED, error=error)
                raise ValueError(error)

        columns = {
            key: headers.get(_header_key(label)) for key, label in labels.items()
        }

        rows = []
        for record in reader:
            values = {
                key: (record.get(header) or "") if header else ""
                for key, header in columns.items()
            }
            # The parent name is kept verbatim: only a blank value or the exact
            # string "null" marks a root row.
            for key in ("name", "notes", "entity_type"):
                values[key] = values[key].strip()
            # Skip lines that are entirely blank
            if not any(values.values()):
                continue
            rows.append(ImportRow(**values))

        # Old rows are only dropped if the new ones are stored
        data = _row_params(import_id, rows)
        with self.db_manager.transaction() as conn:
            conn.execute("DELETE FROM import_rows WHERE import_id = ?", (import_id,))
            if data:
                _insert_rows(conn, data)

        return len(data)

    def dry_run(self, import_id: int) -> dict:
        """Summarize the import without creating anything."""
        return category_import.dry_run(self.find_rows(import_id))

    def publish(self, import_id: int, rng=None) -> Optional[ImportResult]:
        """Run the import atomically and record its outcome.

        Args:
            import_id: The import to publish.
            rng: Optional randomness source for default colors.

        Returns:
            ImportResult on success, None if the import failed. On failure the
            import's status is "failed" and its error holds the message.

        Raises:
            ValueError: If the import does not exist.
            MaxRowCountExceededError: If the import has too many rows. Nothing
                is written and the status is left unchanged.
        """
        data_import = self.find(import_id)
        if data_import is None:
            raise ValueError(f"Import with ID {import_id} not found")

        rows = self.find_rows(import_id)
        if len(rows) > self.max_row_count:
            raise MaxRowCountExceededError(len(rows), self.max_row_count)

        self._update_status(import_id, IMPORTING)

        try:
            with self.db_manager.transaction() as conn:
                store = FamilyCategoryStore(conn, data_import.family_id)
                result = category_import.import_categories(store, rows, rng=rng)
        except Exception as e:
            logger.error(f"Category import {import_id} failed: {e}")
            self._update_status(import_id, FAILED, error=str(e))
            return None

        self._update_status(import_id, COMPLETE)
        logger.info(
            f"Category import {import_id} complete: {result.row_count} categories, "
            f"{len(result.warnings)} warning(s)"
        )
        return result

    def _update_status(
        self, import_id: int, status: str, error: Optional[str] = None
    ) -> None:
        with self.db_manager.connect() as conn:
            conn.execute(
                "UPDATE imports SET status = ?, error = ? WHERE id = ?",
                (status, error, import_id),
            )
            conn.commit()

    def _row_to_import(self, row: tuple) -> CategoryImport:
        """Convert a database row to a CategoryImport object.

        Args:
            row: Database row tuple.

        Returns:
            CategoryImport object.
        """
        return CategoryImport(
            id=row[0],
            family_id=row[1],
            status=row[2],
            error=row[3],
            name_col_label=row[4],
            notes_col_label=row[5],
            category_col_label=row[6],
            entity_type_col_label=row[7],
            created_at=datetime.fromisoformat(row[8]),
        )
