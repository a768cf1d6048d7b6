"""Models for a category import and the rows it carries."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

PENDING = "pending"
IMPORTING = "importing"
COMPLETE = "complete"
FAILED = "failed"


@dataclass
class CategoryImport:
    """Represents one category import operation for a family.

    Attributes:
        id: Unique identifier (auto-generated).
        family_id: ID of the family the categories are imported into.
        status: One of pending, importing, complete, failed.
        error: Failure message when status is failed.
        name_col_label: CSV header holding the category name.
        notes_col_label: CSV header holding the color.
        category_col_label: CSV header holding the parent category name.
        entity_type_col_label: CSV header holding the classification.
        created_at: Timestamp when the import was created.
    """

    id: int
    family_id: int
    status: str
    error: Optional[str]
    name_col_label: str
    notes_col_label: str
    category_col_label: str
    entity_type_col_label: str
    created_at: datetime

    @property
    def column_labels(self) -> dict:
        """Map of row field name -> CSV header label."""
        return {
            "name": self.name_col_label,
            "notes": self.notes_col_label,
            "category": self.category_col_label,
            "entity_type": self.entity_type_col_label,
        }

    def is_failed(self) -> bool:
        return self.status == FAILED


@dataclass
class ImportRow:
    """A single raw input row.

    All fields are strings as read from the file; blanks are allowed.
    `notes` carries the color and `category` the parent category name.
    """

    name: str
    notes: str = ""
    category: str = ""
    entity_type: str = ""
    id: Optional[int] = None
    import_id: Optional[int] = None
