"""Category model for income/expense classification."""

from dataclasses import dataclass
from typing import Optional

INCOME = "income"
EXPENSE = "expense"
CLASSIFICATIONS = (INCOME, EXPENSE)

# Default palette for categories created without an explicit color
COLORS = (
    "#e99537",
    "#4da568",
    "#6471eb",
    "#db5a54",
    "#df4e92",
    "#c44fe9",
    "#eb5429",
    "#61c9ea",
    "#805dee",
    "#6ad28a",
)

DEFAULT_ICON = "shapes"


@dataclass
class Category:
    """Represents a family-scoped category.

    Attributes:
        id: Unique identifier (auto-generated).
        family_id: ID of the owning family.
        name: Category name (unique within the family, case-sensitive).
        color: Hex color code, e.g. "#22c55e".
        classification: Either "income" or "expense".
        lucide_icon: Icon name shown next to the category.
        parent_id: Optional parent category ID for subcategories.
    """

    id: int
    family_id: int
    name: str
    color: str
    classification: str = EXPENSE
    lucide_icon: str = DEFAULT_ICON
    parent_id: Optional[int] = None

    @property
    def is_subcategory(self) -> bool:
        return self.parent_id is not None
