"""Family model: the tenant that owns categories and imports."""

from dataclasses import dataclass


@dataclass
class Family:
    """A household account. Category names are unique within a family.

    Attributes:
        id: Unique identifier (auto-generated).
        name: Family name (unique).
        currency: ISO currency code, e.g. "USD".
    """

    id: int
    name: str
    currency: str = "USD"
