"""Product aggregate and the reference data its variants point at.

Products live independently of orders. Colors, sizes and categories are
managed elsewhere; the catalog only reads them to describe variants.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass(frozen=True)
class Color:
    id: int
    name: str
    hex_code: str | None = None


@dataclass(frozen=True)
class Size:
    id: int
    value: str
    size_type: str | None = None

    @property
    def numeric_value(self) -> float:
        """Numeric reading of the size label; non-numeric labels sort last."""
        try:
            return float(self.value)
        except (TypeError, ValueError):
            return math.inf


@dataclass
class Product:
    """A product in the catalog.

    Owns zero or more variants by ``product_id``. An inactive product
    drops out of listings but is still reachable by id.
    """

    id: int
    name: str
    base_price: Money
    category_id: int
    description: str = ""
    active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("Product name is required")
