"""
Resolved variant data model: the outcome of resolving a selection against a product.
"""

import math
from dataclasses import dataclass

from .enums import StockStatus


@dataclass(frozen=True)
class ResolvedVariant:
    """
    Computed price, availability, completeness and image for one selection.
    Not persisted; recomputed on every selection change.
    """

    is_complete: bool
    price: float
    stock_available: int | float | None  # math.inf = unbounded, None = unknown
    stock_status: StockStatus
    image_url: str | None = None
    combination_id: int | None = None
    option_ids: tuple[int, ...] = ()
    label: str = ""
    regular_price: float | None = None  # Struck-through price when on sale
    price_clamped: bool = False

    @property
    def is_available(self) -> bool:
        """Unknown stock counts as available; only a known count of zero blocks."""
        return self.stock_available is None or self.stock_available > 0

    @property
    def is_unbounded(self) -> bool:
        return self.stock_available is not None and math.isinf(self.stock_available)

    @property
    def is_on_sale(self) -> bool:
        return self.regular_price is not None and self.regular_price > self.price

    @property
    def discount_percent(self) -> int:
        """Whole-number discount off the regular price, 0 when not on sale."""
        if not self.is_on_sale or not self.regular_price:
            return 0
        return round((self.regular_price - self.price) / self.regular_price * 100)
