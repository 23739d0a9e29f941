"""
Data models for the cart write API.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# Request shape emitted by the storefront
class CartItemRequest(BaseModel):
    """Add-to-cart payload. Exactly one variant field is set for products with axes."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    product_id: int = Field(alias="productId")
    quantity: int = Field(ge=1)
    variant_combination_id: int | None = Field(default=None, alias="variantCombinationId")
    variation_id: int | None = Field(default=None, alias="variationId")  # Legacy single-axis field

    def to_payload(self) -> dict:
        """Wire representation: camelCase keys, unset variant fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CartLine(BaseModel):
    """One line in a customer's cart"""

    line_id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: float
    subtotal: float
    variant_combination_id: int | None = None
    variation_id: int | None = None
    variant: str | None = None  # e.g. "Red + Large"
    product_image: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)


class CartSummary(BaseModel):
    """Cart contents with totals"""

    user_id: str
    items: list[CartLine] = Field(default_factory=list)
    subtotal: float = 0.0
    tax: float = 0.0
    shipping: float = 0.0
    discount: float = 0.0
    total_amount: float = 0.0

    @property
    def total_items(self) -> int:
        return len(self.items)
