"""
Translate a resolved variant into the cart's add-item request.

Products with exactly one axis are submitted through the legacy
``variationId`` field so that catalog entries predating the combination model
keep working; products with more axes must reference a real combination.
"""

import logging
import math

from models.cart import CartItemRequest
from models.catalog import Product
from models.variant import ResolvedVariant
from variants.errors import IncompleteSelectionError, OutOfStockError, VariantUnresolvedError

logger = logging.getLogger(__name__)


def ensure_purchasable(product: Product, resolved: ResolvedVariant) -> None:
    """Raise the matching ``VariantResolutionError`` when ``resolved`` cannot be ordered."""
    if not resolved.is_complete:
        raise IncompleteSelectionError(product.product_id)

    if len(product.axes) > 1 and resolved.combination_id is None:
        logger.error(
            f"No variant combination for options {list(resolved.option_ids)} "
            f"on product {product.product_id}; refusing add-to-cart."
        )
        raise VariantUnresolvedError(product.product_id)

    if resolved.stock_available is not None and resolved.stock_available <= 0:
        raise OutOfStockError(product.product_id)


def clamp_quantity(product: Product, resolved: ResolvedVariant, quantity: int) -> int:
    """Clamp to ``[1, stock]`` for tracked finite stock, else to ``[1, inf)``."""
    quantity = max(1, int(quantity))
    stock = resolved.stock_available
    if product.track_inventory and stock is not None and not math.isinf(stock):
        quantity = min(quantity, max(1, int(stock)))
    return quantity


def build_cart_request(product: Product, resolved: ResolvedVariant, quantity: int = 1) -> CartItemRequest:
    ensure_purchasable(product, resolved)

    clamped = clamp_quantity(product, resolved, quantity)
    if clamped != quantity:
        logger.info(f"Quantity for product {product.product_id} clamped from {quantity} to {clamped}")

    if not product.axes:
        return CartItemRequest(product_id=product.product_id, quantity=clamped)

    if len(product.axes) == 1:
        return CartItemRequest(
            product_id=product.product_id,
            quantity=clamped,
            variation_id=resolved.option_ids[0],
        )

    return CartItemRequest(
        product_id=product.product_id,
        quantity=clamped,
        variant_combination_id=resolved.combination_id,
    )
