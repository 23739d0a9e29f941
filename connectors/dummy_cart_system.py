"""
Module: connectors.dummy_cart_system

Provides an in-memory cart write API for the storefront and its tests.
Prices and stock for each line come from the resolution engine, so the
checkout path agrees with what the product page displayed.
"""

import asyncio
import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from collections.abc import Iterable

from config.config import CartConfig, ResolutionConfig
from models.cart import CartItemRequest, CartLine, CartSummary
from models.catalog import Product
from models.selection import SelectionState
from models.variant import ResolvedVariant
from variants.combinations import CombinationIndex
from variants.engine import resolve_variant

logger = logging.getLogger(__name__)


@dataclass
class _StoredLine:
    line_id: int
    product_id: int
    quantity: int
    combination_id: int | None = None
    variation_id: int | None = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)


class DummyCartSystem:
    """
    Dummy cart connector keyed by user id.

    Raises ``LookupError`` for unknown products, variants or lines and
    ``ValueError`` for requests the cart refuses (bad quantity, stock).
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        config: CartConfig | None = None,
        resolution_config: ResolutionConfig | None = None,
        latency: float = 0.0,
    ):
        self.config = config or CartConfig()
        self.resolution_config = resolution_config or ResolutionConfig()
        self.latency = latency
        self._products: dict[int, Product] = {}
        self._indexes: dict[int, CombinationIndex] = {}
        self._carts: dict[str, list[_StoredLine]] = {}
        self._next_line_id = 1
        for product in products:
            self.register_product(product)

    def register_product(self, product: Product) -> None:
        self._products[product.product_id] = product
        self._indexes[product.product_id] = CombinationIndex.build(product)

    def _product(self, product_id: int) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise LookupError("Product not found")
        return product

    def _line_selection(self, product: Product, line: _StoredLine) -> SelectionState:
        if line.combination_id is not None:
            combination = product.combination(line.combination_id)
            options = [product.option(oid) for oid in combination.option_ids]
            # Keep axis order for labels and images
            options.sort(key=lambda opt: product.axis_ids.index(opt.axis_id))
            return SelectionState.from_options(options)
        if line.variation_id is not None:
            return SelectionState.from_options([product.option(line.variation_id)])
        return SelectionState()

    def _resolve(self, product: Product, line: _StoredLine) -> ResolvedVariant:
        return resolve_variant(
            product,
            self._line_selection(product, line),
            config=self.resolution_config,
            index=self._indexes[product.product_id],
        )

    def _check_stock(self, product: Product, line: _StoredLine, quantity: int) -> None:
        if not product.track_inventory:
            return
        resolved = self._resolve(product, line)
        stock = resolved.stock_available
        if stock is None or math.isinf(stock):
            return
        name = f"{product.name} - {resolved.label}" if resolved.label else product.name
        if stock <= 0:
            raise ValueError(f"{name} is out of stock")
        if quantity > stock:
            raise ValueError(f"Insufficient stock for {name}. Available: {stock}, Requested: {quantity}")

    def _target_line(self, product: Product, request: CartItemRequest) -> _StoredLine:
        """Work out which combination or legacy option the request refers to."""
        line = _StoredLine(line_id=0, product_id=product.product_id, quantity=request.quantity)

        if request.variant_combination_id is not None:
            combination = product.combination(request.variant_combination_id)
            if combination is None:
                owner = next(
                    (p for p in self._products.values() if p.combination(request.variant_combination_id)),
                    None,
                )
                if owner is not None:
                    raise ValueError("Variant combination does not belong to this product")
                raise LookupError("Variant combination not found")
            if self._indexes[product.product_id].match(combination.option_ids) is not combination:
                # Inactive or malformed in the catalog
                raise LookupError("Variant combination not found")
            line.combination_id = combination.combination_id
            return line

        if request.variation_id is not None:
            option = product.option(request.variation_id)
            if option is None:
                raise LookupError("Variation option not found")
            if len(product.axes) > 1:
                raise ValueError("Products with several variations need a variant combination")
            combination = self._indexes[product.product_id].match([option.option_id])
            if combination is not None:
                logger.info(
                    f"Found variant combination {combination.combination_id} for single variation option {option.option_id}"
                )
                line.combination_id = combination.combination_id
            else:
                logger.warning(
                    f"No variant combination found for variation option {option.option_id}. Using variation option directly."
                )
                line.variation_id = option.option_id
            return line

        if product.has_axes:
            raise ValueError("Please select all variations")
        return line

    def _find_line(self, user_id: str, line_id: int) -> _StoredLine:
        for line in self._carts.get(user_id, []):
            if line.line_id == line_id:
                return line
        raise LookupError("Cart item not found")

    async def add_item(self, user_id: str, request: CartItemRequest) -> CartLine:
        """Add a line or merge into the existing line for the same variant."""
        await asyncio.sleep(self.latency)
        product = self._product(request.product_id)
        target = self._target_line(product, request)

        lines = self._carts.setdefault(user_id, [])
        existing = next(
            (
                line
                for line in lines
                if line.product_id == target.product_id
                and line.combination_id == target.combination_id
                and line.variation_id == target.variation_id
            ),
            None,
        )
        new_total = request.quantity + (existing.quantity if existing else 0)
        self._check_stock(product, target, new_total)

        if existing is not None:
            existing.quantity = new_total
            existing.updated_at = datetime.now()
            logger.info(f"Updated cart item {existing.line_id} quantity to {new_total}")
            return self._to_cart_line(existing)

        target.line_id = self._next_line_id
        self._next_line_id += 1
        lines.append(target)
        logger.info(f"Added new item to cart for user {user_id}")
        return self._to_cart_line(target)

    async def update_item(self, user_id: str, line_id: int, quantity: int) -> CartLine:
        await asyncio.sleep(self.latency)
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")
        line = self._find_line(user_id, line_id)
        self._check_stock(self._product(line.product_id), line, quantity)
        line.quantity = quantity
        line.updated_at = datetime.now()
        logger.info(f"Updated cart item {line_id} quantity to {quantity}")
        return self._to_cart_line(line)

    async def remove_item(self, user_id: str, line_id: int) -> None:
        await asyncio.sleep(self.latency)
        line = self._find_line(user_id, line_id)
        self._carts[user_id].remove(line)
        logger.info(f"Removed cart item {line_id} for user {user_id}")

    async def clear_cart(self, user_id: str) -> None:
        await asyncio.sleep(self.latency)
        self._carts.pop(user_id, None)
        logger.info(f"Cleared cart for user {user_id}")

    async def get_cart(self, user_id: str) -> CartSummary:
        await asyncio.sleep(self.latency)
        items = []
        subtotal = 0.0
        tax = 0.0
        for line in self._carts.get(user_id, []):
            product = self._product(line.product_id)
            cart_line = self._to_cart_line(line)
            items.append(cart_line)
            subtotal += cart_line.subtotal
            if not product.tax_exempt:
                tax += cart_line.subtotal * product.tax_rate / 100

        shipping = self.calculate_shipping(subtotal, len(items))
        subtotal = round(subtotal, 2)
        tax = round(tax, 2)
        return CartSummary(
            user_id=user_id,
            items=items,
            subtotal=subtotal,
            tax=tax,
            shipping=shipping,
            total_amount=round(subtotal + tax + shipping, 2),
        )

    def calculate_shipping(self, subtotal: float, line_count: int) -> float:
        """Free above the threshold; otherwise a flat fee that rises for larger carts."""
        if line_count == 0:
            return 0.0
        if subtotal >= self.config.free_shipping_threshold:
            return 0.0
        if line_count < self.config.bulk_shipping_min_lines:
            return self.config.standard_shipping_fee
        return self.config.bulk_shipping_fee

    def _to_cart_line(self, line: _StoredLine) -> CartLine:
        product = self._product(line.product_id)
        resolved = self._resolve(product, line)
        return CartLine(
            line_id=line.line_id,
            product_id=product.product_id,
            product_name=product.name,
            quantity=line.quantity,
            unit_price=resolved.price,
            subtotal=round(resolved.price * line.quantity, 2),
            variant_combination_id=line.combination_id,
            variation_id=line.variation_id,
            variant=resolved.label or None,
            product_image=resolved.image_url,
            created_at=line.created_at,
            updated_at=line.updated_at,
        )
