"""
Product detail view session.

Owns the loaded product and its selection for one page view. The catalog
fetch is the only suspend point; a navigation or newer load while it is in
flight makes the response stale and it is discarded.
"""

from typing import Protocol

from config.config import ResolutionConfig
from models.cart import CartItemRequest, CartLine
from models.catalog import Product
from models.enums import EventSource, StorefrontEventType
from models.events import StorefrontEvent
from models.variant import ResolvedVariant
from utils.event_bus import EventBus
from utils.logger import get_logger
from variants.cart_adapter import build_cart_request, ensure_purchasable
from variants.errors import VariantResolutionError
from variants.selection import SelectionController

logger = get_logger(__name__)


class CatalogReader(Protocol):
    async def fetch_product(self, slug: str) -> Product | None: ...


class CartWriter(Protocol):
    async def add_item(self, user_id: str, request: CartItemRequest) -> CartLine: ...


class ProductDetailView:
    def __init__(
        self,
        catalog: CatalogReader,
        cart: CartWriter,
        event_bus: EventBus | None = None,
        config: ResolutionConfig | None = None,
    ):
        self.catalog = catalog
        self.cart = cart
        self.event_bus = event_bus or EventBus()
        self.config = config or ResolutionConfig()
        self.slug: str | None = None
        self.controller: SelectionController | None = None
        self._generation = 0

    @property
    def product(self) -> Product | None:
        return self.controller.product if self.controller else None

    async def load(self, slug: str) -> Product | None:
        """Fetch ``slug`` and start a fresh selection. Returns None if not found or superseded."""
        self._generation += 1
        generation = self._generation
        self.slug = slug
        self.controller = None

        product = await self.catalog.fetch_product(slug)
        if generation != self._generation:
            logger.info(f"Discarding stale catalog response for '{slug}'")
            return None
        if product is None:
            return None

        self.controller = SelectionController(product, self.config)
        await self.event_bus.publish(
            StorefrontEvent(
                event_type=StorefrontEventType.PRODUCT_LOADED.value,
                payload={"product_id": product.product_id, "slug": slug},
                source=EventSource.CATALOG,
            )
        )
        return product

    def navigate_away(self) -> None:
        """Drop the current product; any in-flight load becomes stale."""
        self._generation += 1
        self.slug = None
        self.controller = None

    def _require_controller(self) -> SelectionController:
        if self.controller is None:
            raise RuntimeError("No product loaded")
        return self.controller

    def select_option(self, axis_id: int, option_id: int) -> ResolvedVariant:
        controller = self._require_controller()
        controller.select(axis_id, option_id)
        return controller.resolve()

    @property
    def resolved(self) -> ResolvedVariant | None:
        return self.controller.resolve() if self.controller else None

    @property
    def can_add_to_cart(self) -> bool:
        if self.controller is None:
            return False
        try:
            ensure_purchasable(self.controller.product, self.controller.resolve())
        except VariantResolutionError:
            return False
        return True

    async def add_to_cart(self, user_id: str, quantity: int = 1) -> CartLine:
        """
        Submit the current selection. Raises ``VariantResolutionError`` subclasses
        before any network call when the selection cannot be ordered.
        """
        controller = self._require_controller()
        product = controller.product
        request = build_cart_request(product, controller.resolve(), quantity)

        line = await self.cart.add_item(user_id, request)
        logger.info(f"Added product {product.product_id} x{request.quantity} to cart of {user_id}")

        await self.event_bus.publish(
            StorefrontEvent(
                event_type=StorefrontEventType.CART_CHANGED.value,
                payload={"user_id": user_id, "request": request.to_payload(), "line_id": line.line_id},
                source=EventSource.STOREFRONT,
            )
        )
        if self.controller is controller:
            controller.clear()
        return line
