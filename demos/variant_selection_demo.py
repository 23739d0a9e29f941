"""
Walk-through of variant selection on a product page.

Serves a catalog document from an in-process httpx transport, loads it into a
product view, clicks through options and adds the result to a dummy cart.
Run with: python -m demos.variant_selection_demo
"""

import asyncio

import httpx

from config.config import CatalogConfig
from connectors.catalog_client import CatalogClient
from connectors.dummy_cart_system import DummyCartSystem
from models.events import StorefrontEvent
from utils.env import load_project_dotenv
from utils.event_bus import EventBus
from utils.logger import get_logger
from variants.errors import VariantResolutionError
from variants.view import ProductDetailView

logger = get_logger("demos.variant_selection")

TEE_DOCUMENT = {
    "id": 42,
    "title": "Organic Cotton Tee",
    "slug": "organic-cotton-tee",
    "regularPrice": 499.0,
    "salePrice": 449.0,
    "trackInventory": True,
    "lowStockThreshold": 3,
    "taxRate": 5.0,
    "images": ["/uploads/tee-front.jpg", {"url": "/uploads/tee-back.jpg"}],
    "variations": [
        {
            "id": 1,
            "type": "Color",
            "options": [
                {"id": 11, "name": "Red", "priceAdjustment": 0, "stockQuantity": 6, "imageUrl": "/uploads/tee-red.jpg"},
                {"id": 12, "name": "Blue", "priceAdjustment": 20, "stockQuantity": 0},
                {"id": 13, "name": "Black", "priceAdjustment": 0, "stockQuantity": 10},
            ],
        },
        {
            "id": 2,
            "type": "Size",
            "options": [
                {"id": 21, "name": "M", "priceAdjustment": 0, "stockQuantity": 8},
                {"id": 22, "name": "L", "priceAdjustment": 30, "stockQuantity": 5},
            ],
        },
    ],
    "variantCombinations": [
        {"id": 101, "optionIds": [11, 21], "price": 449.0, "stock": 4},
        {"id": 102, "optionIds": [11, 22], "price": 489.0, "stock": 2},
        {"id": 103, "optionIds": [13, 21], "price": 459.0, "stock": 7},
    ],
}


def catalog_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == f"/api/products/slug/{TEE_DOCUMENT['slug']}":
        return httpx.Response(200, json={"success": True, "message": "OK", "data": TEE_DOCUMENT})
    return httpx.Response(404, json={"success": False, "message": "Product not found", "data": None})


async def on_cart_changed(event: StorefrontEvent) -> None:
    logger.info(f"Cart badge refresh requested: {event.payload}")


async def main() -> None:
    if load_project_dotenv():
        logger.info("Loaded settings from the project .env")
    else:
        logger.info("No project .env found; using default settings")
    config = CatalogConfig(api_base_url="https://shop.example.com")
    catalog = CatalogClient(config, transport=httpx.MockTransport(catalog_handler))
    product = await catalog.fetch_product(TEE_DOCUMENT["slug"])
    cart = DummyCartSystem([product])
    bus = EventBus()
    bus.subscribe("cart_changed", on_cart_changed)

    view = ProductDetailView(catalog, cart, bus)
    await view.load(TEE_DOCUMENT["slug"])

    resolved = view.resolved
    logger.info(f"Initial: complete={resolved.is_complete} available={resolved.is_available}")

    if not view.controller.select(1, 12):
        logger.info("Blue is out of stock and cannot be selected")

    resolved = view.select_option(1, 11)
    logger.info(f"After Red: complete={resolved.is_complete} image={resolved.image_url}")

    resolved = view.select_option(2, 22)
    logger.info(
        f"Red + L: price={resolved.price} stock={resolved.stock_available} "
        f"status={resolved.stock_status.value} combination={resolved.combination_id}"
    )

    line = await view.add_to_cart("demo-user", quantity=5)
    logger.info(f"Cart line: {line.variant} x{line.quantity} @ {line.unit_price}")

    await view.load(TEE_DOCUMENT["slug"])
    view.select_option(1, 13)
    view.select_option(2, 22)
    try:
        await view.add_to_cart("demo-user")
    except VariantResolutionError as exc:
        logger.info(f"Refused: {exc.message}")

    summary = await cart.get_cart("demo-user")
    logger.info(
        f"Cart: subtotal={summary.subtotal} tax={summary.tax} shipping={summary.shipping} total={summary.total_amount}"
    )


if __name__ == "__main__":
    asyncio.run(main())
