"""
Centralized Enum definitions for the project.
"""

from enum import Enum


class StockStatus(str, Enum):
    """Availability label shown next to a resolved variant"""

    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"  # At or below the product's low-stock threshold
    OUT_OF_STOCK = "out_of_stock"
    UNTRACKED = "untracked"  # Inventory tracking disabled for the product


class EventSource(str, Enum):
    """Components that publish storefront events"""

    STOREFRONT = "storefront"
    CART = "cart"
    CATALOG = "catalog"
    TEST = "test"


class StorefrontEventType(str, Enum):
    """Event names carried on the event bus"""

    CART_CHANGED = "cart_changed"
    PRODUCT_LOADED = "product_loaded"
