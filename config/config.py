"""
Configuration classes for the storefront variant resolution project.
Defines pricing, cart and catalog settings in a type-safe, extensible way.
"""

import os
from dataclasses import dataclass, field

from utils.env import env_float


@dataclass
class ResolutionConfig:
    clamp_negative_prices: bool = True
    strict_partial_availability: bool = False  # Require a stocked combination for partial selections
    price_precision: int = 2


@dataclass
class CartConfig:
    free_shipping_threshold: float = 500.0
    standard_shipping_fee: float = 15.0
    bulk_shipping_fee: float = 25.0
    bulk_shipping_min_lines: int = 4


@dataclass
class CatalogConfig:
    api_base_url: str = field(
        default_factory=lambda: os.getenv("CATALOG_API_BASE_URL", "http://localhost:8080")
    )
    placeholder_image_url: str = "https://via.placeholder.com/500x500?text=No+Image"
    request_timeout: float = field(default_factory=lambda: env_float("CATALOG_REQUEST_TIMEOUT", 10.0))


# Example usage:
# resolution_config = ResolutionConfig(strict_partial_availability=True)
# cart_config = CartConfig(free_shipping_threshold=750.0)
