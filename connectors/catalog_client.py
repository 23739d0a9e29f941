"""
Module: connectors.catalog_client

Async client for the catalog read API. Fetches a product document and
normalises it into ``models.catalog.Product``; every failure degrades to
``None`` so the surrounding page can show its not-found state.
"""

import logging

import httpx
from pydantic import ValidationError

from config.config import CatalogConfig
from models.catalog import Product
from models.catalog_api import ProductDocument

logger = logging.getLogger(__name__)


class CatalogClient:
    """
    Read-only catalog connector.

    Pass ``transport`` to route requests through a custom ``httpx`` transport
    (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        config: CatalogConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or CatalogConfig()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.api_base_url,
            timeout=self.config.request_timeout,
            transport=self._transport,
        )

    async def fetch_document(self, slug: str) -> ProductDocument | None:
        try:
            async with self._client() as client:
                response = await client.get(f"/api/products/slug/{slug}")
                if response.status_code == 404:
                    logger.info(f"Catalog has no product '{slug}'")
                    return None
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning(f"Catalog error for '{slug}': {exc.response.status_code} {exc.response.text[:100]}")
            return None
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning(f"Catalog request for '{slug}' failed: {exc}")
            return None

        # The backend wraps documents in {success, message, data}
        if isinstance(data, dict) and isinstance(data.get("data"), dict):
            data = data["data"]

        try:
            return ProductDocument.model_validate(data)
        except ValidationError as exc:
            logger.warning(f"Catalog document for '{slug}' is invalid: {exc.error_count()} error(s)")
            return None

    async def fetch_product(self, slug: str) -> Product | None:
        document = await self.fetch_document(slug)
        if document is None:
            return None
        return document.to_product(self.config.api_base_url, self.config.placeholder_image_url)
