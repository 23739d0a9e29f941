"""
Pydantic models for the catalog read API's product document.

These validate the loosely-shaped JSON once at the boundary and normalise it
into the strict ``models.catalog`` dataclasses via ``ProductDocument.to_product``.
"""

import logging
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from utils.images import absolute_image_url, image_entry_url
from .catalog import Option, Product, VariantCombination, VariationAxis

logger = logging.getLogger(__name__)


class _CatalogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class OptionDocument(_CatalogModel):
    id: int
    name: str = ""
    price_adjustment: float | None = Field(default=None, alias="priceAdjustment")
    stock_quantity: int | None = Field(default=None, alias="stockQuantity")
    sku: str | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    active: bool | None = None


class VariationDocument(_CatalogModel):
    id: int
    type: str = Field(default="", validation_alias=AliasChoices("type", "name"))
    active: bool | None = None
    options: list[OptionDocument] = Field(default_factory=list)


class CombinationDocument(_CatalogModel):
    id: int
    option_ids: list[int] = Field(default_factory=list, alias="optionIds")
    price: float
    stock: int | None = None
    active: bool | None = None
    combination_name: str | None = Field(default=None, alias="combinationName")


class ProductDocument(_CatalogModel):
    id: int
    title: str = Field(default="", validation_alias=AliasChoices("title", "name"))
    slug: str = ""
    regular_price: float | None = Field(
        default=None, validation_alias=AliasChoices("regularPrice", "originalPrice", "price")
    )
    sale_price: float | None = Field(default=None, alias="salePrice")
    track_inventory: bool | None = Field(default=None, alias="trackInventory")
    stock_quantity: int | None = Field(default=None, alias="stockQuantity")
    low_stock_threshold: int | None = Field(default=None, alias="lowStockThreshold")
    tax_rate: float | None = Field(default=None, alias="taxRate")
    tax_exempt: bool | None = Field(default=None, alias="taxExempt")
    images: list[str] = Field(default_factory=list)
    variations: list[VariationDocument] = Field(default_factory=list)
    variant_combinations: list[CombinationDocument] = Field(default_factory=list, alias="variantCombinations")

    @field_validator("images", mode="before")
    @classmethod
    def _flatten_images(cls, value: Any) -> list[str]:
        """Gallery entries arrive as strings or as objects with a url field."""
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError("images must be a list")
        urls = [image_entry_url(entry) for entry in value]
        return [url for url in urls if url]

    @field_validator("variations", "variant_combinations", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_product(self, base_url: str, placeholder_image: str | None = None) -> Product:
        """
        Normalise the document into the strict catalog model.

        ``placeholder_image`` becomes the only gallery entry when the document
        has no usable image.
        """
        base_price = self.regular_price or 0.0
        sale_price = self.sale_price
        if sale_price is not None and sale_price >= base_price:
            logger.warning(
                f"Product {self.id}: sale price {sale_price} is not below regular price {base_price}; ignoring it."
            )
            sale_price = None

        axes = []
        for variation in self.variations:
            if variation.active is False:
                continue
            options = _normalise_options(variation, base_url)
            if not options:
                logger.warning(f"Product {self.id}: variation {variation.id} has no active options; hiding it.")
                continue
            axes.append(VariationAxis(axis_id=variation.id, name=variation.type, options=tuple(options)))

        combinations = tuple(
            VariantCombination(
                combination_id=doc.id,
                option_ids=frozenset(doc.option_ids),
                price=doc.price,
                stock=doc.stock,
                active=doc.active is not False,
                name=doc.combination_name or "",
            )
            for doc in self.variant_combinations
        )

        images = tuple(url for url in (absolute_image_url(raw, base_url) for raw in self.images) if url)
        if not images and placeholder_image:
            images = (placeholder_image,)

        return Product(
            product_id=self.id,
            name=self.title,
            slug=self.slug,
            base_price=base_price,
            sale_price=sale_price,
            track_inventory=bool(self.track_inventory),
            stock_quantity=self.stock_quantity or 0,
            axes=tuple(axes),
            combinations=combinations,
            images=images,
            tax_rate=self.tax_rate or 0.0,
            tax_exempt=bool(self.tax_exempt),
            low_stock_threshold=self.low_stock_threshold,
        )


def _normalise_options(variation: VariationDocument, base_url: str) -> list[Option]:
    options: list[Option] = []
    seen: set[int] = set()
    for doc in variation.options:
        if doc.active is False:
            continue
        if doc.id in seen:
            logger.warning(f"Variation {variation.id}: duplicate option id {doc.id}; keeping the first.")
            continue
        seen.add(doc.id)
        options.append(
            Option(
                option_id=doc.id,
                axis_id=variation.id,
                name=doc.name,
                price_adjustment=doc.price_adjustment or 0.0,
                stock_quantity=doc.stock_quantity,
                image_url=absolute_image_url(doc.image_url, base_url),
                sku=doc.sku,
            )
        )
    return options
