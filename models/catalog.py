"""
Catalog data models for storefront variant resolution.
Includes Option, VariationAxis, VariantCombination and Product dataclasses.

These are the strict, already-normalised shapes the resolution engine works
with. Raw catalog JSON is validated into them by ``models.catalog_api``.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Option:
    """One selectable choice within a variation axis (e.g. "Red")."""

    option_id: int
    axis_id: int
    name: str
    price_adjustment: float = 0.0
    stock_quantity: int | None = None  # None = no count reported; sold out when tracked
    image_url: str | None = None
    sku: str | None = None

    @property
    def has_stock(self) -> bool:
        """True only when the option reports at least one unit."""
        return self.stock_quantity is not None and self.stock_quantity > 0


@dataclass(frozen=True)
class VariationAxis:
    """A named dimension of a product (Color, Size, ...) owning its options."""

    axis_id: int
    name: str
    options: tuple[Option, ...] = ()

    @property
    def is_swatch(self) -> bool:
        """Colour axes, or axes whose options carry images, render as swatches."""
        if self.name.strip().lower() == "color":
            return True
        return bool(self.options and self.options[0].image_url)

    def option(self, option_id: int) -> Option | None:
        for opt in self.options:
            if opt.option_id == option_id:
                return opt
        return None


@dataclass(frozen=True)
class VariantCombination:
    """
    A concrete tuple of one option per axis with its own absolute price and stock.
    """

    combination_id: int
    option_ids: frozenset[int]
    price: float
    stock: int | None = None
    active: bool = True
    name: str = ""


@dataclass(frozen=True)
class Product:
    """
    Data model for a catalog product and its variation axes.

    When ``axes`` is non-empty, ``stock_quantity`` is not authoritative: stock
    comes from options or combinations instead.
    """

    product_id: int
    name: str
    base_price: float
    sale_price: float | None = None
    track_inventory: bool = True
    stock_quantity: int = 0
    axes: tuple[VariationAxis, ...] = ()
    combinations: tuple[VariantCombination, ...] = ()
    images: tuple[str, ...] = ()
    slug: str = ""
    tax_rate: float = 0.0  # Percent
    tax_exempt: bool = False
    low_stock_threshold: int | None = None
    _options_by_id: dict[int, Option] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        lookup = {opt.option_id: opt for axis in self.axes for opt in axis.options}
        object.__setattr__(self, "_options_by_id", lookup)

    @property
    def has_axes(self) -> bool:
        return bool(self.axes)

    @property
    def axis_ids(self) -> tuple[int, ...]:
        return tuple(axis.axis_id for axis in self.axes)

    @property
    def effective_price(self) -> float:
        """Sale price when one is set, otherwise the regular price."""
        return self.sale_price if self.sale_price is not None else self.base_price

    def axis(self, axis_id: int) -> VariationAxis | None:
        for axis in self.axes:
            if axis.axis_id == axis_id:
                return axis
        return None

    def option(self, option_id: int) -> Option | None:
        return self._options_by_id.get(option_id)

    def combination(self, combination_id: int) -> VariantCombination | None:
        for comb in self.combinations:
            if comb.combination_id == combination_id:
                return comb
        return None
