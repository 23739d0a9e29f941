"""
Variant resolution engine.

``resolve_variant`` turns a product and a selection state into a
``ResolvedVariant``: displayed price, stock availability, representative
image and whether the selection is complete enough to order. It is pure and
never raises; catalog inconsistencies degrade to the additive pricing path.

Resolution order:

1. Products without axes have a single implicit variant priced at the sale
   price when present, else the regular price.
2. Incomplete selections get a best-effort additive price and an optimistic
   availability estimate ("is there still a path to something in stock").
3. Complete selections use the exact matching combination when the catalog
   defines one, else additive pricing with the sale discount carried forward.
"""

import logging
import math
from collections.abc import Sequence

from config.config import ResolutionConfig
from models.catalog import Option, Product
from models.enums import StockStatus
from models.selection import SelectionState
from models.variant import ResolvedVariant
from variants.combinations import CombinationIndex, combination_label

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG = ResolutionConfig()


def resolve_variant(
    product: Product,
    selection: SelectionState,
    *,
    image_index: int = 0,
    config: ResolutionConfig | None = None,
    index: CombinationIndex | None = None,
) -> ResolvedVariant:
    """Resolve ``selection`` against ``product``.

    ``index`` may be passed to reuse a combination index built once per
    product load; otherwise one is built for this call.
    """
    cfg = config or _DEFAULT_CONFIG
    chosen = selected_options(product, selection)
    image_url = representative_image(product, chosen, image_index)

    if not product.has_axes:
        stock = product.stock_quantity if product.track_inventory else math.inf
        return _finish(
            product,
            cfg,
            is_complete=True,
            price=product.effective_price,
            regular_price=product.base_price if product.sale_price is not None else None,
            stock=stock,
            image_url=image_url,
        )

    if index is None:
        index = CombinationIndex.build(product)
    option_ids = tuple(opt.option_id for opt in chosen)
    label = combination_label(product, option_ids)

    if len(chosen) < len(product.axes):
        return _finish(
            product,
            cfg,
            is_complete=False,
            price=_additive_price(product, chosen),
            stock=_partial_stock(product, chosen, index, cfg),
            image_url=image_url,
            option_ids=option_ids,
            label=label,
        )

    combination = index.match(option_ids)
    if combination is not None:
        stock = combination.stock if combination.stock is not None else min_option_stock(chosen)
        return _finish(
            product,
            cfg,
            is_complete=True,
            price=combination.price,
            stock=stock,
            image_url=image_url,
            combination_id=combination.combination_id,
            option_ids=option_ids,
            label=combination.name or label,
        )

    regular = _additive_price(product, chosen)
    if product.sale_price is not None:
        price = regular - (product.base_price - product.sale_price)
        regular_price = regular
    else:
        price = regular
        regular_price = None
    return _finish(
        product,
        cfg,
        is_complete=True,
        price=price,
        regular_price=regular_price,
        stock=min_option_stock(chosen),
        image_url=image_url,
        option_ids=option_ids,
        label=label,
    )


def selected_options(product: Product, selection: SelectionState) -> list[Option]:
    """
    The product's own options for each valid choice, in selection order.
    Choices naming an unknown axis, or an option outside that axis, are dropped.
    """
    chosen = []
    for axis_id, opt in selection.choices:
        axis = product.axis(axis_id)
        if axis is None:
            continue
        current = axis.option(opt.option_id)
        if current is not None:
            chosen.append(current)
    return chosen


def representative_image(product: Product, chosen: Sequence[Option], image_index: int = 0) -> str | None:
    """First selected option with an image, else the product gallery at ``image_index``."""
    for opt in chosen:
        if opt.image_url:
            return opt.image_url
    if not product.images:
        return None
    return product.images[image_index % len(product.images)]


def min_option_stock(options: Sequence[Option]) -> int:
    """Smallest stock across ``options``. An option without a count has none to sell."""
    return min((opt.stock_quantity or 0 for opt in options), default=0)


def stock_status(product: Product, stock: int | float | None) -> StockStatus:
    if not product.track_inventory:
        return StockStatus.UNTRACKED
    if stock is None:
        return StockStatus.IN_STOCK
    if stock <= 0:
        return StockStatus.OUT_OF_STOCK
    threshold = product.low_stock_threshold
    if threshold is not None and stock <= threshold:
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def _additive_price(product: Product, chosen: Sequence[Option]) -> float:
    return product.base_price + sum(opt.price_adjustment for opt in chosen)


def _partial_stock(
    product: Product,
    chosen: Sequence[Option],
    index: CombinationIndex,
    cfg: ResolutionConfig,
) -> int | float | None:
    if not product.track_inventory:
        return math.inf

    if cfg.strict_partial_availability and len(index):
        candidates = index.extending(opt.option_id for opt in chosen)
        if not candidates:
            return 0
        best = 0
        for comb in candidates:
            stock = comb.stock
            if stock is None:
                stock = min_option_stock([product.option(oid) for oid in comb.option_ids])
            best = max(best, stock)
        return best

    if not chosen:
        any_open = any(opt.has_stock for axis in product.axes for opt in axis.options)
        return None if any_open else 0
    return min_option_stock(chosen)


def _finish(
    product: Product,
    cfg: ResolutionConfig,
    *,
    is_complete: bool,
    price: float,
    stock: int | float | None,
    image_url: str | None,
    regular_price: float | None = None,
    combination_id: int | None = None,
    option_ids: tuple[int, ...] = (),
    label: str = "",
) -> ResolvedVariant:
    if not product.track_inventory:
        stock = math.inf
    elif stock is not None and stock < 0:
        stock = 0

    clamped = False
    if price < 0 and cfg.clamp_negative_prices:
        logger.warning(
            f"Resolved price {price} for product {product.product_id} "
            f"(options {list(option_ids)}) is negative; clamping to 0."
        )
        price = 0.0
        clamped = True

    if regular_price is not None:
        regular_price = round(max(regular_price, 0.0), cfg.price_precision)

    return ResolvedVariant(
        is_complete=is_complete,
        price=round(price, cfg.price_precision),
        stock_available=stock,
        stock_status=stock_status(product, stock),
        image_url=image_url,
        combination_id=combination_id,
        option_ids=option_ids,
        label=label,
        regular_price=regular_price,
        price_clamped=clamped,
    )
