"""
Combination lookup for multi-axis products.

``CombinationIndex`` keys every usable combination by a canonical sorted tuple
of option ids so that a complete selection resolves in O(1). Combinations the
index cannot trust (inactive, wrong cardinality, options from unknown or
repeated axes, duplicate option sets) are left out and never match.
"""

import logging
from collections.abc import Iterable

from models.catalog import Product, VariantCombination

logger = logging.getLogger(__name__)

CombinationKey = tuple[int, ...]


def combination_key(option_ids: Iterable[int]) -> CombinationKey:
    return tuple(sorted(option_ids))


def combination_label(product: Product, option_ids: Iterable[int]) -> str:
    """Readable name like "Red + Large", option names in axis order."""
    wanted = set(option_ids)
    names = [opt.name for axis in product.axes for opt in axis.options if opt.option_id in wanted]
    return " + ".join(names)


class CombinationIndex:
    """Hash index over a product's active, well-formed combinations."""

    def __init__(self, entries: dict[CombinationKey, VariantCombination]):
        self._entries = entries

    @classmethod
    def build(cls, product: Product) -> "CombinationIndex":
        entries: dict[CombinationKey, VariantCombination] = {}
        axis_count = len(product.axes)
        for comb in product.combinations:
            if not comb.active:
                continue
            if not _is_consistent(product, comb, axis_count):
                logger.warning(
                    f"Combination {comb.combination_id} of product {product.product_id} "
                    f"does not cover one option per axis; ignoring it."
                )
                continue
            key = combination_key(comb.option_ids)
            if key in entries:
                logger.warning(
                    f"Combination {comb.combination_id} duplicates {entries[key].combination_id} "
                    f"on product {product.product_id}; keeping the first."
                )
                continue
            entries[key] = comb
        return cls(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, option_ids: Iterable[int]) -> bool:
        return combination_key(option_ids) in self._entries

    def match(self, option_ids: Iterable[int]) -> VariantCombination | None:
        """Return the combination whose option set equals ``option_ids``."""
        return self._entries.get(combination_key(option_ids))

    def extending(self, option_ids: Iterable[int]) -> list[VariantCombination]:
        """Combinations that contain every id in ``option_ids`` (a partial selection)."""
        wanted = frozenset(option_ids)
        return [comb for comb in self._entries.values() if wanted <= comb.option_ids]


def _is_consistent(product: Product, comb: VariantCombination, axis_count: int) -> bool:
    if len(comb.option_ids) != axis_count:
        return False
    seen_axes = set()
    for option_id in comb.option_ids:
        opt = product.option(option_id)
        if opt is None or opt.axis_id in seen_axes:
            return False
        seen_axes.add(opt.axis_id)
    return True

