"""
Selection controller for one product view.

Holds the current immutable ``SelectionState`` for a product and swaps it for
a new one on every accepted click. Resolution is delegated to the engine.
"""

import logging
from dataclasses import dataclass

from config.config import ResolutionConfig
from models.catalog import Product
from models.selection import SelectionState
from models.variant import ResolvedVariant
from variants.combinations import CombinationIndex
from variants.engine import resolve_variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptionView:
    """Render state of one option button."""

    option_id: int
    name: str
    selected: bool
    selectable: bool
    image_url: str | None = None


class SelectionController:
    """Per-product selection owner. Re-create it on every product load."""

    def __init__(self, product: Product, config: ResolutionConfig | None = None):
        self.product = product
        self.config = config or ResolutionConfig()
        self.index = CombinationIndex.build(product)
        self.state = SelectionState()
        self.image_index = 0

    def is_selectable(self, axis_id: int, option_id: int) -> bool:
        axis = self.product.axis(axis_id)
        option = axis.option(option_id) if axis else None
        if option is None:
            return False
        return not (self.product.track_inventory and not option.has_stock)

    def select(self, axis_id: int, option_id: int) -> bool:
        """Replace the choice for ``axis_id``. Returns False when the click is rejected."""
        if not self.is_selectable(axis_id, option_id):
            logger.debug(f"Ignoring selection of option {option_id} on axis {axis_id} of product {self.product.product_id}")
            return False
        option = self.product.axis(axis_id).option(option_id)
        self.state = self.state.select(axis_id, option)
        return True

    def deselect(self, axis_id: int) -> None:
        self.state = self.state.deselect(axis_id)

    def clear(self) -> None:
        self.state = self.state.clear()
        self.image_index = 0

    def is_axis_selected(self, axis_id: int) -> bool:
        return self.state.is_axis_selected(axis_id)

    def show_image(self, image_index: int) -> None:
        """Move the gallery cursor used when no selected option has its own image."""
        self.image_index = image_index

    def resolve(self) -> ResolvedVariant:
        return resolve_variant(
            self.product,
            self.state,
            image_index=self.image_index,
            config=self.config,
            index=self.index,
        )

    def option_states(self, axis_id: int) -> list[OptionView]:
        """Every option of an axis with its selected/selectable flags; inert options stay listed."""
        axis = self.product.axis(axis_id)
        if axis is None:
            return []
        current = self.state.option_for(axis_id)
        return [
            OptionView(
                option_id=opt.option_id,
                name=opt.name,
                selected=current is not None and current.option_id == opt.option_id,
                selectable=self.is_selectable(axis_id, opt.option_id),
                image_url=opt.image_url,
            )
            for opt in axis.options
        ]
