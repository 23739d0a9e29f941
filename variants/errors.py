"""
Errors raised when a resolved variant cannot be turned into an add-to-cart request.

None of these are fatal: the selection state is left untouched and the
storefront simply refuses to proceed.
"""


class VariantResolutionError(Exception):
    """Base class for add-to-cart refusals."""

    default_message = "This item cannot be added to the cart."

    def __init__(self, product_id: int | None = None, message: str | None = None):
        self.product_id = product_id
        self.message = message or self.default_message
        super().__init__(self.message)


class IncompleteSelectionError(VariantResolutionError):
    """Checkout attempted before every axis has a selected option."""

    default_message = "Please select all options."


class VariantUnresolvedError(VariantResolutionError):
    """A complete multi-axis selection has no matching combination in the catalog."""

    default_message = "This combination is currently unavailable."


class OutOfStockError(VariantResolutionError):
    """The resolved variant has no units available."""

    default_message = "Out of stock."
