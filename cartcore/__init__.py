# Cart Reconciliation Engine

from .availability import AvailabilityChecker
from .cache import CatalogCache
from .errors import (
    AvailabilityError,
    CartError,
    CartNotFoundError,
    ConflictingOptionValues,
    Discontinued,
    IncompleteSelection,
    LineItemNotFoundError,
    NoMatchingVariant,
    NoRegionMatched,
    OutOfStock,
    PersistenceError,
    ResolutionError,
    ShippingMatchError,
    UnknownOptionValue,
)
from .pricing import CartTotals, PriceAccumulator, quantize
from .readable import ReadableCart, ReadableCartItem, ReadableUnavailableItem, to_readable
from .reconciler import CartReconciler
from .shipping import CustomShippingRegionMatcher
from .variants import VariantResolver

__all__ = [
    "AvailabilityChecker",
    "CatalogCache",
    "CartReconciler",
    "CustomShippingRegionMatcher",
    "PriceAccumulator",
    "VariantResolver",
    "CartTotals",
    "quantize",
    "ReadableCart",
    "ReadableCartItem",
    "ReadableUnavailableItem",
    "to_readable",
    "CartError",
    "ResolutionError",
    "IncompleteSelection",
    "UnknownOptionValue",
    "ConflictingOptionValues",
    "NoMatchingVariant",
    "AvailabilityError",
    "OutOfStock",
    "Discontinued",
    "ShippingMatchError",
    "NoRegionMatched",
    "PersistenceError",
    "CartNotFoundError",
    "LineItemNotFoundError",
]
