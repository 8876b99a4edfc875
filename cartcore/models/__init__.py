# Cart Engine Models

from .catalog import (
    OptionValue,
    Product,
    ProductOption,
    ProductVariant,
    ResolutionSource,
    ResolvedUnit,
    SelectedAttribute,
)
from .inventory import (
    ALL_REGIONS,
    Availability,
    AvailabilityRecord,
    AvailabilityStatus,
    StoreContext,
)
from .shipping import (
    CustomShippingRegion,
    ShippingQuote,
    ShippingStatus,
    WeightPriceItem,
    dump_custom_regions,
    load_custom_regions,
)
from .cart import (
    Cart,
    CartLineItem,
    CartState,
    UnavailableItem,
    UnavailableReason,
    normalize_quantity,
)

__all__ = [
    "OptionValue",
    "Product",
    "ProductOption",
    "ProductVariant",
    "ResolutionSource",
    "ResolvedUnit",
    "SelectedAttribute",
    "ALL_REGIONS",
    "Availability",
    "AvailabilityRecord",
    "AvailabilityStatus",
    "StoreContext",
    "CustomShippingRegion",
    "ShippingQuote",
    "ShippingStatus",
    "WeightPriceItem",
    "dump_custom_regions",
    "load_custom_regions",
    "Cart",
    "CartLineItem",
    "CartState",
    "UnavailableItem",
    "UnavailableReason",
    "normalize_quantity",
]
