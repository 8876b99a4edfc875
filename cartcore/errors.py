"""
Cart Engine Exceptions

Hierarchy:
- CartError (base)
  - ResolutionError: IncompleteSelection, UnknownOptionValue,
    ConflictingOptionValues, NoMatchingVariant
  - AvailabilityError: OutOfStock, Discontinued
  - ShippingMatchError: NoRegionMatched
  - PersistenceError: CartNotFoundError
  - LineItemNotFoundError

Resolution, availability and shipping errors are recoverable: the
reconciler turns them into cart state. Persistence errors are never
caught by the core.
"""

from typing import Iterable, Optional


class CartError(Exception):
    """
    Base exception for cart operations.

    Attributes:
        message: Human-readable error description
        details: Context identifying the product, line item or region involved
    """

    def __init__(self, message: str, *, details: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# ---- resolution ----


class ResolutionError(CartError):
    """The selected options do not resolve to a sellable unit"""

    def __init__(
        self,
        message: str,
        *,
        product_id: str,
        line_id: Optional[str] = None,
        details: Optional[dict[str, str]] = None,
    ):
        details = {"product_id": product_id, **(details or {})}
        if line_id:
            details["line_id"] = line_id
        super().__init__(message, details=details)
        self.product_id = product_id
        self.line_id = line_id


class IncompleteSelection(ResolutionError):
    """A required option has no selected value"""

    def __init__(self, product_id: str, missing_options: Iterable[str], line_id: Optional[str] = None):
        self.missing_options = tuple(sorted(missing_options))
        super().__init__(
            "Missing required option",
            product_id=product_id,
            line_id=line_id,
            details={"missing": ",".join(self.missing_options)},
        )


class UnknownOptionValue(ResolutionError):
    """A selected option value does not belong to the product"""

    def __init__(self, product_id: str, option_value_ids: Iterable[str], line_id: Optional[str] = None):
        self.option_value_ids = tuple(sorted(option_value_ids))
        super().__init__(
            "Unknown option value",
            product_id=product_id,
            line_id=line_id,
            details={"option_value_ids": ",".join(self.option_value_ids)},
        )


class ConflictingOptionValues(ResolutionError):
    """More than one value is selected for a single-choice option"""

    def __init__(self, product_id: str, option_codes: Iterable[str], line_id: Optional[str] = None):
        self.option_codes = tuple(sorted(option_codes))
        super().__init__(
            "Conflicting option values",
            product_id=product_id,
            line_id=line_id,
            details={"options": ",".join(self.option_codes)},
        )


class NoMatchingVariant(ResolutionError):
    """Variants are mandatory for the product and none matches the selection"""

    def __init__(self, product_id: str, option_value_ids: Iterable[str], line_id: Optional[str] = None):
        self.option_value_ids = tuple(sorted(option_value_ids))
        super().__init__(
            "No variant matches the selected options",
            product_id=product_id,
            line_id=line_id,
            details={"option_value_ids": ",".join(self.option_value_ids)},
        )


# ---- availability ----


class AvailabilityError(CartError):
    """The resolved unit cannot be purchased"""

    def __init__(self, message: str, *, unit_id: str, line_id: Optional[str] = None):
        details = {"unit_id": unit_id}
        if line_id:
            details["line_id"] = line_id
        super().__init__(message, details=details)
        self.unit_id = unit_id
        self.line_id = line_id


class OutOfStock(AvailabilityError):
    """No quantity on hand and backorder is not permitted"""

    def __init__(self, unit_id: str, line_id: Optional[str] = None):
        super().__init__("Out of stock", unit_id=unit_id, line_id=line_id)


class Discontinued(AvailabilityError):
    """The unit no longer exists in the catalog or inventory"""

    def __init__(self, unit_id: str, line_id: Optional[str] = None):
        super().__init__("No longer available", unit_id=unit_id, line_id=line_id)


# ---- shipping ----


class ShippingMatchError(CartError):
    """Shipping cost could not be determined"""


class NoRegionMatched(ShippingMatchError):
    """No custom region and weight bracket covers the destination"""

    def __init__(self, country_code: str, weight: object, reason: str = "no region covers destination"):
        super().__init__(
            f"Shipping unavailable for destination: {reason}",
            details={"country": country_code, "weight": str(weight)},
        )
        self.country_code = country_code
        self.weight = weight
        self.reason = reason


# ---- persistence / lookup ----


class PersistenceError(CartError):
    """Raised by cart repositories; propagated unchanged by the core"""


class CartNotFoundError(PersistenceError):
    """No cart stored under the given code"""

    def __init__(self, cart_code: str):
        super().__init__("Cart not found", details={"cart_code": cart_code})
        self.cart_code = cart_code


class LineItemNotFoundError(CartError):
    """The cart has no line item with the given id"""

    def __init__(self, cart_code: str, line_id: str):
        super().__init__("Item not in cart", details={"cart_code": cart_code, "line_id": line_id})
        self.cart_code = cart_code
        self.line_id = line_id
