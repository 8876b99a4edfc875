"""
Cart Reconciler

Re-derives a cart's availability, prices and totals from its line items
and the current catalog, inventory and shipping configuration.

Per line: catalog lookup -> VariantResolver -> AvailabilityChecker ->
PriceAccumulator.line_subtotal. Lines that fail are reported in
unavailable_items but stay in the cart until the customer confirms
their removal. Shipping is matched once for the aggregate weight of
the surviving lines.

Callers must serialize reconcile calls per cart; the reconciler keeps
no state between calls.
"""

import logging
from decimal import Decimal
from typing import Optional

from .availability import AvailabilityChecker
from .errors import (
    AvailabilityError,
    ConflictingOptionValues,
    Discontinued,
    IncompleteSelection,
    NoMatchingVariant,
    NoRegionMatched,
    OutOfStock,
    ResolutionError,
    UnknownOptionValue,
)
from .interfaces import CatalogLookup, InventoryLookup, ShippingRegionSource
from .models.cart import Cart, CartLineItem, CartState, UnavailableItem, UnavailableReason
from .models.catalog import ResolvedUnit
from .models.inventory import StoreContext
from .models.shipping import ShippingStatus
from .pricing import ZERO, PriceAccumulator, TaxPolicy
from .shipping import CustomShippingRegionMatcher
from .variants import VariantResolver

logger = logging.getLogger(__name__)

_REASONS: dict[type, UnavailableReason] = {
    IncompleteSelection: UnavailableReason.INCOMPLETE_SELECTION,
    UnknownOptionValue: UnavailableReason.UNKNOWN_OPTION_VALUE,
    ConflictingOptionValues: UnavailableReason.CONFLICTING_OPTIONS,
    NoMatchingVariant: UnavailableReason.NO_MATCHING_VARIANT,
    ResolutionError: UnavailableReason.UNRESOLVED,
    OutOfStock: UnavailableReason.OUT_OF_STOCK,
    Discontinued: UnavailableReason.DISCONTINUED,
    AvailabilityError: UnavailableReason.UNAVAILABLE,
}


def _reason_for(error: Exception) -> UnavailableReason:
    # nearest mapped ancestor; base classes carry generic reasons
    for cls in type(error).__mro__:
        if cls in _REASONS:
            return _REASONS[cls]
    return UnavailableReason.UNRESOLVED


class CartReconciler:
    """
    Orchestrates variant resolution, availability and pricing for a cart.

    Usage:
        reconciler = CartReconciler(catalog, inventory, shipping_regions)
        cart = reconciler.reconcile(cart, StoreContext(store_code="DEFAULT"), "CA")
        to_readable(cart)
    """

    def __init__(
        self,
        catalog: CatalogLookup,
        inventory: InventoryLookup,
        shipping_regions: ShippingRegionSource,
        resolver: Optional[VariantResolver] = None,
        checker: Optional[AvailabilityChecker] = None,
        accumulator: Optional[PriceAccumulator] = None,
        matcher: Optional[CustomShippingRegionMatcher] = None,
        tax_policy: Optional[TaxPolicy] = None,
    ):
        self._catalog = catalog
        self._shipping_regions = shipping_regions
        self.resolver = resolver or VariantResolver(catalog)
        self.checker = checker or AvailabilityChecker(inventory)
        self.accumulator = accumulator or PriceAccumulator()
        self.matcher = matcher or CustomShippingRegionMatcher()
        self.tax_policy = tax_policy

    def reconcile(
        self,
        cart: Cart,
        context: StoreContext,
        destination_country: Optional[str] = None,
    ) -> Cart:
        """
        Recompute a cart.

        Args:
            cart: Cart to reconcile; not modified
            context: Store and region for pricing and stock
            destination_country: Shipping destination; no quote when omitted

        Returns:
            New cart in state CLEAN with refreshed lines, unavailable
            items, quantity, subtotal, shipping, tax and total
        """
        working = cart.model_copy(update={"state": CartState.RECONCILED})

        lines: list[CartLineItem] = []
        unavailable: list[UnavailableItem] = []
        subtotals: list[Decimal] = []
        weight = ZERO
        quantity = 0

        for line in working.lines:
            try:
                unit = self._resolve_line(line, context)
            except (ResolutionError, AvailabilityError) as e:
                flagged = self._flag(line, e)
                lines.append(flagged.line)
                unavailable.append(flagged)
                continue

            subtotal = self.accumulator.line_subtotal(unit, line.quantity)
            lines.append(self._priced(line, unit, subtotal))
            subtotals.append(subtotal)
            weight += unit.unit_weight * line.quantity
            quantity += line.quantity

        shipping, shipping_status, shipping_region = self._quote_shipping(
            working, context, destination_country, weight, has_items=bool(subtotals)
        )

        totals = self.accumulator.cart_total(
            subtotals,
            shipping if shipping is not None else ZERO,
            self.tax_policy,
            currency=working.currency,
        )

        logger.debug(
            f"Reconciled cart {cart.code}: {len(subtotals)} active, "
            f"{len(unavailable)} unavailable, subtotal={totals.subtotal}"
        )

        return working.model_copy(update={
            "lines": tuple(lines),
            "unavailable_items": tuple(unavailable),
            "quantity": quantity,
            "subtotal": totals.subtotal,
            "shipping": totals.shipping if shipping is not None else None,
            "shipping_status": shipping_status,
            "shipping_region": shipping_region,
            "tax": totals.tax,
            "total": totals.total if shipping_status != ShippingStatus.UNAVAILABLE else None,
            "state": CartState.CLEAN,
        })

    def _resolve_line(self, line: CartLineItem, context: StoreContext) -> ResolvedUnit:
        product = self._catalog.get_product(line.product_id)
        if product is None or product.store_code != context.store_code:
            raise Discontinued(line.product_id, line_id=line.line_id)

        unit = self.resolver.resolve(product, line.option_value_ids, line_id=line.line_id)
        self.checker.check(unit, context).raise_for_status(line_id=line.line_id)
        return unit

    def _flag(self, line: CartLineItem, error: Exception) -> UnavailableItem:
        reason = _reason_for(error)
        logger.info(f"Line {line.line_id} ({line.product_id}) unavailable: {error}")

        product = self._catalog.get_product(line.product_id)
        name = product.name if product is not None else line.name
        cleared = line.model_copy(update={
            "name": name,
            "resolved_unit_price": None,
            "unit_weight": None,
            "subtotal": None,
        })
        return UnavailableItem(line=cleared, reason=reason, message=error.message)

    @staticmethod
    def _priced(line: CartLineItem, unit: ResolvedUnit, subtotal: Decimal) -> CartLineItem:
        return line.model_copy(update={
            "sku": unit.sku,
            "name": unit.name,
            "image_url": unit.image_url,
            "variant_id": unit.variant_id,
            "attributes": unit.attributes,
            "resolved_unit_price": unit.unit_price,
            "unit_weight": unit.unit_weight,
            "subtotal": subtotal,
        })

    def _quote_shipping(
        self,
        cart: Cart,
        context: StoreContext,
        destination_country: Optional[str],
        weight: Decimal,
        has_items: bool,
    ) -> tuple[Optional[Decimal], ShippingStatus, Optional[str]]:
        if not destination_country or not has_items:
            return ZERO, ShippingStatus.NOT_REQUESTED, None

        regions = self._shipping_regions.get_custom_regions(context.store_code)
        try:
            quote = self.matcher.match(destination_country, weight, regions)
        except NoRegionMatched as e:
            logger.info(f"Shipping unavailable for cart {cart.code}: {e}")
            return None, ShippingStatus.UNAVAILABLE, None

        return quote.price, ShippingStatus.QUOTED, quote.region_name
