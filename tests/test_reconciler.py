"""Unit tests for CartReconciler."""

from __future__ import annotations

from decimal import Decimal

from cartcore import (
    AvailabilityChecker,
    AvailabilityError,
    CartReconciler,
    CatalogCache,
    OutOfStock,
    to_readable,
)
from cartcore.models import (
    AvailabilityRecord,
    CartState,
    ShippingStatus,
    StoreContext,
    UnavailableReason,
)


class TestReconcile:
    """Tests for CartReconciler.reconcile."""

    def test_prices_active_lines(self, reconciler, cart, context) -> None:
        cart = cart.add_line("tee", ["red"], 2).add_line("shoe", ["size-10"], 1)

        result = reconciler.reconcile(cart, context)

        assert result.state == CartState.CLEAN
        assert result.unavailable_items == ()
        assert result.quantity == 3
        assert result.subtotal == Decimal("164.00")
        assert result.total == Decimal("164.00")
        tee_line, shoe_line = result.lines
        assert tee_line.resolved_unit_price == Decimal("22.50")
        assert tee_line.subtotal == Decimal("45.00")
        assert shoe_line.variant_id == "shoe-10"
        assert shoe_line.sku == "SHOE-10"

    def test_input_cart_untouched(self, reconciler, cart, context) -> None:
        cart = cart.add_line("tee")

        reconciler.reconcile(cart, context)

        assert cart.state == CartState.DIRTY
        assert cart.lines[0].subtotal is None

    def test_out_of_stock_line_moves_to_unavailable(self, reconciler, inventory, cart, context) -> None:
        """Test a zero-stock line leaves the active list and the subtotal."""
        inventory.put(AvailabilityRecord(unit_id="tee", store_code="TEST", quantity=0))
        cart = cart.add_line("tee", quantity=2)

        result = reconciler.reconcile(cart, context)

        assert result.active_lines == ()
        assert len(result.unavailable_items) == 1
        flagged = result.unavailable_items[0]
        assert flagged.reason == UnavailableReason.OUT_OF_STOCK
        assert flagged.line.product_id == "tee"
        assert flagged.line.quantity == 2
        assert result.subtotal == Decimal("0")
        assert result.quantity == 0

    def test_partial_failure_keeps_other_lines(self, reconciler, cart, context) -> None:
        """Test one failing line does not affect the rest of the cart."""
        cart = cart.add_line("shoe").add_line("tee", quantity=1)

        result = reconciler.reconcile(cart, context)

        assert [l.product_id for l in result.active_lines] == ["tee"]
        assert result.unavailable_items[0].reason == UnavailableReason.INCOMPLETE_SELECTION
        assert result.subtotal == Decimal("20.00")

    def test_selection_preserved_on_unavailable_line(self, reconciler, cart, context) -> None:
        cart = cart.add_line("tee", ["red", "ghost"])

        result = reconciler.reconcile(cart, context)

        flagged = result.unavailable_items[0]
        assert flagged.reason == UnavailableReason.UNKNOWN_OPTION_VALUE
        assert flagged.line.option_value_ids == frozenset({"red", "ghost"})
        assert flagged.line.name == "Basic Tee"
        assert len(result.lines) == 1

    def test_missing_product_is_discontinued(self, reconciler, catalog, cart, context) -> None:
        cart = cart.add_line("tee")
        catalog.delete_product("tee")

        result = reconciler.reconcile(cart, context)

        assert result.unavailable_items[0].reason == UnavailableReason.DISCONTINUED

    def test_missing_inventory_record_is_discontinued(self, reconciler, inventory, cart, context) -> None:
        inventory.remove("shoe-10", store_code="TEST")
        cart = cart.add_line("shoe", ["size-10"])

        result = reconciler.reconcile(cart, context)

        assert result.unavailable_items[0].reason == UnavailableReason.DISCONTINUED
        assert result.unavailable_items[0].line.resolved_unit_price is None

    def test_product_from_other_store_is_discontinued(self, reconciler, cart) -> None:
        cart = cart.add_line("tee")

        result = reconciler.reconcile(cart, StoreContext(store_code="ELSEWHERE"))

        assert result.unavailable_items[0].reason == UnavailableReason.DISCONTINUED

    def test_item_recovers_when_restocked(self, reconciler, inventory, cart, context) -> None:
        inventory.put(AvailabilityRecord(unit_id="tee", store_code="TEST", quantity=0))
        cart = reconciler.reconcile(cart.add_line("tee"), context)
        assert len(cart.unavailable_items) == 1

        inventory.put(AvailabilityRecord(unit_id="tee", store_code="TEST", quantity=4))
        result = reconciler.reconcile(cart, context)

        assert result.unavailable_items == ()
        assert result.subtotal == Decimal("20.00")

    def test_remove_unavailable_after_confirmation(self, reconciler, inventory, cart, context) -> None:
        inventory.put(AvailabilityRecord(unit_id="tee", store_code="TEST", quantity=0))
        cart = reconciler.reconcile(cart.add_line("tee").add_line("shoe", ["size-10"]), context)

        result = reconciler.reconcile(cart.remove_unavailable(), context)

        assert [l.product_id for l in result.lines] == ["shoe"]
        assert result.unavailable_items == ()

    def test_empty_cart(self, reconciler, cart, context) -> None:
        result = reconciler.reconcile(cart, context, "CA")

        assert result.subtotal == Decimal("0")
        assert result.shipping == Decimal("0")
        assert result.total == Decimal("0")
        assert result.shipping_status == ShippingStatus.NOT_REQUESTED

    def test_tax_policy(self, catalog, inventory, shipping_regions, cart, context) -> None:
        reconciler = CartReconciler(
            catalog, inventory, shipping_regions, tax_policy=lambda subtotal: subtotal * Decimal("0.10")
        )

        result = reconciler.reconcile(cart.add_line("tee"), context)

        assert result.tax == Decimal("2.00")
        assert result.total == Decimal("22.00")


class TestReconcileShipping:
    """Tests for the shipping contribution."""

    def test_shipping_quote_added(self, reconciler, catalog, cart, context) -> None:
        """Test aggregate weight 12 to CA adds 25.00."""
        cart = cart.add_line("shoe", ["size-9"], 12)

        result = reconciler.reconcile(cart, context, "CA")

        assert result.shipping_status == ShippingStatus.QUOTED
        assert result.shipping_region == "NorthAmerica"
        assert result.shipping == Decimal("25.00")
        assert result.subtotal == Decimal("1188.00")
        assert result.total == Decimal("1213.00")

    def test_no_region_matched_is_distinct(self, reconciler, cart, context) -> None:
        """Test weight 50 to CA reports shipping unavailable with no total."""
        cart = cart.add_line("shoe", ["size-9"], 50)

        result = reconciler.reconcile(cart, context, "CA")

        assert result.shipping_status == ShippingStatus.UNAVAILABLE
        assert result.shipping is None
        assert result.total is None
        assert result.subtotal == Decimal("4950.00")

    def test_unavailable_items_excluded_from_weight(self, reconciler, inventory, cart, context) -> None:
        inventory.put(AvailabilityRecord(unit_id="shoe", store_code="TEST", quantity=0))
        cart = cart.add_line("shoe", ["size-9"], 40).add_line("tee", quantity=1)

        result = reconciler.reconcile(cart, context, "US")

        assert result.shipping_status == ShippingStatus.QUOTED
        assert result.shipping == Decimal("10.00")

    def test_no_destination(self, reconciler, cart, context) -> None:
        result = reconciler.reconcile(cart.add_line("tee"), context)

        assert result.shipping_status == ShippingStatus.NOT_REQUESTED
        assert result.total == result.subtotal


class TestReconcileIdempotence:
    """Tests that reconcile is a pure function of cart and snapshot."""

    def test_reconcile_twice_identical_projection(self, reconciler, inventory, cart, context) -> None:
        inventory.put(AvailabilityRecord(unit_id="tee", store_code="TEST", quantity=0))
        cart = cart.add_line("tee", ["red"], 2).add_line("shoe", ["size-10"]).add_line("shoe")

        once = reconciler.reconcile(cart, context, "US")
        twice = reconciler.reconcile(once, context, "US")

        assert to_readable(once).model_dump_json() == to_readable(twice).model_dump_json()
        assert once == twice


class TestVariantPrecedenceThroughReconcile:
    """Tests that carts price explicit variants, not synthetic units."""

    def test_variant_price_change_reaches_cart(self, reconciler, catalog, size_10_variant, cart, context) -> None:
        cart = cart.add_line("shoe", ["size-10"])

        before = reconciler.reconcile(cart, context)
        catalog.put_variant(size_10_variant.model_copy(update={"price": Decimal("129.00")}))
        after = reconciler.reconcile(cart, context)

        assert before.lines[0].variant_id == "shoe-10"
        assert before.subtotal == Decimal("119.00")
        assert after.subtotal == Decimal("129.00")


class TestReconcileWithCache:
    """Tests for reconciling through a CatalogCache."""

    def test_cached_catalog_until_invalidated(self, catalog, inventory, shipping_regions, size_10_variant, cart, context) -> None:
        cache = CatalogCache(catalog)
        reconciler = CartReconciler(cache, inventory, shipping_regions)
        cart = cart.add_line("shoe", ["size-10"])

        assert reconciler.reconcile(cart, context).subtotal == Decimal("119.00")
        catalog.put_variant(size_10_variant.model_copy(update={"price": Decimal("129.00")}))
        assert reconciler.reconcile(cart, context).subtotal == Decimal("119.00")

        cache.invalidate("shoe")
        assert reconciler.reconcile(cart, context).subtotal == Decimal("129.00")


class OfflineChecker(AvailabilityChecker):
    """Checker whose inventory backend is unreachable."""

    def check(self, unit, context):
        raise AvailabilityError("Inventory offline", unit_id=unit.unit_id)


class WarehouseChecker(AvailabilityChecker):
    """Checker raising a store-specific OutOfStock subclass."""

    class NotInWarehouse(OutOfStock):
        pass

    def check(self, unit, context):
        raise self.NotInWarehouse(unit.unit_id)


class TestReconcileFailureReasons:
    """Tests for how failed lines are classified."""

    def test_conflicting_options_flagged(self, reconciler, cart, context) -> None:
        cart = cart.add_line("tee", ["red", "blue"]).add_line("shoe", ["size-9"])

        result = reconciler.reconcile(cart, context)

        assert len(result.unavailable_items) == 1
        flagged = result.unavailable_items[0]
        assert flagged.reason == UnavailableReason.CONFLICTING_OPTIONS
        assert flagged.line.resolved_unit_price is None
        assert flagged.line.option_value_ids == frozenset({"red", "blue"})
        assert result.subtotal == Decimal("99.00")

    def test_base_availability_error_from_custom_checker(
        self, catalog, inventory, shipping_regions, cart, context
    ) -> None:
        reconciler = CartReconciler(
            catalog, inventory, shipping_regions, checker=OfflineChecker(inventory)
        )

        result = reconciler.reconcile(cart.add_line("tee"), context)

        assert result.unavailable_items[0].reason == UnavailableReason.UNAVAILABLE
        assert result.unavailable_items[0].message == "Inventory offline"
        assert result.state == CartState.CLEAN

    def test_error_subclass_uses_parent_reason(
        self, catalog, inventory, shipping_regions, cart, context
    ) -> None:
        reconciler = CartReconciler(
            catalog, inventory, shipping_regions, checker=WarehouseChecker(inventory)
        )

        result = reconciler.reconcile(cart.add_line("tee"), context)

        assert result.unavailable_items[0].reason == UnavailableReason.OUT_OF_STOCK
