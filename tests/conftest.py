"""Shared test fixtures.

Provides a small catalog, inventory and shipping configuration that the
engine and service tests build on.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from cartcore import CartReconciler
from cartcore.models import (
    AvailabilityRecord,
    Cart,
    CustomShippingRegion,
    OptionValue,
    Product,
    ProductOption,
    ProductVariant,
    StoreContext,
    WeightPriceItem,
)
from merchant.database import (
    CartDatabase,
    InventoryDatabase,
    ProductDatabase,
    ShippingRegionDatabase,
)

STORE = "TEST"


@pytest.fixture
def shoe() -> Product:
    """Shoe with a required size option and an explicit size-10 variant."""
    return Product(
        id="shoe",
        store_code=STORE,
        sku="SHOE",
        name="Runner",
        price=Decimal("99.00"),
        weight=Decimal("1.0"),
        options=(ProductOption(code="SHOESIZE", name="Shoe size", required=True),),
    )


@pytest.fixture
def tee() -> Product:
    """T-shirt with an optional color option and no variants."""
    return Product(
        id="tee",
        store_code=STORE,
        sku="TEE",
        name="Basic Tee",
        price=Decimal("20.00"),
        weight=Decimal("0.2"),
        options=(ProductOption(code="COLOR", name="Color"),),
    )


@pytest.fixture
def option_values() -> dict[str, OptionValue]:
    values = [
        OptionValue(id="size-9", product_id="shoe", option_code="SHOESIZE", code="nine", name="9"),
        OptionValue(
            id="size-10", product_id="shoe", option_code="SHOESIZE", code="ten", name="10",
            price_delta=Decimal("20.00"),
        ),
        OptionValue(
            id="red", product_id="tee", option_code="COLOR", code="red", name="Red",
            price_delta=Decimal("2.50"), weight_delta=Decimal("0.05"),
        ),
        OptionValue(
            id="blue", product_id="tee", option_code="COLOR", code="blue", name="Blue",
            price_delta=Decimal("3.00"),
        ),
    ]
    return {v.id: v for v in values}


@pytest.fixture
def size_10_variant() -> ProductVariant:
    return ProductVariant(
        id="shoe-10",
        product_id="shoe",
        sku="SHOE-10",
        option_value_ids={"size-10"},
        price=Decimal("119.00"),
    )


@pytest.fixture
def catalog(shoe, tee, option_values, size_10_variant) -> ProductDatabase:
    return ProductDatabase(
        products={shoe.id: shoe, tee.id: tee},
        option_values=option_values,
        variants={"shoe": [size_10_variant]},
    )


@pytest.fixture
def inventory() -> InventoryDatabase:
    return InventoryDatabase([
        AvailabilityRecord(unit_id="shoe", store_code=STORE, quantity=8),
        AvailabilityRecord(unit_id="shoe-10", store_code=STORE, quantity=5),
        AvailabilityRecord(unit_id="tee", store_code=STORE, quantity=100),
    ])


@pytest.fixture
def north_america() -> CustomShippingRegion:
    return CustomShippingRegion(
        region_name="NorthAmerica",
        countries=["US", "CA"],
        quote_items=[
            WeightPriceItem(max_weight=Decimal("5"), price=Decimal("10.00")),
            WeightPriceItem(max_weight=Decimal("20"), price=Decimal("25.00")),
        ],
    )


@pytest.fixture
def shipping_regions(north_america) -> ShippingRegionDatabase:
    return ShippingRegionDatabase({STORE: [north_america]})


@pytest.fixture
def context() -> StoreContext:
    return StoreContext(store_code=STORE)


@pytest.fixture
def reconciler(catalog, inventory, shipping_regions) -> CartReconciler:
    return CartReconciler(catalog, inventory, shipping_regions)


@pytest.fixture
def cart() -> Cart:
    return Cart(store_code=STORE)


@pytest.fixture
def carts() -> CartDatabase:
    return CartDatabase()
