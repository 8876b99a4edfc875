"""Collaborator interfaces consumed by the cart engine"""

from typing import Iterable, Optional, Protocol

from .models.cart import Cart
from .models.catalog import OptionValue, Product, ProductVariant
from .models.inventory import AvailabilityRecord
from .models.shipping import CustomShippingRegion


class CatalogLookup(Protocol):
    """Product catalog reads"""

    def get_product(self, product_id: str) -> Optional[Product]: ...

    def get_variants(self, product_id: str) -> list[ProductVariant]: ...

    def get_option_values(self, ids: Iterable[str]) -> list[OptionValue]: ...


class InventoryLookup(Protocol):
    """Exact-match stock lookup; region fallback is the caller's job"""

    def get_availability(
        self, unit_id: str, store_code: str, region_code: str
    ) -> Optional[AvailabilityRecord]: ...


class ShippingRegionSource(Protocol):
    def get_custom_regions(self, store_code: str) -> list[CustomShippingRegion]: ...


class CartRepository(Protocol):
    """Cart persistence; errors raised here reach the caller unchanged"""

    def load_cart(self, cart_code: str) -> Cart: ...

    def save_cart(self, cart: Cart) -> None: ...
