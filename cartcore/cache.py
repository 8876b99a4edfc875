"""
Catalog Cache

Memoizes catalog reads for the reconciler. Built explicitly and passed
to the components that need it; one instance per application.
"""

import logging
import time
from typing import Any, Callable, Iterable, Optional

from .interfaces import CatalogLookup
from .models.catalog import OptionValue, Product, ProductVariant

logger = logging.getLogger(__name__)


class CatalogCache:
    """
    Read-through cache in front of a CatalogLookup.

    Usage:
        catalog = CatalogCache(product_db, ttl_seconds=30)
        reconciler = CartReconciler(catalog, inventory, regions)

        # after an admin edit
        catalog.invalidate("prod-001")
    """

    def __init__(
        self,
        catalog: CatalogLookup,
        ttl_seconds: float = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            catalog: Underlying catalog lookup
            ttl_seconds: Entry lifetime; 0 keeps entries until invalidated
            clock: Monotonic time source
        """
        self._catalog = catalog
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._products: dict[str, tuple[float, Optional[Product]]] = {}
        self._variants: dict[str, tuple[float, list[ProductVariant]]] = {}
        self._option_values: dict[str, tuple[float, OptionValue]] = {}

    def _fresh(self, entry: Optional[tuple[float, Any]]) -> bool:
        if entry is None:
            return False
        if not self.ttl_seconds:
            return True
        return self._clock() - entry[0] < self.ttl_seconds

    def get_product(self, product_id: str) -> Optional[Product]:
        entry = self._products.get(product_id)
        if self._fresh(entry):
            logger.debug(f"Catalog cache hit: product {product_id}")
            return entry[1]
        product = self._catalog.get_product(product_id)
        self._products[product_id] = (self._clock(), product)
        return product

    def get_variants(self, product_id: str) -> list[ProductVariant]:
        entry = self._variants.get(product_id)
        if self._fresh(entry):
            return list(entry[1])
        variants = list(self._catalog.get_variants(product_id))
        self._variants[product_id] = (self._clock(), variants)
        return list(variants)

    def get_option_values(self, ids: Iterable[str]) -> list[OptionValue]:
        ids = list(ids)
        missing = [i for i in ids if not self._fresh(self._option_values.get(i))]
        if missing:
            for key in missing:
                self._option_values.pop(key, None)
            now = self._clock()
            for value in self._catalog.get_option_values(missing):
                self._option_values[value.id] = (now, value)
        return [self._option_values[i][1] for i in ids if i in self._option_values]

    def invalidate(self, product_id: str) -> None:
        """Drop every entry belonging to a product"""
        self._products.pop(product_id, None)
        self._variants.pop(product_id, None)
        stale = [k for k, (_, v) in self._option_values.items() if v.product_id == product_id]
        for key in stale:
            del self._option_values[key]

    def clear(self) -> None:
        """Drop all entries"""
        self._products.clear()
        self._variants.clear()
        self._option_values.clear()
