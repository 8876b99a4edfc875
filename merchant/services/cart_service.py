"""Cart service: one load, mutate, reconcile, save cycle per request"""

import logging
import threading
from typing import Callable, Iterable, Optional

from cartcore import CartNotFoundError, CartReconciler
from cartcore.models import Cart, StoreContext

from ..database.carts import CartDatabase

logger = logging.getLogger(__name__)

Mutation = Callable[[Cart], Cart]


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - serialize mutations and reconciliation per cart code
      - reconcile after every mutation so responses carry fresh totals
      - persist the reconciled cart

    Locks are held only for carts that exist. Calls block, so routes
    invoke the service from FastAPI's threadpool.
    """

    def __init__(
        self,
        carts: CartDatabase,
        reconciler: CartReconciler,
        context: StoreContext,
    ):
        self.carts = carts
        self.reconciler = reconciler
        self.context = context
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # ---- internal helpers ----

    def _lock_for(self, cart_code: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(cart_code)
            if lock is None:
                lock = self._locks[cart_code] = threading.Lock()
            return lock

    def _drop_lock(self, cart_code: str) -> None:
        with self._locks_guard:
            self._locks.pop(cart_code, None)

    def _cycle(
        self,
        cart_code: str,
        mutation: Optional[Mutation],
        destination_country: Optional[str],
    ) -> Cart:
        with self._lock_for(cart_code):
            try:
                cart = self.carts.load_cart(cart_code)
            except CartNotFoundError:
                self._drop_lock(cart_code)
                raise
            if mutation is not None:
                cart = mutation(cart)
            cart = self.reconciler.reconcile(cart, self.context, destination_country)
            self.carts.save_cart(cart)
            return cart

    # ---- public operations ----

    def create_cart(self, customer_id: Optional[str] = None) -> Cart:
        cart = self.carts.create_cart(
            store_code=self.context.store_code,
            currency=self.context.currency,
            customer_id=customer_id,
        )
        logger.info(f"Created cart {cart.code}")
        return cart

    def get_cart(self, cart_code: str, destination_country: Optional[str] = None) -> Cart:
        """Reconcile and return a cart"""
        return self._cycle(cart_code, None, destination_country)

    def add_item(
        self,
        cart_code: str,
        product_id: str,
        option_value_ids: Iterable[str] = (),
        quantity: int = 1,
        name: Optional[str] = None,
        destination_country: Optional[str] = None,
    ) -> Cart:
        return self._cycle(
            cart_code,
            lambda cart: cart.add_line(product_id, option_value_ids, quantity, name=name),
            destination_country,
        )

    def update_quantity(
        self,
        cart_code: str,
        line_id: str,
        quantity: int,
        destination_country: Optional[str] = None,
    ) -> Cart:
        return self._cycle(
            cart_code,
            lambda cart: cart.update_quantity(line_id, quantity),
            destination_country,
        )

    def reselect_options(
        self,
        cart_code: str,
        line_id: str,
        option_value_ids: Iterable[str],
        destination_country: Optional[str] = None,
    ) -> Cart:
        return self._cycle(
            cart_code,
            lambda cart: cart.reselect_options(line_id, option_value_ids),
            destination_country,
        )

    def remove_item(
        self,
        cart_code: str,
        line_id: str,
        destination_country: Optional[str] = None,
    ) -> Cart:
        return self._cycle(cart_code, lambda cart: cart.remove_line(line_id), destination_country)

    def remove_unavailable(self, cart_code: str, destination_country: Optional[str] = None) -> Cart:
        """Confirm removal of the items last reported unavailable"""
        return self._cycle(cart_code, lambda cart: cart.remove_unavailable(), destination_country)

    def clear_cart(self, cart_code: str) -> Cart:
        return self._cycle(cart_code, lambda cart: cart.clear(), None)

    def delete_cart(self, cart_code: str) -> bool:
        with self._lock_for(cart_code):
            deleted = self.carts.delete_cart(cart_code)
        self._drop_lock(cart_code)
        return deleted
