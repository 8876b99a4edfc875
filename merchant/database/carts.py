"""Cart storage for the merchant service"""

from typing import Optional

from cartcore.errors import CartNotFoundError
from cartcore.models import Cart


class CartDatabase:
    """In-memory cart storage"""

    def __init__(self):
        self.carts: dict[str, Cart] = {}

    def create_cart(
        self,
        store_code: str,
        currency: str = "USD",
        customer_id: Optional[str] = None,
    ) -> Cart:
        """Create and store a new empty cart"""
        cart = Cart(store_code=store_code, currency=currency, customer_id=customer_id)
        self.carts[cart.code] = cart
        return cart

    def load_cart(self, cart_code: str) -> Cart:
        """Get a cart by code"""
        cart = self.carts.get(cart_code)
        if cart is None:
            raise CartNotFoundError(cart_code)
        return cart

    def save_cart(self, cart: Cart) -> None:
        self.carts[cart.code] = cart

    def delete_cart(self, cart_code: str) -> bool:
        """Delete a cart"""
        if cart_code in self.carts:
            del self.carts[cart_code]
            return True
        return False
