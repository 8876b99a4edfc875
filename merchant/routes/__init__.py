# API Routes

from .cart import router as cart_router
from .shipping import router as shipping_router

__all__ = ["cart_router", "shipping_router"]
