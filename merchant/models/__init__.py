# Merchant API Models

from .cart import (
    AddToCartRequest,
    CartResponse,
    CreateCartRequest,
    ReselectOptionsRequest,
    UpdateCartItemRequest,
)

__all__ = [
    "AddToCartRequest",
    "CartResponse",
    "CreateCartRequest",
    "ReselectOptionsRequest",
    "UpdateCartItemRequest",
]
