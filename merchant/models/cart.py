"""Cart API request and response models"""

from typing import Optional

from pydantic import BaseModel, Field

from cartcore.readable import ReadableCart


class CreateCartRequest(BaseModel):
    """Request to create a cart"""
    customer_id: Optional[str] = None


class AddToCartRequest(BaseModel):
    """Request to add item to cart"""
    product_id: str
    option_value_ids: list[str] = Field(default_factory=list)
    # values <= 0 are treated as 1
    quantity: int = 1


class UpdateCartItemRequest(BaseModel):
    """Request to update cart item quantity"""
    quantity: int


class ReselectOptionsRequest(BaseModel):
    """Request to change a line item's option selection"""
    option_value_ids: list[str]


class CartResponse(BaseModel):
    """Cart API response"""
    cart: ReadableCart
    message: Optional[str] = None
