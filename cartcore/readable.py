"""Read-only cart projection for the web layer"""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from .models.cart import Cart, CartLineItem, UnavailableReason
from .models.shipping import ShippingStatus


class ReadableAttribute(BaseModel):
    """Selected option shown on a cart item"""
    option_code: str
    option_name: str
    value_code: str
    value_name: str


class ReadableCartItem(BaseModel):
    """Active line item with its resolved price"""
    line_id: str
    product_id: str
    variant_id: Optional[str] = None
    sku: Optional[str] = None
    name: Optional[str] = None
    image_url: Optional[str] = None
    quantity: int
    unit_price: Optional[Decimal] = None
    subtotal: Optional[Decimal] = None
    option_value_ids: list[str] = []
    attributes: list[ReadableAttribute] = []


class ReadableUnavailableItem(BaseModel):
    """Line item the customer must be told about"""
    line_id: str
    product_id: str
    name: Optional[str] = None
    quantity: int
    option_value_ids: list[str] = []
    reason: UnavailableReason
    message: str


class ReadableCart(BaseModel):
    """Cart as returned to API clients"""
    code: str
    currency: str
    quantity: int
    subtotal: Decimal
    shipping: Optional[Decimal] = None
    shipping_status: ShippingStatus
    shipping_region: Optional[str] = None
    tax: Decimal
    total: Optional[Decimal] = None
    items: list[ReadableCartItem] = []
    unavailable_items: list[ReadableUnavailableItem] = []
    order_id: Optional[str] = None


def _readable_item(line: CartLineItem) -> ReadableCartItem:
    return ReadableCartItem(
        line_id=line.line_id,
        product_id=line.product_id,
        variant_id=line.variant_id,
        sku=line.sku,
        name=line.name,
        image_url=line.image_url,
        quantity=line.quantity,
        unit_price=line.resolved_unit_price,
        subtotal=line.subtotal,
        option_value_ids=sorted(line.option_value_ids),
        attributes=[
            ReadableAttribute(
                option_code=a.option_code,
                option_name=a.option_name,
                value_code=a.value_code,
                value_name=a.value_name,
            )
            for a in line.attributes
        ],
    )


def to_readable(cart: Cart) -> ReadableCart:
    """Project a cart into its API representation"""
    return ReadableCart(
        code=cart.code,
        currency=cart.currency,
        quantity=cart.quantity,
        subtotal=cart.subtotal,
        shipping=cart.shipping,
        shipping_status=cart.shipping_status,
        shipping_region=cart.shipping_region,
        tax=cart.tax,
        total=cart.total,
        items=[_readable_item(line) for line in cart.active_lines],
        unavailable_items=[
            ReadableUnavailableItem(
                line_id=u.line.line_id,
                product_id=u.line.product_id,
                name=u.line.name,
                quantity=u.line.quantity,
                option_value_ids=sorted(u.line.option_value_ids),
                reason=u.reason,
                message=u.message,
            )
            for u in cart.unavailable_items
        ],
        order_id=cart.order_id,
    )
