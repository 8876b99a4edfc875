"""Cart API routes

Handlers are plain functions: the cart service blocks on per-cart locks,
so FastAPI runs them in its threadpool.
"""

from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cartcore import CartNotFoundError, LineItemNotFoundError, to_readable
from cartcore.interfaces import CatalogLookup
from cartcore.models import Cart

from ..models.cart import (
    AddToCartRequest,
    CartResponse,
    CreateCartRequest,
    ReselectOptionsRequest,
    UpdateCartItemRequest,
)
from ..services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["Cart"])

CountryQuery = Query(None, min_length=2, max_length=2, description="Shipping destination country")


def get_cart_service(request: Request) -> CartService:
    return request.app.state.cart_service


def get_catalog(request: Request) -> CatalogLookup:
    return request.app.state.catalog


def _run(call: Callable[[], Cart]) -> Cart:
    """Map lookup errors to 404 responses"""
    try:
        return call()
    except CartNotFoundError:
        raise HTTPException(status_code=404, detail="Cart not found")
    except LineItemNotFoundError:
        raise HTTPException(status_code=404, detail="Item not in cart")


@router.post("", response_model=CartResponse)
def create_cart(
    request: Optional[CreateCartRequest] = None,
    service: CartService = Depends(get_cart_service),
):
    """Create a new shopping cart"""
    cart = service.create_cart(customer_id=request.customer_id if request else None)
    return CartResponse(cart=to_readable(cart), message="Cart created")


@router.get("/{cart_code}", response_model=CartResponse)
def get_cart(
    cart_code: str,
    country: Optional[str] = CountryQuery,
    service: CartService = Depends(get_cart_service),
):
    """Get cart by code, reconciled against current stock and prices"""
    cart = _run(lambda: service.get_cart(cart_code, country))
    return CartResponse(cart=to_readable(cart))


@router.post("/{cart_code}/items", response_model=CartResponse)
def add_to_cart(
    cart_code: str,
    request: AddToCartRequest,
    country: Optional[str] = CountryQuery,
    service: CartService = Depends(get_cart_service),
    catalog: CatalogLookup = Depends(get_catalog),
):
    """Add an item to the cart"""
    product = catalog.get_product(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    cart = _run(lambda: service.add_item(
        cart_code,
        product.id,
        request.option_value_ids,
        request.quantity,
        name=product.name,
        destination_country=country,
    ))
    return CartResponse(cart=to_readable(cart), message=f"Added {product.name} to cart")


@router.put("/{cart_code}/items/{line_id}", response_model=CartResponse)
def update_cart_item(
    cart_code: str,
    line_id: str,
    request: UpdateCartItemRequest,
    country: Optional[str] = CountryQuery,
    service: CartService = Depends(get_cart_service),
):
    """Update item quantity in cart"""
    cart = _run(lambda: service.update_quantity(cart_code, line_id, request.quantity, country))
    return CartResponse(cart=to_readable(cart), message="Cart updated")


@router.put("/{cart_code}/items/{line_id}/options", response_model=CartResponse)
def reselect_item_options(
    cart_code: str,
    line_id: str,
    request: ReselectOptionsRequest,
    country: Optional[str] = CountryQuery,
    service: CartService = Depends(get_cart_service),
):
    """Change the selected options of a cart item"""
    cart = _run(lambda: service.reselect_options(cart_code, line_id, request.option_value_ids, country))
    return CartResponse(cart=to_readable(cart), message="Cart updated")


@router.delete("/{cart_code}/items/{line_id}", response_model=CartResponse)
def remove_from_cart(
    cart_code: str,
    line_id: str,
    country: Optional[str] = CountryQuery,
    service: CartService = Depends(get_cart_service),
):
    """Remove an item from the cart"""
    cart = _run(lambda: service.remove_item(cart_code, line_id, country))
    return CartResponse(cart=to_readable(cart), message="Item removed")


@router.delete("/{cart_code}/unavailable", response_model=CartResponse)
def remove_unavailable_items(
    cart_code: str,
    country: Optional[str] = CountryQuery,
    service: CartService = Depends(get_cart_service),
):
    """Remove the items reported as unavailable"""
    cart = _run(lambda: service.remove_unavailable(cart_code, country))
    return CartResponse(cart=to_readable(cart), message="Unavailable items removed")


@router.delete("/{cart_code}/items", response_model=CartResponse)
def clear_cart(
    cart_code: str,
    service: CartService = Depends(get_cart_service),
):
    """Clear all items from cart"""
    cart = _run(lambda: service.clear_cart(cart_code))
    return CartResponse(cart=to_readable(cart), message="Cart cleared")


@router.delete("/{cart_code}")
def delete_cart(
    cart_code: str,
    service: CartService = Depends(get_cart_service),
):
    """Delete a cart"""
    if not service.delete_cart(cart_code):
        raise HTTPException(status_code=404, detail="Cart not found")
    return {"deleted": cart_code}
