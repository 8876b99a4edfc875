"""Cart models"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..errors import LineItemNotFoundError
from .catalog import SelectedAttribute
from .shipping import ShippingStatus


def normalize_quantity(quantity: int) -> int:
    """
    Map non-positive quantities to 1.

    Kept for compatibility with storefront clients that send 0 or a
    negative number when they mean "one".
    """
    return quantity if quantity > 0 else 1


def _now() -> datetime:
    return datetime.now(timezone.utc)


class CartState(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"
    # held only by the working copy inside CartReconciler.reconcile
    RECONCILED = "reconciled"


class CartLineItem(BaseModel):
    """
    One product, option selection and quantity in a cart.

    The resolved fields are written by reconciliation only and are
    cleared whenever the selection or quantity changes.
    """
    model_config = ConfigDict(frozen=True)

    line_id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    product_id: str
    option_value_ids: frozenset[str] = frozenset()
    quantity: int = Field(default=1, ge=1)

    # resolved
    sku: Optional[str] = None
    name: Optional[str] = None
    image_url: Optional[str] = None
    variant_id: Optional[str] = None
    attributes: tuple[SelectedAttribute, ...] = ()
    resolved_unit_price: Optional[Decimal] = None
    unit_weight: Optional[Decimal] = None
    subtotal: Optional[Decimal] = None

    @field_validator("option_value_ids", mode="before")
    @classmethod
    def _as_frozenset(cls, v):
        return frozenset(v)

    def same_selection(self, product_id: str, option_value_ids: frozenset[str]) -> bool:
        return self.product_id == product_id and self.option_value_ids == option_value_ids

    def with_quantity(self, quantity: int) -> "CartLineItem":
        return self.model_copy(update={"quantity": normalize_quantity(quantity), "subtotal": None})

    def with_selection(self, option_value_ids: Iterable[str]) -> "CartLineItem":
        return self.model_copy(update={
            "option_value_ids": frozenset(option_value_ids),
            "sku": None,
            "variant_id": None,
            "attributes": (),
            "resolved_unit_price": None,
            "unit_weight": None,
            "subtotal": None,
        })


class UnavailableReason(str, Enum):
    INCOMPLETE_SELECTION = "incomplete_selection"
    UNKNOWN_OPTION_VALUE = "unknown_option_value"
    CONFLICTING_OPTIONS = "conflicting_options"
    NO_MATCHING_VARIANT = "no_matching_variant"
    UNRESOLVED = "unresolved"
    OUT_OF_STOCK = "out_of_stock"
    DISCONTINUED = "discontinued"
    UNAVAILABLE = "unavailable"


class UnavailableItem(BaseModel):
    """A line item that failed reconciliation, kept for user notification"""
    model_config = ConfigDict(frozen=True)

    line: CartLineItem
    reason: UnavailableReason
    message: str


class Cart(BaseModel):
    """
    Shopping cart.

    Mutating methods return a new cart in state DIRTY; totals and
    unavailable_items are only current after CartReconciler.reconcile.
    """
    model_config = ConfigDict(frozen=True)

    code: str = Field(default_factory=lambda: uuid.uuid4().hex)
    store_code: str
    customer_id: Optional[str] = None
    currency: str = "USD"
    lines: tuple[CartLineItem, ...] = ()
    unavailable_items: tuple[UnavailableItem, ...] = ()
    quantity: int = 0
    subtotal: Decimal = Decimal("0")
    shipping: Optional[Decimal] = Decimal("0")
    shipping_status: ShippingStatus = ShippingStatus.NOT_REQUESTED
    shipping_region: Optional[str] = None
    tax: Decimal = Decimal("0")
    total: Optional[Decimal] = Decimal("0")
    state: CartState = CartState.CLEAN
    order_id: Optional[str] = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    @property
    def unavailable_line_ids(self) -> set[str]:
        return {u.line.line_id for u in self.unavailable_items}

    @property
    def active_lines(self) -> tuple[CartLineItem, ...]:
        unavailable = self.unavailable_line_ids
        return tuple(line for line in self.lines if line.line_id not in unavailable)

    @property
    def is_dirty(self) -> bool:
        return self.state == CartState.DIRTY

    def line(self, line_id: str) -> CartLineItem:
        """Get a line item by id"""
        for line in self.lines:
            if line.line_id == line_id:
                return line
        raise LineItemNotFoundError(self.code, line_id)

    # ---- mutations ----

    def add_line(
        self,
        product_id: str,
        option_value_ids: Iterable[str] = (),
        quantity: int = 1,
        name: Optional[str] = None,
    ) -> "Cart":
        """Add a product selection, merging into an identical existing line"""
        quantity = normalize_quantity(quantity)
        selection = frozenset(option_value_ids)

        existing = next((l for l in self.lines if l.same_selection(product_id, selection)), None)
        if existing:
            return self._replace_line(existing.with_quantity(existing.quantity + quantity))

        line = CartLineItem(
            product_id=product_id,
            option_value_ids=selection,
            quantity=quantity,
            name=name,
        )
        return self._mutated(lines=self.lines + (line,))

    def update_quantity(self, line_id: str, quantity: int) -> "Cart":
        """Set a line's quantity; values <= 0 become 1"""
        return self._replace_line(self.line(line_id).with_quantity(quantity))

    def reselect_options(self, line_id: str, option_value_ids: Iterable[str]) -> "Cart":
        """Replace a line's option selection"""
        return self._replace_line(self.line(line_id).with_selection(option_value_ids))

    def remove_line(self, line_id: str) -> "Cart":
        """Remove a line item"""
        self.line(line_id)
        return self._mutated(lines=tuple(l for l in self.lines if l.line_id != line_id))

    def remove_unavailable(self) -> "Cart":
        """Drop the lines the last reconciliation flagged as unavailable"""
        unavailable = self.unavailable_line_ids
        return self._mutated(lines=tuple(l for l in self.lines if l.line_id not in unavailable))

    def clear(self) -> "Cart":
        """Remove all line items"""
        return self._mutated(lines=())

    def _replace_line(self, line: CartLineItem) -> "Cart":
        return self._mutated(lines=tuple(line if l.line_id == line.line_id else l for l in self.lines))

    def _mutated(self, lines: tuple[CartLineItem, ...]) -> "Cart":
        remaining = {l.line_id for l in lines}
        return self.model_copy(update={
            "lines": lines,
            "unavailable_items": tuple(u for u in self.unavailable_items if u.line.line_id in remaining),
            "state": CartState.DIRTY,
            "updated_at": _now(),
        })
