"""
Price Accumulator

Fixed-point cart arithmetic. Line subtotals are rounded half-up to the
currency's minor unit when multiplied; cart totals sum already-rounded
amounts.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable, Optional

from .models.catalog import ResolvedUnit

TaxPolicy = Callable[[Decimal], Decimal]

ZERO = Decimal("0")

# ISO 4217 minor units for currencies that differ from 2
MINOR_UNITS: dict[str, int] = {
    "JPY": 0,
    "KRW": 0,
    "VND": 0,
    "CLP": 0,
    "ISK": 0,
    "BHD": 3,
    "KWD": 3,
    "JOD": 3,
    "OMR": 3,
    "TND": 3,
}


def quantize(amount: Decimal, currency: str = "USD") -> Decimal:
    """Round half-up to the currency's minor unit"""
    exponent = Decimal(1).scaleb(-MINOR_UNITS.get(currency.upper(), 2))
    return Decimal(amount).quantize(exponent, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CartTotals:
    """Cart-level amounts"""
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


class PriceAccumulator:
    """Computes line subtotals and cart totals"""

    def line_subtotal(self, unit: ResolvedUnit, quantity: int) -> Decimal:
        """unit price x quantity, rounded at the multiplication"""
        return quantize(unit.unit_price * quantity, unit.currency)

    def cart_total(
        self,
        line_subtotals: Iterable[Decimal],
        shipping_contribution: Decimal = ZERO,
        tax_policy: Optional[TaxPolicy] = None,
        currency: str = "USD",
    ) -> CartTotals:
        """
        Sum line subtotals and add shipping and tax.

        Args:
            line_subtotals: Rounded line subtotals
            shipping_contribution: Shipping cost for the whole cart
            tax_policy: Callable returning the tax owed on a subtotal
            currency: Currency whose minor unit amounts are rounded to

        Returns:
            CartTotals
        """
        subtotal = quantize(sum(line_subtotals, ZERO), currency)
        shipping = quantize(shipping_contribution, currency)
        tax = quantize(tax_policy(subtotal), currency) if tax_policy else quantize(ZERO, currency)
        return CartTotals(
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=subtotal + shipping + tax,
        )
