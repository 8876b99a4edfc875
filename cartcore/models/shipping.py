"""Custom shipping region models"""

from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class ShippingStatus(str, Enum):
    NOT_REQUESTED = "not_requested"
    QUOTED = "quoted"
    UNAVAILABLE = "unavailable"


class WeightPriceItem(BaseModel):
    """Weight bracket: carts weighing up to max_weight ship for price"""
    model_config = ConfigDict(frozen=True)

    max_weight: Decimal = Field(ge=0)
    price: Decimal = Field(ge=0)


class CustomShippingRegion(BaseModel):
    """
    Merchant-defined shipping region.

    quote_items must be strictly ascending by max_weight; the first
    bracket whose max_weight covers the cart weight applies.
    """
    model_config = ConfigDict(frozen=True)

    region_name: str
    countries: tuple[str, ...] = ()
    quote_items: tuple[WeightPriceItem, ...] = ()

    @field_validator("countries", mode="before")
    @classmethod
    def _upper_countries(cls, v):
        return tuple(c.strip().upper() for c in v)

    @field_validator("quote_items")
    @classmethod
    def _ascending_brackets(cls, v: tuple[WeightPriceItem, ...]):
        weights = [item.max_weight for item in v]
        if any(a >= b for a, b in zip(weights, weights[1:])):
            raise ValueError("quote_items must be sorted ascending by max_weight")
        return v

    def covers(self, country_code: str) -> bool:
        return country_code.upper() in self.countries


class ShippingQuote(BaseModel):
    """Shipping contribution picked from a region's weight bracket"""
    model_config = ConfigDict(frozen=True)

    region_name: str
    max_weight: Decimal
    price: Decimal


_regions_adapter = TypeAdapter(list[CustomShippingRegion])


def load_custom_regions(data: str | bytes) -> list[CustomShippingRegion]:
    """Parse a JSON array of custom shipping regions"""
    return _regions_adapter.validate_json(data)


def dump_custom_regions(regions: list[CustomShippingRegion]) -> bytes:
    """Serialize custom shipping regions to a JSON array"""
    return _regions_adapter.dump_json(regions)
