"""Catalog models: products, options, variants and resolved units"""

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OptionValue(BaseModel):
    """One value of a product option, e.g. SHOESIZE=nine, with its deltas"""
    model_config = ConfigDict(frozen=True)

    id: str
    product_id: str
    option_code: str
    code: str
    name: str
    price_delta: Decimal = Decimal("0")
    weight_delta: Decimal = Decimal("0")


class ProductOption(BaseModel):
    """Option definition on a product (SHOESIZE, COLOR, ...)"""
    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    required: bool = False
    multi_select: bool = False


class Product(BaseModel):
    """Product in the catalog"""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str
    store_code: str
    sku: str
    name: str
    description: str = ""
    image_url: Optional[str] = None
    price: Decimal = Field(ge=0)
    weight: Decimal = Field(default=Decimal("0"), ge=0)
    currency: str = "USD"
    options: tuple[ProductOption, ...] = ()
    # False: option values attach deltas to the base product and no
    # variant row is needed to sell a combination
    variants_required: bool = False

    @property
    def option_codes(self) -> set[str]:
        return {o.code for o in self.options}

    @property
    def required_option_codes(self) -> set[str]:
        return {o.code for o in self.options if o.required}

    def get_option(self, code: str) -> Optional[ProductOption]:
        return next((o for o in self.options if o.code == code), None)


class ProductVariant(BaseModel):
    """Merchant-curated SKU bound to one option value combination"""
    model_config = ConfigDict(frozen=True)

    id: str
    product_id: str
    sku: str
    option_value_ids: frozenset[str]
    price: Decimal = Field(ge=0)
    weight: Optional[Decimal] = Field(default=None, ge=0)

    @field_validator("option_value_ids", mode="before")
    @classmethod
    def _as_frozenset(cls, v):
        return frozenset(v)


class ResolutionSource(str, Enum):
    """How a resolved unit was derived"""
    BASE = "base"
    VARIANT = "variant"
    ATTRIBUTES = "attributes"


class SelectedAttribute(BaseModel):
    """Display form of one selected option value"""
    model_config = ConfigDict(frozen=True)

    option_value_id: str
    option_code: str
    option_name: str
    value_code: str
    value_name: str


class ResolvedUnit(BaseModel):
    """The concrete purchasable unit with effective price and weight"""
    model_config = ConfigDict(frozen=True)

    unit_id: str
    product_id: str
    variant_id: Optional[str] = None
    sku: str
    name: str
    image_url: Optional[str] = None
    unit_price: Decimal
    unit_weight: Decimal
    currency: str = "USD"
    source: ResolutionSource
    attributes: tuple[SelectedAttribute, ...] = ()
