"""Inventory and store context models"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..errors import Discontinued, OutOfStock

ALL_REGIONS = "*"


class StoreContext(BaseModel):
    """Store and region a cart is priced and stocked against"""
    model_config = ConfigDict(frozen=True)

    store_code: str
    region: str = ALL_REGIONS
    currency: str = "USD"


class AvailabilityRecord(BaseModel):
    """Stock record for one unit in one store and region"""
    model_config = ConfigDict(frozen=True)

    unit_id: str
    store_code: str
    region: str = ALL_REGIONS
    quantity: int = 0
    backorder: bool = False


class AvailabilityStatus(str, Enum):
    AVAILABLE = "available"
    OUT_OF_STOCK = "out_of_stock"
    DISCONTINUED = "discontinued"


class Availability(BaseModel):
    """Result of an availability check"""
    model_config = ConfigDict(frozen=True)

    unit_id: str
    status: AvailabilityStatus
    quantity_on_hand: int = 0
    region: str = ALL_REGIONS

    @property
    def is_available(self) -> bool:
        return self.status == AvailabilityStatus.AVAILABLE

    def raise_for_status(self, line_id: Optional[str] = None) -> None:
        """Raise OutOfStock or Discontinued unless the unit is available"""
        if self.status == AvailabilityStatus.OUT_OF_STOCK:
            raise OutOfStock(self.unit_id, line_id=line_id)
        if self.status == AvailabilityStatus.DISCONTINUED:
            raise Discontinued(self.unit_id, line_id=line_id)
