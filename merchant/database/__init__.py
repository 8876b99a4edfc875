# Database modules

from .catalog import DEFAULT_STORE, ProductDatabase
from .inventory import InventoryDatabase
from .shipping import ShippingRegionDatabase
from .carts import CartDatabase

__all__ = [
    "DEFAULT_STORE",
    "ProductDatabase",
    "InventoryDatabase",
    "ShippingRegionDatabase",
    "CartDatabase",
]
