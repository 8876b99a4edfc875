"""Custom shipping region configuration"""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Optional

from cartcore.models import (
    CustomShippingRegion,
    WeightPriceItem,
    dump_custom_regions,
    load_custom_regions,
)

from .catalog import DEFAULT_STORE

logger = logging.getLogger(__name__)

DEFAULT_REGIONS: list[CustomShippingRegion] = [
    CustomShippingRegion(
        region_name="NorthAmerica",
        countries=("US", "CA"),
        quote_items=(
            WeightPriceItem(max_weight=Decimal("5"), price=Decimal("10.00")),
            WeightPriceItem(max_weight=Decimal("20"), price=Decimal("25.00")),
        ),
    ),
    CustomShippingRegion(
        region_name="Europe",
        countries=("FR", "DE", "ES", "IT", "NL", "GB"),
        quote_items=(
            WeightPriceItem(max_weight=Decimal("2"), price=Decimal("15.00")),
            WeightPriceItem(max_weight=Decimal("10"), price=Decimal("40.00")),
        ),
    ),
]


class ShippingRegionDatabase:
    """Per-store custom shipping regions, kept in declaration order"""

    def __init__(self, regions: Optional[dict[str, list[CustomShippingRegion]]] = None):
        if regions is None:
            regions = {DEFAULT_STORE: list(DEFAULT_REGIONS)}
        self.regions = {store: list(r) for store, r in regions.items()}

    @classmethod
    def from_file(cls, path: str | Path, store_code: str = DEFAULT_STORE) -> "ShippingRegionDatabase":
        """Load one store's regions from a JSON array file"""
        regions = load_custom_regions(Path(path).read_bytes())
        logger.info(f"Loaded {len(regions)} custom shipping regions from {path}")
        return cls({store_code: regions})

    def get_custom_regions(self, store_code: str) -> list[CustomShippingRegion]:
        """Get a store's regions"""
        return list(self.regions.get(store_code, []))

    def set_custom_regions(self, store_code: str, regions: list[CustomShippingRegion]) -> None:
        self.regions[store_code] = list(regions)

    def export_json(self, store_code: str) -> bytes:
        """Serialize a store's regions to JSON"""
        return dump_custom_regions(self.get_custom_regions(store_code))
