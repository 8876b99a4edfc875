"""In-memory inventory"""

from typing import Optional

from cartcore.models import ALL_REGIONS, AvailabilityRecord

from .catalog import DEFAULT_STORE

# Mock stock levels
AVAILABILITY: list[AvailabilityRecord] = [
    AvailabilityRecord(unit_id="prod-001", store_code=DEFAULT_STORE, quantity=50),
    AvailabilityRecord(unit_id="prod-004", store_code=DEFAULT_STORE, quantity=75),
    AvailabilityRecord(unit_id="prod-004", store_code=DEFAULT_STORE, region="CA", quantity=0),
    AvailabilityRecord(unit_id="var-005-9", store_code=DEFAULT_STORE, quantity=0),
    AvailabilityRecord(unit_id="var-005-10", store_code=DEFAULT_STORE, quantity=12),
    AvailabilityRecord(unit_id="prod-010", store_code=DEFAULT_STORE, quantity=0, backorder=True),
]


class InventoryDatabase:
    """In-memory stock records keyed by (unit, store, region)"""

    def __init__(self, records: Optional[list[AvailabilityRecord]] = None):
        self.records: dict[tuple[str, str, str], AvailabilityRecord] = {}
        for record in AVAILABILITY if records is None else records:
            self.put(record)

    def get_availability(
        self, unit_id: str, store_code: str, region_code: str
    ) -> Optional[AvailabilityRecord]:
        """Get the record for an exact (unit, store, region) key"""
        return self.records.get((unit_id, store_code, region_code))

    def put(self, record: AvailabilityRecord) -> None:
        self.records[(record.unit_id, record.store_code, record.region)] = record

    def update_stock(
        self,
        unit_id: str,
        quantity_change: int,
        store_code: str = DEFAULT_STORE,
        region: str = ALL_REGIONS,
    ) -> bool:
        """
        Update stock for a unit.

        Args:
            unit_id: Unit to update
            quantity_change: Positive to add, negative to remove

        Returns:
            True if successful
        """
        record = self.records.get((unit_id, store_code, region))
        if not record:
            return False

        new_quantity = record.quantity + quantity_change
        if new_quantity < 0 and not record.backorder:
            return False

        self.put(record.model_copy(update={"quantity": new_quantity}))
        return True

    def remove(self, unit_id: str, store_code: str = DEFAULT_STORE, region: str = ALL_REGIONS) -> bool:
        return self.records.pop((unit_id, store_code, region), None) is not None
