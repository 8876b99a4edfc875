"""
Availability Checker

Reads stock for a resolved unit from an inventory snapshot. The snapshot
may lag true stock; no retries are made.
"""

import logging

from .interfaces import InventoryLookup
from .models.catalog import ResolvedUnit
from .models.inventory import (
    ALL_REGIONS,
    Availability,
    AvailabilityStatus,
    StoreContext,
)

logger = logging.getLogger(__name__)


class AvailabilityChecker:
    """Determines whether a resolved unit can be purchased in a store and region"""

    def __init__(self, inventory: InventoryLookup):
        self._inventory = inventory

    def check(self, unit: ResolvedUnit, context: StoreContext) -> Availability:
        """
        Check a unit's availability.

        A record for the context's region takes precedence over the
        record scoped to all regions ("*").

        Returns:
            Availability with status AVAILABLE, OUT_OF_STOCK or DISCONTINUED
        """
        return self.check_unit(unit.unit_id, context)

    def check_unit(self, unit_id: str, context: StoreContext) -> Availability:
        record = None
        if context.region != ALL_REGIONS:
            record = self._inventory.get_availability(unit_id, context.store_code, context.region)
        if record is None:
            record = self._inventory.get_availability(unit_id, context.store_code, ALL_REGIONS)

        if record is None:
            logger.debug(f"No availability record for {unit_id} in {context.store_code}/{context.region}")
            return Availability(
                unit_id=unit_id,
                status=AvailabilityStatus.DISCONTINUED,
                region=context.region,
            )

        if record.quantity <= 0 and not record.backorder:
            status = AvailabilityStatus.OUT_OF_STOCK
        else:
            status = AvailabilityStatus.AVAILABLE

        return Availability(
            unit_id=unit_id,
            status=status,
            quantity_on_hand=max(record.quantity, 0),
            region=record.region,
        )
