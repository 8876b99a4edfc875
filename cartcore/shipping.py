"""
Custom Shipping Region Matcher

Picks a shipping price from merchant-defined regions by destination
country and aggregate cart weight.
"""

import logging
from decimal import Decimal
from typing import Sequence

from .errors import NoRegionMatched
from .models.shipping import CustomShippingRegion, ShippingQuote

logger = logging.getLogger(__name__)


class CustomShippingRegionMatcher:
    """
    Matches a destination and weight to a region's weight bracket.

    Overlapping regions are not validated: the first region in
    declaration order that covers the country is used.
    """

    def match(
        self,
        destination_country_code: str,
        total_weight: Decimal,
        regions: Sequence[CustomShippingRegion],
    ) -> ShippingQuote:
        """
        Quote shipping for a destination.

        Args:
            destination_country_code: ISO country code
            total_weight: Aggregate weight of the cart
            regions: Merchant regions in declaration order

        Returns:
            ShippingQuote from the first bracket whose max_weight >= total_weight

        Raises:
            NoRegionMatched: no region covers the country, or the weight
                exceeds every bracket of the chosen region
        """
        country = destination_country_code.strip().upper()
        matches = [r for r in regions if r.covers(country)]
        if not matches:
            raise NoRegionMatched(country, total_weight)

        if len(matches) > 1:
            logger.debug(
                f"{len(matches)} shipping regions cover {country}; "
                f"using '{matches[0].region_name}'"
            )
        region = matches[0]

        for item in region.quote_items:
            if item.max_weight >= total_weight:
                return ShippingQuote(
                    region_name=region.region_name,
                    max_weight=item.max_weight,
                    price=item.price,
                )

        raise NoRegionMatched(
            country,
            total_weight,
            reason=f"weight exceeds every bracket of region '{region.region_name}'",
        )
