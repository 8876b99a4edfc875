"""
Variant Resolver

Resolves a product and a set of selected option values to the concrete
sellable unit: an explicit ProductVariant when one is bound to exactly
that selection, otherwise the base product with option value deltas
applied.
"""

import logging
from decimal import Decimal
from typing import Iterable, Optional

from .errors import (
    ConflictingOptionValues,
    IncompleteSelection,
    NoMatchingVariant,
    UnknownOptionValue,
)
from .interfaces import CatalogLookup
from .models.catalog import (
    OptionValue,
    Product,
    ProductVariant,
    ResolutionSource,
    ResolvedUnit,
    SelectedAttribute,
)

logger = logging.getLogger(__name__)


class VariantResolver:
    """
    Resolves cart selections against the catalog.

    Usage:
        resolver = VariantResolver(catalog)
        unit = resolver.resolve(product, {"ov-size-10"})
        unit.unit_price, unit.source
    """

    def __init__(self, catalog: CatalogLookup):
        self._catalog = catalog

    def resolve(
        self,
        product: Product,
        selected_option_value_ids: Iterable[str],
        line_id: Optional[str] = None,
    ) -> ResolvedUnit:
        """
        Resolve a selection to a unit.

        Args:
            product: Catalog product the line refers to
            selected_option_value_ids: Option value ids; order is irrelevant
            line_id: Cart line, for error context only

        Returns:
            ResolvedUnit with effective price and weight

        Raises:
            UnknownOptionValue: an id is not part of the product's option set
            ConflictingOptionValues: two values of a single-choice option
            IncompleteSelection: a required option has no value
            NoMatchingVariant: variants are mandatory and none matches
        """
        selection = frozenset(selected_option_value_ids)
        values = self._selected_values(product, selection, line_id)

        conflicting = self._conflicting_options(product, values)
        if conflicting:
            raise ConflictingOptionValues(product.id, conflicting, line_id=line_id)

        missing = product.required_option_codes - {v.option_code for v in values}
        if missing:
            raise IncompleteSelection(product.id, missing, line_id=line_id)

        attributes = self._attributes(product, values)
        synthetic_weight = product.weight + sum((v.weight_delta for v in values), Decimal("0"))

        variant = self._match_variant(product.id, selection)
        if variant is not None:
            logger.debug(f"Resolved {product.id} to variant {variant.id}")
            return ResolvedUnit(
                unit_id=variant.id,
                product_id=product.id,
                variant_id=variant.id,
                sku=variant.sku,
                name=product.name,
                image_url=product.image_url,
                unit_price=variant.price,
                unit_weight=variant.weight if variant.weight is not None else synthetic_weight,
                currency=product.currency,
                source=ResolutionSource.VARIANT,
                attributes=attributes,
            )

        if selection and product.variants_required:
            raise NoMatchingVariant(product.id, selection, line_id=line_id)

        return ResolvedUnit(
            unit_id=product.id,
            product_id=product.id,
            sku=product.sku,
            name=product.name,
            image_url=product.image_url,
            unit_price=product.price + sum((v.price_delta for v in values), Decimal("0")),
            unit_weight=synthetic_weight,
            currency=product.currency,
            source=ResolutionSource.ATTRIBUTES if selection else ResolutionSource.BASE,
            attributes=attributes,
        )

    def _selected_values(
        self,
        product: Product,
        selection: frozenset[str],
        line_id: Optional[str],
    ) -> list[OptionValue]:
        if not selection:
            return []

        found = {v.id: v for v in self._catalog.get_option_values(selection)}
        codes = product.option_codes
        unknown = [
            i for i in selection
            if i not in found
            or found[i].product_id != product.id
            or found[i].option_code not in codes
        ]
        if unknown:
            raise UnknownOptionValue(product.id, unknown, line_id=line_id)
        return [found[i] for i in selection]

    @staticmethod
    def _conflicting_options(product: Product, values: list[OptionValue]) -> set[str]:
        seen: set[str] = set()
        conflicting: set[str] = set()
        for value in values:
            option = product.get_option(value.option_code)
            if option is not None and option.multi_select:
                continue
            if value.option_code in seen:
                conflicting.add(value.option_code)
            seen.add(value.option_code)
        return conflicting

    def _match_variant(self, product_id: str, selection: frozenset[str]) -> Optional[ProductVariant]:
        # exact set match; explicit variants win over synthetic units
        return next(
            (v for v in self._catalog.get_variants(product_id) if v.option_value_ids == selection),
            None,
        )

    @staticmethod
    def _attributes(product: Product, values: list[OptionValue]) -> tuple[SelectedAttribute, ...]:
        attributes = []
        for value in values:
            option = product.get_option(value.option_code)
            attributes.append(
                SelectedAttribute(
                    option_value_id=value.id,
                    option_code=value.option_code,
                    option_name=option.name if option else value.option_code,
                    value_code=value.code,
                    value_name=value.name,
                )
            )
        attributes.sort(key=lambda a: (a.option_code, a.value_code, a.option_value_id))
        return tuple(attributes)
