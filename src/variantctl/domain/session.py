"""Customization session — one shopper configuring one catalog item.

Bundles the item, its indexes (built once), the current selection and
the line quantity. This is the state a storefront "customize" page keeps
between interactions.
"""

from __future__ import annotations

from typing import Any

from variantctl.domain.catalog import CatalogItem
from variantctl.domain.errors import InvalidQuantity
from variantctl.domain.options import OptionIndex, build_option_index
from variantctl.domain.resolver import ResolutionResult, is_purchasable, resolve
from variantctl.domain.selection import Selection
from variantctl.domain.variants import VariantIndex, build_variant_index


class CustomizationSession:
    """Selection plus quantity over an immutable catalog item.

    The session is the single writer of its selection. Indexes may be
    passed in to share them across sessions for the same item.
    """

    def __init__(
        self,
        item: CatalogItem,
        *,
        option_index: OptionIndex | None = None,
        variant_index: VariantIndex | None = None,
        defaults: bool = True,
        quantity: int = 1,
    ) -> None:
        self.item = item
        if option_index is None:
            option_index = build_option_index(item.options)
        if variant_index is None:
            variant_index = build_variant_index(item.variants, option_index)
        self.option_index = option_index
        self.variant_index = variant_index
        if defaults:
            self.selection = Selection.defaulted(self.option_index)
        else:
            self.selection = Selection.empty(self.option_index)
        self._quantity = 1
        self.set_quantity(quantity)

    @property
    def quantity(self) -> int:
        return self._quantity

    def set_quantity(self, quantity: int) -> None:
        """Set the line quantity.

        Raises:
            InvalidQuantity: *quantity* is below 1. The quantity is unchanged.
        """
        if quantity < 1:
            raise InvalidQuantity(quantity)
        self._quantity = quantity

    def select(self, name: str, value: str) -> None:
        self.selection.set_value(name, value)

    def clear(self, name: str) -> None:
        self.selection.clear(name)

    def resolve(self) -> ResolutionResult:
        return resolve(self.selection, self.option_index, self.variant_index)

    def is_purchasable(self) -> bool:
        return is_purchasable(self.resolve())

    def summary(self) -> dict[str, Any]:
        """Current state as plain data: choices, quantity, and resolved variant."""
        result = self.resolve()
        variant = result.variant
        return {
            "item_id": self.item.id,
            "selected": {opt.name: self.selection.get(opt.name) for opt in self.option_index},
            "quantity": self._quantity,
            "status": str(result.kind),
            "variant_id": variant.id if variant else None,
            "variant_title": variant.title if variant else None,
            "purchasable": is_purchasable(result),
        }
