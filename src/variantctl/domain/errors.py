"""Domain exceptions.

Only invalid API usage raises. Empty and ambiguous resolutions are
ordinary results (see :mod:`variantctl.domain.resolver`).
"""

from __future__ import annotations


class VariantError(Exception):
    """Base class for all variantctl domain errors."""


class UnknownOption(VariantError):  # noqa: N818
    """A selection referenced an option name the item does not declare."""

    def __init__(self, option: str, declared: list[str] | None = None) -> None:
        self.option = option
        self.declared = declared or []
        msg = f"Unknown option: {option!r}"
        if self.declared:
            msg += f" (declared: {', '.join(self.declared)})"
        super().__init__(msg)


class InvalidQuantity(VariantError):  # noqa: N818
    """A line quantity below 1 was requested."""

    def __init__(self, quantity: int) -> None:
        self.quantity = quantity
        super().__init__(f"Quantity must be at least 1, got {quantity}")
