"""Catalog models: items, option axes, and variants.

Models are frozen once loaded. Numeric ids and values (common in YAML
exports) are coerced to strings. Field aliases follow the storefront
payload shape (``availableForSale``, ``selectedOptions``) so a loaded
document validates directly; Python code uses the snake_case names.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SelectedOption(BaseModel):
    """A single ``(name, value)`` pair declared by a variant."""

    model_config = {"frozen": True, "coerce_numbers_to_str": True}

    name: str
    value: str


class Option(BaseModel):
    """A declared option axis and its values in display order.

    Values may repeat upstream; de-duplication happens in the option index.
    """

    model_config = {"frozen": True, "coerce_numbers_to_str": True}

    name: str
    values: tuple[str, ...] = ()


class Variant(BaseModel):
    """A concrete purchasable configuration of a catalog item."""

    model_config = {"frozen": True, "populate_by_name": True, "coerce_numbers_to_str": True}

    id: str
    title: str = ""
    available_for_sale: bool = Field(default=False, alias="availableForSale")
    selected_options: tuple[SelectedOption, ...] = Field(default=(), alias="selectedOptions")


class CatalogItem(BaseModel):
    """A configurable catalog item: its axes and enumerated variants."""

    model_config = {"frozen": True, "coerce_numbers_to_str": True}

    id: str
    title: str = ""
    handle: str | None = None
    options: tuple[Option, ...] = ()
    variants: tuple[Variant, ...] = ()
