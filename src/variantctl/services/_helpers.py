"""Shared service-layer helper functions."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from variantctl.domain.catalog import Variant
from variantctl.domain.options import OptionIndex


def parse_assignment(text: str) -> tuple[str, str]:
    """Split a ``NAME=VALUE`` selection argument.

    The value may be empty (it clears the axis) and may itself contain ``=``.

    Examples:
        >>> parse_assignment("Color=Red")
        ('Color', 'Red')
        >>> parse_assignment(" Size = XL ")
        ('Size', 'XL')
        >>> parse_assignment("Note=a=b")
        ('Note', 'a=b')

    Raises:
        ValueError: No ``=`` or an empty name.
    """
    name, sep, value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        msg = f"Expected NAME=VALUE, got {text!r}"
        raise ValueError(msg)
    return name, value.strip()


def parse_assignments(texts: Iterable[str]) -> dict[str, str]:
    """Parse several ``NAME=VALUE`` arguments; later ones win per name."""
    result: dict[str, str] = {}
    for text in texts:
        name, value = parse_assignment(text)
        result[name] = value
    return result


def variant_payload(variant: Variant, option_index: OptionIndex | None = None) -> dict[str, Any]:
    """Serializable summary of a variant.

    With *option_index*, option names are reported by their declared
    spelling (``color`` on a variant of an item declaring ``Color`` is
    keyed ``Color``). A repeated axis keeps its first value; names the
    item never declares keep the variant's own spelling.
    """
    options: dict[str, str] = {}
    for opt in variant.selected_options:
        declared = option_index.get(opt.name) if option_index is not None else None
        options.setdefault(declared.name if declared else opt.name, opt.value)
    return {
        "id": variant.id,
        "title": variant.title,
        "available_for_sale": variant.available_for_sale,
        "options": options,
    }
