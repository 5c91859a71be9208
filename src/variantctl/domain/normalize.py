"""Normalization rule shared by every case-insensitive comparison.

Option names and values are compared by their folded form only.
Display strings are never rewritten; callers keep the original casing.
"""

from __future__ import annotations


def fold(text: str) -> str:
    """Fold *text* for comparison: trim surrounding whitespace, lowercase.

    Examples:
        >>> fold("  Red ")
        'red'
        >>> fold("XL")
        'xl'
    """
    return text.strip().lower()
