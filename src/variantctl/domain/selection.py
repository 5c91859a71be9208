"""Selection state — the shopper's current choice per option axis.

INVARIANT: A Selection only ever holds values for axes declared on its
item, at most one per axis. It is mutated only through
:meth:`Selection.set_value` and :meth:`Selection.clear`; the resolver
reads it and never writes.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from variantctl.domain.errors import UnknownOption
from variantctl.domain.options import IndexedOption, OptionIndex


class Selection:
    """Per-axis choices validated against an :class:`OptionIndex`.

    Values keep the casing the caller supplied; matching downstream is
    always case-insensitive.

    Usage::

        selection = Selection.defaulted(option_index)
        selection.set_value("color", "Blue")
        selection.clear("Size")
    """

    def __init__(self, option_index: OptionIndex) -> None:
        self._index = option_index
        # option key -> chosen value (display casing as given)
        self._values: dict[str, str] = {}

    @classmethod
    def empty(cls, option_index: OptionIndex) -> Selection:
        return cls(option_index)

    @classmethod
    def defaulted(cls, option_index: OptionIndex) -> Selection:
        """Select each axis's first declared value; axes without values stay unset."""
        selection = cls(option_index)
        for option in option_index:
            if option.first_value is not None:
                selection._values[option.key] = option.first_value
        return selection

    @property
    def option_index(self) -> OptionIndex:
        return self._index

    def _declared(self, name: str) -> IndexedOption:
        option = self._index.get(name)
        if option is None:
            raise UnknownOption(name, declared=self._index.names)
        return option

    def set_value(self, name: str, value: str) -> None:
        """Choose *value* for axis *name*.

        Raises:
            UnknownOption: *name* is not declared. The selection is unchanged.

        A blank value clears the axis.
        """
        option = self._declared(name)
        if not value.strip():
            self._values.pop(option.key, None)
            return
        self._values[option.key] = value

    def clear(self, name: str) -> None:
        """Remove the choice for axis *name*, leaving it unconstrained."""
        option = self._declared(name)
        self._values.pop(option.key, None)

    def get(self, name: str) -> str | None:
        option = self._index.get(name)
        if option is None:
            return None
        return self._values.get(option.key)

    def items(self) -> Iterator[tuple[str, str]]:
        """Yield ``(display name, value)`` pairs in declared axis order."""
        for option in self._index:
            value = self._values.get(option.key)
            if value is not None:
                yield option.name, value

    def requirements(self) -> list[tuple[str, str]]:
        """Requirement pairs for the resolver: one per axis with a chosen value."""
        return list(self.items())

    @property
    def is_complete(self) -> bool:
        """True when every declared axis has a chosen value."""
        return len(self._values) == len(self._index)

    def snapshot(self) -> dict[str, str]:
        """Plain ``{display name: value}`` copy, safe to hand to other code."""
        return dict(self.items())

    def update(self, values: Mapping[str, str]) -> None:
        """Apply several choices at once, validating every name first.

        Raises:
            UnknownOption: on the first undeclared name; nothing is applied.
        """
        for name in values:
            self._declared(name)
        for name, value in values.items():
            self.set_value(name, value)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selection):
            return NotImplemented
        return self._index is other._index and self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Selection({self.snapshot()!r})"
