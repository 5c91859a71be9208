"""Option index — declared option axes keyed for case-insensitive lookup.

INVARIANT: Built once per catalog item and never mutated. Declared order
is preserved both for axes and for each axis's values.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from variantctl.domain.catalog import Option
from variantctl.domain.issues import DataIssue, IssueCode
from variantctl.domain.normalize import fold


@dataclass(frozen=True)
class IndexedOption:
    """A declared axis with its normalized key and de-duplicated values."""

    name: str
    key: str
    values: tuple[str, ...]
    position: int

    def has_value(self, value: str) -> bool:
        key = fold(value)
        return any(fold(v) == key for v in self.values)

    @property
    def first_value(self) -> str | None:
        return self.values[0] if self.values else None


@dataclass(frozen=True)
class OptionIndex:
    """Immutable lookup over an item's declared option axes."""

    options: tuple[IndexedOption, ...] = ()
    issues: tuple[DataIssue, ...] = ()
    _by_key: Mapping[str, IndexedOption] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )

    def __len__(self) -> int:
        return len(self.options)

    def __iter__(self) -> Iterator[IndexedOption]:
        return iter(self.options)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and fold(name) in self._by_key

    @property
    def names(self) -> list[str]:
        """Declared display names, in declared order."""
        return [opt.name for opt in self.options]

    def get(self, name: str) -> IndexedOption | None:
        return self._by_key.get(fold(name))


def build_option_index(options: Iterable[Option]) -> OptionIndex:
    """Normalize declared options into an :class:`OptionIndex`.

    Never fails. A repeated axis name keeps its first declaration, blank
    names are skipped, and repeated values (by folded form) keep their
    first display casing. Each of these is recorded as a :class:`DataIssue`.
    """
    indexed: list[IndexedOption] = []
    by_key: dict[str, IndexedOption] = {}
    issues: list[DataIssue] = []

    for option in options:
        key = fold(option.name)
        if not key:
            issues.append(
                DataIssue(IssueCode.BLANK_OPTION_NAME, "Option with a blank name was skipped")
            )
            continue
        if key in by_key:
            issues.append(
                DataIssue(
                    IssueCode.DUPLICATE_OPTION,
                    f"Option {option.name!r} is declared more than once; "
                    "the first declaration is used",
                    option=option.name,
                )
            )
            continue

        values: list[str] = []
        seen: set[str] = set()
        for value in option.values:
            value_key = fold(value)
            if value_key in seen:
                issues.append(
                    DataIssue(
                        IssueCode.DUPLICATE_OPTION_VALUE,
                        f"Value {value!r} repeats on option {option.name!r}",
                        option=option.name,
                    )
                )
                continue
            seen.add(value_key)
            values.append(value)

        entry = IndexedOption(
            name=option.name,
            key=key,
            values=tuple(values),
            position=len(indexed),
        )
        indexed.append(entry)
        by_key[key] = entry

    return OptionIndex(
        options=tuple(indexed),
        issues=tuple(issues),
        _by_key=MappingProxyType(by_key),
    )


def find_option(index: OptionIndex, name: str) -> IndexedOption | None:
    """Case-insensitive exact lookup of a declared option by name."""
    return index.get(name)
