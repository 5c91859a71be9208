"""Variant index — canonical option tuples and exact-key lookup.

A canonical key has one slot per declared option, in declared order.
Each slot holds the variant's folded value for that axis, or ``None``
when the variant does not specify it.

INVARIANT: When several variants share a key, the first-listed variant
is the one returned by :func:`lookup_exact`. Later duplicates are kept
only to count ambiguity and are reported as data issues.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from variantctl.domain.catalog import Variant
from variantctl.domain.issues import DataIssue, IssueCode
from variantctl.domain.normalize import fold
from variantctl.domain.options import OptionIndex

logger = logging.getLogger(__name__)

CanonicalKey = tuple[str | None, ...]


@dataclass(frozen=True)
class VariantIndex:
    """Immutable canonical-key lookup over an item's variants."""

    option_index: OptionIndex
    variants: tuple[Variant, ...] = ()
    issues: tuple[DataIssue, ...] = ()
    # True when no variant declares two values for one axis. Only then
    # is key equality equivalent to conjunctive matching.
    regular: bool = True
    _buckets: Mapping[CanonicalKey, tuple[Variant, ...]] = field(
        default_factory=lambda: MappingProxyType({}), repr=False, compare=False
    )

    def __len__(self) -> int:
        return len(self.variants)

    def bucket(self, key: CanonicalKey) -> tuple[Variant, ...]:
        """All variants sharing *key*, in catalog order."""
        return self._buckets.get(key, ())


def canonical_key(variant: Variant, option_index: OptionIndex) -> CanonicalKey:
    """Compute *variant*'s canonical key against the declared options."""
    slots: list[str | None] = [None] * len(option_index)
    for opt in variant.selected_options:
        declared = option_index.get(opt.name)
        if declared is None or slots[declared.position] is not None:
            continue
        slots[declared.position] = fold(opt.value)
    return tuple(slots)


def selection_key(values: Mapping[str, str], option_index: OptionIndex) -> CanonicalKey:
    """Build a canonical key from a ``{option name: value}`` mapping.

    Undeclared names are ignored; missing axes become ``None``.
    """
    slots: list[str | None] = [None] * len(option_index)
    for name, value in values.items():
        declared = option_index.get(name)
        if declared is not None:
            slots[declared.position] = fold(value)
    return tuple(slots)


def _variant_issues(variant: Variant, option_index: OptionIndex) -> list[DataIssue]:
    issues: list[DataIssue] = []
    seen: set[str] = set()
    for opt in variant.selected_options:
        declared = option_index.get(opt.name)
        if declared is None:
            issues.append(
                DataIssue(
                    IssueCode.UNDECLARED_OPTION,
                    f"Variant {variant.id!r} references undeclared option {opt.name!r}",
                    variant_id=variant.id,
                    option=opt.name,
                )
            )
            continue
        if declared.key in seen:
            issues.append(
                DataIssue(
                    IssueCode.CONFLICTING_OPTION,
                    f"Variant {variant.id!r} declares option {declared.name!r} more than once",
                    variant_id=variant.id,
                    option=declared.name,
                )
            )
            continue
        seen.add(declared.key)
    return issues


def build_variant_index(variants: Iterable[Variant], option_index: OptionIndex) -> VariantIndex:
    """Index *variants* by canonical key.

    Never fails. Key collisions keep the first-encountered variant and
    emit a warning; malformed option references are recorded as issues.
    """
    ordered = tuple(variants)
    buckets: dict[CanonicalKey, list[Variant]] = {}
    issues: list[DataIssue] = []
    regular = True

    for variant in ordered:
        variant_issues = _variant_issues(variant, option_index)
        if any(i.code is IssueCode.CONFLICTING_OPTION for i in variant_issues):
            regular = False
        issues.extend(variant_issues)

        key = canonical_key(variant, option_index)
        bucket = buckets.setdefault(key, [])
        if bucket:
            winner = bucket[0]
            logger.warning(
                "Duplicate option tuple: variant %s shadowed by %s",
                variant.id,
                winner.id,
            )
            issues.append(
                DataIssue(
                    IssueCode.DUPLICATE_VARIANT,
                    f"Variant {variant.id!r} repeats the options of {winner.id!r}; "
                    f"{winner.id!r} wins",
                    variant_id=variant.id,
                )
            )
        bucket.append(variant)

    for issue in issues:
        if issue.code is not IssueCode.DUPLICATE_VARIANT:
            logger.debug("Catalog data issue: %s", issue.message)

    return VariantIndex(
        option_index=option_index,
        variants=ordered,
        issues=tuple(issues),
        regular=regular,
        _buckets=MappingProxyType({k: tuple(v) for k, v in buckets.items()}),
    )


def lookup_exact(index: VariantIndex, key: Sequence[str | None]) -> Variant | None:
    """O(1) exact canonical-key lookup; first-listed variant wins."""
    bucket = index.bucket(tuple(None if slot is None else fold(slot) for slot in key))
    return bucket[0] if bucket else None
