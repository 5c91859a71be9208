"""Resolver — map a (possibly partial) selection to a single variant.

Contract: a variant satisfies a selection iff, for every axis that has a
chosen value, the variant declares a pair whose name and value both match
case-insensitively. All requirements must hold (logical AND). Axes
without a choice impose nothing.

Outcomes:
- exactly one satisfying variant  -> :class:`Matched`
- several satisfying variants     -> :class:`AmbiguousMatch` carrying the
  first one in catalog order (stable, user-visible tie-break)
- none                            -> :class:`NoMatch`

Complete selections on a regular index take the O(1) canonical-key path;
everything else scans in O(variants x requirements). Both paths return
the same result.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from variantctl.domain.catalog import Variant
from variantctl.domain.normalize import fold
from variantctl.domain.options import OptionIndex
from variantctl.domain.selection import Selection
from variantctl.domain.variants import VariantIndex, selection_key


class MatchKind(StrEnum):
    """Resolution outcome tags."""

    MATCHED = "matched"
    AMBIGUOUS = "ambiguous"
    NO_MATCH = "no_match"


@dataclass(frozen=True)
class ResolutionResult:
    """Base type for resolution outcomes."""

    kind: MatchKind
    variant: Variant | None = None
    match_count: int = 0


@dataclass(frozen=True)
class Matched(ResolutionResult):
    """Exactly one variant satisfies the selection."""

    kind: MatchKind = field(default=MatchKind.MATCHED, init=False)
    match_count: int = 1


@dataclass(frozen=True)
class AmbiguousMatch(ResolutionResult):
    """Several variants satisfy; ``variant`` is the first in catalog order."""

    kind: MatchKind = field(default=MatchKind.AMBIGUOUS, init=False)


@dataclass(frozen=True)
class NoMatch(ResolutionResult):
    """No variant satisfies the selection."""

    kind: MatchKind = field(default=MatchKind.NO_MATCH, init=False)


def satisfies(variant: Variant, requirements: Sequence[tuple[str, str]]) -> bool:
    """True when *variant* matches every ``(name, value)`` requirement."""
    pairs = {(fold(opt.name), fold(opt.value)) for opt in variant.selected_options}
    return all((fold(name), fold(value)) in pairs for name, value in requirements)


def _from_candidates(candidates: Sequence[Variant]) -> ResolutionResult:
    if not candidates:
        return NoMatch()
    if len(candidates) == 1:
        return Matched(variant=candidates[0])
    return AmbiguousMatch(variant=candidates[0], match_count=len(candidates))


def resolve(
    selection: Selection,
    option_index: OptionIndex,
    variant_index: VariantIndex,
    variants: Sequence[Variant] | None = None,
) -> ResolutionResult:
    """Resolve *selection* against an item's indexes.

    Args:
        selection: Current per-axis choices. Read only.
        option_index: The item's declared axes.
        variant_index: Canonical-key index built from the same axes.
        variants: Variants to scan, in catalog order. Defaults to the
            variants the index was built from.
    """
    requirements = [
        (name, value) for name, value in selection.requirements() if name in option_index
    ]
    complete = len(requirements) == len(option_index)

    if variants is None and complete and variant_index.regular:
        key = selection_key(dict(requirements), option_index)
        return _from_candidates(variant_index.bucket(key))

    pool = variant_index.variants if variants is None else variants
    return _from_candidates([v for v in pool if satisfies(v, requirements)])


def is_purchasable(result: ResolutionResult) -> bool:
    """True iff a variant was resolved and it is available for sale."""
    if result.kind is MatchKind.NO_MATCH or result.variant is None:
        return False
    return result.variant.available_for_sale
