"""Domain layer — catalog models and the variant resolution engine.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""

from variantctl.domain.catalog import CatalogItem, Option, SelectedOption, Variant
from variantctl.domain.errors import InvalidQuantity, UnknownOption, VariantError
from variantctl.domain.issues import DataIssue, IssueCode
from variantctl.domain.options import IndexedOption, OptionIndex, build_option_index, find_option
from variantctl.domain.resolver import (
    AmbiguousMatch,
    Matched,
    MatchKind,
    NoMatch,
    ResolutionResult,
    is_purchasable,
    resolve,
)
from variantctl.domain.selection import Selection
from variantctl.domain.session import CustomizationSession
from variantctl.domain.variants import (
    CanonicalKey,
    VariantIndex,
    build_variant_index,
    canonical_key,
    lookup_exact,
)

__all__ = [
    "AmbiguousMatch",
    "CanonicalKey",
    "CatalogItem",
    "CustomizationSession",
    "DataIssue",
    "IndexedOption",
    "InvalidQuantity",
    "IssueCode",
    "MatchKind",
    "Matched",
    "NoMatch",
    "Option",
    "OptionIndex",
    "ResolutionResult",
    "SelectedOption",
    "Selection",
    "UnknownOption",
    "Variant",
    "VariantError",
    "VariantIndex",
    "build_option_index",
    "build_variant_index",
    "canonical_key",
    "find_option",
    "is_purchasable",
    "lookup_exact",
    "resolve",
]
