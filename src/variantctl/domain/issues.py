"""Data-quality issues found while indexing a catalog item.

Issues are reported, never raised: malformed upstream data degrades
to a deterministic first-listed tie-break.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class IssueCode(StrEnum):
    """Kinds of non-fatal catalog problems."""

    DUPLICATE_OPTION = "DUPLICATE_OPTION"
    BLANK_OPTION_NAME = "BLANK_OPTION_NAME"
    DUPLICATE_OPTION_VALUE = "DUPLICATE_OPTION_VALUE"
    UNDECLARED_OPTION = "UNDECLARED_OPTION"
    CONFLICTING_OPTION = "CONFLICTING_OPTION"
    DUPLICATE_VARIANT = "DUPLICATE_VARIANT"


@dataclass(frozen=True)
class DataIssue:
    """One catalog data-quality finding."""

    code: IssueCode
    message: str
    variant_id: str | None = None
    option: str | None = None

    def to_dict(self) -> dict[str, str]:
        result = {"code": str(self.code), "message": self.message}
        if self.variant_id is not None:
            result["variant_id"] = self.variant_id
        if self.option is not None:
            result["option"] = self.option
        return result
