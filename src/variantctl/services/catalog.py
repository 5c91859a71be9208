"""CatalogService — inspect a catalog item and audit its data quality.

Three operations: ``show_item`` (summary), ``list_options`` (declared
axes after normalization), and ``check`` (data-quality issues found
while indexing, following the linter pattern: report, never fail).
"""

from __future__ import annotations

from typing import Any

from variantctl.domain.issues import DataIssue, IssueCode
from variantctl.services._helpers import variant_payload
from variantctl.services.base import BaseService
from variantctl.services.result import ServiceResult
from variantctl.services.telemetry import trace_span, traced

# ---------------------------------------------------------------------------
# Issue severity
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

# Errors change which variant a shopper can end up with; warnings are
# cosmetic and fully absorbed by normalization.
_ISSUE_SEVERITY: dict[IssueCode, str] = {
    IssueCode.DUPLICATE_VARIANT: SEVERITY_ERROR,
    IssueCode.CONFLICTING_OPTION: SEVERITY_ERROR,
    IssueCode.UNDECLARED_OPTION: SEVERITY_ERROR,
    IssueCode.DUPLICATE_OPTION: SEVERITY_WARNING,
    IssueCode.DUPLICATE_OPTION_VALUE: SEVERITY_WARNING,
    IssueCode.BLANK_OPTION_NAME: SEVERITY_WARNING,
}


def issue_severity(issue: DataIssue) -> str:
    return _ISSUE_SEVERITY.get(issue.code, SEVERITY_WARNING)


class CatalogService(BaseService):
    """Read-only views over one catalog item."""

    @traced
    def show_item(self, handle: str | None = None) -> ServiceResult:
        """Summarize an item: axes, variants, and availability."""
        entry = self._load("show_item", handle)
        if isinstance(entry, ServiceResult):
            return entry

        item = entry.item
        variants = [variant_payload(v, entry.option_index) for v in item.variants]
        return ServiceResult(
            ok=True,
            op="show_item",
            data={
                "id": item.id,
                "title": item.title,
                "handle": item.handle,
                "options": [
                    {"name": opt.name, "values": list(opt.values)} for opt in entry.option_index
                ],
                "variants": variants,
                "variant_count": len(variants),
                "available_count": sum(1 for v in item.variants if v.available_for_sale),
            },
            warnings=[issue.message for issue in entry.issues],
        )

    @traced
    def list_options(self, handle: str | None = None) -> ServiceResult:
        """List declared axes with their de-duplicated values in display order."""
        entry = self._load("list_options", handle)
        if isinstance(entry, ServiceResult):
            return entry

        items = [
            {
                "name": opt.name,
                "key": opt.key,
                "values": list(opt.values),
                "default": opt.first_value,
            }
            for opt in entry.option_index
        ]
        return ServiceResult(
            ok=True,
            op="list_options",
            data={"item_id": entry.item.id, "items": items, "count": len(items)},
        )

    @traced
    def check(
        self, handle: str | None = None, *, min_severity: str = SEVERITY_WARNING
    ) -> ServiceResult:
        """Report catalog data-quality issues without failing."""
        entry = self._load("check", handle)
        if isinstance(entry, ServiceResult):
            return entry

        issues: list[dict[str, Any]] = []
        with trace_span("classify_issues") as span:
            for issue in entry.issues:
                severity = issue_severity(issue)
                if min_severity == SEVERITY_ERROR and severity != SEVERITY_ERROR:
                    continue
                issues.append({**issue.to_dict(), "severity": severity})
            if span:
                span.annotate("issues", len(issues))

        error_count = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "item_id": entry.item.id,
                "issues": issues,
                "count": len(issues),
                "error_count": error_count,
                "warning_count": len(issues) - error_count,
                "healthy": error_count == 0,
            },
        )
