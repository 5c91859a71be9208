"""ResolveService — resolve a shopper's selection to a variant.

Builds a :class:`CustomizationSession` over the cached indexes, applies
the requested choices one axis at a time, and reports the outcome.
``no_match`` and ``ambiguous`` are successful results; only invalid
input (unknown axis, bad quantity, malformed ``NAME=VALUE``) fails.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from variantctl.domain.errors import InvalidQuantity, UnknownOption
from variantctl.domain.resolver import MatchKind, is_purchasable
from variantctl.domain.session import CustomizationSession
from variantctl.services._helpers import parse_assignments, variant_payload
from variantctl.services.base import BaseService
from variantctl.services.result import ServiceResult
from variantctl.services.telemetry import trace_span, traced

logger = logging.getLogger(__name__)


class ResolveService(BaseService):
    """Selection resolution over one catalog item."""

    @traced
    def resolve(
        self,
        selections: Mapping[str, str] | None = None,
        *,
        assignments: Sequence[str] = (),
        clear: Sequence[str] = (),
        quantity: int = 1,
        defaults: bool = True,
        handle: str | None = None,
    ) -> ServiceResult:
        """Resolve a selection and report the matching variant.

        Args:
            selections: ``{option name: value}`` choices.
            assignments: ``NAME=VALUE`` strings, applied after *selections*.
            clear: Axes to leave unconstrained, applied last.
            quantity: Line quantity, at least 1.
            defaults: Start from each axis's first value instead of empty.
            handle: Catalog item handle or id (optional for single-item catalogs).
        """
        op = "resolve"
        try:
            requested = dict(selections or {})
            requested.update(parse_assignments(assignments))
        except ValueError as exc:
            return ServiceResult.failure(op, "INVALID_SELECTION", str(exc))

        entry = self._load(op, handle)
        if isinstance(entry, ServiceResult):
            return entry

        try:
            session = CustomizationSession(
                entry.item,
                option_index=entry.option_index,
                variant_index=entry.variant_index,
                defaults=defaults,
                quantity=quantity,
            )
        except InvalidQuantity as exc:
            return ServiceResult.failure(op, "INVALID_QUANTITY", str(exc), quantity=exc.quantity)

        try:
            session.selection.update(requested)
            for name in clear:
                session.clear(name)
        except UnknownOption as exc:
            return ServiceResult.failure(
                op, "UNKNOWN_OPTION", str(exc), option=exc.option, declared=exc.declared
            )

        with trace_span("match") as span:
            result = session.resolve()
            if span:
                span.annotate("requirements", len(session.selection))
                span.annotate("variants", len(entry.variant_index))

        variant = result.variant
        warnings: list[str] = []
        for name, value in session.selection.items():
            option = entry.option_index.get(name)
            if option is not None and not option.has_value(value):
                warnings.append(f"{value!r} is not a declared value of option {name!r}")
        if result.kind is MatchKind.AMBIGUOUS and variant is not None:
            warnings.append(
                f"Selection matches {result.match_count} variants; "
                f"using first listed ({variant.id})"
            )
        if entry.issues:
            warnings.append(
                f"Catalog item has {len(entry.issues)} data issues; "
                "run 'variantctl catalog check'"
            )
        logger.debug("Resolved %s -> %s", session.selection.snapshot(), result.kind)

        data: dict[str, Any] = {
            "item_id": entry.item.id,
            "status": str(result.kind),
            "selected": session.selection.snapshot(),
            "complete": session.selection.is_complete,
            "quantity": session.quantity,
            "match_count": result.match_count,
            "variant": variant_payload(variant, entry.option_index) if variant else None,
            "purchasable": is_purchasable(result),
        }
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
