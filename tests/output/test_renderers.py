"""Tests for operation-specific Rich renderers."""

from variantctl.output.renderers import render_quiet, render_result
from variantctl.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


def _resolved(**overrides: object) -> ServiceResult:
    data: dict[str, object] = {
        "item_id": "gid://shop/Product/1",
        "status": "matched",
        "selected": {"Color": "Red", "Size": "S"},
        "complete": True,
        "quantity": 2,
        "match_count": 1,
        "variant": {
            "id": "V1",
            "title": "Red / S",
            "available_for_sale": True,
            "options": {"Color": "Red", "Size": "S"},
        },
        "purchasable": True,
    }
    data.update(overrides)
    return ServiceResult(ok=True, op="resolve", data=data)


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("resolve", "UNKNOWN_OPTION", "Unknown option: 'Fit'"))
        assert "ERROR" in output
        assert "resolve" in output
        assert "Unknown option: 'Fit'" in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("resolve", "UNKNOWN_OPTION", "Bad", option="Fit")
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "option: Fit" in output

    def test_message_with_brackets_not_markup(self) -> None:
        result = _err("show_item", "ITEM_NOT_FOUND", "No item [gid://shop/Product/9]")
        assert "[gid://shop/Product/9]" in render_result(result)

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="test"))


# ── Resolve renderer ─────────────────────────────────────────────────


class TestResolveRenderer:
    def test_matched(self) -> None:
        output = render_result(_resolved())
        assert "OK" in output
        assert "Red / S – Qty: 2" in output
        assert "matched" in output
        assert "Red / S (V1)" in output
        assert "purchasable: true" in output

    def test_no_match(self) -> None:
        output = render_result(
            _resolved(status="no_match", variant=None, match_count=0, purchasable=False)
        )
        assert "None found (check options)" in output
        assert "purchasable: false" in output

    def test_ambiguous_shows_count(self) -> None:
        output = render_result(_resolved(status="ambiguous", match_count=3))
        assert "match_count: 3" in output

    def test_nothing_selected(self) -> None:
        output = render_result(_resolved(selected={}))
        assert "nothing selected" in output

    def test_verbose_shows_telemetry(self) -> None:
        result = _resolved().model_copy(
            update={
                "meta": {
                    "telemetry": {
                        "name": "ResolveService.resolve",
                        "duration_ms": 1.5,
                        "children": [
                            {
                                "name": "match",
                                "duration_ms": 0.2,
                                "annotations": {"variants": 3},
                            }
                        ],
                    }
                }
            }
        )
        output = render_result(result, verbose=True)
        assert "meta:" in output
        assert "ResolveService.resolve" in output
        assert "match  (variants=3)" in output


# ── Catalog renderers ────────────────────────────────────────────────


class TestShowItemRenderer:
    def test_summary_and_table(self) -> None:
        result = _ok(
            "show_item",
            id="gid://shop/Product/1",
            title="Classic Tee",
            handle="classic-tee",
            options=[{"name": "Color", "values": ["Red", "Blue"]}],
            variants=[
                {
                    "id": "V1",
                    "title": "Red",
                    "available_for_sale": True,
                    "options": {"Color": "Red"},
                },
                {
                    "id": "V2",
                    "title": "Blue",
                    "available_for_sale": False,
                    "options": {"Color": "Blue"},
                },
            ],
            variant_count=2,
            available_count=1,
        )
        output = render_result(result)
        assert "Classic Tee" in output
        assert "1/2 available" in output
        assert "Color: Red, Blue" in output
        assert "sold out" in output
        assert "V2" in output

    def test_bracketed_catalog_strings_kept(self) -> None:
        result = _ok(
            "show_item",
            id="P1",
            title="Tee",
            options=[{"name": "[Fit]", "values": ["[XL]"]}],
            variants=[
                {
                    "id": "V1",
                    "title": "[XL]",
                    "available_for_sale": True,
                    "options": {"[Fit]": "[XL]"},
                }
            ],
            variant_count=1,
            available_count=1,
        )
        output = render_result(result)
        table = output.split("\n\n", 1)[1]
        assert "[Fit]" in table
        assert table.count("[XL]") == 2


class TestOptionsRenderer:
    def test_table(self) -> None:
        result = _ok(
            "list_options",
            items=[
                {"name": "Color", "key": "color", "values": ["Red", "Blue"], "default": "Red"},
                {"name": "Size", "key": "size", "values": [], "default": None},
            ],
            count=2,
        )
        output = render_result(result)
        assert "Red, Blue" in output
        assert "2 options" in output

    def test_bracketed_values_kept(self) -> None:
        result = _ok(
            "list_options",
            items=[
                {"name": "[Size]", "key": "[size]", "values": ["[XL]", "M"], "default": "[XL]"}
            ],
            count=1,
        )
        output = render_result(result)
        assert "[Size]" in output
        assert "[XL], M" in output


class TestCheckRenderer:
    def test_no_issues(self) -> None:
        output = render_result(_ok("check", issues=[], count=0))
        assert "No issues found." in output

    def test_grouped_by_code(self) -> None:
        issues = [
            {
                "code": "DUPLICATE_VARIANT",
                "message": "Variant 'B' repeats the options of 'A'",
                "variant_id": "B",
                "severity": "error",
            },
            {
                "code": "DUPLICATE_OPTION_VALUE",
                "message": "Value 'red' repeats on option 'Color'",
                "severity": "warning",
            },
        ]
        output = render_result(
            _ok("check", issues=issues, count=2, error_count=1, warning_count=1)
        )
        assert "DUPLICATE_VARIANT" in output
        assert "error [B]: Variant 'B' repeats" in output
        assert "warning: Value 'red'" in output
        assert "1 errors, 1 warnings" in output


class TestGenericRenderer:
    def test_unknown_op(self) -> None:
        output = render_result(_ok("custom", key="value", nested={"a": 1}))
        assert "custom" in output
        assert "key: value" in output
        assert '{"a":1}' in output


# ── Quiet mode ───────────────────────────────────────────────────────


class TestRenderQuiet:
    def test_resolve_prints_variant_id(self) -> None:
        assert render_quiet(_resolved()) == "V1"

    def test_resolve_no_match_prints_status(self) -> None:
        assert render_quiet(_resolved(status="no_match", variant=None)) == "no_match"

    def test_items_listed(self) -> None:
        result = _ok("list_options", items=[{"name": "Color"}, {"name": "Size"}])
        assert render_quiet(result) == "Color\nSize"

    def test_generic(self) -> None:
        assert render_quiet(_ok("check")) == "OK: check"

    def test_error(self) -> None:
        assert render_quiet(_err("resolve", "X", "nope")) == "ERROR: resolve — nope"
