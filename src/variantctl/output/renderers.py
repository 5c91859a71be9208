"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from variantctl.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from variantctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "resolve":
        variant = result.data.get("variant")
        return variant["id"] if variant else str(result.data.get("status", ""))

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items if isinstance(item, dict))

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="vc.ok")
    op = Text(f"  {result.op}", style="vc.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="vc.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="vc.id")
    elif key == "title":
        v = Text(str(value), style="vc.title")
    elif key == "status":
        v = Text(str(value), style=style_for_status(str(value)))
    else:
        v = Text(str(value))
    console.print(k, v, sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))

    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(escape(f"    {k}: {v}"))


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 100:
        style = "bold red"
    elif duration > 10:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.3f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{ak}={av}" for ak, av in annotations.items()) + ")"

    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


def _availability(available: bool) -> Text:
    if available:
        return Text("available", style="vc.available")
    return Text("sold out", style="vc.unavailable")


def _variant_table(variants: list[dict[str, Any]], option_names: list[str]) -> Table:
    """Build a Rich Table listing variants with one column per axis.

    Catalog strings are wrapped in ``Text`` so brackets are never read as markup.
    """
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="vc.id", no_wrap=True)
    table.add_column("Title", style="vc.title")
    for name in option_names:
        table.add_column(Text(name))
    table.add_column("Stock")

    for variant in variants:
        options = variant.get("options", {})
        row: list[Any] = [Text(str(variant.get("id", ""))), Text(str(variant.get("title", "")))]
        row.extend(Text(str(options.get(name, "—"))) for name in option_names)
        row.append(_availability(bool(variant.get("available_for_sale"))))
        table.add_row(*row)

    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="vc.error")
    op = Text(f"  {result.op}", style="vc.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(escape(f"    {k}: {v}"))


# ── Resolve renderer ──────────────────────────────────────────────────


def _render_resolve(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render the selection and the resolved variant."""
    d = result.data
    _status_line(console, result)

    selected = d.get("selected", {})
    choice = " / ".join(selected.values()) if selected else "nothing selected"
    _field(console, "selected", f"{choice} – Qty: {d.get('quantity', 1)}")
    _field(console, "status", d.get("status", ""))

    variant = d.get("variant")
    if variant:
        _field(console, "variant", f"{variant['title']} ({variant['id']})")
        if d.get("match_count", 1) > 1:
            _field(console, "match_count", d["match_count"])
    else:
        _field(console, "variant", "None found (check options)")

    purchasable = bool(d.get("purchasable"))
    style = "vc.ok" if purchasable else "vc.error"
    console.print(
        Text("  purchasable: ", style="vc.key"),
        Text(str(purchasable).lower(), style=style),
        sep="",
    )

    if verbose:
        _render_meta(console, result)


# ── Catalog renderers ─────────────────────────────────────────────────


def _render_show_item(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render an item summary with its variant table."""
    d = result.data
    _status_line(console, result)
    for key in ("id", "title", "handle"):
        if d.get(key) is not None:
            _field(console, key, d[key])
    available = f"{d.get('available_count', 0)}/{d.get('variant_count', 0)} available"
    _field(console, "variants", available)

    options = d.get("options", [])
    for opt in options:
        _field(console, opt["name"], ", ".join(opt["values"]) or "—")

    variants = d.get("variants", [])
    if variants:
        console.print()
        console.print(_variant_table(variants, [opt["name"] for opt in options]))
    if verbose:
        _render_meta(console, result)


def _render_options(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render declared axes as a table."""
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Option", style="vc.title")
    table.add_column("Values")
    table.add_column("Default", style="dim")
    for item in items:
        table.add_row(
            Text(item["name"]),
            Text(", ".join(item["values"])),
            Text(str(item.get("default") or "")),
        )
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} options")
    if verbose:
        _render_meta(console, result)


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render data-quality issues grouped by code."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[vc.ok]OK[/vc.ok]  No issues found.")
        return

    severity_styles = {"error": "vc.error", "warning": "vc.warning"}

    by_code: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_code.setdefault(str(issue.get("code", "unknown")), []).append(issue)

    for code, code_issues in by_code.items():
        console.print(f"\n[bold]{code}[/bold]")
        for issue in code_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            prefix = f"[{style}]{sev}[/{style}]" if style else sev
            vid = " " + escape(f"[{issue['variant_id']}]") if issue.get("variant_id") else ""
            console.print(f"  {prefix}{vid}: {escape(str(issue.get('message', '')))}")

    errors = result.data.get("error_count", 0)
    warnings = result.data.get("warning_count", count - errors)
    console.print(f"\n{errors} errors, {warnings} warnings")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "resolve": _render_resolve,
    "show_item": _render_show_item,
    "list_options": _render_options,
    "check": _render_check,
}
