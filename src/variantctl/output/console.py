"""Rich Console factory and theme for variantctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

VARIANT_THEME = Theme(
    {
        "vc.ok": "bold green",
        "vc.error": "bold red",
        "vc.warning": "bold yellow",
        "vc.op": "bold cyan",
        "vc.key": "dim",
        "vc.id": "bold blue",
        "vc.title": "bold",
        "vc.status.matched": "green",
        "vc.status.ambiguous": "yellow",
        "vc.status.no_match": "red",
        "vc.available": "green",
        "vc.unavailable": "dim red",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "matched": "vc.status.matched",
    "ambiguous": "vc.status.ambiguous",
    "no_match": "vc.status.no_match",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=VARIANT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for a resolution status."""
    return _STATUS_STYLES.get(status, "")
