"""Command: resolve a selection to a catalog variant."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from variantctl.commands._base import VariantCommand

if TYPE_CHECKING:
    from variantctl.commands._context import AppContext


@click.command(
    cls=VariantCommand,
    examples=(
        "--catalog tee.json resolve",
        "--catalog tee.json resolve -s Color=Red -s Size=M",
        "--catalog tee.json resolve -s color=BLUE --clear Size",
        "--catalog shop.yaml --handle classic-tee resolve --no-defaults -s Color=Red",
        "--json --catalog tee.json resolve -s Size=S --quantity 3",
    ),
)
@click.option(
    "-s",
    "--set",
    "assignments",
    multiple=True,
    metavar="NAME=VALUE",
    help="Choose a value for an option (repeatable).",
)
@click.option(
    "--clear", "clear", multiple=True, metavar="NAME", help="Leave an option unselected."
)
@click.option("--quantity", type=int, default=None, help="Line quantity (at least 1).")
@click.option(
    "--defaults/--no-defaults",
    default=None,
    help="Start from each option's first value (default) or from nothing.",
)
@click.pass_obj
def resolve(
    app: AppContext,
    assignments: tuple[str, ...],
    clear: tuple[str, ...],
    quantity: int | None,
    defaults: bool | None,
) -> None:
    """Resolve option choices to a single purchasable variant."""
    from variantctl.services.resolve import ResolveService

    selection_cfg = app.settings.selection
    result = ResolveService(app.store).resolve(
        assignments=assignments,
        clear=clear,
        quantity=selection_cfg.default_quantity if quantity is None else quantity,
        defaults=selection_cfg.default_to_first if defaults is None else defaults,
        handle=app.handle,
    )
    app.emit(result)
