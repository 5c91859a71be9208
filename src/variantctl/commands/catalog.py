"""Command group: inspect catalog items and audit their data."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from variantctl.commands._base import VariantGroup

if TYPE_CHECKING:
    from variantctl.commands._context import AppContext

_CATALOG_EXAMPLES = (
    "--catalog tee.json catalog show",
    "--catalog shop.yaml --handle classic-tee catalog options",
    "--catalog tee.json catalog check --errors-only",
)


@click.group(cls=VariantGroup, examples=_CATALOG_EXAMPLES)
@click.pass_obj
def catalog(app: AppContext) -> None:
    """Inspect a catalog item's options, variants, and data quality."""


@catalog.command(
    examples=(
        "--catalog tee.json catalog show",
        "--json --catalog tee.json catalog show",
    )
)
@click.pass_obj
def show(app: AppContext) -> None:
    """Show an item with its options and variants."""
    from variantctl.services.catalog import CatalogService

    app.emit(CatalogService(app.store).show_item(app.handle))


@catalog.command(
    examples=(
        "--catalog tee.json catalog options",
        "-q --catalog tee.json catalog options",
    )
)
@click.pass_obj
def options(app: AppContext) -> None:
    """List declared options and their values."""
    from variantctl.services.catalog import CatalogService

    app.emit(CatalogService(app.store).list_options(app.handle))


@catalog.command(
    examples=(
        "--catalog tee.json catalog check",
        "--catalog tee.json catalog check --min-severity error",
    )
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.pass_obj
def check(app: AppContext, min_severity: str, errors_only: bool) -> None:
    """Report catalog data-quality issues (duplicates, undeclared options)."""
    from variantctl.services.catalog import CatalogService

    threshold = "error" if errors_only else min_severity
    app.emit(CatalogService(app.store).check(app.handle, min_severity=threshold))
