"""Root CLI group for variantctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from variantctl import __version__
from variantctl.commands import register_commands
from variantctl.commands._context import AppContext
from variantctl.config.settings import VariantSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="variantctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with timing info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Catalog document (JSON or YAML).",
)
@click.option("--handle", default=None, help="Item handle or id within the catalog.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    catalog_path: Path | None,
    handle: str | None,
) -> None:
    """variantctl — resolve catalog option choices to purchasable variants."""
    settings = VariantSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        catalog_path=catalog_path,
        handle=handle,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
