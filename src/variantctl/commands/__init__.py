"""Subcommand modules for variantctl.

Provides register_commands() which uses deferred imports to keep
``variantctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``catalog`` group and the standalone ``resolve`` command."""
    from variantctl.commands.catalog import catalog
    from variantctl.commands.resolve import resolve

    cli.add_command(catalog)
    cli.add_command(resolve)
