"""Click base classes with an ``--examples`` flag.

``examples`` is a sequence of argument lines; each is shown prefixed
with the program name. ``--examples`` is eager, so it works without a
catalog and keeps ``--help`` short.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

PROG_NAME = "variantctl"


def format_examples(examples: Sequence[str]) -> str:
    """Render argument lines as indented ``variantctl ...`` invocations."""
    return "\n".join(f"  {PROG_NAME} {line}" for line in examples)


class _ExamplesMixin:
    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(self.examples))
        related = self._related_examples()
        if related:
            click.echo(f"\nAlso: --examples on {', '.join(related)}")
        ctx.exit(0)

    def _related_examples(self) -> list[str]:
        return []


class VariantCommand(_ExamplesMixin, click.Command):
    """Click Command that supports ``--examples``."""


class VariantGroup(_ExamplesMixin, click.Group):
    """Click Group that supports ``--examples``.

    Subcommands default to :class:`VariantCommand`; the group's examples
    end with the subcommands that carry their own.
    """

    command_class = VariantCommand

    def _related_examples(self) -> list[str]:
        return [
            name
            for name, cmd in self.commands.items()
            if isinstance(cmd, VariantCommand) and cmd.examples
        ]
