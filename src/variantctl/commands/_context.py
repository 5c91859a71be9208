"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides a lazily created catalog store and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from variantctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from variantctl.config.settings import VariantSettings
    from variantctl.infrastructure.catalog_store import CatalogStore
    from variantctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The catalog is read lazily on first use so ``--help`` and
    ``--version`` never touch the filesystem.
    """

    def __init__(self, settings: VariantSettings) -> None:
        self.settings = settings
        self._store: CatalogStore | None = None

        from variantctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from variantctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> CatalogStore:
        """The catalog store (created lazily on first access)."""
        if self._store is None:
            from variantctl.config.logging import bind_catalog
            from variantctl.infrastructure.catalog_store import CatalogStore

            path = self.settings.resolved_catalog_path
            bind_catalog(path, self.handle)
            self._store = CatalogStore(path)
        return self._store

    @property
    def handle(self) -> str | None:
        return self.settings.resolved_handle

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output and not settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
