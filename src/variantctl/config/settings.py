"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``VARIANTCTL_*`` prefix
  3. TOML file    — ``variantctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

A relative ``[catalog] path`` in the TOML file is resolved against the
directory that holds the file.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from variantctl.config.discovery import find_config
from variantctl.config.models import CatalogConfig, SelectionConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``variantctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc
            catalog = self._data.get("catalog")
            if isinstance(catalog, dict) and catalog.get("path"):
                path = Path(catalog["path"])
                if not path.is_absolute():
                    catalog["path"] = str(toml_path.parent / path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class VariantSettings(BaseSettings):
    """Unified settings for the variantctl CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.

    Attributes:
        config_path: The TOML file that was loaded, or None.
        catalog_path: ``--catalog`` override; falls back to ``[catalog] path``.
        handle: ``--handle`` override; falls back to ``[catalog] handle``.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "VARIANTCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    catalog_path: Path | None = None
    handle: str | None = None

    # --- TOML sections ---
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)

    @property
    def resolved_catalog_path(self) -> Path | None:
        """Catalog document to load: CLI/env override first, then TOML."""
        return self.catalog_path or self.catalog.path

    @property
    def resolved_handle(self) -> str | None:
        return self.handle or self.catalog.handle

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> VariantSettings:
        """Construct settings from a CLI invocation.

        Discovers ``variantctl.toml`` via walk-up from *start* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides. Flags passed as None are dropped so lower layers apply.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        flags = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _tls.toml_path = None
