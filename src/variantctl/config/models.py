"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, variantctl.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, field_validator

# --- variantctl.toml sections ---


class CatalogConfig(BaseModel):
    """[catalog] section."""

    model_config = {"frozen": True}

    path: Path | None = None
    handle: str | None = None


class SelectionConfig(BaseModel):
    """[selection] section."""

    model_config = {"frozen": True}

    default_to_first: bool = True
    default_quantity: int = 1

    @field_validator("default_quantity")
    @classmethod
    def _positive_quantity(cls, value: int) -> int:
        if value < 1:
            msg = "default_quantity must be at least 1"
            raise ValueError(msg)
        return value
