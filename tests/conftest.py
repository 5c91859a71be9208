"""Shared pytest fixtures and test helpers for variantctl tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
import structlog
from click.testing import CliRunner

from variantctl.domain.catalog import CatalogItem, Option, SelectedOption, Variant
from variantctl.domain.options import OptionIndex, build_option_index
from variantctl.domain.variants import VariantIndex, build_variant_index
from variantctl.infrastructure.catalog_store import CatalogStore
from variantctl.services.telemetry import disable_telemetry

# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_variant(
    variant_id: str,
    options: dict[str, str] | list[tuple[str, str]],
    *,
    available: bool = True,
    title: str | None = None,
) -> Variant:
    """Build a Variant from ``{name: value}`` or a list of pairs (allows repeats)."""
    pairs = list(options.items()) if isinstance(options, dict) else list(options)
    return Variant(
        id=variant_id,
        title=title if title is not None else " / ".join(v for _, v in pairs),
        available_for_sale=available,
        selected_options=tuple(SelectedOption(name=n, value=v) for n, v in pairs),
    )


def make_item(
    options: dict[str, list[str]] | list[tuple[str, list[str]]],
    variants: list[Variant],
    *,
    item_id: str = "gid://shop/Product/1",
    handle: str | None = "classic-tee",
) -> CatalogItem:
    """Build a CatalogItem from ``{axis: [values]}`` (or pairs, to allow repeats)."""
    pairs = list(options.items()) if isinstance(options, dict) else list(options)
    return CatalogItem(
        id=item_id,
        title="Classic Tee",
        handle=handle,
        options=tuple(Option(name=n, values=tuple(vals)) for n, vals in pairs),
        variants=tuple(variants),
    )


def storefront_product(item: CatalogItem) -> dict[str, Any]:
    """Render a CatalogItem back into the storefront document shape."""
    return {
        "id": item.id,
        "title": item.title,
        "handle": item.handle,
        "options": [
            {"name": opt.name, "optionValues": [{"name": v} for v in opt.values]}
            for opt in item.options
        ],
        "variants": {
            "nodes": [
                {
                    "id": v.id,
                    "title": v.title,
                    "availableForSale": v.available_for_sale,
                    "selectedOptions": [
                        {"name": o.name, "value": o.value} for o in v.selected_options
                    ],
                }
                for v in item.variants
            ]
        },
    }


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tee_item() -> CatalogItem:
    """Color [Red, Blue] x Size [S, M] with a sparse, partly sold-out variant set.

    V1 = Red/S (available), V2 = Red/M (sold out), V3 = Blue/S (available).
    """
    return make_item(
        {"Color": ["Red", "Blue"], "Size": ["S", "M"]},
        [
            make_variant("V1", {"Color": "Red", "Size": "S"}),
            make_variant("V2", {"Color": "Red", "Size": "M"}, available=False),
            make_variant("V3", {"Color": "Blue", "Size": "S"}),
        ],
    )


@pytest.fixture
def option_index(tee_item: CatalogItem) -> OptionIndex:
    return build_option_index(tee_item.options)


@pytest.fixture
def variant_index(tee_item: CatalogItem, option_index: OptionIndex) -> VariantIndex:
    return build_variant_index(tee_item.variants, option_index)


@pytest.fixture
def store(tee_item: CatalogItem) -> CatalogStore:
    """In-memory store holding only the tee item."""
    return CatalogStore(items=[tee_item])


@pytest.fixture
def catalog_file(tmp_path: Path, tee_item: CatalogItem) -> Path:
    """The tee item written as a storefront JSON document."""
    path = tmp_path / "tee.json"
    path.write_text(json.dumps({"product": storefront_product(tee_item)}), encoding="utf-8")
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_catalog(
    tmp_path: Path, catalog_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """CWD with a ``variantctl.toml`` pointing at the tee catalog.

    Use via ``@pytest.mark.usefixtures("_isolated_catalog")`` on command
    test classes.
    """
    (tmp_path / "variantctl.toml").write_text(
        f'[catalog]\npath = "{catalog_file.name}"\n', encoding="utf-8"
    )
    monkeypatch.delenv("VARIANTCTL_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _telemetry_off() -> Generator[None]:
    """``-v`` enables telemetry for the whole context; switch it back off."""
    yield
    disable_telemetry()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo ``configure_logging`` calls made by CLI invocations."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("variantctl")
    app_level = app.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)
    structlog.contextvars.clear_contextvars()
