"""Catalog store — reads exported catalog documents and caches item indexes.

Documents are JSON (``.json``) or YAML (``.yaml`` / ``.yml``) in the
storefront product shape::

    {"product": {
        "id": "gid://shopify/Product/1", "title": "Tee", "handle": "tee",
        "options": [{"name": "Color", "optionValues": [{"name": "Red"}]}],
        "variants": {"nodes": [
            {"id": "...", "title": "Red / S", "availableForSale": true,
             "selectedOptions": [{"name": "Color", "value": "Red"}]}
        ]}
    }}

Also accepted: a bare product object, ``{"data": {"product": ...}}``,
``{"products": [...]}`` / ``{"products": {"nodes": [...]}}``, and a
top-level list of products. Connections may use ``nodes`` or
``edges[].node``.

INVARIANT: Indexes are built at most once per item per store and never
mutated. A changed catalog means a new store.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from variantctl.domain.catalog import CatalogItem
from variantctl.domain.issues import DataIssue
from variantctl.domain.options import OptionIndex, build_option_index
from variantctl.domain.variants import VariantIndex, build_variant_index

logger = logging.getLogger(__name__)

YAML_SUFFIXES = frozenset({".yaml", ".yml"})


class CatalogLoadError(Exception):
    """The catalog document is missing, unreadable, or malformed."""

    def __init__(self, path: Path | None, message: str) -> None:
        self.path = path
        super().__init__(message)


class CatalogItemNotFound(Exception):  # noqa: N818
    """No item in the catalog matches the requested handle or id."""

    def __init__(self, handle: str | None, available: list[str]) -> None:
        self.handle = handle
        self.available = available
        if handle is None:
            msg = f"Catalog holds {len(available)} items; pass --handle to pick one"
        else:
            msg = f"No catalog item with handle or id {handle!r}"
        super().__init__(msg)


@dataclass(frozen=True)
class IndexedItem:
    """A catalog item together with its immutable indexes."""

    item: CatalogItem
    option_index: OptionIndex
    variant_index: VariantIndex

    @property
    def issues(self) -> tuple[DataIssue, ...]:
        return self.option_index.issues + self.variant_index.issues


# ---------------------------------------------------------------------------
# Document parsing
# ---------------------------------------------------------------------------


def _mapping(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        msg = f"Expected {what} to be a mapping, got {type(value).__name__}"
        raise ValueError(msg)
    return value


def _nodes(connection: Any) -> list[Any]:
    """Flatten a list, ``{"nodes": [...]}`` or ``{"edges": [{"node": ...}]}``."""
    if connection is None:
        return []
    if isinstance(connection, list):
        return connection
    if isinstance(connection, dict):
        if "nodes" in connection:
            return list(connection["nodes"] or [])
        if "edges" in connection:
            return [_mapping(edge, "an edge").get("node") for edge in connection["edges"] or []]
    msg = f"Expected a list or connection object, got {type(connection).__name__}"
    raise ValueError(msg)


def _option_values(raw: dict[str, Any]) -> list[str]:
    values = raw.get("optionValues")
    if values is None:
        values = raw.get("values", [])
    return [v["name"] if isinstance(v, dict) else str(v) for v in values]


def parse_product(raw: dict[str, Any]) -> CatalogItem:
    """Convert one storefront-shaped product mapping into a :class:`CatalogItem`.

    Raises:
        ValueError: The mapping does not have the expected shape.
        ValidationError: Field types do not validate.
    """
    raw = _mapping(raw, "a product")
    options = [
        {"name": opt.get("name", ""), "values": _option_values(opt)}
        for opt in (_mapping(o, "an option") for o in raw.get("options") or [])
    ]
    return CatalogItem.model_validate(
        {
            "id": raw.get("id"),
            "title": raw.get("title", ""),
            "handle": raw.get("handle"),
            "options": options,
            "variants": _nodes(raw.get("variants")),
        }
    )


def _products(document: Any) -> list[dict[str, Any]]:
    if isinstance(document, list):
        return document
    if not isinstance(document, dict):
        msg = "Catalog document must be a mapping or a list of products"
        raise ValueError(msg)
    if "data" in document and isinstance(document["data"], dict):
        return _products(document["data"])
    if "products" in document:
        return _nodes(document["products"])
    if "product" in document:
        product = document["product"]
        return [] if product is None else [product]
    return [document]


def _read_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in YAML_SUFFIXES:
        return YAML(typ="safe", pure=True).load(text)
    return json.loads(text)


def read_catalog(path: Path) -> list[CatalogItem]:
    """Read every catalog item from the document at *path*.

    Raises:
        CatalogLoadError: The file is missing or its content is invalid.
    """
    if not path.is_file():
        raise CatalogLoadError(path, f"Catalog file not found: {path}")
    try:
        document = _read_document(path)
        items = [parse_product(raw) for raw in _products(document)]
    except (OSError, json.JSONDecodeError, YAMLError) as exc:
        raise CatalogLoadError(path, f"Cannot read catalog {path}: {exc}") from exc
    except (ValueError, TypeError, KeyError, ValidationError) as exc:
        raise CatalogLoadError(path, f"Invalid catalog document {path}: {exc}") from exc
    logger.debug("Loaded %d catalog items from %s", len(items), path)
    return items


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class CatalogStore:
    """Lazy, read-only access to the items of one catalog document.

    Items can also be supplied directly (tests, library callers) instead
    of a path.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        items: list[CatalogItem] | None = None,
    ) -> None:
        self.path = path
        self._items = items
        self._indexed: dict[tuple[str, str | None], IndexedItem] = {}

    @property
    def items(self) -> list[CatalogItem]:
        """All items in the document (loaded on first access)."""
        if self._items is None:
            if self.path is None:
                raise CatalogLoadError(None, "No catalog configured; pass --catalog PATH")
            self._items = read_catalog(self.path)
        return self._items

    def item(self, handle: str | None = None) -> CatalogItem:
        """Find an item by handle or id; with no handle the sole item is returned.

        Raises:
            CatalogItemNotFound: Nothing matches, or *handle* is None and the
                document holds other than exactly one item.
        """
        items = self.items
        available = [i.handle or i.id for i in items]
        if handle is None:
            if len(items) == 1:
                return items[0]
            raise CatalogItemNotFound(None, available)
        for candidate in items:
            if handle in (candidate.handle, candidate.id):
                return candidate
        raise CatalogItemNotFound(handle, available)

    def indexed(self, handle: str | None = None) -> IndexedItem:
        """Return the item with its indexes, building them once."""
        item = self.item(handle)
        cached = self._indexed.get((item.id, item.handle))
        if cached is not None:
            return cached
        option_index = build_option_index(item.options)
        variant_index = build_variant_index(item.variants, option_index)
        entry = IndexedItem(item=item, option_index=option_index, variant_index=variant_index)
        self._indexed[item.id, item.handle] = entry
        if entry.issues:
            logger.warning("Catalog item %s has %d data issues", item.id, len(entry.issues))
        return entry
