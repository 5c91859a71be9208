"""Tests for ResolveService."""

from __future__ import annotations

from pathlib import Path

from tests.conftest import make_item, make_variant
from variantctl.infrastructure.catalog_store import CatalogStore
from variantctl.services.resolve import ResolveService


class TestResolveDefaults:
    def test_defaults_pick_first_values(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve()
        assert result.ok
        assert result.op == "resolve"
        assert result.data["selected"] == {"Color": "Red", "Size": "S"}
        assert result.data["status"] == "matched"
        assert result.data["variant"]["id"] == "V1"
        assert result.data["complete"] is True
        assert result.data["quantity"] == 1
        assert result.data["purchasable"] is True
        assert result.warnings == []

    def test_without_defaults_everything_matches(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve(defaults=False)
        assert result.data["selected"] == {}
        assert result.data["complete"] is False
        assert result.data["status"] == "ambiguous"
        assert result.data["match_count"] == 3
        assert result.data["variant"]["id"] == "V1"
        assert any("matches 3 variants" in w for w in result.warnings)


class TestResolveSelections:
    def test_mapping_selection(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve({"Color": "Blue"})
        assert result.data["variant"]["id"] == "V3"
        assert result.data["purchasable"] is True

    def test_case_insensitive(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve({"color": "RED", "SIZE": "m"})
        assert result.data["status"] == "matched"
        assert result.data["variant"]["id"] == "V2"
        assert result.data["purchasable"] is False

    def test_assignments_override_mapping(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve(
            {"Color": "Red"}, assignments=["Color=Blue"], defaults=False
        )
        assert result.data["selected"] == {"Color": "Blue"}
        assert result.data["variant"]["id"] == "V3"

    def test_clear_axis(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve({"Color": "Red"}, clear=["Size"])
        assert result.data["selected"] == {"Color": "Red"}
        assert result.data["status"] == "ambiguous"
        assert result.data["match_count"] == 2

    def test_no_match_is_ok(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve({"Color": "Blue", "Size": "M"})
        assert result.ok
        assert result.data["status"] == "no_match"
        assert result.data["variant"] is None
        assert result.data["match_count"] == 0
        assert result.data["purchasable"] is False

    def test_undeclared_value_is_no_match(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve({"Color": "Green"})
        assert result.ok
        assert result.data["status"] == "no_match"
        assert result.warnings == ["'Green' is not a declared value of option 'Color'"]

    def test_quantity(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve(quantity=4)
        assert result.data["quantity"] == 4


class TestResolveErrors:
    def test_unknown_option(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve({"Fit": "Slim"})
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_OPTION"
        assert result.error.detail["option"] == "Fit"
        assert result.error.detail["declared"] == ["Color", "Size"]

    def test_unknown_clear(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve(clear=["Fit"])
        assert result.error is not None
        assert result.error.code == "UNKNOWN_OPTION"

    def test_invalid_quantity(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve(quantity=0)
        assert result.error is not None
        assert result.error.code == "INVALID_QUANTITY"
        assert result.error.detail["quantity"] == 0

    def test_malformed_assignment(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve(assignments=["Color"])
        assert result.error is not None
        assert result.error.code == "INVALID_SELECTION"

    def test_unknown_handle(self, store: CatalogStore) -> None:
        result = ResolveService(store).resolve(handle="hoodie")
        assert result.error is not None
        assert result.error.code == "ITEM_NOT_FOUND"

    def test_missing_catalog(self, tmp_path: Path) -> None:
        result = ResolveService(CatalogStore(tmp_path / "none.json")).resolve()
        assert result.error is not None
        assert result.error.code == "CATALOG_LOAD_FAILED"


class TestResolveDataIssues:
    def test_duplicate_variant_warns_and_first_wins(self) -> None:
        item = make_item(
            {"Color": ["Red"]},
            [
                make_variant("A", {"Color": "Red"}, available=False),
                make_variant("B", {"Color": "red"}),
            ],
        )
        result = ResolveService(CatalogStore(items=[item])).resolve()
        assert result.data["status"] == "ambiguous"
        assert result.data["variant"]["id"] == "A"
        assert result.data["purchasable"] is False
        assert any("data issues" in w for w in result.warnings)

    def test_conflicting_variant_uses_scan(self) -> None:
        item = make_item(
            {"Color": ["Red", "Blue"]},
            [
                make_variant("X", [("Color", "Red"), ("Color", "Blue")]),
                make_variant("Y", {"Color": "Blue"}),
            ],
        )
        result = ResolveService(CatalogStore(items=[item])).resolve({"Color": "Blue"})
        assert result.data["status"] == "ambiguous"
        assert result.data["variant"]["id"] == "X"
        assert result.data["match_count"] == 2

    def test_variant_options_use_declared_names(self) -> None:
        item = make_item({"Color": ["Red"]}, [make_variant("V1", {" color ": "Red"})])
        result = ResolveService(CatalogStore(items=[item])).resolve()
        assert result.data["variant"]["options"] == {"Color": "Red"}
