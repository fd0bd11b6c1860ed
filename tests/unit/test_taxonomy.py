import json
from pathlib import Path

import pytest

from docanalytics.classification.exceptions import TaxonomyValidationError
from docanalytics.classification.taxonomy import DEFAULT_TAXONOMY, build_taxonomy, load_taxonomy


class TestDefaultTaxonomy:
    def test_categories(self) -> None:
        assert DEFAULT_TAXONOMY.names == ("Academic", "Business", "Technical", "Legal", "Medical")

    def test_default_subcategory_is_first(self) -> None:
        assert DEFAULT_TAXONOMY.get("Medical").default_subcategory == "Clinical Study"

    def test_lookup_is_case_insensitive(self) -> None:
        assert DEFAULT_TAXONOMY.lookup(" legal ").name == "Legal"
        assert DEFAULT_TAXONOMY.get("legal") is None

    def test_is_immutable(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_TAXONOMY.categories = ()  # type: ignore[misc]


class TestLoadTaxonomy:
    def test_none_returns_default(self) -> None:
        assert load_taxonomy(None) is DEFAULT_TAXONOMY

    def test_loads_file(self, tmp_path: Path) -> None:
        path = tmp_path / "taxonomy.json"
        path.write_text(
            json.dumps(
                {
                    "categories": [
                        {
                            "name": "Finance",
                            "keywords": ["Invoice", "ledger"],
                            "subcategories": [
                                {"name": "Invoice", "keywords": ["invoice"]},
                                "Statement",
                            ],
                        }
                    ]
                }
            )
        )
        taxonomy = load_taxonomy(path)
        finance = taxonomy.get("Finance")
        assert finance.keywords == ("invoice", "ledger")
        assert [s.name for s in finance.subcategories] == ["Invoice", "Statement"]

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(TaxonomyValidationError, match="Failed to read"):
            load_taxonomy(tmp_path / "missing.json")

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(TaxonomyValidationError, match="Invalid taxonomy JSON"):
            load_taxonomy(path)


class TestBuildTaxonomyValidation:
    def test_requires_categories_list(self) -> None:
        with pytest.raises(TaxonomyValidationError):
            build_taxonomy({"categories": "nope"})

    def test_requires_at_least_one_category(self) -> None:
        with pytest.raises(TaxonomyValidationError, match="at least one"):
            build_taxonomy({"categories": []})

    def test_rejects_duplicate_names(self) -> None:
        category = {"name": "A", "keywords": [], "subcategories": ["X"]}
        with pytest.raises(TaxonomyValidationError, match="Duplicate"):
            build_taxonomy({"categories": [category, {**category, "name": "a"}]})

    def test_rejects_empty_subcategories(self) -> None:
        with pytest.raises(TaxonomyValidationError, match="subcategories"):
            build_taxonomy({"categories": [{"name": "A", "keywords": [], "subcategories": []}]})

    def test_rejects_bad_keywords(self) -> None:
        with pytest.raises(TaxonomyValidationError, match="keywords"):
            build_taxonomy(
                {"categories": [{"name": "A", "keywords": [1], "subcategories": ["X"]}]}
            )
