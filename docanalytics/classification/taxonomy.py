"""Category taxonomy: names, keyword sets and subcategories.

Loaded once at startup and passed by reference into the classifier.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from docanalytics.classification.exceptions import TaxonomyValidationError


@dataclass(frozen=True)
class Subcategory:
    name: str
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class CategorySpec:
    name: str
    keywords: tuple[str, ...]
    subcategories: tuple[Subcategory, ...]

    @property
    def default_subcategory(self) -> str:
        return self.subcategories[0].name


@dataclass(frozen=True)
class Taxonomy:
    categories: tuple[CategorySpec, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(category.name for category in self.categories)

    @property
    def first(self) -> CategorySpec:
        return self.categories[0]

    def get(self, name: str) -> CategorySpec | None:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def lookup(self, name: str) -> CategorySpec | None:
        """Case-insensitive variant of get()."""
        wanted = name.strip().lower()
        for category in self.categories:
            if category.name.lower() == wanted:
                return category
        return None


def _sub(name: str, *keywords: str) -> Subcategory:
    return Subcategory(name=name, keywords=keywords)


DEFAULT_TAXONOMY = Taxonomy(
    categories=(
        CategorySpec(
            name="Academic",
            keywords=(
                "research", "study", "methodology", "hypothesis", "analysis",
                "findings", "conclusion", "abstract", "literature review", "experiment",
            ),
            subcategories=(
                _sub("Research Paper", "research", "findings", "methodology"),
                _sub("Thesis", "thesis", "dissertation"),
                _sub("Conference Paper", "conference", "proceedings"),
                _sub("Journal Article", "journal", "publication"),
                _sub("Technical Report", "report", "technical"),
            ),
        ),
        CategorySpec(
            name="Business",
            keywords=(
                "strategy", "market", "revenue", "profit", "business plan",
                "financial", "investment", "proposal", "contract", "agreement",
            ),
            subcategories=(
                _sub("Business Plan", "plan", "strategy"),
                _sub("Financial Report", "financial", "revenue", "profit"),
                _sub("Market Analysis", "market", "analysis"),
                _sub("Contract", "contract", "agreement"),
                _sub("Proposal", "proposal", "bid"),
            ),
        ),
        CategorySpec(
            name="Technical",
            keywords=(
                "algorithm", "implementation", "system", "architecture", "software",
                "programming", "development", "api", "documentation", "specification",
            ),
            subcategories=(
                _sub("API Documentation", "api", "documentation"),
                _sub("System Design", "system", "architecture"),
                _sub("Software Manual", "manual", "guide"),
                _sub("Technical Specification", "specification", "requirements"),
                _sub("Code Documentation", "code", "programming"),
            ),
        ),
        CategorySpec(
            name="Legal",
            keywords=(
                "law", "legal", "regulation", "compliance", "policy",
                "terms", "conditions", "agreement", "contract", "liability",
            ),
            subcategories=(
                _sub("Legal Contract", "contract", "agreement"),
                _sub("Policy Document", "policy", "procedure"),
                _sub("Compliance Report", "compliance", "audit"),
                _sub("Terms of Service", "terms", "service"),
                _sub("Legal Brief", "brief", "case"),
            ),
        ),
        CategorySpec(
            name="Medical",
            keywords=(
                "patient", "medical", "health", "diagnosis", "treatment",
                "clinical", "pharmaceutical", "therapy", "symptoms", "healthcare",
            ),
            subcategories=(
                _sub("Clinical Study", "clinical", "study"),
                _sub("Medical Report", "report", "diagnosis"),
                _sub("Patient Record", "patient", "record"),
                _sub("Pharmaceutical Research", "pharmaceutical", "drug"),
                _sub("Healthcare Policy", "healthcare", "policy"),
            ),
        ),
    )
)


def load_taxonomy(path: Path | None = None) -> Taxonomy:
    """Load a taxonomy from a JSON file, or the built-in one when path is None.

    Expected shape::

        {"categories": [{"name": ..., "keywords": [...],
                         "subcategories": [{"name": ..., "keywords": [...]}]}]}

    Raises:
        TaxonomyValidationError: if the file is unreadable or malformed.
    """
    if path is None:
        return DEFAULT_TAXONOMY
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TaxonomyValidationError(f"Failed to read taxonomy file: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise TaxonomyValidationError(f"Invalid taxonomy JSON: {exc}") from exc
    return build_taxonomy(data)


def build_taxonomy(data: Any) -> Taxonomy:
    if not isinstance(data, dict) or not isinstance(data.get("categories"), list):
        raise TaxonomyValidationError("Taxonomy must be an object with a 'categories' list")
    raw_categories = data["categories"]
    if not raw_categories:
        raise TaxonomyValidationError("Taxonomy must define at least one category")

    categories: list[CategorySpec] = []
    seen: set[str] = set()
    for index, raw in enumerate(raw_categories):
        category = _build_category(raw, index)
        if category.name.lower() in seen:
            raise TaxonomyValidationError(f"Duplicate category name: {category.name}")
        seen.add(category.name.lower())
        categories.append(category)
    return Taxonomy(categories=tuple(categories))


def _build_category(raw: Any, index: int) -> CategorySpec:
    if not isinstance(raw, dict):
        raise TaxonomyValidationError(f"Category at index {index} must be an object")
    name = _require_name(raw, f"Category at index {index}")
    keywords = _keywords(raw.get("keywords", []), f"Category '{name}'")
    raw_subs = raw.get("subcategories")
    if not isinstance(raw_subs, list) or not raw_subs:
        raise TaxonomyValidationError(
            f"Category '{name}': 'subcategories' must be a non-empty list"
        )
    subcategories: list[Subcategory] = []
    for sub_index, raw_sub in enumerate(raw_subs):
        if isinstance(raw_sub, str) and raw_sub.strip():
            subcategories.append(Subcategory(name=raw_sub.strip()))
            continue
        if not isinstance(raw_sub, dict):
            raise TaxonomyValidationError(
                f"Category '{name}': subcategory at index {sub_index} must be an object or string"
            )
        sub_name = _require_name(raw_sub, f"Category '{name}' subcategory {sub_index}")
        sub_keywords = _keywords(raw_sub.get("keywords", []), f"Subcategory '{sub_name}'")
        subcategories.append(Subcategory(name=sub_name, keywords=sub_keywords))
    return CategorySpec(name=name, keywords=keywords, subcategories=tuple(subcategories))


def _require_name(raw: dict[str, Any], where: str) -> str:
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise TaxonomyValidationError(f"{where}: 'name' must be a non-empty string")
    return name.strip()


def _keywords(raw: Any, where: str) -> tuple[str, ...]:
    if not isinstance(raw, list) or not all(isinstance(k, str) and k.strip() for k in raw):
        raise TaxonomyValidationError(f"{where}: 'keywords' must be a list of non-empty strings")
    return tuple(k.strip().lower() for k in raw)
