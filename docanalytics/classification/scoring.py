"""Pure scoring functions used by the classification strategies."""

import re
from collections.abc import Mapping
from functools import lru_cache

from docanalytics.classification.taxonomy import CategorySpec, Taxonomy

CONFIDENCE_FLOOR = 0.5
CONFIDENCE_CEILING = 0.95
MAX_KEYWORDS = 5

LEXICAL_WEIGHT = 0.6
STRUCTURAL_WEIGHT = 0.3
SEMANTIC_WEIGHT = 0.1

# (category, field, terms, boost). A signal fires when any term occurs as a whole word.
STRUCTURAL_SIGNALS: tuple[tuple[str, str, tuple[str, ...], float], ...] = (
    ("Academic", "title", ("research", "study"), 0.3),
    ("Business", "title", ("business", "strategy"), 0.3),
    ("Academic", "content", ("abstract", "methodology", "references", "bibliography"), 0.4),
    ("Business", "content", ("executive summary", "market analysis", "quarterly results"), 0.3),
    ("Legal", "content", ("whereas", "hereinafter", "terms and conditions", "governing law"), 0.4),
    ("Medical", "content", ("diagnosis", "clinical trial", "treatment plan", "patient history"), 0.3),
    ("Technical", "content", ("installation", "api reference", "getting started", "configuration"), 0.3),
)


@lru_cache(maxsize=1024)
def word_pattern(term: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(term)}\b")


def clamp(value: float, low: float = CONFIDENCE_FLOOR, high: float = CONFIDENCE_CEILING) -> float:
    return max(low, min(high, value))


def lexical_scores(text: str, taxonomy: Taxonomy) -> dict[str, float]:
    """Term-frequency keyword score per category over lowercased ``text``.

    Each keyword contributes occurrences / token count * weight * 100, where
    keywords longer than six characters weigh 2 and the rest weigh 1. Only
    tokens longer than two characters are counted.
    """
    token_count = sum(1 for word in text.split() if len(word) > 2)
    scores = {name: 0.0 for name in taxonomy.names}
    if token_count == 0:
        return scores
    for category in taxonomy.categories:
        score = 0.0
        for keyword in category.keywords:
            matches = len(word_pattern(keyword).findall(text))
            if matches:
                weight = 2 if len(keyword) > 6 else 1
                score += matches / token_count * weight * 100
        scores[category.name] = score
    return scores


def structural_scores(title: str, content: str, taxonomy: Taxonomy) -> dict[str, float]:
    fields = {"title": title.lower(), "content": content.lower()}
    scores = {name: 0.0 for name in taxonomy.names}
    for category, field, terms, boost in STRUCTURAL_SIGNALS:
        if category not in scores:
            continue
        if any(word_pattern(term).search(fields[field]) for term in terms):
            scores[category] = min(1.0, scores[category] + boost)
    return scores


def combine_scores(
    lexical: Mapping[str, float],
    structural: Mapping[str, float],
    semantic: Mapping[str, float],
) -> dict[str, float]:
    return {
        name: lexical[name] * LEXICAL_WEIGHT
        + structural.get(name, 0.0) * 100 * STRUCTURAL_WEIGHT
        + semantic.get(name, 0.0) * 50 * SEMANTIC_WEIGHT
        for name in lexical
    }


def best_category(scores: Mapping[str, float]) -> tuple[str, float]:
    """Highest-scoring category; ties resolve to taxonomy order."""
    name = max(scores, key=lambda key: scores[key])
    return name, scores[name]


def distribution_confidence(scores: Mapping[str, float]) -> float:
    """Confidence from how clearly the winner stands out, within [0.5, 0.95].

    With no signal at all the floor of 0.5 is reported.
    """
    ordered = sorted(scores.values(), reverse=True)
    total = sum(ordered)
    if not ordered or total <= 0:
        return CONFIDENCE_FLOOR
    top = ordered[0]
    runner_up = ordered[1] if len(ordered) > 1 else 0.0
    raw = (top / total) * 0.8 + ((top - runner_up) / top) * 0.2
    return clamp(raw)


def select_subcategory(category: CategorySpec, text: str) -> str:
    """First subcategory whose name or a hint keyword occurs in ``text``."""
    for sub in category.subcategories:
        if sub.name.lower() in text or any(keyword in text for keyword in sub.keywords):
            return sub.name
    return category.default_subcategory


def relevant_keywords(category: CategorySpec, text: str) -> tuple[str, ...]:
    return tuple(keyword for keyword in category.keywords if keyword in text)[:MAX_KEYWORDS]
