from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import assert_never

from docanalytics.classification.exceptions import (
    ClassificationError,
    InferenceResponseError,
    InferenceUnavailableError,
)
from docanalytics.classification.inference.base import BaseInferenceClient
from docanalytics.classification.models import ClassificationMethod, ClassificationResult
from docanalytics.classification.scoring import (
    MAX_KEYWORDS,
    best_category,
    clamp,
    combine_scores,
    distribution_confidence,
    lexical_scores,
    relevant_keywords,
    select_subcategory,
    structural_scores,
)
from docanalytics.classification.taxonomy import DEFAULT_TAXONOMY, CategorySpec, Taxonomy
from docanalytics.logging.logger import Log

LEXICAL_ALGORITHM = "Enhanced Keyword Analysis"
FALLBACK_ALGORITHM = "Enhanced Keyword Analysis (Fallback)"
STRUCTURAL_ALGORITHM = "Structural Feature Analysis"
HYBRID_ALGORITHM = "Hybrid AI (Keywords + Structure + Semantics)"

# Lowercased label fragment -> category, checked in order after exact name matches.
LABEL_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("research", "Academic"),
    ("academic", "Academic"),
    ("business", "Business"),
    ("commercial", "Business"),
    ("technical", "Technical"),
    ("technology", "Technical"),
    ("legal", "Legal"),
    ("law", "Legal"),
    ("medical", "Medical"),
    ("health", "Medical"),
)

SemanticScorer = Callable[[str], Mapping[str, float]]


@dataclass(frozen=True)
class Outcome:
    """One ensemble member's attempt: a result or the error it raised."""

    method: ClassificationMethod
    result: ClassificationResult | None = None
    error: Exception | None = None


class Classifier:
    """Assigns a taxonomy category, subcategory and confidence to a document.

    Every method degrades to lexical scoring when it fails, so classify()
    always returns a result.
    """

    def __init__(
        self,
        taxonomy: Taxonomy = DEFAULT_TAXONOMY,
        *,
        inference_client: BaseInferenceClient | None = None,
        semantic_scorer: SemanticScorer | None = None,
        default_method: ClassificationMethod = ClassificationMethod.HYBRID,
        inference_max_chars: int = 4000,
    ) -> None:
        self._taxonomy = taxonomy
        self._inference_client = inference_client
        self._semantic_scorer = semantic_scorer
        self._default_method = default_method
        self._inference_max_chars = inference_max_chars

    @property
    def taxonomy(self) -> Taxonomy:
        return self._taxonomy

    def classify(
        self,
        title: str,
        content: str,
        method: ClassificationMethod | None = None,
    ) -> ClassificationResult:
        method = method or self._default_method
        try:
            result = self._run(method, title, content)
        except Exception as exc:
            Log.warning(
                f"Classification with {method.value} failed, using keyword fallback: {exc}",
                event="classification_degraded",
                method=method.value,
            )
            result = self._lexical(title, content, FALLBACK_ALGORITHM)
        Log.debug(
            f"Classified '{title}' as {result.category}/{result.subcategory} "
            f"({result.confidence:.2f}) by {result.algorithm}"
        )
        return result

    def _run(self, method: ClassificationMethod, title: str, content: str) -> ClassificationResult:
        match method:
            case ClassificationMethod.LEXICAL:
                return self._lexical(title, content, LEXICAL_ALGORITHM)
            case ClassificationMethod.STRUCTURAL:
                return self._structural(title, content)
            case ClassificationMethod.EXTERNAL:
                return self._external(title, content)
            case ClassificationMethod.HYBRID:
                return self._hybrid(title, content)
            case ClassificationMethod.ENSEMBLE:
                return self._ensemble(title, content)
            case _:
                assert_never(method)

    def _lexical(self, title: str, content: str, algorithm: str) -> ClassificationResult:
        text = f"{title} {content}".lower()
        scores = lexical_scores(text, self._taxonomy)
        return self._result(scores, text, distribution_confidence(scores), algorithm)

    def _structural(self, title: str, content: str) -> ClassificationResult:
        scores = structural_scores(title, content, self._taxonomy)
        name, score = best_category(scores)
        if score <= 0:
            raise ClassificationError("No structural signals found")
        text = f"{title} {content}".lower()
        return self._result(scores, text, clamp(score), STRUCTURAL_ALGORITHM)

    def _external(self, title: str, content: str) -> ClassificationResult:
        if self._inference_client is None:
            raise InferenceUnavailableError("No inference client configured")
        text = f"{title} {content}".strip()[: self._inference_max_chars]
        answer = self._inference_client.classify(text, labels=self._taxonomy.names)
        category = self._map_label(answer.label)
        lowered = f"{title} {content}".lower()
        return ClassificationResult(
            category=category.name,
            subcategory=select_subcategory(category, lowered),
            confidence=clamp(answer.score, 0.0, 1.0),
            algorithm=f"External Inference ({self._inference_client.name})",
            keywords=relevant_keywords(category, lowered),
        )

    def _hybrid(self, title: str, content: str) -> ClassificationResult:
        text = f"{title} {content}".lower()
        combined = combine_scores(
            lexical_scores(text, self._taxonomy),
            structural_scores(title, content, self._taxonomy),
            self._semantic_scores(text),
        )
        return self._result(combined, text, distribution_confidence(combined), HYBRID_ALGORITHM)

    def _ensemble(self, title: str, content: str) -> ClassificationResult:
        members = [ClassificationMethod.STRUCTURAL, ClassificationMethod.HYBRID]
        if self._inference_client is not None:
            members.insert(0, ClassificationMethod.EXTERNAL)

        outcomes = [self._attempt(member, title, content) for member in members]
        results = [outcome.result for outcome in outcomes if outcome.result is not None]
        if not results:
            raise ClassificationError("All ensemble members failed")

        mean = sum(r.confidence for r in results) / len(results)
        keywords: list[str] = []
        for result in results:
            for keyword in result.keywords:
                if keyword not in keywords:
                    keywords.append(keyword)

        return ClassificationResult(
            category=_vote(results, lambda r: r.category),
            subcategory=_vote(results, lambda r: r.subcategory),
            confidence=min(clamp(mean), max(r.confidence for r in results)),
            algorithm=f"Ensemble ({', '.join(r.algorithm for r in results)})",
            keywords=tuple(keywords[:MAX_KEYWORDS]),
        )

    def _attempt(self, method: ClassificationMethod, title: str, content: str) -> Outcome:
        try:
            return Outcome(method=method, result=self._run(method, title, content))
        except Exception as exc:
            Log.warning(
                f"Ensemble member {method.value} failed: {exc}",
                event="classification_degraded",
                method=method.value,
            )
            return Outcome(method=method, error=exc)

    def _semantic_scores(self, text: str) -> Mapping[str, float]:
        if self._semantic_scorer is None:
            return {}
        try:
            return self._semantic_scorer(text)
        except Exception as exc:
            Log.warning(
                f"Semantic scorer failed, treating as neutral: {exc}",
                event="semantic_unavailable",
            )
            return {}

    def _map_label(self, label: str) -> CategorySpec:
        category = self._taxonomy.lookup(label)
        if category is not None:
            return category
        lowered = label.lower()
        for fragment, name in LABEL_CATEGORIES:
            if fragment in lowered:
                category = self._taxonomy.get(name)
                if category is not None:
                    return category
        raise InferenceResponseError(f"Label '{label}' does not map to any category")

    def _result(
        self,
        scores: Mapping[str, float],
        text: str,
        confidence: float,
        algorithm: str,
    ) -> ClassificationResult:
        name, score = best_category(scores)
        category = self._taxonomy.get(name) or self._taxonomy.first
        if score <= 0:
            return ClassificationResult(
                category=category.name,
                subcategory=category.default_subcategory,
                confidence=confidence,
                algorithm=algorithm,
            )
        return ClassificationResult(
            category=category.name,
            subcategory=select_subcategory(category, text),
            confidence=confidence,
            algorithm=algorithm,
            keywords=relevant_keywords(category, text),
        )


def _vote(
    results: list[ClassificationResult],
    key: Callable[[ClassificationResult], str],
) -> str:
    """Confidence-weighted vote; ties go to the single most confident backer, then order."""
    votes: dict[str, float] = {}
    peak: dict[str, float] = {}
    order: dict[str, int] = {}
    for index, result in enumerate(results):
        choice = key(result)
        votes[choice] = votes.get(choice, 0.0) + result.confidence
        peak[choice] = max(peak.get(choice, 0.0), result.confidence)
        order.setdefault(choice, index)
    return max(votes, key=lambda choice: (votes[choice], peak[choice], -order[choice]))


def build_classifier(
    taxonomy: Taxonomy,
    inference_client: BaseInferenceClient | None,
    method: str,
    inference_max_chars: int = 4000,
) -> Classifier:
    return Classifier(
        taxonomy,
        inference_client=inference_client,
        default_method=ClassificationMethod(method.lower()),
        inference_max_chars=inference_max_chars,
    )
