from collections.abc import Sequence

import pytest

from docanalytics.classification import (
    ClassificationMethod,
    Classifier,
    build_classifier,
)
from docanalytics.classification.classifier import (
    FALLBACK_ALGORITHM,
    HYBRID_ALGORITHM,
    LEXICAL_ALGORITHM,
    STRUCTURAL_ALGORITHM,
    _vote,
)
from docanalytics.classification.exceptions import InferenceUnavailableError
from docanalytics.classification.inference.base import BaseInferenceClient
from docanalytics.classification.models import ClassificationResult, InferenceLabel
from docanalytics.classification.taxonomy import DEFAULT_TAXONOMY

RESEARCH_CONTENT = "research methodology findings " * 5
CONTRACT_TITLE = "Service Agreement"
CONTRACT_CONTENT = (
    "whereas the parties agree to the terms and conditions and governing law of this contract"
)


class FakeInferenceClient(BaseInferenceClient):
    name = "fake"

    def __init__(self, answer: InferenceLabel | None = None, error: Exception | None = None) -> None:
        self.answer = answer
        self.error = error
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def classify(self, text: str, *, labels: Sequence[str]) -> InferenceLabel:
        self.calls.append((text, tuple(labels)))
        if self.error is not None:
            raise self.error
        assert self.answer is not None
        return self.answer


class TestLexicalAndHybrid:
    def test_research_text_is_academic(self) -> None:
        result = Classifier().classify("", RESEARCH_CONTENT)

        assert result.category == "Academic"
        assert result.subcategory == "Research Paper"
        assert 0.6 <= result.confidence <= 0.95
        assert result.algorithm == HYBRID_ALGORITHM
        assert result.keywords == ("research", "methodology", "findings")

    def test_lexical_method(self) -> None:
        result = Classifier().classify("", RESEARCH_CONTENT, ClassificationMethod.LEXICAL)
        assert result.algorithm == LEXICAL_ALGORITHM
        assert result.category == "Academic"

    def test_empty_document_gets_first_category(self) -> None:
        result = Classifier().classify("", "")

        assert result.category == "Academic"
        assert result.subcategory == "Research Paper"
        assert result.confidence == 0.5
        assert result.keywords == ()

    def test_semantic_scores_are_blended_in(self) -> None:
        classifier = Classifier(semantic_scorer=lambda text: {"Medical": 1.0})
        result = classifier.classify("", "")
        assert result.category == "Medical"
        assert result.algorithm == HYBRID_ALGORITHM

    def test_failing_semantic_scorer_is_neutral(self) -> None:
        def broken(text: str) -> dict[str, float]:
            raise RuntimeError("model not loaded")

        result = Classifier(semantic_scorer=broken).classify("", RESEARCH_CONTENT)
        assert result.algorithm == HYBRID_ALGORITHM
        assert result.category == "Academic"


class TestStructural:
    def test_uses_structural_signals(self) -> None:
        result = Classifier().classify(
            CONTRACT_TITLE, CONTRACT_CONTENT, ClassificationMethod.STRUCTURAL
        )
        assert result.category == "Legal"
        assert result.algorithm == STRUCTURAL_ALGORITHM
        assert result.confidence == 0.5

    def test_no_signal_falls_back_to_keywords(self) -> None:
        result = Classifier().classify("notes", "plain words", ClassificationMethod.STRUCTURAL)
        assert result.algorithm == FALLBACK_ALGORITHM


class TestExternal:
    def test_maps_label_and_clamps_score(self) -> None:
        client = FakeInferenceClient(InferenceLabel("legal documents", 1.4))
        result = Classifier(inference_client=client).classify(
            CONTRACT_TITLE, CONTRACT_CONTENT, ClassificationMethod.EXTERNAL
        )

        assert result.category == "Legal"
        assert result.confidence == 1.0
        assert result.algorithm == "External Inference (fake)"
        assert client.calls[0][1] == DEFAULT_TAXONOMY.names

    def test_text_is_truncated(self) -> None:
        client = FakeInferenceClient(InferenceLabel("Academic", 0.9))
        Classifier(inference_client=client, inference_max_chars=10).classify(
            "Title", RESEARCH_CONTENT, ClassificationMethod.EXTERNAL
        )
        assert len(client.calls[0][0]) == 10

    def test_unavailable_provider_falls_back(self) -> None:
        client = FakeInferenceClient(error=InferenceUnavailableError("timeout"))
        result = Classifier(inference_client=client).classify(
            "", RESEARCH_CONTENT, ClassificationMethod.EXTERNAL
        )

        assert result.algorithm == FALLBACK_ALGORITHM
        assert result.category == "Academic"
        assert 0.5 <= result.confidence <= 0.95

    def test_unmappable_label_falls_back(self) -> None:
        client = FakeInferenceClient(InferenceLabel("Poetry", 0.9))
        result = Classifier(inference_client=client).classify(
            "", RESEARCH_CONTENT, ClassificationMethod.EXTERNAL
        )
        assert result.algorithm == FALLBACK_ALGORITHM

    def test_missing_client_falls_back(self) -> None:
        result = Classifier().classify("", RESEARCH_CONTENT, ClassificationMethod.EXTERNAL)
        assert result.algorithm == FALLBACK_ALGORITHM


class TestEnsemble:
    def test_agreeing_members(self) -> None:
        client = FakeInferenceClient(InferenceLabel("Legal", 0.9))
        result = Classifier(inference_client=client).classify(
            CONTRACT_TITLE, CONTRACT_CONTENT, ClassificationMethod.ENSEMBLE
        )

        assert result.category == "Legal"
        assert 0.5 <= result.confidence <= 0.9
        assert result.algorithm.startswith(
            f"Ensemble (External Inference (fake), {STRUCTURAL_ALGORITHM}, "
        )
        assert len(result.keywords) <= 5

    def test_majority_outvotes_single_member(self) -> None:
        client = FakeInferenceClient(InferenceLabel("Medical", 0.95))
        result = Classifier(inference_client=client).classify(
            CONTRACT_TITLE, CONTRACT_CONTENT, ClassificationMethod.ENSEMBLE
        )
        assert result.category == "Legal"

    def test_failed_members_are_skipped(self) -> None:
        result = Classifier().classify(
            "", "software development algorithm implementation", ClassificationMethod.ENSEMBLE
        )
        assert result.category == "Technical"
        assert result.algorithm == f"Ensemble ({HYBRID_ALGORITHM})"

    def test_vote_ties_go_to_most_confident_backer(self) -> None:
        def result(category: str, confidence: float) -> ClassificationResult:
            return ClassificationResult(category, "sub", confidence, "a")

        results = [result("Legal", 0.5), result("Legal", 0.25), result("Medical", 0.75)]
        assert _vote(results, lambda r: r.category) == "Medical"


class TestConfidenceBounds:
    @pytest.mark.parametrize(
        "method",
        [
            ClassificationMethod.LEXICAL,
            ClassificationMethod.STRUCTURAL,
            ClassificationMethod.HYBRID,
            ClassificationMethod.ENSEMBLE,
        ],
    )
    @pytest.mark.parametrize(
        ("title", "content"),
        [
            ("", ""),
            ("A Study", RESEARCH_CONTENT),
            (CONTRACT_TITLE, CONTRACT_CONTENT),
            ("x", "patient diagnosis treatment " * 40),
        ],
    )
    def test_local_methods_stay_in_bounds(
        self, method: ClassificationMethod, title: str, content: str
    ) -> None:
        result = Classifier().classify(title, content, method)
        assert 0.5 <= result.confidence <= 0.95
        assert result.category in DEFAULT_TAXONOMY.names


class TestBuildClassifier:
    def test_method_name_is_case_insensitive(self) -> None:
        classifier = build_classifier(DEFAULT_TAXONOMY, None, "LEXICAL")
        assert classifier.classify("", RESEARCH_CONTENT).algorithm == LEXICAL_ALGORITHM

    def test_unknown_method(self) -> None:
        with pytest.raises(ValueError):
            build_classifier(DEFAULT_TAXONOMY, None, "magic")
