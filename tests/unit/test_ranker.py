from collections.abc import Callable

import pytest

from docanalytics.search.models import ScoredResult, SortMode, SortOrder
from docanalytics.search.ranker import Ranker, compare_titles, sort_results
from docanalytics.search.tokenizer import tokenize_query
from docanalytics.store.models import IndexedDocument

DocumentFactory = Callable[..., IndexedDocument]


class TestRanker:
    def test_title_hit_beats_repeated_content_hits(self, make_document: DocumentFactory) -> None:
        doc_a = make_document("a", title="Cloud Computing", content="An overview.")
        doc_b = make_document(
            "b", title="Notes", content="cloud storage is cheap. cloud storage scales."
        )
        doc_c = make_document("c", title="Recipes", content="Bread and butter.")

        results = Ranker().rank("cloud storage", [doc_b, doc_c, doc_a])

        assert [r.document.id for r in results] == ["a", "b"]
        assert [r.score for r in results] == [30, 24]

    def test_short_query_returns_nothing(self, make_document: DocumentFactory) -> None:
        assert Ranker().rank("ab", [make_document(title="ab ab")]) == []

    def test_accepts_parsed_query(self, make_document: DocumentFactory) -> None:
        results = Ranker().rank(tokenize_query("bread"), [make_document(content="Bread")])
        assert len(results) == 1

    def test_equal_scores_keep_input_order(self, make_document: DocumentFactory) -> None:
        docs = [make_document(str(i), title="Cloud") for i in range(4)]
        assert [r.document.id for r in Ranker().rank("cloud", docs)] == ["0", "1", "2", "3"]

    def test_more_matches_never_lower_score(self, make_document: DocumentFactory) -> None:
        once = make_document("1", content="cloud")
        twice = make_document("2", content="cloud cloud")
        scores = {r.document.id: r.score for r in Ranker().rank("cloud", [once, twice])}
        assert scores["2"] >= scores["1"]

    def test_result_carries_snippet_and_match_count(
        self, make_document: DocumentFactory
    ) -> None:
        doc = make_document(title="Cloud", content="the cloud is here")
        result = Ranker().rank("cloud", [doc])[0]
        assert result.match_count == 2
        assert result.snippet == "the <mark>cloud</mark> is here"


class TestCompareTitles:
    def test_chapter_numbers(self) -> None:
        assert compare_titles("Chapter 2", "Chapter 10") < 0
        assert compare_titles("Ch. 9 Intro", "ch 3 End") > 0

    def test_leading_numbers(self) -> None:
        assert compare_titles("2 Basics", "10 Advanced") < 0

    def test_case_insensitive_text(self) -> None:
        assert compare_titles("apple", "Banana") < 0
        assert compare_titles("Same", "same") == 0


def _scored(document: IndexedDocument, score: float) -> ScoredResult:
    return ScoredResult(document=document, score=score, match_count=1, snippet="")


class TestSortResults:
    @pytest.fixture
    def results(self, make_document: DocumentFactory) -> list[ScoredResult]:
        return [
            _scored(make_document("a", title="Chapter 10", created_offset=5), 10),
            _scored(make_document("b", title="Chapter 2", created_offset=1), 30),
            _scored(make_document("c", title="Appendix", created_offset=9), 20),
        ]

    def test_relevance_ascending(self, results: list[ScoredResult]) -> None:
        ordered = sort_results(results, SortMode.RELEVANCE, SortOrder.ASC)
        assert [r.document.id for r in ordered] == ["a", "c", "b"]

    def test_date_descending(self, results: list[ScoredResult]) -> None:
        ordered = sort_results(results, SortMode.DATE, SortOrder.DESC)
        assert [r.document.id for r in ordered] == ["c", "a", "b"]

    def test_title_ascending(self, results: list[ScoredResult]) -> None:
        ordered = sort_results(results, SortMode.TITLE, SortOrder.ASC)
        assert [r.document.id for r in ordered] == ["c", "b", "a"]
