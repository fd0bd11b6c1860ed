import re
from collections.abc import Sequence
from functools import cmp_to_key

from docanalytics.logging.logger import Log
from docanalytics.search.models import ScoredResult, SearchQuery, SortMode, SortOrder
from docanalytics.search.scoring import score_document
from docanalytics.search.snippet import build_snippet
from docanalytics.search.tokenizer import tokenize_query
from docanalytics.store.models import IndexedDocument

_CHAPTER = re.compile(r"(?:chapter|ch\.?)\s*(\d+)", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"^(\d+)")


class Ranker:
    """Scores a document snapshot against a query and orders the hits."""

    def rank(
        self,
        query: str | SearchQuery,
        documents: Sequence[IndexedDocument],
    ) -> list[ScoredResult]:
        """Return matching documents by descending score.

        Documents scoring zero are left out. Equal scores keep the order of
        ``documents``.
        """
        parsed = tokenize_query(query) if isinstance(query, str) else query
        if parsed.is_empty:
            return []

        results: list[ScoredResult] = []
        for document in documents:
            score, match_count = score_document(parsed.tokens, document.title, document.content)
            if score <= 0:
                continue
            results.append(
                ScoredResult(
                    document=document,
                    score=score,
                    match_count=match_count,
                    snippet=build_snippet(document.content, parsed.tokens),
                )
            )
        Log.debug(f"Query {parsed.tokens} matched {len(results)} of {len(documents)} documents")
        return sorted(results, key=lambda result: result.score, reverse=True)


def compare_titles(left: str, right: str) -> int:
    """Order titles by chapter number, then leading number, then text."""
    left_chapter, right_chapter = _CHAPTER.search(left), _CHAPTER.search(right)
    if left_chapter and right_chapter:
        diff = int(left_chapter.group(1)) - int(right_chapter.group(1))
        if diff:
            return diff

    left_number, right_number = _LEADING_NUMBER.match(left), _LEADING_NUMBER.match(right)
    if left_number and right_number:
        diff = int(left_number.group(1)) - int(right_number.group(1))
        if diff:
            return diff

    left_key, right_key = left.lower(), right.lower()
    return (left_key > right_key) - (left_key < right_key)


def sort_results(
    results: Sequence[ScoredResult],
    mode: SortMode = SortMode.RELEVANCE,
    order: SortOrder = SortOrder.DESC,
) -> list[ScoredResult]:
    """Re-order scored results. Every mode is stable for ties."""
    reverse = order is SortOrder.DESC
    match mode:
        case SortMode.RELEVANCE:
            return sorted(results, key=lambda r: r.score, reverse=reverse)
        case SortMode.DATE:
            return sorted(results, key=lambda r: r.document.created_at, reverse=reverse)
        case SortMode.TITLE:
            title_key = cmp_to_key(compare_titles)
            return sorted(results, key=lambda r: title_key(r.document.title), reverse=reverse)
        case _:
            raise ValueError(f"Unknown sort mode '{mode}'")
