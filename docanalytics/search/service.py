from docanalytics.logging.logger import Log
from docanalytics.search.models import ScoredResult, SortMode, SortOrder
from docanalytics.search.ranker import Ranker, sort_results
from docanalytics.store.base import DocumentStore


class SearchService:
    """Runs a query over one owner's documents."""

    def __init__(self, store: DocumentStore, ranker: Ranker | None = None) -> None:
        self._store = store
        self._ranker = ranker or Ranker()

    def search(
        self,
        owner: str,
        query: str,
        sort: SortMode = SortMode.RELEVANCE,
        order: SortOrder = SortOrder.DESC,
        limit: int | None = None,
    ) -> list[ScoredResult]:
        # Snapshot is newest first, which is the tie order for equal scores.
        snapshot = self._store.list_by_owner(owner)
        results = self._ranker.rank(query, snapshot)
        if sort is not SortMode.RELEVANCE or order is not SortOrder.DESC:
            results = sort_results(results, sort, order)
        if limit is not None:
            results = results[:limit]
        Log.info(f"Search for '{query}' by {owner}: {len(results)} results")
        return results
