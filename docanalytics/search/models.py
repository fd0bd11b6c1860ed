from dataclasses import dataclass
from enum import Enum

from docanalytics.store.models import IndexedDocument


class SortMode(str, Enum):
    RELEVANCE = "relevance"
    TITLE = "title"
    DATE = "date"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SearchQuery:
    raw: str
    tokens: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.tokens


@dataclass(frozen=True)
class ScoredResult:
    document: IndexedDocument
    score: float
    match_count: int
    snippet: str
