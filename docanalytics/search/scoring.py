"""Per-document relevance scoring for a tokenized query."""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from functools import lru_cache

TITLE_EXACT_WEIGHT = 20
TITLE_PREFIX_WEIGHT = 10
CONTENT_EXACT_WEIGHT = 5
CONTENT_PREFIX_WEIGHT = 1


@dataclass(frozen=True)
class FieldMatches:
    exact: int
    prefix: int


@lru_cache(maxsize=512)
def _patterns(token: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    escaped = re.escape(token)
    exact = re.compile(rf"(?<!\w){escaped}(?!\w)", re.IGNORECASE)
    prefix = re.compile(rf"(?<!\w){escaped}", re.IGNORECASE)
    return exact, prefix


def count_matches(token: str, text: str) -> FieldMatches:
    """Whole-word occurrences and occurrences that start a word."""
    if not text:
        return FieldMatches(exact=0, prefix=0)
    exact, prefix = _patterns(token)
    return FieldMatches(exact=len(exact.findall(text)), prefix=len(prefix.findall(text)))


def score_document(tokens: Sequence[str], title: str, content: str) -> tuple[float, int]:
    """Return (score, match_count) for one document.

    Per token: title whole-word x20, title word-start x10, content
    whole-word x5, content word-start x1. A whole-word hit is also a
    word-start hit, so it earns both weights. match_count is the raw number
    of word-start hits across both fields.
    """
    score = 0.0
    match_count = 0
    for token in tokens:
        in_title = count_matches(token, title)
        in_content = count_matches(token, content)
        score += (
            in_title.exact * TITLE_EXACT_WEIGHT
            + in_title.prefix * TITLE_PREFIX_WEIGHT
            + in_content.exact * CONTENT_EXACT_WEIGHT
            + in_content.prefix * CONTENT_PREFIX_WEIGHT
        )
        match_count += in_title.prefix + in_content.prefix
    return score, match_count
