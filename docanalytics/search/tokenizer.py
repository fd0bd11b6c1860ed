from docanalytics.search.models import SearchQuery

MIN_TOKEN_LENGTH = 3


def tokenize_query(raw: str) -> SearchQuery:
    """Whitespace-split, lowercase, drop short tokens and repeats.

    A query with no usable tokens is valid and simply matches nothing.
    """
    tokens: list[str] = []
    for word in raw.split():
        token = word.lower()
        if len(token) >= MIN_TOKEN_LENGTH and token not in tokens:
            tokens.append(token)
    return SearchQuery(raw=raw, tokens=tuple(tokens))
