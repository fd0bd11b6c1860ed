"""Snippet windowing and term highlighting for search results."""

import re
from collections.abc import Sequence

CONTEXT_BEFORE = 100
CONTEXT_AFTER = 300
FALLBACK_LENGTH = 300
ELLIPSIS = "..."
MARK_OPEN = "<mark>"
MARK_CLOSE = "</mark>"


def highlight_terms(text: str, terms: Sequence[str]) -> str:
    """Wrap every case-insensitive occurrence of the terms in <mark> tags.

    Overlapping matches resolve to the earliest, then the longest. The
    original casing of the text is kept.
    """
    if not text or not terms:
        return text

    matches: list[tuple[int, int]] = []
    for term in terms:
        if not term:
            continue
        pattern = re.compile(re.escape(term), re.IGNORECASE)
        matches.extend((m.start(), m.end()) for m in pattern.finditer(text))
    if not matches:
        return text

    matches.sort(key=lambda span: (span[0], -(span[1] - span[0])))
    selected: list[tuple[int, int]] = []
    for start, end in matches:
        if selected and start < selected[-1][1]:
            continue
        selected.append((start, end))

    result = text
    for start, end in reversed(selected):
        result = f"{result[:start]}{MARK_OPEN}{result[start:end]}{MARK_CLOSE}{result[end:]}"
    return result


def build_snippet(content: str, terms: Sequence[str]) -> str:
    """Cut a highlighted window around the earliest term occurrence.

    The window spans 100 characters before to 300 after the first hit and is
    marked with "..." on each clipped side. Without any hit the first 300
    characters are used.
    """
    if not content:
        return ""

    lowered = content.lower()
    positions = [pos for pos in (lowered.find(term) for term in terms if term) if pos != -1]
    if not positions:
        window = content[:FALLBACK_LENGTH]
        suffix = ELLIPSIS if len(content) > FALLBACK_LENGTH else ""
        return highlight_terms(window, terms) + suffix

    first = min(positions)
    start = max(0, first - CONTEXT_BEFORE)
    end = min(len(content), first + CONTEXT_AFTER)
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(content) else ""
    return f"{prefix}{highlight_terms(content[start:end], terms)}{suffix}"
