"""Title heuristics shared by the extractor's title chain."""

import re
from collections.abc import Iterable
from pathlib import PurePosixPath

DEFAULT_TITLE = "Untitled Document"

PLACEHOLDER_TITLES = frozenset({"untitled", "untitled document", "no title"})

NON_TITLE_PATTERNS = (
    re.compile(r"^page \d+( of \d+)?$", re.IGNORECASE),
    re.compile(r"^table of contents$", re.IGNORECASE),
    re.compile(r"^(cover|title) page$", re.IGNORECASE),
    re.compile(r"^abstract$", re.IGNORECASE),
    re.compile(r"^(file|document|page)\s*\d+\b", re.IGNORECASE),
    re.compile(r"^\d+$"),
)

_MARKDOWN_HEADER = re.compile(r"^#+\s*(.+)$")
_SENTENCE_END = re.compile(r"[.!?]$")
_EXTENSION = re.compile(r"\.[^/.]+$")
_WORD = re.compile(r"\w\S*")
_CONTROL = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

HEADER_SCAN_LINES = 10
LINE_SCAN_LINES = 5
MIN_LINE_TITLE = 5
MAX_LINE_TITLE = 120


def clean_title(text: str | None) -> str:
    """Collapse internal whitespace and strip."""
    if not text:
        return ""
    return " ".join(text.split())


def is_non_title(line: str) -> bool:
    return any(pattern.search(line) for pattern in NON_TITLE_PATTERNS)


def metadata_title(raw: str | None) -> str:
    """Return a usable metadata title, or "" for blank and placeholder values."""
    title = clean_title(raw)
    if title.lower() in PLACEHOLDER_TITLES:
        return ""
    return title


def heading_title(headings: Iterable[str]) -> str:
    for heading in headings:
        title = clean_title(heading)
        if len(title) >= 3 and not is_non_title(title):
            return title
    return ""


def _nonempty_lines(text: str) -> list[str]:
    return [line.strip() for line in re.split(r"[\n\r]+", text) if line.strip()]


def flow_text_title(text: str) -> str:
    """Pick a title from flowing text.

    A markdown header within the first ten lines wins. Otherwise the first of
    the first five lines that is 5 to 120 characters long, has no sentence
    punctuation at the end and is not a page marker or similar boilerplate.
    """
    lines = _nonempty_lines(text)
    for line in lines[:HEADER_SCAN_LINES]:
        match = _MARKDOWN_HEADER.match(line)
        if match:
            title = clean_title(match.group(1).strip("# "))
            if len(title) >= 3:
                return title

    for line in lines[:LINE_SCAN_LINES]:
        if (
            MIN_LINE_TITLE <= len(line) <= MAX_LINE_TITLE
            and not _SENTENCE_END.search(line)
            and not is_non_title(line)
        ):
            return clean_title(line)
    return ""


def first_line(text: str) -> str:
    lines = _nonempty_lines(text)
    return clean_title(lines[0]) if lines else ""


def printable_text(data: bytes) -> str:
    """Decode bytes as UTF-8, dropping undecodable bytes and control characters."""
    return _CONTROL.sub("", data.decode("utf-8", errors="ignore"))


def filename_title(filename: str) -> str:
    """Turn ``quarterly_report-2024.pdf`` into ``Quarterly Report 2024``."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    stem = _EXTENSION.sub("", name)
    spaced = clean_title(re.sub(r"[_-]", " ", stem))
    title = _WORD.sub(lambda m: m.group()[0].upper() + m.group()[1:].lower(), spaced)
    return title or DEFAULT_TITLE


def placeholder_content(title: str) -> str:
    return f"Content could not be extracted from this document. Title: {title}"
