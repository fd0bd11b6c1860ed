from dataclasses import dataclass


@dataclass(frozen=True)
class TextRun:
    """A positioned piece of text on a page, with its rendered font size."""

    text: str
    x: float
    y: float
    size: float


@dataclass(frozen=True)
class DecodedDocument:
    """What a format decoder recovered from raw bytes."""

    text: str
    metadata_title: str | None = None
    page_count: int | None = None
    first_page_runs: tuple[TextRun, ...] = ()
    headings: tuple[str, ...] = ()
