from dataclasses import dataclass
from enum import Enum


class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    DOC = "doc"
    HTML = "html"
    TEXT = "text"


class TitleSource(str, Enum):
    """Which step of the title chain produced the title."""

    METADATA = "metadata"
    HEURISTIC = "heuristic"
    FIRST_LINE = "first_line"
    FILENAME = "filename"


@dataclass(frozen=True)
class RawArtifact:
    """An uploaded file as received: bytes plus declared media type and name."""

    data: bytes
    media_type: str
    filename: str

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class DocumentMetadata:
    word_count: int
    page_count: int
    language: str


@dataclass(frozen=True)
class ExtractedDocument:
    """Normalized text view of an artifact. ``title`` is never empty."""

    title: str
    content: str
    metadata: DocumentMetadata
    title_source: TitleSource
    format: DocumentFormat
