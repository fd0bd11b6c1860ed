from dataclasses import dataclass
from datetime import datetime

from docanalytics.classification.models import ClassificationResult
from docanalytics.extraction.models import ExtractedDocument


@dataclass(frozen=True)
class IndexedDocument:
    """A stored document: identity, extraction output and current classification."""

    id: str
    owner: str
    filename: str
    media_type: str
    size_bytes: int
    blob_path: str
    extracted: ExtractedDocument
    classification: ClassificationResult
    created_at: datetime
    updated_at: datetime

    @property
    def title(self) -> str:
        return self.extracted.title

    @property
    def content(self) -> str:
        return self.extracted.content
