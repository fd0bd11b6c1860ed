from abc import ABC, abstractmethod
from dataclasses import dataclass

from docanalytics.classification.models import ClassificationMethod, ClassificationResult
from docanalytics.extraction.models import ExtractedDocument, RawArtifact
from docanalytics.store.models import IndexedDocument


@dataclass(slots=True)
class IngestionContext:
    artifact: RawArtifact
    owner: str
    document_id: str
    method: ClassificationMethod | None = None
    blob_path: str = ""
    extracted: ExtractedDocument | None = None
    classification: ClassificationResult | None = None
    document: IndexedDocument | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: IngestionContext) -> IngestionContext:
        raise NotImplementedError
