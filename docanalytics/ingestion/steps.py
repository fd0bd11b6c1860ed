from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import PurePosixPath

from docanalytics.classification.classifier import Classifier
from docanalytics.extraction.extractor import Extractor
from docanalytics.ingestion.pipeline import IngestionContext, PipelineStep
from docanalytics.logging.logger import Log
from docanalytics.store.base import BlobStore, DocumentStore
from docanalytics.store.models import IndexedDocument

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def blob_key(owner: str, document_id: str, filename: str) -> str:
    """Build blob key: {owner}/{document_id}{suffix}"""
    suffix = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
    return f"{owner}/{document_id}{suffix}"


class StoreBlobStep(PipelineStep):
    def __init__(self, blob_store: BlobStore) -> None:
        self._blob_store = blob_store

    def run(self, context: IngestionContext) -> IngestionContext:
        key = blob_key(context.owner, context.document_id, context.artifact.filename)
        context.blob_path = self._blob_store.store(context.artifact.data, key)
        Log.info(
            f"Stored {context.artifact.size_bytes} bytes for document {context.document_id}"
        )
        return context


class ExtractStep(PipelineStep):
    def __init__(self, extractor: Extractor) -> None:
        self._extractor = extractor

    def run(self, context: IngestionContext) -> IngestionContext:
        context.extracted = self._extractor.extract(context.artifact)
        return context


class ClassifyStep(PipelineStep):
    def __init__(self, classifier: Classifier) -> None:
        self._classifier = classifier

    def run(self, context: IngestionContext) -> IngestionContext:
        if context.extracted is None:
            raise ValueError("IngestionContext.extracted must be set before classification")
        context.classification = self._classifier.classify(
            context.extracted.title,
            context.extracted.content,
            context.method,
        )
        Log.info(
            f"Classified document {context.document_id} as "
            f"{context.classification.category}/{context.classification.subcategory} "
            f"({context.classification.confidence:.2f})"
        )
        return context


class PersistStep(PipelineStep):
    def __init__(self, store: DocumentStore, clock: Clock = utc_now) -> None:
        self._store = store
        self._clock = clock

    def run(self, context: IngestionContext) -> IngestionContext:
        if context.extracted is None or context.classification is None:
            raise ValueError("IngestionContext must be extracted and classified before persist")
        now = self._clock()
        document = IndexedDocument(
            id=context.document_id,
            owner=context.owner,
            filename=context.artifact.filename,
            media_type=context.artifact.media_type,
            size_bytes=context.artifact.size_bytes,
            blob_path=context.blob_path,
            extracted=context.extracted,
            classification=context.classification,
            created_at=now,
            updated_at=now,
        )
        self._store.put(document)
        context.document = document
        return context


class RemoveBlobStep(PipelineStep):
    """Failure step: drops the stored blob of a document that did not make it in."""

    def __init__(self, blob_store: BlobStore) -> None:
        self._blob_store = blob_store

    def run(self, context: IngestionContext) -> IngestionContext:
        if context.blob_path:
            self._blob_store.remove(context.blob_path)
        Log.error(
            f"Ingestion of '{context.artifact.filename}' failed: {context.error_message}",
            event="ingest_failed",
        )
        return context
