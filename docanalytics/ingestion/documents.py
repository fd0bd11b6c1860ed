from dataclasses import replace

from docanalytics.classification.classifier import Classifier
from docanalytics.classification.models import ClassificationMethod
from docanalytics.ingestion.steps import Clock, utc_now
from docanalytics.logging.logger import Log
from docanalytics.store.base import BlobStore, DocumentStore
from docanalytics.store.exceptions import DocumentNotFoundError
from docanalytics.store.models import IndexedDocument


class DocumentManager:
    """Operations on documents that are already indexed."""

    def __init__(
        self,
        store: DocumentStore,
        blob_store: BlobStore,
        classifier: Classifier,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._blob_store = blob_store
        self._classifier = classifier
        self._clock = clock

    def reclassify(
        self,
        document_id: str,
        method: ClassificationMethod | None = None,
    ) -> IndexedDocument:
        """Replace a document's classification, keeping its id and content.

        Raises:
            DocumentNotFoundError: if no document with this id exists.
        """
        document = self._require(document_id)
        classification = self._classifier.classify(
            document.title,
            document.content,
            method,
        )
        updated = replace(document, classification=classification, updated_at=self._clock())
        self._store.put(updated)
        Log.info(
            f"Reclassified document {document_id} as "
            f"{classification.category}/{classification.subcategory}"
        )
        return updated

    def remove(self, document_id: str) -> bool:
        """Delete the record and its stored artifact. False if it did not exist."""
        document = self._store.get(document_id)
        if document is None:
            return False
        self._store.delete(document_id)
        if document.blob_path:
            self._blob_store.remove(document.blob_path)
        Log.info(f"Removed document {document_id}")
        return True

    def _require(self, document_id: str) -> IndexedDocument:
        document = self._store.get(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document
