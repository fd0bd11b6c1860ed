import threading

from docanalytics.store.base import DocumentStore
from docanalytics.store.models import IndexedDocument


class InMemoryDocumentStore(DocumentStore):
    """Process-local document store guarded by a lock."""

    def __init__(self) -> None:
        self._documents: dict[str, IndexedDocument] = {}
        self._lock = threading.Lock()

    def get(self, document_id: str) -> IndexedDocument | None:
        with self._lock:
            return self._documents.get(document_id)

    def put(self, document: IndexedDocument) -> str:
        with self._lock:
            self._documents[document.id] = document
        return document.id

    def delete(self, document_id: str) -> bool:
        with self._lock:
            return self._documents.pop(document_id, None) is not None

    def list_by_owner(self, owner: str) -> list[IndexedDocument]:
        with self._lock:
            snapshot = [doc for doc in self._documents.values() if doc.owner == owner]
        return sorted(snapshot, key=lambda doc: doc.created_at, reverse=True)
