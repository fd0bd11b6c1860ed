from abc import ABC, abstractmethod

from docanalytics.store.models import IndexedDocument


class DocumentStore(ABC):
    """Contract for indexed document persistence.

    Writers are expected to be at most one per document id; a later put()
    replaces an earlier one.
    """

    @abstractmethod
    def get(self, document_id: str) -> IndexedDocument | None: ...

    @abstractmethod
    def put(self, document: IndexedDocument) -> str:
        """Insert or replace a document and return its id."""

    @abstractmethod
    def delete(self, document_id: str) -> bool:
        """Return True if a document was removed."""

    @abstractmethod
    def list_by_owner(self, owner: str) -> list[IndexedDocument]:
        """Return a consistent snapshot of the owner's documents, newest first."""


class BlobStore(ABC):
    """Contract for storing the original artifact bytes."""

    @abstractmethod
    def store(self, data: bytes, key: str) -> str:
        """Write bytes under ``key`` and return the stored path."""

    @abstractmethod
    def fetch(self, path: str) -> bytes:
        """Raises BlobNotFoundError if nothing is stored at ``path``."""

    @abstractmethod
    def remove(self, path: str) -> bool: ...
