from pathlib import Path

from docanalytics.config.settings import Settings
from docanalytics.store.base import BlobStore, DocumentStore
from docanalytics.store.blob_store import LocalBlobStore
from docanalytics.store.connection import init_pool
from docanalytics.store.memory import InMemoryDocumentStore
from docanalytics.store.postgres_store import PostgresDocumentStore


class StoreFactory:
    """Creates the document and blob stores based on settings."""

    BACKENDS = ("memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> DocumentStore:
        """Create the configured document store.

        The postgres backend initializes the connection pool and the schema.
        """
        backend = settings.store_backend.lower()
        if backend == "memory":
            return InMemoryDocumentStore()
        if backend == "postgres":
            init_pool(settings)
            store = PostgresDocumentStore()
            store.ensure_schema()
            return store
        raise ValueError(f"Unknown store backend '{backend}'. Choose from: {list(cls.BACKENDS)}")

    @classmethod
    def create_blob_store(cls, settings: Settings) -> BlobStore:
        return LocalBlobStore(Path(settings.files_root))
