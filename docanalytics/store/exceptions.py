class StoreError(Exception):
    """Base exception for document and blob storage errors."""


class DocumentNotFoundError(StoreError):
    """Raised when a document id is not in the store."""


class BlobNotFoundError(StoreError):
    """Raised when a blob path does not exist."""


class InvalidBlobKeyError(StoreError):
    """Raised when a blob key would resolve outside the storage root."""
