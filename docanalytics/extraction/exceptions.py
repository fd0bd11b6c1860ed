class ExtractionError(Exception):
    """Base exception for extraction errors."""


class UnsupportedFormatError(ExtractionError):
    """Raised when an artifact's format is outside the supported set."""
