class ClassificationError(Exception):
    """Raised when a classification strategy cannot produce a result."""


class TaxonomyValidationError(ClassificationError):
    """Raised when a taxonomy definition is malformed."""


class InferenceError(ClassificationError):
    """Base exception for external inference failures."""


class InferenceUnavailableError(InferenceError):
    """Raised when the inference provider cannot be reached or is not configured."""


class InferenceResponseError(InferenceError):
    """Raised when the inference provider returns an unusable response."""
