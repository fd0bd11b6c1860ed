class DecodeDegradedError(Exception):
    """Raised when a format decoder cannot recover text from the given bytes."""
