from abc import ABC, abstractmethod

from docanalytics.decoders.models import DecodedDocument


class BaseDecoder(ABC):
    """Contract for all format decoders."""

    @abstractmethod
    def decode(self, data: bytes) -> DecodedDocument:
        """Decode raw file bytes.

        Args:
            data: Raw file content.

        Returns:
            Recovered text plus whatever title hints the format carries.

        Raises:
            DecodeDegradedError: if decoding fails for any reason.
        """
