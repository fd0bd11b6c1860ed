from docanalytics.decoders.base import BaseDecoder
from docanalytics.decoders.exceptions import DecodeDegradedError
from docanalytics.decoders.models import DecodedDocument


class PlainTextDecoder(BaseDecoder):
    """Decodes plain text and markdown, UTF-8 first and Latin-1 otherwise."""

    def decode(self, data: bytes) -> DecodedDocument:
        if b"\x00" in data:
            raise DecodeDegradedError("text extraction failed: content is binary")
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError:
            text = data.decode("latin-1")
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        return DecodedDocument(text=text.strip())
