import io

import pdfplumber

from docanalytics.decoders.base import BaseDecoder
from docanalytics.decoders.exceptions import DecodeDegradedError
from docanalytics.decoders.layout import font_size
from docanalytics.decoders.models import DecodedDocument, TextRun


class PdfPlumberDecoder(BaseDecoder):
    """Decodes PDF using pdfplumber."""

    def decode(self, data: bytes) -> DecodedDocument:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
                runs = self._first_page_runs(pdf)
                title = pdf.metadata.get("Title")
                page_count = len(pdf.pages)
        except DecodeDegradedError:
            raise
        except Exception as exc:
            raise DecodeDegradedError(f"pdfplumber extraction failed: {exc}") from exc

        return DecodedDocument(
            text="\n".join(pages).strip(),
            metadata_title=title if isinstance(title, str) else None,
            page_count=page_count,
            first_page_runs=runs,
        )

    @staticmethod
    def _first_page_runs(pdf: pdfplumber.PDF) -> tuple[TextRun, ...]:
        if not pdf.pages:
            return ()
        words = pdf.pages[0].extract_words(extra_attrs=["size"])
        return tuple(
            TextRun(
                text=word["text"],
                x=float(word["x0"]),
                y=float(word["top"]),
                size=font_size(None, word.get("size")),
            )
            for word in words
        )
