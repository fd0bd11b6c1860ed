from typing import Any

import pymupdf

from docanalytics.decoders.base import BaseDecoder
from docanalytics.decoders.exceptions import DecodeDegradedError
from docanalytics.decoders.layout import font_size
from docanalytics.decoders.models import DecodedDocument, TextRun


class PyMuPdfDecoder(BaseDecoder):
    """Decodes PDF using PyMuPDF."""

    def decode(self, data: bytes) -> DecodedDocument:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
                runs = self._first_page_runs(doc[0].get_text("dict")) if doc.page_count else ()
                title = (doc.metadata or {}).get("title")
                page_count = doc.page_count
        except DecodeDegradedError:
            raise
        except Exception as exc:
            raise DecodeDegradedError(f"pymupdf extraction failed: {exc}") from exc

        return DecodedDocument(
            text="\n".join(pages).strip(),
            metadata_title=title or None,
            page_count=page_count,
            first_page_runs=runs,
        )

    @staticmethod
    def _first_page_runs(page_dict: dict[str, Any]) -> tuple[TextRun, ...]:
        runs: list[TextRun] = []
        for block in page_dict.get("blocks", []):
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    x, y = span["origin"]
                    runs.append(
                        TextRun(
                            text=span["text"],
                            x=float(x),
                            y=float(y),
                            size=font_size(None, span.get("size")),
                        )
                    )
        return tuple(runs)
