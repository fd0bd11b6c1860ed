from docanalytics.config.settings import Settings
from docanalytics.decoders.base import BaseDecoder
from docanalytics.decoders.pdfplumber_adapter import PdfPlumberDecoder
from docanalytics.decoders.pymupdf_adapter import PyMuPdfDecoder


class PdfDecoderFactory:
    """Creates the correct PDF decoder based on settings."""

    ADAPTERS: dict[str, type[BaseDecoder]] = {
        "pdfplumber": PdfPlumberDecoder,
        "pymupdf": PyMuPdfDecoder,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDecoder:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
