from typing import assert_never

from docanalytics.config.settings import Settings
from docanalytics.decoders.base import BaseDecoder
from docanalytics.decoders.docx_decoder import DocxDecoder
from docanalytics.decoders.exceptions import DecodeDegradedError
from docanalytics.decoders.factory import PdfDecoderFactory
from docanalytics.decoders.html_decoder import HtmlDecoder
from docanalytics.decoders.layout import title_candidates
from docanalytics.decoders.legacy_word_decoder import LegacyWordDecoder
from docanalytics.decoders.models import DecodedDocument
from docanalytics.decoders.text_decoder import PlainTextDecoder
from docanalytics.extraction.formats import resolve_format
from docanalytics.extraction.models import (
    DocumentFormat,
    DocumentMetadata,
    ExtractedDocument,
    RawArtifact,
    TitleSource,
)
from docanalytics.extraction.titles import (
    filename_title,
    first_line,
    flow_text_title,
    heading_title,
    metadata_title,
    placeholder_content,
    printable_text,
)
from docanalytics.logging.logger import Log


class Extractor:
    """Turns a raw artifact into an ExtractedDocument with a resolved title.

    Title chain, first non-empty wins: format metadata, format heuristic,
    first line of the fallback text, filename. Decoder failures are logged
    and never raised; only an unsupported format reaches the caller.
    """

    def __init__(
        self,
        decoders: dict[DocumentFormat, BaseDecoder],
        default_language: str = "en",
    ) -> None:
        missing = set(DocumentFormat) - set(decoders)
        if missing:
            raise ValueError(f"No decoder registered for: {sorted(f.value for f in missing)}")
        self._decoders = decoders
        self._default_language = default_language

    def extract(self, artifact: RawArtifact) -> ExtractedDocument:
        """Raises UnsupportedFormatError for formats outside DocumentFormat."""
        fmt = resolve_format(artifact.media_type, artifact.filename)
        decoded = self._decode(fmt, artifact)

        title, source = self._resolve_title(fmt, decoded, artifact)
        if decoded is None:
            content = placeholder_content(title)
            page_count = 1
        else:
            content = decoded.text
            page_count = decoded.page_count or 1

        metadata = DocumentMetadata(
            word_count=len(content.split()),
            page_count=page_count,
            language=self._default_language,
        )
        Log.info(
            f"Extracted '{artifact.filename}' as {fmt.value}: "
            f"title from {source.value}, {metadata.word_count} words"
        )
        return ExtractedDocument(
            title=title,
            content=content,
            metadata=metadata,
            title_source=source,
            format=fmt,
        )

    def _decode(self, fmt: DocumentFormat, artifact: RawArtifact) -> DecodedDocument | None:
        try:
            return self._decoders[fmt].decode(artifact.data)
        except DecodeDegradedError as exc:
            Log.warning(
                f"Decoding '{artifact.filename}' degraded: {exc}",
                event="decode_degraded",
                format=fmt.value,
            )
            return None

    def _resolve_title(
        self,
        fmt: DocumentFormat,
        decoded: DecodedDocument | None,
        artifact: RawArtifact,
    ) -> tuple[str, TitleSource]:
        if decoded is not None:
            title = metadata_title(decoded.metadata_title)
            if title:
                return title, TitleSource.METADATA
            title = self._heuristic_title(fmt, decoded)
            if title:
                return title, TitleSource.HEURISTIC

        fallback_text = decoded.text if decoded is not None else printable_text(artifact.data)
        title = first_line(fallback_text)
        if title:
            return title, TitleSource.FIRST_LINE
        return filename_title(artifact.filename), TitleSource.FILENAME

    @staticmethod
    def _heuristic_title(fmt: DocumentFormat, decoded: DecodedDocument) -> str:
        match fmt:
            case DocumentFormat.PDF:
                candidates = title_candidates(decoded.first_page_runs)
                return candidates[0] if candidates else ""
            case DocumentFormat.DOCX | DocumentFormat.DOC | DocumentFormat.HTML | DocumentFormat.TEXT:
                return heading_title(decoded.headings) or flow_text_title(decoded.text)
            case _:
                assert_never(fmt)


def build_extractor(settings: Settings) -> Extractor:
    """Build an Extractor with one decoder per supported format."""
    return Extractor(
        decoders={
            DocumentFormat.PDF: PdfDecoderFactory.create(settings),
            DocumentFormat.DOCX: DocxDecoder(),
            DocumentFormat.DOC: LegacyWordDecoder(),
            DocumentFormat.HTML: HtmlDecoder(),
            DocumentFormat.TEXT: PlainTextDecoder(),
        },
        default_language=settings.default_language,
    )
