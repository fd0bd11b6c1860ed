"""Decoder for Office Open XML word-processing packages (.docx)."""

import io
import re
import zipfile

from lxml import etree

from docanalytics.decoders.base import BaseDecoder
from docanalytics.decoders.exceptions import DecodeDegradedError
from docanalytics.decoders.models import DecodedDocument

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
DC_NS = "http://purl.org/dc/elements/1.1/"
EXT_NS = "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"

_HEADING_STYLE = re.compile(r"^heading\s*(\d)$", re.IGNORECASE)


def _w(tag: str) -> str:
    return f"{{{W_NS}}}{tag}"


class DocxDecoder(BaseDecoder):
    """Reads paragraphs, heading styles and core properties from a .docx package."""

    def __init__(self) -> None:
        self._parser = etree.XMLParser(resolve_entities=False, no_network=True)

    def decode(self, data: bytes) -> DecodedDocument:
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                body = etree.fromstring(archive.read("word/document.xml"), self._parser)
                title = self._core_title(archive)
                page_count = self._page_count(archive)
        except DecodeDegradedError:
            raise
        except Exception as exc:
            raise DecodeDegradedError(f"docx extraction failed: {exc}") from exc

        paragraphs: list[str] = []
        styled: list[tuple[int, int, str]] = []
        for index, paragraph in enumerate(body.iter(_w("p"))):
            text = self._paragraph_text(paragraph).strip()
            if not text:
                continue
            paragraphs.append(text)
            rank = self._heading_rank(paragraph)
            if rank is not None:
                styled.append((rank, index, text))

        styled.sort()
        return DecodedDocument(
            text="\n".join(paragraphs),
            metadata_title=title,
            page_count=page_count,
            headings=tuple(text for _, _, text in styled),
        )

    @staticmethod
    def _paragraph_text(paragraph: etree._Element) -> str:
        parts: list[str] = []
        for node in paragraph.iter(_w("t"), _w("tab"), _w("br")):
            if node.tag == _w("t"):
                parts.append(node.text or "")
            elif node.tag == _w("tab"):
                parts.append(" ")
            else:
                parts.append("\n")
        return "".join(parts)

    @staticmethod
    def _heading_rank(paragraph: etree._Element) -> int | None:
        """Title style ranks 0, Heading N ranks N; anything else is not a heading."""
        style = paragraph.find(f"{_w('pPr')}/{_w('pStyle')}")
        if style is None:
            return None
        name = style.get(_w("val"), "")
        if name.lower() == "title":
            return 0
        match = _HEADING_STYLE.match(name)
        return int(match.group(1)) if match else None

    def _core_title(self, archive: zipfile.ZipFile) -> str | None:
        try:
            core = etree.fromstring(archive.read("docProps/core.xml"), self._parser)
        except KeyError:
            return None
        node = core.find(f"{{{DC_NS}}}title")
        if node is None or not node.text:
            return None
        return node.text

    def _page_count(self, archive: zipfile.ZipFile) -> int | None:
        try:
            app = etree.fromstring(archive.read("docProps/app.xml"), self._parser)
        except KeyError:
            return None
        node = app.find(f"{{{EXT_NS}}}Pages")
        if node is None or not (node.text or "").strip().isdigit():
            return None
        return int(node.text.strip())
