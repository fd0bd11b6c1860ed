import io
import zipfile
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docanalytics.classification.models import ClassificationResult
from docanalytics.extraction.models import (
    DocumentFormat,
    DocumentMetadata,
    ExtractedDocument,
    TitleSource,
)
from docanalytics.store.models import IndexedDocument

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def headline_pdf_bytes() -> bytes:
    """PDF without a metadata title whose first page opens with a large headline."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setFont("Helvetica", 10)
    c.drawString(72, 760, "Internal draft")
    c.setFont("Helvetica-Bold", 24)
    c.drawString(72, 720, "Cloud Systems Overview")
    c.setFont("Helvetica", 12)
    c.drawString(72, 690, "This paper describes the architecture of distributed systems.")
    c.drawString(72, 675, "It covers storage, networking and scheduling.")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def titled_pdf_bytes() -> bytes:
    """PDF with an embedded metadata title that differs from its visible headline."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.setTitle("Annual Report 2024")
    c.setFont("Helvetica-Bold", 20)
    c.drawString(72, 720, "Welcome")
    c.setFont("Helvetica", 12)
    c.drawString(72, 690, "Revenue and profit grew this year.")
    c.save()
    return buf.getvalue()


W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def _docx_paragraph(text: str, style: str | None) -> str:
    ppr = f'<w:pPr><w:pStyle w:val="{style}"/></w:pPr>' if style else ""
    return f"<w:p>{ppr}<w:r><w:t xml:space=\"preserve\">{text}</w:t></w:r></w:p>"


def build_docx(
    paragraphs: list[tuple[str, str | None]],
    core_title: str | None = None,
    pages: int | None = None,
) -> bytes:
    body = "".join(_docx_paragraph(text, style) for text, style in paragraphs)
    document = (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'
        f'<w:document xmlns:w="{W_NS}"><w:body>{body}</w:body></w:document>'
    )
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as archive:
        archive.writestr("word/document.xml", document)
        if core_title is not None:
            archive.writestr(
                "docProps/core.xml",
                '<?xml version="1.0" encoding="UTF-8"?>'
                "<cp:coreProperties "
                'xmlns:cp="http://schemas.openxmlformats.org/package/2006/metadata/core-properties" '
                'xmlns:dc="http://purl.org/dc/elements/1.1/">'
                f"<dc:title>{core_title}</dc:title></cp:coreProperties>",
            )
        if pages is not None:
            archive.writestr(
                "docProps/app.xml",
                '<?xml version="1.0" encoding="UTF-8"?>'
                "<Properties "
                'xmlns="http://schemas.openxmlformats.org/officeDocument/2006/extended-properties">'
                f"<Pages>{pages}</Pages></Properties>",
            )
    return buf.getvalue()


@pytest.fixture()
def make_docx() -> Callable[..., bytes]:
    return build_docx


@pytest.fixture()
def corrupt_docx_bytes() -> bytes:
    """Deflated document part whose first block has an invalid type."""
    document = "<w:document>" + "<w:p>minutes</w:p>" * 50 + "</w:document>"
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr("word/document.xml", document)
    data = bytearray(buf.getvalue())
    name_len = int.from_bytes(data[26:28], "little")
    extra_len = int.from_bytes(data[28:30], "little")
    data[30 + name_len + extra_len] = 0xFF
    return bytes(data)


def build_legacy_doc(text: str) -> bytes:
    """Minimal OLE2-signed blob carrying UTF-16LE text like a Word 97 file."""
    header = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 504
    return header + text.encode("utf-16-le") + b"\x00" * 64


@pytest.fixture()
def legacy_doc_bytes() -> bytes:
    return build_legacy_doc(
        "Annual Compliance Report\rThis report covers the audit of our policy.\r"
    )


def build_document(
    doc_id: str = "doc-1",
    title: str = "Untitled",
    content: str = "",
    owner: str = "alice",
    created_offset: int = 0,
    category: str = "Academic",
) -> IndexedDocument:
    created = BASE_TIME + timedelta(minutes=created_offset)
    return IndexedDocument(
        id=doc_id,
        owner=owner,
        filename=f"{doc_id}.txt",
        media_type="text/plain",
        size_bytes=len(content),
        blob_path=f"/tmp/{doc_id}.txt",
        extracted=ExtractedDocument(
            title=title,
            content=content,
            metadata=DocumentMetadata(
                word_count=len(content.split()),
                page_count=1,
                language="en",
            ),
            title_source=TitleSource.FIRST_LINE,
            format=DocumentFormat.TEXT,
        ),
        classification=ClassificationResult(
            category=category,
            subcategory="Research Paper",
            confidence=0.5,
            algorithm="Enhanced Keyword Analysis",
        ),
        created_at=created,
        updated_at=created,
    )


@pytest.fixture()
def make_document() -> Callable[..., IndexedDocument]:
    return build_document
