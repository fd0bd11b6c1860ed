from pathlib import PurePosixPath

from docanalytics.extraction.exceptions import UnsupportedFormatError
from docanalytics.extraction.models import DocumentFormat

MEDIA_TYPES: dict[str, DocumentFormat] = {
    "application/pdf": DocumentFormat.PDF,
    "application/x-pdf": DocumentFormat.PDF,
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": DocumentFormat.DOCX,
    "application/msword": DocumentFormat.DOC,
    "text/html": DocumentFormat.HTML,
    "application/xhtml+xml": DocumentFormat.HTML,
    "text/plain": DocumentFormat.TEXT,
    "text/markdown": DocumentFormat.TEXT,
    "text/x-markdown": DocumentFormat.TEXT,
}

EXTENSIONS: dict[str, DocumentFormat] = {
    ".pdf": DocumentFormat.PDF,
    ".docx": DocumentFormat.DOCX,
    ".doc": DocumentFormat.DOC,
    ".html": DocumentFormat.HTML,
    ".htm": DocumentFormat.HTML,
    ".xhtml": DocumentFormat.HTML,
    ".txt": DocumentFormat.TEXT,
    ".text": DocumentFormat.TEXT,
    ".md": DocumentFormat.TEXT,
    ".markdown": DocumentFormat.TEXT,
}

GENERIC_MEDIA_TYPES = frozenset({"", "application/octet-stream", "binary/octet-stream"})


def resolve_format(media_type: str, filename: str) -> DocumentFormat:
    """Resolve the document format from the declared media type.

    Generic media types fall back to the filename extension.

    Raises:
        UnsupportedFormatError: if neither identifies a supported format.
    """
    essence = media_type.split(";", 1)[0].strip().lower()
    if essence not in GENERIC_MEDIA_TYPES:
        fmt = MEDIA_TYPES.get(essence)
        if fmt is None:
            raise UnsupportedFormatError(f"Unsupported media type '{essence}'")
        return fmt

    suffix = PurePosixPath(filename.replace("\\", "/")).suffix.lower()
    fmt = EXTENSIONS.get(suffix)
    if fmt is None:
        raise UnsupportedFormatError(
            f"Cannot determine format of '{filename}' (media type '{essence or 'none'}')"
        )
    return fmt
