"""Best-effort text recovery from legacy binary word-processor files (.doc)."""

import re

from docanalytics.decoders.base import BaseDecoder
from docanalytics.decoders.exceptions import DecodeDegradedError
from docanalytics.decoders.models import DecodedDocument

OLE_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

# Printable runs of at least 8 characters, stored as UTF-16LE or single-byte.
_WIDE_RUN = re.compile(rb"(?:[\x20-\x7e\r\t]\x00){8,}")
_NARROW_RUN = re.compile(rb"[\x20-\x7e\r\t]{8,}")

_CONTAINER_NAMES = frozenset(
    {
        "Root Entry",
        "WordDocument",
        "SummaryInformation",
        "DocumentSummaryInformation",
        "CompObj",
        "1Table",
        "0Table",
        "Microsoft Word-Dokument",
        "Microsoft Office Word",
        "MSWordDoc",
        "Word.Document.8",
    }
)


def _looks_like_prose(text: str) -> bool:
    letters = sum(ch.isalpha() for ch in text)
    return " " in text and letters >= len(text) * 0.6


class LegacyWordDecoder(BaseDecoder):
    """Recovers readable text runs from an OLE2 compound word-processor file."""

    def decode(self, data: bytes) -> DecodedDocument:
        if not data.startswith(OLE_SIGNATURE):
            raise DecodeDegradedError("legacy word extraction failed: not an OLE2 compound file")

        wide = [m.group().decode("utf-16-le") for m in _WIDE_RUN.finditer(data)]
        narrow = [m.group().decode("latin-1") for m in _NARROW_RUN.finditer(data)]

        lines: list[str] = []
        seen: set[str] = set()
        for run in wide + narrow:
            for piece in re.split(r"[\r\t]+", run):
                piece = " ".join(piece.split())
                if piece in _CONTAINER_NAMES or piece in seen or not _looks_like_prose(piece):
                    continue
                seen.add(piece)
                lines.append(piece)

        if not lines:
            raise DecodeDegradedError("legacy word extraction failed: no readable text")
        return DecodedDocument(text="\n".join(lines))
