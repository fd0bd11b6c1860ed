from bs4 import BeautifulSoup

from docanalytics.decoders.base import BaseDecoder
from docanalytics.decoders.exceptions import DecodeDegradedError
from docanalytics.decoders.models import DecodedDocument

_INVISIBLE_TAGS = ["script", "style", "noscript", "template"]


class HtmlDecoder(BaseDecoder):
    """Decodes HTML markup using BeautifulSoup."""

    def decode(self, data: bytes) -> DecodedDocument:
        try:
            soup = BeautifulSoup(data, "html.parser")
        except Exception as exc:
            raise DecodeDegradedError(f"html extraction failed: {exc}") from exc

        for tag in soup(_INVISIBLE_TAGS):
            tag.decompose()

        title = None
        if soup.title is not None:
            title = " ".join(soup.title.get_text(" ").split()) or None
            soup.title.decompose()

        headings: list[str] = []
        for level in range(1, 7):
            for heading in soup.find_all(f"h{level}"):
                text = " ".join(heading.get_text(" ").split())
                if text:
                    headings.append(text)

        root = soup.body if soup.body is not None else soup
        lines = [" ".join(line.split()) for line in root.get_text("\n").splitlines()]
        return DecodedDocument(
            text="\n".join(line for line in lines if line),
            metadata_title=title,
            headings=tuple(headings),
        )
