import io

import pdfplumber
from pdfplumber.page import Page
from pdfplumber.pdf import PDF

from contract_analyst.pdf.base import BasePdfDecoder, DecodedDocument, DecodedPage, Viewport

_POINTS_PER_INCH = 72


class PdfPlumberPage(DecodedPage):
    def __init__(self, page: Page) -> None:
        self._page = page

    def text_fragments(self) -> list[str]:
        return [word["text"] for word in self._page.extract_words()]

    def viewport(self, scale: float) -> Viewport:
        return Viewport(
            width=round(float(self._page.width) * scale),
            height=round(float(self._page.height) * scale),
            scale=scale,
        )

    def render_png(self, viewport: Viewport) -> bytes:
        image = self._page.to_image(resolution=_POINTS_PER_INCH * viewport.scale).original
        # pypdfium2 rounds fractional page sizes up; the surface must match the viewport.
        size = (viewport.width, viewport.height)
        if image.size != size:
            image = image.resize(size)
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()


class PdfPlumberDocument(DecodedDocument):
    def __init__(self, pdf: PDF) -> None:
        self._pdf = pdf

    @property
    def page_count(self) -> int:
        return len(self._pdf.pages)

    def page(self, page_number: int) -> DecodedPage:
        return PdfPlumberPage(self._pdf.pages[page_number - 1])

    def close(self) -> None:
        self._pdf.close()


class PdfPlumberDecoder(BasePdfDecoder):
    """Decodes PDFs with pdfplumber (pdfminer for text, pypdfium2 for rendering)."""

    def open(self, data: bytearray) -> DecodedDocument:
        return PdfPlumberDocument(pdfplumber.open(io.BytesIO(data)))
