import pymupdf

from contract_analyst.pdf.base import BasePdfDecoder, DecodedDocument, DecodedPage, Viewport


class PyMuPdfPage(DecodedPage):
    def __init__(self, page: pymupdf.Page) -> None:
        self._page = page

    def text_fragments(self) -> list[str]:
        content = self._page.get_text("dict")  # type: ignore[no-untyped-call]
        return [
            span["text"]
            for block in content["blocks"]
            for line in block.get("lines", [])
            for span in line["spans"]
        ]

    def viewport(self, scale: float) -> Viewport:
        bounds = (self._page.rect * pymupdf.Matrix(scale, scale)).irect
        return Viewport(width=bounds.width, height=bounds.height, scale=scale)

    def render_png(self, viewport: Viewport) -> bytes:
        matrix = pymupdf.Matrix(viewport.scale, viewport.scale)
        pixmap = self._page.get_pixmap(matrix=matrix, alpha=False)  # type: ignore[no-untyped-call]
        return pixmap.tobytes("png")


class PyMuPdfDocument(DecodedDocument):
    def __init__(self, doc: pymupdf.Document) -> None:
        self._doc = doc

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def page(self, page_number: int) -> DecodedPage:
        return PyMuPdfPage(self._doc.load_page(page_number - 1))

    def close(self) -> None:
        self._doc.close()


class PyMuPdfDecoder(BasePdfDecoder):
    """Decodes PDFs with PyMuPDF."""

    def open(self, data: bytearray) -> DecodedDocument:
        doc = pymupdf.open(stream=data, filetype="pdf")  # type: ignore[no-untyped-call]
        return PyMuPdfDocument(doc)
