import io
from collections.abc import Callable, Iterable

import pytest
from reportlab.lib.pagesizes import A4, letter
from reportlab.pdfgen import canvas

from contract_analyst.pdf.base import BasePdfDecoder, DecodedDocument, DecodedPage, Viewport


def _build_pdf(pages: list[list[str]], pagesize: tuple[float, float] = letter) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=pagesize)
    for lines in pages:
        y = 720
        for line in lines:
            c.drawString(72, y, line)
            y -= 20
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    return _build_pdf([["Hello PDF World"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    return _build_pdf([["Page one content"], ["Page two content"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    return _build_pdf([[]])


@pytest.fixture()
def a4_pdf_bytes() -> bytes:
    """Generate a single A4 page, whose size is not a whole number of points."""
    return _build_pdf([["A4 schedule of rates"]], pagesize=A4)


@pytest.fixture()
def contract_pdf_bytes() -> bytes:
    """Generate a three-page contract with numbered clauses."""
    return _build_pdf(
        [
            ["MASTER AGREEMENT", "1.1 Definitions apply throughout"],
            ["14.2(a) Mobilization advance is 10 percent"],
            ["20.1 Termination requires 30 days notice"],
        ]
    )


class FakePage(DecodedPage):
    def __init__(self, fragments: list[str], width: float = 612, height: float = 792) -> None:
        self.fragments = fragments
        self.width = width
        self.height = height
        self.fail_render = False

    def text_fragments(self) -> list[str]:
        return list(self.fragments)

    def viewport(self, scale: float) -> Viewport:
        return Viewport(
            width=round(self.width * scale),
            height=round(self.height * scale),
            scale=scale,
        )

    def render_png(self, viewport: Viewport) -> bytes:
        if self.fail_render:
            raise MemoryError("cannot allocate surface")
        return f"PNG {viewport.width}x{viewport.height} {'|'.join(self.fragments)}".encode()


class FakeDocument(DecodedDocument):
    def __init__(self, pages: list[FakePage], failing_pages: Iterable[int] = ()) -> None:
        self._pages = pages
        self._failing_pages = set(failing_pages)
        self.closed = False
        self.fetched: list[int] = []

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def page(self, page_number: int) -> DecodedPage:
        self.fetched.append(page_number)
        if page_number in self._failing_pages:
            raise RuntimeError(f"broken page object {page_number}")
        return self._pages[page_number - 1]

    def close(self) -> None:
        self.closed = True


class FakeDecoder(BasePdfDecoder):
    """Accepts any buffer starting with %PDF and detaches it after decoding.

    Detaching (clearing) the input mimics engines that take ownership of the
    buffer; a second decode of the same buffer would then see zero bytes.
    """

    def __init__(self, pages: list[FakePage], failing_pages: Iterable[int] = ()) -> None:
        self.pages = pages
        self.failing_pages = list(failing_pages)
        self.received: list[bytearray] = []
        self.opened: list[FakeDocument] = []

    def open(self, data: bytearray) -> DecodedDocument:
        if not bytes(data).startswith(b"%PDF"):
            raise ValueError("no objects found")
        self.received.append(data)
        data.clear()
        doc = FakeDocument(self.pages, self.failing_pages)
        self.opened.append(doc)
        return doc


FAKE_PDF = b"%PDF-1.7 fake contract"


@pytest.fixture()
def make_fake_decoder() -> Callable[..., FakeDecoder]:
    """Build a FakeDecoder whose pages carry the given text fragments."""

    def _make(
        page_fragments: list[list[str]],
        failing_pages: Iterable[int] = (),
    ) -> FakeDecoder:
        return FakeDecoder([FakePage(f) for f in page_fragments], failing_pages)

    return _make


@pytest.fixture()
def fake_pdf() -> bytes:
    return FAKE_PDF
