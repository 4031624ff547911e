import math
from numbers import Integral, Real

from contract_analyst.logging.logger import Log
from contract_analyst.pdf.base import BasePdfDecoder, DecodedDocument, DecodedPage, Viewport
from contract_analyst.pdf.buffer_guard import BufferGuard, BufferLike, guarded_copy
from contract_analyst.pdf.exceptions import (
    DataUnavailableError,
    InvalidArgumentError,
    PageOutOfBoundsError,
    PageRetrievalError,
    RenderSurfaceError,
)
from contract_analyst.pdf.models import PageImage


class PdfPageRasterizer:
    """Renders single PDF pages to PNG images.

    Every call decodes its own copy of the bytes; nothing is cached between
    calls or shared with text extraction.
    """

    DEFAULT_SCALE = 1.0

    def __init__(self, decoder: BasePdfDecoder) -> None:
        self._decoder = decoder

    def render_page(
        self,
        buffer: BufferLike | BufferGuard | None,
        page_number: object,
        scale: float = DEFAULT_SCALE,
    ) -> PageImage:
        """Render one page of the document.

        Raises:
            DataUnavailableError: buffer is missing, empty or not a decodable PDF.
            InvalidArgumentError: page_number is not an integer, or scale is not positive.
            PageOutOfBoundsError: page_number is outside 1..page_count.
            PageRetrievalError: the page exists but could not be loaded.
            RenderSurfaceError: the image surface could not be created or encoded.
        """
        if buffer is None or len(buffer) == 0:
            raise DataUnavailableError("No PDF data available; re-upload required")
        number = self._validate_page_number(page_number)
        self._validate_scale(scale)

        with self._open(buffer) as doc:
            if number < 1 or number > doc.page_count:
                raise PageOutOfBoundsError(number, doc.page_count)
            page = self._fetch_page(doc, number)
            viewport = self._viewport(page, scale)
            png = self._render(page, viewport)

        Log.debug(
            f"Rendered page {number} at scale {scale} ({viewport.width}x{viewport.height})"
        )
        return PageImage(
            page_number=number,
            scale=scale,
            width=viewport.width,
            height=viewport.height,
            png=png,
        )

    @staticmethod
    def _validate_page_number(page_number: object) -> int:
        if isinstance(page_number, bool):
            raise InvalidArgumentError(f"Page number must be an integer, got {page_number!r}")
        if isinstance(page_number, Integral):
            return int(page_number)
        if isinstance(page_number, Real):
            value = float(page_number)
            if math.isfinite(value) and value.is_integer():
                return int(value)
        raise InvalidArgumentError(f"Page number must be an integer, got {page_number!r}")

    @staticmethod
    def _validate_scale(scale: float) -> None:
        if (
            isinstance(scale, bool)
            or not isinstance(scale, Real)
            or not math.isfinite(scale)
            or scale <= 0
        ):
            raise InvalidArgumentError(f"Scale must be a positive number, got {scale!r}")

    def _open(self, buffer: BufferLike | BufferGuard) -> DecodedDocument:
        try:
            return self._decoder.open(guarded_copy(buffer))
        except Exception as exc:
            raise DataUnavailableError(
                f"PDF data could not be decoded; re-upload required: {exc}"
            ) from exc

    @staticmethod
    def _fetch_page(doc: DecodedDocument, page_number: int) -> DecodedPage:
        try:
            return doc.page(page_number)
        except Exception as exc:
            raise PageRetrievalError(
                f"Page {page_number} could not be loaded; it may be corrupted or "
                f"too complex: {exc}"
            ) from exc

    @staticmethod
    def _viewport(page: DecodedPage, scale: float) -> Viewport:
        try:
            viewport = page.viewport(scale)
        except Exception as exc:
            raise RenderSurfaceError(f"Could not compute page viewport: {exc}") from exc
        if viewport.width < 1 or viewport.height < 1:
            raise RenderSurfaceError(
                f"Render surface of {viewport.width}x{viewport.height} pixels cannot be created"
            )
        return viewport

    @staticmethod
    def _render(page: DecodedPage, viewport: Viewport) -> bytes:
        try:
            png = page.render_png(viewport)
        except Exception as exc:
            raise RenderSurfaceError(f"Could not render page image: {exc}") from exc
        if not png:
            raise RenderSurfaceError("Renderer produced an empty image")
        return png
