class PdfError(Exception):
    """Base exception for all PDF decoding errors."""


class ParseError(PdfError):
    """Raised when a buffer cannot be decoded or a page fails during text extraction."""


class RasterizationError(PdfError):
    """Base exception for page rendering failures.

    ``user_message`` is the short, user-facing hint shown next to a retry action.
    """

    user_message = "The page preview could not be produced."


class DataUnavailableError(RasterizationError):
    """Raised when the original PDF bytes are missing, empty or undecodable."""

    user_message = "Original PDF data not found. Please re-upload the file."


class InvalidArgumentError(RasterizationError):
    """Raised when the page number or scale is not a usable number."""

    user_message = "This page number is invalid."


class PageOutOfBoundsError(RasterizationError):
    """Raised when the requested page is outside 1..page_count."""

    user_message = "This page number is invalid."

    def __init__(self, page_number: int, page_count: int) -> None:
        self.page_number = page_number
        self.page_count = page_count
        super().__init__(
            f"Page {page_number} is out of range; valid pages are 1..{page_count}"
        )


class PageRetrievalError(RasterizationError):
    """Raised when a page exists but its object cannot be loaded."""

    user_message = "This page could not be read. It may be corrupted or too complex."


class RenderSurfaceError(RasterizationError):
    """Raised when the pixel surface cannot be allocated, drawn or encoded."""

    user_message = "Could not build the preview image."
