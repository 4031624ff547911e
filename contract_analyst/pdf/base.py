from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import TracebackType


@dataclass(frozen=True)
class Viewport:
    """Pixel dimensions of a page rendered at a given scale."""

    width: int
    height: int
    scale: float


class DecodedPage(ABC):
    """A single page of a decoded document."""

    @abstractmethod
    def text_fragments(self) -> list[str]:
        """Return the page's positioned text runs in content-stream order."""

    @abstractmethod
    def viewport(self, scale: float) -> Viewport:
        """Compute the pixel size of this page at ``scale`` (1.0 = 72 dpi)."""

    @abstractmethod
    def render_png(self, viewport: Viewport) -> bytes:
        """Rasterize the page into a surface sized to ``viewport`` and encode it as PNG."""


class DecodedDocument(ABC):
    """A page-addressable decoded PDF. Owned by exactly one operation."""

    @property
    @abstractmethod
    def page_count(self) -> int: ...

    @abstractmethod
    def page(self, page_number: int) -> DecodedPage:
        """Fetch a page by its 1-based number."""

    @abstractmethod
    def close(self) -> None: ...

    def __enter__(self) -> "DecodedDocument":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class BasePdfDecoder(ABC):
    """Contract for all PDF decoding engines."""

    @abstractmethod
    def open(self, data: bytearray) -> DecodedDocument:
        """Decode PDF bytes into a page-addressable document.

        Args:
            data: A private copy of the PDF bytes. The decoder may keep,
                  mutate or release it.

        Returns:
            A DecodedDocument that the caller must close.

        Raises:
            Any engine-specific exception if the bytes are not a PDF.
        """
