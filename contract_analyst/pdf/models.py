import base64
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class ProgressState:
    """Pages processed so far for one in-flight extraction."""

    pages_done: int
    pages_total: int


ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class ExtractionResult:
    """Marker-tagged text of a whole document."""

    text: str
    page_count: int


@dataclass(frozen=True)
class PageImage:
    """A single rasterized page encoded as PNG."""

    page_number: int
    scale: float
    width: int
    height: int
    png: bytes

    @property
    def data_uri(self) -> str:
        return "data:image/png;base64," + base64.b64encode(self.png).decode("ascii")
