from collections.abc import Iterator
from contextlib import contextmanager

from contract_analyst.logging.logger import Log
from contract_analyst.pdf.base import BasePdfDecoder
from contract_analyst.pdf.buffer_guard import BufferGuard, BufferLike, guarded_copy
from contract_analyst.pdf.exceptions import ParseError
from contract_analyst.pdf.models import ExtractionResult, ProgressCallback


def page_marker(page_number: int) -> str:
    return f"[Page {page_number}]"


def format_page(page_number: int, text: str) -> str:
    """Render one page as it appears in a document's extracted text."""
    return f"{page_marker(page_number)}\n{text}\n\n"


@contextmanager
def _as_parse_error() -> Iterator[None]:
    """Re-raise decoder failures as ParseError."""
    try:
        yield
    except ParseError:
        raise
    except Exception as exc:
        raise ParseError(f"PDF extraction failed: {exc}") from exc


class PdfTextExtractor:
    """Extracts marker-tagged, per-page plain text from PDF bytes.

    Fragments are joined with single spaces; no column or line reconstruction
    is attempted. Pages are processed strictly in order, one at a time.
    """

    def __init__(self, decoder: BasePdfDecoder) -> None:
        self._decoder = decoder

    def extract(
        self,
        buffer: BufferLike | BufferGuard,
        on_progress: ProgressCallback | None = None,
    ) -> ExtractionResult:
        """Extract text from every page of the document.

        Args:
            buffer: PDF bytes. Only a private copy is handed to the decoder.
            on_progress: Called as ``on_progress(page, page_count)`` after each page.

        Returns:
            ExtractionResult with the concatenated ``[Page n]`` sections.

        Raises:
            ParseError: if the bytes cannot be decoded or any page fails.
        """
        with _as_parse_error():
            doc = self._decoder.open(guarded_copy(buffer))
        with doc:
            with _as_parse_error():
                page_count = doc.page_count
            sections: list[str] = []
            for page_number in range(1, page_count + 1):
                with _as_parse_error():
                    text = " ".join(doc.page(page_number).text_fragments())
                sections.append(format_page(page_number, text))
                # Callback errors propagate unchanged.
                if on_progress is not None:
                    on_progress(page_number, page_count)

        Log.debug(f"Extracted {page_count} pages")
        return ExtractionResult(text="".join(sections), page_count=page_count)
