from dataclasses import dataclass

from contract_analyst.citations.models import CitationSegment
from contract_analyst.documents.models import SourceDocument
from contract_analyst.logging.logger import Log
from contract_analyst.pdf.exceptions import RasterizationError
from contract_analyst.pdf.models import PageImage
from contract_analyst.pdf.rasterizer import PdfPageRasterizer


@dataclass(frozen=True)
class PreviewResult:
    """Outcome of a preview request: an image, or a message to show next to a retry action."""

    file_name: str
    page_number: int
    image: PageImage | None = None
    error_message: str | None = None
    error_detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.image is not None


class PagePreviewer:
    """Render boundary: rasterization failures become PreviewResult errors.

    Retrying is calling ``preview`` again with the same arguments.
    """

    def __init__(self, rasterizer: PdfPageRasterizer, scale: float = 2.0) -> None:
        self._rasterizer = rasterizer
        self._scale = scale

    def preview(
        self,
        document: SourceDocument,
        page_number: int,
        scale: float | None = None,
    ) -> PreviewResult:
        try:
            image = self._rasterizer.render_page(
                document.raw_bytes,
                page_number,
                scale=scale if scale is not None else self._scale,
            )
        except RasterizationError as exc:
            Log.warning(f"Preview of {document.name} page {page_number} failed: {exc}")
            return PreviewResult(
                file_name=document.name,
                page_number=page_number,
                error_message=exc.user_message,
                error_detail=str(exc),
            )
        return PreviewResult(file_name=document.name, page_number=page_number, image=image)

    def preview_citation(self, segment: CitationSegment) -> PreviewResult | None:
        """Activate a citation; inert (unresolved) citations have nothing to preview."""
        if segment.resolved_file is None:
            return None
        return self.preview(segment.resolved_file, segment.citation.page_number)
