from collections.abc import Callable, Iterable

from contract_analyst.documents.base import BaseDocumentStore
from contract_analyst.documents.models import (
    PARSE_FAILED_MESSAGE,
    SourceDocument,
    Upload,
    new_document_id,
)
from contract_analyst.ingestion.pipeline import IngestionContext, IngestionStep
from contract_analyst.ingestion.steps import (
    ExtractTextStep,
    MarkErrorStep,
    MarkProcessingStep,
    MarkReadyStep,
)
from contract_analyst.logging.logger import Log
from contract_analyst.pdf.exceptions import ParseError
from contract_analyst.pdf.extractor import PdfTextExtractor
from contract_analyst.pdf.models import ProgressState

UploadProgressCallback = Callable[[Upload, ProgressState], None]


class Ingestor:
    """Processes uploads one at a time: register -> extract -> ready.

    Files are handled strictly sequentially so that at most one decoded
    document is held in memory. A file that fails to parse is stored with
    Error status and the batch continues with the next file.
    """

    ERROR_MESSAGE = PARSE_FAILED_MESSAGE

    def __init__(self, steps: list[IngestionStep], failed_step: IngestionStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def ingest(
        self,
        uploads: Iterable[Upload],
        on_progress: UploadProgressCallback | None = None,
    ) -> list[SourceDocument]:
        """Ingest every upload in order and return the resulting documents."""
        return [self.ingest_one(upload, on_progress) for upload in uploads]

    def ingest_one(
        self,
        upload: Upload,
        on_progress: UploadProgressCallback | None = None,
    ) -> SourceDocument:
        document = SourceDocument(
            id=new_document_id(),
            name=upload.name,
            size_bytes=len(upload.data),
            raw_bytes=upload.data,
        )
        context = IngestionContext(upload=upload, document=document)
        if on_progress is not None:
            on_progress(upload, ProgressState(pages_done=0, pages_total=0))
            context.on_progress = lambda done, total: on_progress(
                upload, ProgressState(pages_done=done, pages_total=total)
            )

        Log.info(f"Ingesting {upload.name} ({len(upload.data)} bytes)")
        try:
            for step in self._steps:
                context = step.run(context)
        except ParseError as exc:
            Log.exception(f"Error processing {upload.name}: {exc}")
            context.error_message = self.ERROR_MESSAGE
            context = self._failed_step.run(context)
        return context.document


def build_ingestor(store: BaseDocumentStore, extractor: PdfTextExtractor) -> Ingestor:
    """Build an Ingestor with the standard step sequence."""
    return Ingestor(
        steps=[
            MarkProcessingStep(store),
            ExtractTextStep(extractor),
            MarkReadyStep(store),
        ],
        failed_step=MarkErrorStep(store),
    )
