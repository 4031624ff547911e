from contract_analyst.documents.base import BaseDocumentStore
from contract_analyst.ingestion.pipeline import IngestionContext, IngestionStep
from contract_analyst.logging.logger import Log
from contract_analyst.pdf.extractor import PdfTextExtractor


class MarkProcessingStep(IngestionStep):
    def __init__(self, store: BaseDocumentStore) -> None:
        self._store = store

    def run(self, context: IngestionContext) -> IngestionContext:
        context.document = context.document.mark_processing()
        self._store.put(context.document)
        Log.info(f"Document {context.document.id} ({context.upload.name}) marked as processing")
        return context


class ExtractTextStep(IngestionStep):
    def __init__(self, extractor: PdfTextExtractor) -> None:
        self._extractor = extractor

    def run(self, context: IngestionContext) -> IngestionContext:
        context.extraction = self._extractor.extract(
            context.document.raw_bytes,
            on_progress=context.on_progress,
        )
        Log.info(
            f"Extracted {context.extraction.page_count} pages "
            f"({len(context.extraction.text)} chars) from {context.upload.name}"
        )
        return context


class MarkReadyStep(IngestionStep):
    def __init__(self, store: BaseDocumentStore) -> None:
        self._store = store

    def run(self, context: IngestionContext) -> IngestionContext:
        if context.extraction is None:
            raise ValueError("IngestionContext.extraction must be set before marking ready")
        context.document = context.document.mark_ready(
            context.extraction.text,
            context.extraction.page_count,
        )
        self._store.put(context.document)
        return context


class MarkErrorStep(IngestionStep):
    def __init__(self, store: BaseDocumentStore) -> None:
        self._store = store

    def run(self, context: IngestionContext) -> IngestionContext:
        context.document = context.document.mark_error(context.error_message)
        self._store.put(context.document)
        Log.error(f"Document {context.document.id} ({context.upload.name}) marked as error")
        return context
