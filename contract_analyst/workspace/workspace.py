"""Single-user contract workspace: documents, chat session and citation previews."""

from dataclasses import dataclass
from pathlib import Path

from contract_analyst.citations.models import CitationSegment, Segment
from contract_analyst.citations.parser import render_with_citations
from contract_analyst.config.settings import Settings
from contract_analyst.documents.base import BaseDocumentStore
from contract_analyst.documents.filesystem_store import FileSystemDocumentStore
from contract_analyst.documents.models import SourceDocument, Upload
from contract_analyst.ingestion.ingestor import Ingestor, UploadProgressCallback, build_ingestor
from contract_analyst.llm.exceptions import ChatError, ChatSessionNotInitializedError
from contract_analyst.llm.factory import ChatTransportFactory
from contract_analyst.llm.models import ChatMessage, ChatSession
from contract_analyst.llm.transport import ChatTransport
from contract_analyst.logging.logger import Log
from contract_analyst.pdf.extractor import PdfTextExtractor
from contract_analyst.pdf.factory import PdfDecoderFactory
from contract_analyst.pdf.rasterizer import PdfPageRasterizer
from contract_analyst.workspace.context import (
    ContextBudget,
    build_context_blob,
    estimate_context_budget,
)
from contract_analyst.workspace.preview import PagePreviewer, PreviewResult


@dataclass(frozen=True)
class ModelReply:
    """A complete model answer and its citation-aware segments."""

    text: str
    segments: list[Segment]

    @property
    def citations(self) -> list[CitationSegment]:
        return [s for s in self.segments if isinstance(s, CitationSegment)]


class ContractWorkspace:
    """Coordinates ingestion, the chat session and page previews.

    Any change to the document set drops the loaded context; ``load_context``
    must be called again before asking further questions.
    """

    FALLBACK_REPLY = (
        "I encountered an error analyzing the document. The file might be too large "
        "for the current context window, or there was a network issue."
    )

    def __init__(
        self,
        *,
        store: BaseDocumentStore,
        ingestor: Ingestor,
        transport: ChatTransport,
        previewer: PagePreviewer,
        tokens_per_page: int = 650,
        context_warning_threshold: int = 2_000_000,
    ) -> None:
        self._store = store
        self._ingestor = ingestor
        self._transport = transport
        self._previewer = previewer
        self._tokens_per_page = tokens_per_page
        self._context_warning_threshold = context_warning_threshold
        self._session: ChatSession | None = None
        self._messages: list[ChatMessage] = []

    @property
    def context_loaded(self) -> bool:
        return self._session is not None

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    def documents(self) -> list[SourceDocument]:
        return self._store.get_all()

    def ready_documents(self) -> list[SourceDocument]:
        return [d for d in self._store.get_all() if d.is_ready]

    def upload(
        self,
        uploads: list[Upload],
        on_progress: UploadProgressCallback | None = None,
    ) -> list[SourceDocument]:
        self._session = None
        return self._ingestor.ingest(uploads, on_progress)

    def remove(self, document_id: str) -> None:
        self._session = None
        self._store.delete(document_id)
        Log.info(f"Removed document {document_id}")

    def clear(self) -> None:
        self._store.clear()
        self._session = None
        self._messages = []
        Log.info("Cleared all stored documents")

    def context_budget(self) -> ContextBudget:
        return estimate_context_budget(
            self.documents(),
            tokens_per_page=self._tokens_per_page,
            warning_threshold=self._context_warning_threshold,
        )

    def load_context(self) -> str:
        """Start a chat session over all ready documents and return the greeting.

        Raises:
            EmptyContextError: if no ready document has any text.
        """
        documents = self.documents()
        self._session = self._transport.initialize(build_context_blob(documents))
        total_pages = sum(d.page_count for d in documents)
        greeting = (
            f"I have analyzed {len(documents)} document(s) totaling approx. "
            f"{total_pages} pages. I am ready to answer questions regarding the "
            f"contract terms, clauses, and specifications."
        )
        self._messages = [ChatMessage(role="assistant", content=greeting)]
        budget = self.context_budget()
        if budget.is_over_limit:
            Log.warning(
                f"Context is very large (~{budget.estimated_tokens} tokens); "
                f"responses may be slower or hit limits"
            )
        return greeting

    def ask(self, question: str) -> ModelReply:
        """Send a question and parse the complete reply into segments.

        Raises:
            ChatSessionNotInitializedError: if no context has been loaded.
        """
        if self._session is None:
            raise ChatSessionNotInitializedError(
                "Chat session not initialized. Please upload documents first."
            )
        self._messages.append(ChatMessage(role="user", content=question))
        try:
            text = "".join(self._transport.send(self._session, question))
        except ChatError as exc:
            Log.error(f"Chat request failed: {exc}")
            text = self.FALLBACK_REPLY
        self._messages.append(ChatMessage(role="assistant", content=text))
        return ModelReply(text=text, segments=render_with_citations(text, self.ready_documents()))

    def preview(self, segment: CitationSegment) -> PreviewResult | None:
        return self._previewer.preview_citation(segment)

    def preview_page(
        self,
        document: SourceDocument,
        page_number: int,
        scale: float | None = None,
    ) -> PreviewResult:
        return self._previewer.preview(document, page_number, scale=scale)


def build_workspace(
    settings: Settings,
    store: BaseDocumentStore | None = None,
    transport: ChatTransport | None = None,
) -> ContractWorkspace:
    """Build a ContractWorkspace with all required adapters."""
    if store is None:
        store = FileSystemDocumentStore(Path(settings.document_store_dir))
    decoder = PdfDecoderFactory.create(settings)
    return ContractWorkspace(
        store=store,
        ingestor=build_ingestor(store, PdfTextExtractor(decoder)),
        transport=transport or ChatTransportFactory.create(settings),
        previewer=PagePreviewer(PdfPageRasterizer(decoder), scale=settings.preview_render_scale),
        tokens_per_page=settings.tokens_per_page_estimate,
        context_warning_threshold=settings.context_token_warning_threshold,
    )
