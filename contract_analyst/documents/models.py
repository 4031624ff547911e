import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum

from contract_analyst.documents.exceptions import InvalidStatusTransitionError


PARSE_FAILED_MESSAGE = "Failed to parse PDF"
INTERRUPTED_MESSAGE = "Processing was interrupted"


class DocumentStatus(str, Enum):
    UPLOADING = "uploading"
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


def new_document_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class SourceDocument:
    """An uploaded PDF together with its extracted text.

    ``raw_bytes`` is the canonical buffer. It is never handed to a decoder;
    extraction and rendering work on copies.
    """

    id: str
    name: str
    size_bytes: int
    raw_bytes: bytes = field(repr=False)
    status: DocumentStatus = DocumentStatus.UPLOADING
    page_count: int = 0
    extracted_text: str = field(default="", repr=False)
    error_message: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_ready(self) -> bool:
        return self.status is DocumentStatus.READY

    def mark_processing(self) -> "SourceDocument":
        if self.status is not DocumentStatus.UPLOADING:
            raise InvalidStatusTransitionError(
                f"Document {self.id} cannot start processing from '{self.status.value}'"
            )
        return replace(self, status=DocumentStatus.PROCESSING)

    def mark_ready(self, extracted_text: str, page_count: int) -> "SourceDocument":
        self._require_processing(DocumentStatus.READY)
        return replace(
            self,
            status=DocumentStatus.READY,
            extracted_text=extracted_text,
            page_count=page_count,
            error_message=None,
        )

    def mark_error(self, message: str) -> "SourceDocument":
        self._require_processing(DocumentStatus.ERROR)
        return replace(
            self,
            status=DocumentStatus.ERROR,
            extracted_text="",
            page_count=0,
            error_message=message,
        )

    def _require_processing(self, target: DocumentStatus) -> None:
        if self.status is not DocumentStatus.PROCESSING:
            raise InvalidStatusTransitionError(
                f"Document {self.id} cannot move from '{self.status.value}' to '{target.value}'"
            )


@dataclass(frozen=True)
class Upload:
    """A file handed to ingestion: display name plus its bytes."""

    name: str
    data: bytes = field(repr=False)
