from abc import ABC, abstractmethod

from contract_analyst.documents.exceptions import DocumentNotFoundError
from contract_analyst.documents.models import SourceDocument


class BaseDocumentStore(ABC):
    """Contract for document persistence keyed by document id.

    All operations are idempotent: putting the same document twice keeps one
    record, deleting a missing id is a no-op.
    """

    @abstractmethod
    def get_all(self) -> list[SourceDocument]:
        """Return every stored document, oldest first."""

    @abstractmethod
    def put(self, document: SourceDocument) -> None:
        """Insert or replace the document with the same id."""

    @abstractmethod
    def delete(self, document_id: str) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...

    def get(self, document_id: str) -> SourceDocument:
        """Find a document by id.

        Raises:
            DocumentNotFoundError: if no document with this id exists.
        """
        for document in self.get_all():
            if document.id == document_id:
                return document
        raise DocumentNotFoundError(f"Document {document_id} not found")
