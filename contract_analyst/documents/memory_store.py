from contract_analyst.documents.base import BaseDocumentStore
from contract_analyst.documents.models import SourceDocument


class InMemoryDocumentStore(BaseDocumentStore):
    """Keeps documents for the lifetime of the process."""

    def __init__(self) -> None:
        self._documents: dict[str, SourceDocument] = {}

    def get_all(self) -> list[SourceDocument]:
        return sorted(self._documents.values(), key=lambda d: d.created_at)

    def put(self, document: SourceDocument) -> None:
        self._documents[document.id] = document

    def delete(self, document_id: str) -> None:
        self._documents.pop(document_id, None)

    def clear(self) -> None:
        self._documents.clear()
