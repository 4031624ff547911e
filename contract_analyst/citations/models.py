from dataclasses import dataclass
from typing import ClassVar, Literal

from contract_analyst.documents.models import SourceDocument

GENERIC_CLAUSE_IDS = frozenset({"", "N/A", "General"})


@dataclass(frozen=True)
class Citation:
    """A structured reference emitted by the model."""

    clause_id: str
    page_number: int
    file_name: str

    @property
    def display_label(self) -> str:
        if self.clause_id in GENERIC_CLAUSE_IDS:
            return f"Page {self.page_number}"
        return self.clause_id

    @property
    def inert_label(self) -> str:
        return f"[{self.file_name}, p.{self.page_number}]"


@dataclass(frozen=True)
class TextSegment:
    """Prose between citations, kept verbatim including inline markup."""

    kind: ClassVar[Literal["text"]] = "text"
    value: str


@dataclass(frozen=True)
class CitationSegment:
    """A citation bound, when possible, to a loaded document.

    An unresolved segment is the designed degraded state: it renders as inert
    text and is never treated as an error.
    """

    kind: ClassVar[Literal["citation"]] = "citation"
    citation: Citation
    resolved_file: SourceDocument | None = None

    @property
    def is_interactive(self) -> bool:
        return self.resolved_file is not None

    @property
    def label(self) -> str:
        if self.resolved_file is None:
            return self.citation.inert_label
        return self.citation.display_label


Segment = TextSegment | CitationSegment
