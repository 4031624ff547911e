from collections.abc import Iterable
from dataclasses import dataclass

from contract_analyst.documents.models import SourceDocument


def document_section(document: SourceDocument) -> str:
    return (
        f"--- DOCUMENT: {document.name} ---\n"
        f"{document.extracted_text}\n"
        f"--- END DOCUMENT ---\n"
    )


def build_context_blob(documents: Iterable[SourceDocument]) -> str:
    """Combine the text of every ready document into one LLM context blob."""
    return "\n".join(document_section(d) for d in documents if d.is_ready)


@dataclass(frozen=True)
class ContextBudget:
    """Rough size of the combined context; one page is counted as a fixed token estimate."""

    total_pages: int
    estimated_tokens: int
    warning_threshold: int

    @property
    def is_over_limit(self) -> bool:
        return self.estimated_tokens > self.warning_threshold


def estimate_context_budget(
    documents: Iterable[SourceDocument],
    tokens_per_page: int,
    warning_threshold: int,
) -> ContextBudget:
    total_pages = sum(d.page_count for d in documents)
    return ContextBudget(
        total_pages=total_pages,
        estimated_tokens=total_pages * tokens_per_page,
        warning_threshold=warning_threshold,
    )
