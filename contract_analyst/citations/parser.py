"""Citation token scanning and resolution.

The model is instructed to cite every fact with a token of the form::

    ⦗Clause: 14.2(a) | Page: 12 | File: "Master_Agreement.pdf"⦘

The same grammar is spelled out in the analyst system prompt; both sides must
agree on it exactly.
"""

import re
from collections.abc import Iterable, Iterator

from contract_analyst.citations.models import (
    Citation,
    CitationSegment,
    Segment,
    TextSegment,
)
from contract_analyst.documents.models import SourceDocument

CITATION_PATTERN = re.compile(
    r"⦗\s*Clause:\s*(?P<clause>[^|⦘]*?)\s*"
    r"\|\s*Page:\s*(?P<page>\d+)\s*"
    r"\|\s*File:\s*\"(?P<file>[^\"⦘]*)\"\s*⦘"
)

_QUOTES_RE = re.compile(r"[\"']")


def clean_file_name(file_name: str) -> str:
    """Strip quote characters and surrounding whitespace from a cited file name."""
    return _QUOTES_RE.sub("", file_name).strip()


def scan(text: str) -> Iterator[TextSegment | Citation]:
    """Split ``text`` into prose runs and citations, left to right.

    Empty prose runs are skipped. A token naming page 0 is not a valid
    citation and is passed through as prose.
    """
    cursor = 0
    pending = ""
    for match in CITATION_PATTERN.finditer(text):
        pending += text[cursor:match.start()]
        cursor = match.end()
        page_number = int(match.group("page"))
        if page_number < 1:
            pending += match.group(0)
            continue
        if pending:
            yield TextSegment(pending)
            pending = ""
        yield Citation(
            clause_id=match.group("clause").strip(),
            page_number=page_number,
            file_name=clean_file_name(match.group("file")),
        )
    pending += text[cursor:]
    if pending:
        yield TextSegment(pending)


def resolve(citation: Citation, known_files: Iterable[SourceDocument]) -> SourceDocument | None:
    """Find the loaded document whose name matches the citation exactly."""
    for document in known_files:
        if document.name == citation.file_name:
            return document
    return None


def render_with_citations(
    text: str,
    known_files: Iterable[SourceDocument],
) -> list[Segment]:
    """Turn a model reply into text and citation segments bound to ``known_files``."""
    files = list(known_files)
    segments: list[Segment] = []
    for item in scan(text):
        if isinstance(item, Citation):
            segments.append(CitationSegment(citation=item, resolved_file=resolve(item, files)))
        else:
            segments.append(item)
    return segments
