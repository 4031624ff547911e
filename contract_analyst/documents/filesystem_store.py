import json
import os
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any

from contract_analyst.documents.base import BaseDocumentStore
from contract_analyst.documents.exceptions import DocumentStoreError
from contract_analyst.documents.models import (
    INTERRUPTED_MESSAGE,
    DocumentStatus,
    SourceDocument,
)
from contract_analyst.logging.logger import Log


def document_file_path(root: Path, document_id: str) -> Path:
    """Build path to the stored PDF: {root}/{document_id}.pdf"""
    return root / f"{document_id}.pdf"


def metadata_file_path(root: Path, document_id: str) -> Path:
    """Build path to the document record: {root}/{document_id}.json"""
    return root / f"{document_id}.json"


class FileSystemDocumentStore(BaseDocumentStore):
    """Persists each document as a PDF file plus a JSON record in one directory."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def get_all(self) -> list[SourceDocument]:
        if not self._root.exists():
            return []
        documents = [self._load(path) for path in self._root.glob("*.json")]
        return sorted(documents, key=lambda d: d.created_at)

    def put(self, document: SourceDocument) -> None:
        self._root.mkdir(parents=True, exist_ok=True)
        self._write_atomic(document_file_path(self._root, document.id), document.raw_bytes)
        record = json.dumps(self._to_record(document), ensure_ascii=False)
        self._write_atomic(
            metadata_file_path(self._root, document.id), record.encode("utf-8")
        )
        Log.debug(f"Stored document {document.id} ({document.name}, {document.status.value})")

    def delete(self, document_id: str) -> None:
        metadata_file_path(self._root, document_id).unlink(missing_ok=True)
        document_file_path(self._root, document_id).unlink(missing_ok=True)

    def clear(self) -> None:
        if not self._root.exists():
            return
        for path in [*self._root.glob("*.json"), *self._root.glob("*.pdf")]:
            path.unlink(missing_ok=True)

    def _load(self, metadata_path: Path) -> SourceDocument:
        try:
            record = json.loads(metadata_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise DocumentStoreError(
                f"Failed to read document record {metadata_path}: {exc}"
            ) from exc
        pdf_path = document_file_path(self._root, record["id"])
        raw_bytes = pdf_path.read_bytes() if pdf_path.exists() else b""
        document = self._from_record(record, raw_bytes)
        if document.status in (DocumentStatus.UPLOADING, DocumentStatus.PROCESSING):
            # Nothing resumes an ingestion, so an unfinished record is a failed one.
            Log.warning(f"Document {document.id} ({document.name}) was left unfinished")
            document = replace(
                document,
                status=DocumentStatus.ERROR,
                extracted_text="",
                page_count=0,
                error_message=INTERRUPTED_MESSAGE,
            )
        return document

    @staticmethod
    def _write_atomic(path: Path, data: bytes) -> None:
        tmp_path = path.with_name(path.name + ".tmp")
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)

    @staticmethod
    def _to_record(document: SourceDocument) -> dict[str, Any]:
        return {
            "id": document.id,
            "name": document.name,
            "size_bytes": document.size_bytes,
            "status": document.status.value,
            "page_count": document.page_count,
            "extracted_text": document.extracted_text,
            "error_message": document.error_message,
            "created_at": document.created_at.isoformat(),
        }

    @staticmethod
    def _from_record(record: dict[str, Any], raw_bytes: bytes) -> SourceDocument:
        return SourceDocument(
            id=record["id"],
            name=record["name"],
            size_bytes=record["size_bytes"],
            raw_bytes=raw_bytes,
            status=DocumentStatus(record["status"]),
            page_count=record["page_count"],
            extracted_text=record["extracted_text"],
            error_message=record.get("error_message"),
            created_at=datetime.fromisoformat(record["created_at"]),
        )
