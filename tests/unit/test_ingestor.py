from unittest.mock import MagicMock

import pytest

from contract_analyst.documents.memory_store import InMemoryDocumentStore
from contract_analyst.documents.models import DocumentStatus, Upload
from contract_analyst.ingestion.ingestor import Ingestor, build_ingestor
from contract_analyst.ingestion.pipeline import IngestionContext
from contract_analyst.ingestion.steps import (
    ExtractTextStep,
    MarkErrorStep,
    MarkProcessingStep,
    MarkReadyStep,
)
from contract_analyst.pdf.exceptions import ParseError
from contract_analyst.pdf.extractor import PdfTextExtractor
from contract_analyst.pdf.models import ExtractionResult, ProgressState


def _upload(name: str = "a.pdf", data: bytes = b"%PDF-1.7 fake") -> Upload:
    return Upload(name=name, data=data)


class TestIngestorWithFakeDecoder:
    def test_ready_document_is_stored(self, make_fake_decoder) -> None:
        store = InMemoryDocumentStore()
        ingestor = build_ingestor(store, PdfTextExtractor(make_fake_decoder([["a"], ["b"]])))

        (document,) = ingestor.ingest([_upload()])

        assert document.status is DocumentStatus.READY
        assert document.page_count == 2
        assert document.extracted_text == "[Page 1]\na\n\n[Page 2]\nb\n\n"
        assert document.size_bytes == len(b"%PDF-1.7 fake")
        assert store.get_all() == [document]

    def test_raw_bytes_survive_extraction(self, make_fake_decoder) -> None:
        store = InMemoryDocumentStore()
        ingestor = build_ingestor(store, PdfTextExtractor(make_fake_decoder([["a"]])))
        (document,) = ingestor.ingest([_upload()])
        assert document.raw_bytes == b"%PDF-1.7 fake"

    def test_bad_file_is_marked_error_and_batch_continues(self, make_fake_decoder) -> None:
        store = InMemoryDocumentStore()
        ingestor = build_ingestor(store, PdfTextExtractor(make_fake_decoder([["a"]])))

        documents = ingestor.ingest(
            [_upload("first.pdf"), _upload("broken.pdf", b"garbage"), _upload("third.pdf")]
        )

        assert [d.status for d in documents] == [
            DocumentStatus.READY,
            DocumentStatus.ERROR,
            DocumentStatus.READY,
        ]
        broken = documents[1]
        assert broken.error_message == "Failed to parse PDF"
        assert broken.page_count == 0
        assert broken.extracted_text == ""
        assert len(store.get_all()) == 3

    def test_progress_callback_failure_is_not_recorded_as_parse_error(
        self, make_fake_decoder
    ) -> None:
        def on_progress(upload: Upload, state: ProgressState) -> None:
            if state.pages_done:
                raise RuntimeError("progress display closed")

        store = InMemoryDocumentStore()
        ingestor = build_ingestor(store, PdfTextExtractor(make_fake_decoder([["a"]])))
        with pytest.raises(RuntimeError, match="progress display closed"):
            ingestor.ingest_one(_upload(), on_progress)
        assert all(d.status is not DocumentStatus.ERROR for d in store.get_all())

    def test_progress_resets_per_file_then_ticks_per_page(self, make_fake_decoder) -> None:
        store = InMemoryDocumentStore()
        ingestor = build_ingestor(store, PdfTextExtractor(make_fake_decoder([["a"], ["b"]])))
        ticks: list[tuple[str, ProgressState]] = []

        ingestor.ingest(
            [_upload("one.pdf"), _upload("two.pdf")],
            on_progress=lambda upload, state: ticks.append((upload.name, state)),
        )

        assert ticks == [
            ("one.pdf", ProgressState(0, 0)),
            ("one.pdf", ProgressState(1, 2)),
            ("one.pdf", ProgressState(2, 2)),
            ("two.pdf", ProgressState(0, 0)),
            ("two.pdf", ProgressState(1, 2)),
            ("two.pdf", ProgressState(2, 2)),
        ]

    def test_files_are_processed_sequentially(self, make_fake_decoder) -> None:
        decoder = make_fake_decoder([["a"]])
        ingestor = build_ingestor(InMemoryDocumentStore(), PdfTextExtractor(decoder))
        ingestor.ingest([_upload("one.pdf"), _upload("two.pdf")])
        assert len(decoder.opened) == 2
        assert all(doc.closed for doc in decoder.opened)


class TestIngestorSteps:
    def _ingestor(self) -> tuple[Ingestor, MagicMock, MagicMock]:
        store = MagicMock()
        extractor = MagicMock(spec=PdfTextExtractor)
        extractor.extract.return_value = ExtractionResult(text="[Page 1]\nx\n\n", page_count=1)
        ingestor = Ingestor(
            steps=[MarkProcessingStep(store), ExtractTextStep(extractor), MarkReadyStep(store)],
            failed_step=MarkErrorStep(store),
        )
        return ingestor, store, extractor

    def test_store_sees_processing_then_ready(self) -> None:
        ingestor, store, _extractor = self._ingestor()
        ingestor.ingest_one(_upload())
        statuses = [c.args[0].status for c in store.put.call_args_list]
        assert statuses == [DocumentStatus.PROCESSING, DocumentStatus.READY]

    def test_store_sees_processing_then_error(self) -> None:
        ingestor, store, extractor = self._ingestor()
        extractor.extract.side_effect = ParseError("bad pdf")
        document = ingestor.ingest_one(_upload())
        statuses = [c.args[0].status for c in store.put.call_args_list]
        assert statuses == [DocumentStatus.PROCESSING, DocumentStatus.ERROR]
        assert document.status is DocumentStatus.ERROR

    def test_unexpected_errors_propagate(self) -> None:
        ingestor, store, _extractor = self._ingestor()
        store.put.side_effect = [None, OSError("disk full")]
        with pytest.raises(OSError, match="disk full"):
            ingestor.ingest_one(_upload())

    def test_mark_ready_requires_extraction(self) -> None:
        ingestor, store, _extractor = self._ingestor()
        context = IngestionContext(
            upload=_upload(),
            document=MagicMock(),
        )
        with pytest.raises(ValueError, match="extraction must be set"):
            MarkReadyStep(store).run(context)
