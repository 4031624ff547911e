from abc import ABC, abstractmethod
from dataclasses import dataclass

from contract_analyst.documents.models import SourceDocument, Upload
from contract_analyst.pdf.models import ExtractionResult, ProgressCallback


@dataclass(slots=True)
class IngestionContext:
    upload: Upload
    document: SourceDocument
    on_progress: ProgressCallback | None = None
    extraction: ExtractionResult | None = None
    error_message: str = ""


class IngestionStep(ABC):
    @abstractmethod
    def run(self, context: IngestionContext) -> IngestionContext:
        raise NotImplementedError
