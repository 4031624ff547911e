from contract_analyst.config.settings import Settings
from contract_analyst.pdf.base import BasePdfDecoder
from contract_analyst.pdf.pdfplumber_adapter import PdfPlumberDecoder
from contract_analyst.pdf.pymupdf_adapter import PyMuPdfDecoder


class PdfDecoderFactory:
    """Creates the correct PDF decoder based on settings."""

    ADAPTERS: dict[str, type[BasePdfDecoder]] = {
        "pdfplumber": PdfPlumberDecoder,
        "pymupdf": PyMuPdfDecoder,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfDecoder:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()
