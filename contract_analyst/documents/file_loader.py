from pathlib import Path

from contract_analyst.documents.exceptions import UnsupportedFileTypeError
from contract_analyst.documents.models import Upload


class FileLoader:
    """Reads a local PDF into an Upload."""

    SUPPORTED_SUFFIXES = frozenset({".pdf"})

    def load(self, path: Path) -> Upload:
        """Read file bytes from disk.

        Raises:
            FileNotFoundError: if the file does not exist.
            UnsupportedFileTypeError: if the file is not a PDF.
        """
        if path.suffix.lower() not in self.SUPPORTED_SUFFIXES:
            raise UnsupportedFileTypeError(f"'{path.name}' is not a PDF file")
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return Upload(name=path.name, data=path.read_bytes())
