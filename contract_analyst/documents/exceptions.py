class DocumentStoreError(Exception):
    """Base exception for document storage errors."""


class DocumentNotFoundError(DocumentStoreError):
    """Raised when a document id is not present in the store."""


class InvalidStatusTransitionError(DocumentStoreError):
    """Raised when a document leaves Processing more than once."""


class UnsupportedFileTypeError(DocumentStoreError):
    """Raised when an upload is not a PDF file."""
