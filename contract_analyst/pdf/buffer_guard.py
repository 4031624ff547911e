"""Copy-before-decode protection for canonical PDF bytes.

PDF engines may take ownership of the buffer they are handed (PyMuPDF keeps a
reference to the stream for the document's lifetime, other decoders transfer
it). The canonical bytes owned by the document store are therefore never
passed to a decoder directly; every consumer decodes its own copy.
"""

BufferLike = bytes | bytearray | memoryview


def copy_of(buffer: BufferLike) -> bytearray:
    """Return a fresh, independent copy of ``buffer``."""
    return bytearray(buffer)


class BufferGuard:
    """Holds canonical bytes and hands out independent copies."""

    def __init__(self, buffer: BufferLike) -> None:
        self._canonical = bytes(buffer)

    def __len__(self) -> int:
        return len(self._canonical)

    def copy(self) -> bytearray:
        return copy_of(self._canonical)


def guarded_copy(buffer: "BufferLike | BufferGuard") -> bytearray:
    """Copy either a raw buffer or the canonical bytes behind a guard."""
    if isinstance(buffer, BufferGuard):
        return buffer.copy()
    return copy_of(buffer)
