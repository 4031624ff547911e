from contract_analyst.pdf.buffer_guard import BufferGuard, copy_of, guarded_copy


class TestCopyOf:
    def test_returns_equal_but_distinct_buffer(self) -> None:
        original = bytearray(b"%PDF-1.7")
        copy = copy_of(original)
        assert copy == original
        assert copy is not original

    def test_mutating_copy_leaves_original_intact(self) -> None:
        original = bytearray(b"%PDF-1.7")
        copy = copy_of(original)
        copy.clear()
        assert original == bytearray(b"%PDF-1.7")

    def test_accepts_bytes_and_memoryview(self) -> None:
        assert copy_of(b"abc") == bytearray(b"abc")
        assert copy_of(memoryview(b"abc")) == bytearray(b"abc")

    def test_empty_buffer(self) -> None:
        assert copy_of(b"") == bytearray()


class TestBufferGuard:
    def test_each_copy_is_independent(self) -> None:
        guard = BufferGuard(b"%PDF-1.7")
        first = guard.copy()
        first.clear()
        assert guard.copy() == bytearray(b"%PDF-1.7")
        assert len(guard) == 8

    def test_guard_does_not_alias_mutable_source(self) -> None:
        source = bytearray(b"%PDF")
        guard = BufferGuard(source)
        source.clear()
        assert guard.copy() == bytearray(b"%PDF")

    def test_guarded_copy_handles_both_forms(self) -> None:
        assert guarded_copy(BufferGuard(b"x")) == bytearray(b"x")
        assert guarded_copy(b"y") == bytearray(b"y")
