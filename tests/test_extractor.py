"""Tests for extractor module."""

from remote_tail.extractor import extract_lines


class TestExtractLines:
    def test_complete_lines(self):
        lines, offset = extract_lines(b"foo\nbar\n", 0)
        assert lines == ["foo", "bar"]
        assert offset == 8

    def test_empty_buffer(self):
        assert extract_lines(b"", 17) == ([], 17)

    def test_partial_line_not_consumed(self):
        lines, offset = extract_lines(b"baz", 8)
        assert lines == []
        assert offset == 8

    def test_trailing_partial_after_lines(self):
        lines, offset = extract_lines(b"one\ntwo\nthr", 100)
        assert lines == ["one", "two"]
        assert offset == 108

    def test_empty_lines_preserved(self):
        lines, offset = extract_lines(b"\n\nx\n", 0)
        assert lines == ["", "", "x"]
        assert offset == 4

    def test_whitespace_not_trimmed(self):
        lines, _ = extract_lines(b"  padded \t\r\n", 0)
        assert lines == ["  padded \t\r"]

    def test_offset_counts_bytes_not_characters(self):
        data = "héllo wörld\n".encode("utf-8")
        lines, offset = extract_lines(data, 0)
        assert lines == ["héllo wörld"]
        assert offset == len(data) == 14

    def test_invalid_utf8_replaced(self):
        lines, offset = extract_lines(b"bad \xff byte\n", 0)
        assert lines == ["bad � byte"]
        assert offset == 11


class TestGrowingFile:
    def _poll(self, content: bytes, offset: int):
        return extract_lines(content[offset:], offset)

    def test_line_split_across_polls_emitted_once(self):
        content = b"foo\nbar\n"
        lines, offset = self._poll(content, 0)
        assert lines == ["foo", "bar"]

        content += b"ba"
        lines, offset = self._poll(content, offset)
        assert lines == []
        assert offset == 8

        content += b"z"
        lines, offset = self._poll(content, offset)
        assert lines == []

        content += b"\nqux\n"
        lines, offset = self._poll(content, offset)
        assert lines == ["baz", "qux"]
        assert offset == len(content)

    def test_repeated_polls_never_reemit(self):
        chunks = [b"a", b"1\nb2", b"\n", b"", b"c3\nd", b"4\ne5\n"]
        content = b""
        offset = 0
        emitted = []
        for chunk in chunks:
            content += chunk
            lines, offset = self._poll(content, offset)
            emitted.extend(lines)
            # polling again with nothing new produces nothing
            again, same = self._poll(content, offset)
            assert again == []
            assert same == offset
        assert emitted == ["a1", "b2", "c3", "d4", "e5"]
        assert offset == len(content)
