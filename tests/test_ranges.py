"""Tests for hashline.ranges."""

import pytest

from hashline.errors import (
    InvalidRangeError,
    InvalidReferenceError,
    OutOfRangeError,
    StaleReferenceError,
)
from hashline.hasher import compute_line_hash
from hashline.ranges import replace_range, resolve_range

SAMPLE = "line one\nline two\nline three"
FIVE = "a\nb\nc\nd\ne"


def _ref(content: str, line: int) -> str:
    """Build a valid ref like '2:1da' for 1-based *line* of *content*."""
    raw = content.replace("\r\n", "\n").split("\n")[line - 1]
    return f"{line}:{compute_line_hash(line - 1, raw)}"


class TestResolveRange:
    def test_whole_document(self):
        resolved = resolve_range("1:c15", "3:15b", SAMPLE)
        assert resolved.start_line == 1
        assert resolved.end_line == 3
        assert resolved.lines == ["line one", "line two", "line three"]
        assert resolved.content == SAMPLE

    def test_single_line(self):
        resolved = resolve_range("2:1da", "2:1da", SAMPLE)
        assert resolved.lines == ["line two"]
        assert resolved.content == "line two"

    def test_crlf_content_joined_with_crlf(self):
        crlf = SAMPLE.replace("\n", "\r\n")
        resolved = resolve_range("1:c15", "2:1da", crlf)
        assert resolved.lines == ["line one", "line two"]
        assert resolved.content == "line one\r\nline two"

    def test_start_after_end(self):
        with pytest.raises(InvalidRangeError, match="start line 3 is after end line 1"):
            resolve_range("3:15b", "1:c15", SAMPLE)

    def test_stale_start_named(self):
        with pytest.raises(StaleReferenceError, match="^Start reference invalid"):
            resolve_range("1:fff", "3:15b", SAMPLE)

    def test_stale_end_named(self):
        with pytest.raises(StaleReferenceError, match="^End reference invalid") as exc_info:
            resolve_range("1:c15", "3:fff", SAMPLE)
        assert exc_info.value.endpoint == "end"
        assert exc_info.value.actual_hash == "15b"

    def test_end_out_of_range(self):
        with pytest.raises(OutOfRangeError, match="^End reference invalid: Line 9"):
            resolve_range("1:c15", "9:abc", SAMPLE)

    def test_malformed_reference(self):
        with pytest.raises(InvalidReferenceError):
            resolve_range("one", "3:15b", SAMPLE)

    def test_endpoints_use_their_own_lengths(self):
        resolved = resolve_range("1:3c15", "2:1da", SAMPLE)
        assert resolved.lines == ["line one", "line two"]


class TestReplaceRange:
    def test_replace_middle(self):
        out = replace_range(_ref(FIVE, 2), _ref(FIVE, 4), FIVE, "X")
        assert out == "a\nX\ne"

    def test_multi_line_replacement(self):
        out = replace_range("2:1da", "2:1da", SAMPLE, "x\ny\nz")
        assert out == "line one\nx\ny\nz\nline three"

    def test_empty_replacement_leaves_blank_line(self):
        out = replace_range("2:1da", "2:1da", SAMPLE, "")
        assert out == "line one\n\nline three"

    def test_crlf_preserved(self):
        crlf = SAMPLE.replace("\n", "\r\n")
        out = replace_range("2:1da", "3:15b", crlf, "new\r\nlines")
        assert out == "line one\r\nnew\r\nlines"

    def test_stale_leaves_content_untouched(self):
        original = SAMPLE
        with pytest.raises(StaleReferenceError):
            replace_range("2:aaa", "2:aaa", original, "X")
        assert original == "line one\nline two\nline three"
