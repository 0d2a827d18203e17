"""Tests for hashline.annotator: tagging, stripping, line endings."""

import pytest

from hashline.annotator import (
    DEFAULT_PREFIX,
    detect_line_ending,
    format_file_with_hashes,
    get_byte_length,
    strip_hashes,
)

SAMPLE = "line one\nline two\nline three"

ROUND_TRIP_DOCS = [
    "",
    "a",
    "a\n",
    "\n\n\n",
    SAMPLE,
    "def f():\n    return 1\n",
    "a\r\nb\r\n",
    "mixed\r\nendings\nhere\r\n",
    "   \n\t\n  trailing  \n",
    "#HL 1:abc|looks tagged already\n+#HL 2:abcd|so does this",
    "1:abc|bare tag lookalike",
    "unicode ✓ 日本語 😀\n",
    "x\n" * 150,
]


# ── 1. format_file_with_hashes ───────────────────────────────────────────


class TestFormatFileWithHashes:
    def test_exact_output(self):
        assert format_file_with_hashes(SAMPLE).split("\n") == [
            "#HL 1:c15|line one",
            "#HL 2:1da|line two",
            "#HL 3:15b|line three",
        ]

    def test_non_ascii_output(self):
        assert format_file_with_hashes("Привет мир\n🎉").split("\n") == [
            "#HL 1:e55|Привет мир",
            "#HL 2:a19|🎉",
        ]

    def test_prefix_disabled(self):
        out = format_file_with_hashes(SAMPLE, prefix=False)
        assert out.split("\n")[0] == "1:c15|line one"

    def test_none_prefix_disables_too(self):
        assert format_file_with_hashes("line one", prefix=None) == "1:c15|line one"

    def test_custom_prefix(self):
        out = format_file_with_hashes("line one", prefix=">> ")
        assert out == ">> 1:c15|line one"

    def test_hash_length_override(self):
        lines = format_file_with_hashes(SAMPLE, hash_length=4).split("\n")
        assert lines[0] == "#HL 1:3c15|line one"
        assert lines[1] == "#HL 2:d1da|line two"

    def test_override_below_three_falls_back_to_adaptive(self):
        assert format_file_with_hashes(SAMPLE, hash_length=2) == format_file_with_hashes(
            SAMPLE
        )

    def test_empty_document_has_one_tagged_line(self):
        out = format_file_with_hashes("")
        assert out.startswith("#HL 1:")
        assert out.endswith("|")
        assert "\n" not in out

    def test_trailing_newline_yields_empty_last_line(self):
        lines = format_file_with_hashes("a\n").split("\n")
        assert len(lines) == 2
        assert lines[1].startswith("#HL 2:")
        assert lines[1].endswith("|")

    def test_crlf_preserved(self):
        out = format_file_with_hashes("line one\r\nline two")
        assert out == "#HL 1:c15|line one\r\n#HL 2:1da|line two"

    def test_adaptive_length_for_large_files(self):
        content = "\n".join(f"row {i}" for i in range(4097))
        first = format_file_with_hashes(content).split("\n")[0]
        tag = first[len(DEFAULT_PREFIX) :].split("|", 1)[0]
        assert len(tag.split(":")[1]) == 4

    def test_collision_widens_only_the_colliding_line(self):
        # Line 101 ("x" at index 100) collides with line 37 at 3 chars.
        lines = format_file_with_hashes("\n".join(["x"] * 101)).split("\n")
        assert lines[36] == "#HL 37:51e|x"
        assert lines[100] == "#HL 101:151e|x"
        widths = {len(line.split("|")[0].split(":")[1]) for line in lines[:100]}
        assert widths == {3}


# ── 2. strip_hashes ──────────────────────────────────────────────────────


class TestStripHashes:
    def test_basic(self):
        assert strip_hashes(format_file_with_hashes(SAMPLE)) == SAMPLE

    def test_untagged_lines_pass_through(self):
        text = "plain\n#HL 2:abc|tagged\nalso plain"
        assert strip_hashes(text) == "plain\ntagged\nalso plain"

    def test_patch_markers_preserved(self):
        text = "+#HL 1:abc|added\n-#HL 2:abcd|removed\n #HL 3:ab|context"
        assert strip_hashes(text) == "+added\n-removed\n context"

    def test_other_prefix_not_stripped(self):
        assert strip_hashes(">> 1:abc|x") == ">> 1:abc|x"

    def test_uppercase_hex_not_stripped(self):
        assert strip_hashes("#HL 1:ABC|x") == "#HL 1:ABC|x"

    def test_non_ascii_digits_not_stripped(self):
        assert strip_hashes("#HL ٢:abc|x") == "#HL ٢:abc|x"

    def test_legacy_bare_format(self):
        assert strip_hashes("1:abc|x\n2:def|y", prefix=False) == "x\ny"

    def test_bare_tags_left_alone_with_default_prefix(self):
        assert strip_hashes("1:abc|x") == "1:abc|x"

    def test_only_leading_tag_removed(self):
        assert strip_hashes("#HL 1:abc|#HL 9:fff|inner") == "#HL 9:fff|inner"

    def test_prefix_with_regex_metacharacters(self):
        tagged = format_file_with_hashes("a\nb", prefix="[*] ")
        assert tagged.startswith("[*] 1:")
        assert strip_hashes(tagged, prefix="[*] ") == "a\nb"


# ── 3. round trip ────────────────────────────────────────────────────────


class TestRoundTrip:
    @pytest.mark.parametrize("content", ROUND_TRIP_DOCS)
    @pytest.mark.parametrize("length", [3, 4])
    @pytest.mark.parametrize("prefix", [DEFAULT_PREFIX, False, "// ", "+"])
    def test_strip_inverts_format(self, content, length, prefix):
        tagged = format_file_with_hashes(content, length, prefix)
        assert strip_hashes(tagged, prefix) == content


# ── 4. helpers ───────────────────────────────────────────────────────────


class TestHelpers:
    def test_detect_line_ending(self):
        assert detect_line_ending("a\nb") == "\n"
        assert detect_line_ending("a\r\nb") == "\r\n"
        assert detect_line_ending("a\nb\r\nc") == "\r\n"
        assert detect_line_ending("") == "\n"

    def test_byte_length_counts_utf8(self):
        assert get_byte_length("hello") == 5
        assert get_byte_length("héllo") == 6
        assert get_byte_length("日本") == 6
        assert get_byte_length("😀") == 4
