"""Parsing and normalising ``<line>:<hash>`` references."""

import re
from functools import lru_cache
from typing import NamedTuple

from hashline.annotator import Prefix, effective_hash_length
from hashline.errors import InvalidReferenceError
from hashline.hasher import compute_line_hash

# Applied with fullmatch; line numbers are ASCII digits only.
_REF_RE = re.compile(r"([0-9]+):([0-9a-f]{2,8})")
_PLAIN_RE = re.compile(r"([0-9]+):([0-9a-f]{2,8})", re.IGNORECASE)
# Optional prefix token (e.g. "#HL") followed by whitespace, then the tag.
_ANNOTATED_RE = re.compile(
    r"(?:[#A-Za-z0-9_]*\s+)?([0-9]+):([0-9a-f]{2,8})\|.*", re.IGNORECASE
)


@lru_cache(maxsize=32)
def _prefixed_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(
        rf"{re.escape(prefix.lstrip())}([0-9]+):([0-9a-f]{{2,8}})\|.*", re.IGNORECASE
    )


class HashRef(NamedTuple):
    """A parsed reference: 1-based line number plus its hash tag."""

    line: int
    hash: str

    def __str__(self) -> str:
        return f"{self.line}:{self.hash}"


def parse_hash_ref(ref: str) -> HashRef:
    """Parse ``"2:f1a"`` -> ``HashRef(2, "f1a")``.

    Raises:
        InvalidReferenceError: *ref* is not exactly ``<digits>:<2-8 lowercase hex>``.
    """
    match = _REF_RE.fullmatch(ref) if isinstance(ref, str) else None
    if not match:
        raise InvalidReferenceError(ref)
    return HashRef(int(match.group(1)), match.group(2))


def normalize_hash_ref(ref: str, prefix: Prefix = None) -> str:
    """Canonicalise a bare or annotated reference to ``"<line>:<hash>"``.

    Accepts ``2:F1C``, ``#HL 2:f1c|line content`` and ``2:f1c|line content``.
    When *prefix* is given, lines tagged with it (``>> 2:f1c|...``) are
    accepted too.
    """
    if not isinstance(ref, str):
        raise InvalidReferenceError(repr(ref))
    trimmed = ref.strip()
    match = _PLAIN_RE.fullmatch(trimmed) or _ANNOTATED_RE.fullmatch(trimmed)
    if not match and prefix:
        match = _prefixed_pattern(prefix).fullmatch(trimmed)
    if not match:
        raise InvalidReferenceError(
            ref,
            expected='"<line>:<hash>" or an annotated line like "#HL <line>:<hash>|..."',
        )
    return f"{int(match.group(1))}:{match.group(2).lower()}"


def build_hash_map(content: str, hash_length: int | None = None) -> dict[str, int]:
    """Map ``"<line>:<hash>"`` to its 1-based line number for every line.

    No collision widening is applied, so this is for lookup and display;
    edits must go through verification instead.
    """
    lines = content.split("\n")
    length = effective_hash_length(len(lines), hash_length)
    return {
        f"{idx + 1}:{compute_line_hash(idx, line, length)}": idx + 1
        for idx, line in enumerate(lines)
    }
