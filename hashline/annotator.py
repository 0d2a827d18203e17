"""Formatting documents with hashline tags and stripping them back off.

Example output (default ``#HL `` prefix)::

    #HL 1:a3f|def hello():
    #HL 2:f1c|    return "world"

Lines are split on ``\\n`` only. A ``\\r`` belonging to a CRLF ending stays
attached to its line and is ignored by the hash (trailing whitespace), so
tagging and stripping preserve line endings byte for byte, including mixed
ones.
"""

import logging
import re
from functools import lru_cache
from typing import Literal

from hashline.hasher import (
    MAX_HASH_LENGTH,
    MIN_HASH_LENGTH,
    compute_line_hash,
    get_adaptive_hash_length,
)

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "#HL "

Prefix = str | Literal[False] | None


def resolve_prefix(prefix: Prefix) -> str:
    """``False``/``None`` disable the prefix; any string is used verbatim."""
    if prefix is False or prefix is None:
        return ""
    return prefix


def detect_line_ending(content: str) -> str:
    """Return ``"\\r\\n"`` if any CRLF is present in *content*, else ``"\\n"``."""
    return "\r\n" if "\r\n" in content else "\n"


def get_byte_length(content: str) -> int:
    """UTF-8 byte length of *content* (multi-byte characters counted fully)."""
    return len(content.encode("utf-8", errors="surrogatepass"))


def effective_hash_length(line_count: int, hash_length: int | None = None) -> int:
    """An explicit length wins when it is >= 3, otherwise adapt to *line_count*."""
    if hash_length and hash_length >= MIN_HASH_LENGTH:
        return hash_length
    return get_adaptive_hash_length(line_count)


def format_file_with_hashes(
    content: str,
    hash_length: int | None = None,
    prefix: Prefix = DEFAULT_PREFIX,
) -> str:
    """Tag every line of *content* as ``<prefix><n>:<hash>|<line>``.

    Args:
        content: Raw document text.
        hash_length: Override hash width (3-8). ``None``/``0`` = adaptive.
        prefix: Tag prefix, or ``False`` for bare ``<n>:<hash>|`` tags.

    A line whose hash was already used earlier in the same document is
    rehashed one character wider (capped at 8). Only that line widens.
    """
    lines = content.split("\n")
    length = effective_hash_length(len(lines), hash_length)
    longer = min(length + 1, MAX_HASH_LENGTH)
    pfx = resolve_prefix(prefix)

    seen: set[str] = set()
    parts: list[str] = []
    collisions = 0
    for idx, line in enumerate(lines):
        h = compute_line_hash(idx, line, length)
        if h in seen:
            collisions += 1
            h = compute_line_hash(idx, line, longer)
        else:
            seen.add(h)
        parts.append(f"{pfx}{idx + 1}:{h}|{line}")

    if collisions:
        logger.debug(
            "Widened %d colliding hash(es) to %d chars across %d lines",
            collisions,
            longer,
            len(lines),
        )
    return "\n".join(parts)


@lru_cache(maxsize=32)
def _strip_pattern(prefix: str) -> re.Pattern[str]:
    # Optional leading patch marker (+, -, space) is captured and kept.
    return re.compile(rf"^([+ \-])?{re.escape(prefix)}[0-9]+:[0-9a-f]{{2,8}}\|")


def strip_hashes(content: str, prefix: Prefix = DEFAULT_PREFIX) -> str:
    """Remove hashline tags from *content*, recovering the original text.

    Lines without a leading tag are returned unchanged. Unified-diff markers
    in front of a tag (``+#HL 3:abc|x``) survive as ``+x``.
    """
    pattern = _strip_pattern(resolve_prefix(prefix))
    out: list[str] = []
    for line in content.split("\n"):
        match = pattern.match(line)
        if match:
            out.append((match.group(1) or "") + line[match.end() :])
        else:
            out.append(line)
    return "\n".join(out)
