"""Resolving and replacing inclusive line ranges named by two references."""

from dataclasses import dataclass

from hashline.annotator import detect_line_ending
from hashline.errors import InvalidRangeError
from hashline.references import parse_hash_ref
from hashline.verify import verify_hash


@dataclass(frozen=True)
class ResolvedRange:
    start_line: int
    end_line: int
    lines: list[str]
    content: str


def to_lf(text: str) -> str:
    return text.replace("\r\n", "\n")


def restore_line_ending(text: str, line_ending: str) -> str:
    if line_ending == "\r\n":
        return text.replace("\n", "\r\n")
    return text


def resolve_range(
    start_ref: str,
    end_ref: str,
    content: str,
    hash_length: int | None = None,
) -> ResolvedRange:
    """Resolve ``start_ref``..``end_ref`` (inclusive) against *content*.

    Both endpoints are verified independently against a single split of the
    document.

    Raises:
        InvalidReferenceError: either reference is malformed.
        InvalidRangeError: the start line is after the end line.
        OutOfRangeError / StaleReferenceError: an endpoint failed to verify;
            the message says which one.
    """
    start = parse_hash_ref(start_ref)
    end = parse_hash_ref(end_ref)
    if start.line > end.line:
        raise InvalidRangeError(start.line, end.line)

    line_ending = detect_line_ending(content)
    normalized = to_lf(content)
    lines = normalized.split("\n")

    verify_hash(start.line, start.hash, normalized, hash_length, lines).raise_for_status(
        "start"
    )
    verify_hash(end.line, end.hash, normalized, hash_length, lines).raise_for_status(
        "end"
    )

    range_lines = lines[start.line - 1 : end.line]
    return ResolvedRange(
        start_line=start.line,
        end_line=end.line,
        lines=range_lines,
        content=line_ending.join(range_lines),
    )


def replace_range(
    start_ref: str,
    end_ref: str,
    content: str,
    replacement: str,
    hash_length: int | None = None,
) -> str:
    """Return *content* with the verified range swapped for *replacement*.

    An empty *replacement* leaves a single empty line where the range was.
    """
    line_ending = detect_line_ending(content)
    normalized = to_lf(content)
    resolved = resolve_range(start_ref, end_ref, normalized, hash_length)
    lines = normalized.split("\n")
    lines[resolved.start_line - 1 : resolved.end_line] = to_lf(replacement).split("\n")
    return restore_line_ending("\n".join(lines), line_ending)
