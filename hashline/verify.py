"""Checking a reference against the current document snapshot.

The recomputation width comes from the reference's own hash, not from the
document's current adaptive width, so a 3-char reference taken while a
file was small is still checkable after it grows past 4096 lines.
"""

from dataclasses import dataclass
from typing import Literal

from hashline.errors import HashlineError, OutOfRangeError, StaleReferenceError
from hashline.hasher import compute_line_hash

FailureReason = Literal["out_of_range", "stale_reference"]


@dataclass(frozen=True)
class VerifyResult:
    valid: bool
    line: int
    reason: FailureReason | None = None
    expected: str | None = None
    actual: str | None = None
    line_count: int = 0
    actual_content: str | None = None

    @property
    def message(self) -> str | None:
        error = self.to_error()
        return str(error) if error else None

    def to_error(self, endpoint: str | None = None) -> HashlineError | None:
        """Build the exception describing this failure (``None`` when valid)."""
        if self.reason == "out_of_range":
            return OutOfRangeError(self.line, self.line_count, endpoint=endpoint)
        if self.reason == "stale_reference":
            return StaleReferenceError(
                self.line,
                self.expected or "",
                self.actual or "",
                self.actual_content or "",
                endpoint=endpoint,
            )
        return None

    def raise_for_status(self, endpoint: str | None = None) -> None:
        error = self.to_error(endpoint)
        if error is not None:
            raise error


def verify_hash(
    line_number: int,
    hash: str,
    current_content: str,
    hash_length: int | None = None,
    lines: list[str] | None = None,
) -> VerifyResult:
    """Verify that line *line_number* (1-based) still hashes to *hash*.

    Args:
        line_number: 1-based line the reference names.
        hash: Expected tag from the reference.
        current_content: Current raw document text.
        hash_length: Force a recomputation width (>= 2). Defaults to ``len(hash)``.
        lines: Pre-split lines of *current_content*, to avoid splitting again.
    """
    content_lines = lines if lines is not None else current_content.split("\n")
    length = hash_length if hash_length and hash_length >= 2 else len(hash)
    line_count = len(content_lines)

    if line_number < 1 or line_number > line_count:
        return VerifyResult(
            valid=False, line=line_number, reason="out_of_range", line_count=line_count
        )

    raw = content_lines[line_number - 1]
    actual = compute_line_hash(line_number - 1, raw, length)
    if actual != hash:
        return VerifyResult(
            valid=False,
            line=line_number,
            reason="stale_reference",
            expected=hash,
            actual=actual,
            line_count=line_count,
            actual_content=raw.rstrip("\r"),
        )
    return VerifyResult(valid=True, line=line_number, line_count=line_count)
