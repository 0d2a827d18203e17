"""Exceptions raised by the hashline engine.

Every error subclasses :class:`HashlineError`, which is itself a
``ValueError`` so callers that only care about "bad input" can catch that.
"""


class HashlineError(ValueError):
    """Base class for all hashline failures."""


def _with_endpoint(message: str, endpoint: str | None) -> str:
    if endpoint:
        return f"{endpoint.capitalize()} reference invalid: {message}"
    return message


class InvalidReferenceError(HashlineError):
    """Raised when a reference string is not ``<line>:<hash>`` shaped."""

    def __init__(self, ref: str, expected: str = '"<line>:<2-8 char hex>"'):
        self.ref = ref
        super().__init__(f"Invalid hash reference: {ref!r}. Expected format: {expected}")


class InvalidRangeError(HashlineError):
    """Raised when a range starts after it ends."""

    def __init__(self, start_line: int, end_line: int):
        self.start_line = start_line
        self.end_line = end_line
        super().__init__(
            f"Invalid range: start line {start_line} is after end line {end_line}"
        )


class OutOfRangeError(HashlineError):
    """Raised when a reference points past either end of the document."""

    def __init__(self, line: int, line_count: int, endpoint: str | None = None):
        self.line = line
        self.line_count = line_count
        self.endpoint = endpoint
        super().__init__(
            _with_endpoint(
                f"Line {line} is out of range (file has {line_count} lines)", endpoint
            )
        )


class StaleReferenceError(HashlineError):
    """Raised when a hashline reference doesn't match current file content."""

    def __init__(
        self,
        line: int,
        expected_hash: str,
        actual_hash: str,
        actual_content: str,
        endpoint: str | None = None,
    ):
        self.line = line
        self.expected_hash = expected_hash
        self.actual_hash = actual_hash
        self.actual_content = actual_content
        self.endpoint = endpoint
        super().__init__(
            _with_endpoint(
                f"Hash mismatch at line {line}: expected '{expected_hash}', "
                f"got '{actual_hash}' for content: {actual_content!r}. "
                "The file may have changed since it was read.",
                endpoint,
            )
        )


class MissingReplacementError(HashlineError):
    """Raised when replace/insert is requested without replacement text."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Operation {operation!r} requires 'replacement' content")
