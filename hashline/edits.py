"""Hash-aware edit application.

Unlike search/replace editing, edits here are resolved by line+hash
references and verified before anything changes, so exact old-string
matching is not required. Content strings are never modified in place:
a failed edit raises and the caller still holds the untouched input.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from hashline.annotator import Prefix, detect_line_ending
from hashline.errors import InvalidRangeError, MissingReplacementError
from hashline.ranges import restore_line_ending, to_lf
from hashline.references import normalize_hash_ref, parse_hash_ref
from hashline.verify import verify_hash

logger = logging.getLogger(__name__)

HashEditOperation = Literal["replace", "delete", "insert_before", "insert_after"]

INSERT_OPERATIONS = ("insert_before", "insert_after")


class HashEdit(BaseModel):
    """A single hash-referenced edit.

    ``start_ref``/``end_ref`` may be bare (``"5:a3f"``) or copied straight
    from annotated output (``"#HL 5:a3f|const x = 1;"``). ``end_ref`` defaults
    to ``start_ref`` and is ignored by inserts.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    operation: HashEditOperation
    start_ref: str = Field(alias="startRef")
    end_ref: str | None = Field(default=None, alias="endRef")
    replacement: str | None = None


@dataclass(frozen=True)
class HashEditResult:
    operation: HashEditOperation
    start_line: int
    end_line: int
    content: str


def _coerce_edit(edit: HashEdit | Mapping[str, Any]) -> HashEdit:
    if isinstance(edit, HashEdit):
        return edit
    return HashEdit.model_validate(dict(edit))


def apply_hash_edit(
    edit: HashEdit | Mapping[str, Any],
    content: str,
    hash_length: int | None = None,
    prefix: Prefix = None,
) -> HashEditResult:
    """Apply one ``replace`` | ``delete`` | ``insert_before`` | ``insert_after``.

    Args:
        edit: A :class:`HashEdit` or a mapping that validates into one.
        content: Current raw document text.
        hash_length: Force the verification width. By default each reference
            is checked at its own hash length.
        prefix: Extra tag prefix accepted in annotated references.

    Returns:
        :class:`HashEditResult` with the resolved line span and new content,
        using the document's original line endings.

    Raises:
        InvalidReferenceError, InvalidRangeError, OutOfRangeError,
        StaleReferenceError, MissingReplacementError.
    """
    edit = _coerce_edit(edit)
    op = edit.operation
    line_ending = detect_line_ending(content)
    work = to_lf(content)
    lines = work.split("\n")

    start = parse_hash_ref(normalize_hash_ref(edit.start_ref, prefix))
    verify_hash(start.line, start.hash, work, hash_length, lines).raise_for_status(
        "start"
    )

    if op in INSERT_OPERATIONS:
        if edit.replacement is None:
            raise MissingReplacementError(op)
        at = start.line - 1 if op == "insert_before" else start.line
        new_lines = lines[:at] + to_lf(edit.replacement).split("\n") + lines[at:]
        logger.debug("%s at line %d", op, start.line)
        return HashEditResult(
            operation=op,
            start_line=start.line,
            end_line=start.line,
            content=restore_line_ending("\n".join(new_lines), line_ending),
        )

    end_ref = edit.end_ref or edit.start_ref
    end = parse_hash_ref(normalize_hash_ref(end_ref, prefix))
    if start.line > end.line:
        raise InvalidRangeError(start.line, end.line)
    verify_hash(end.line, end.hash, work, hash_length, lines).raise_for_status("end")

    if op == "delete":
        replacement_lines: list[str] = []
    elif edit.replacement is None:
        raise MissingReplacementError(op)
    else:
        replacement_lines = to_lf(edit.replacement).split("\n")

    new_lines = lines[: start.line - 1] + replacement_lines + lines[end.line :]
    logger.debug("%s lines %d-%d", op, start.line, end.line)
    return HashEditResult(
        operation=op,
        start_line=start.line,
        end_line=end.line,
        content=restore_line_ending("\n".join(new_lines), line_ending),
    )
