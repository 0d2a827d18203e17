"""Host-side wiring: tag file-read tool output, strip tags from edit args.

Nothing in the core engine depends on this module. It is the glue an agent
runtime calls around its tool executions:

- ``after_tool_call`` annotates the output of file-reading tools so the
  model sees ``#HL <line>:<hash>|`` references.
- ``before_tool_call`` removes any tags the model copied into the content
  arguments of file-editing tools.
"""

import logging
from collections import OrderedDict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from hashline.annotator import DEFAULT_PREFIX, Prefix, strip_hashes
from hashline.instance import Hashline

logger = logging.getLogger(__name__)

FILE_READ_TOOLS: tuple[str, ...] = ("read", "file_read", "read_file", "cat", "view")
FILE_EDIT_TOOLS: tuple[str, ...] = (
    "write",
    "file_write",
    "file_edit",
    "edit",
    "edit_file",
    "patch",
    "apply_patch",
    "multiedit",
    "batch",
)
WRITE_INDICATORS: tuple[str, ...] = (
    "write",
    "edit",
    "patch",
    "execute",
    "run",
    "command",
    "shell",
    "bash",
)
PATH_KEYS: tuple[str, ...] = ("path", "file", "filePath")

CONTENT_FIELDS = frozenset(
    {
        "content",
        "new_content",
        "old_content",
        "old_string",
        "new_string",
        "replacement",
        "text",
        "diff",
        "patch",
        "patchText",
        "body",
    }
)

MAX_TRACKED_CALLS = 10_000


def _name_matches(tool_name: str, names: Iterable[str]) -> bool:
    """Exact match, or dotted-suffix match for namespaced tools (``mcp.read``)."""
    lower = tool_name.lower()
    return any(lower == name or lower.endswith(f".{name}") for name in names)


@dataclass(frozen=True)
class ToolClassifier:
    """Decides which tool calls carry file content.

    A tool is a file reader when its name is on ``read_tools`` or, failing
    that, when its arguments hold a string path and its name contains none
    of ``write_indicators``.
    """

    read_tools: tuple[str, ...] = FILE_READ_TOOLS
    edit_tools: tuple[str, ...] = FILE_EDIT_TOOLS
    write_indicators: tuple[str, ...] = WRITE_INDICATORS
    path_keys: tuple[str, ...] = PATH_KEYS

    def extract_path(self, args: Mapping[str, Any] | None) -> str | None:
        if not isinstance(args, Mapping):
            return None
        for key in self.path_keys:
            value = args.get(key)
            if isinstance(value, str):
                return value
        return None

    def is_file_read(self, tool_name: str, args: Mapping[str, Any] | None = None) -> bool:
        if _name_matches(tool_name, self.read_tools):
            return True
        if self.extract_path(args) is None:
            return False
        lower = tool_name.lower()
        return not any(word in lower for word in self.write_indicators)

    def is_file_edit(self, tool_name: str) -> bool:
        return _name_matches(tool_name, self.edit_tools)


def strip_hashes_from_args(
    args: Mapping[str, Any],
    prefix: Prefix = DEFAULT_PREFIX,
    content_fields: frozenset[str] = CONTENT_FIELDS,
) -> dict[str, Any]:
    """Return a copy of *args* with tags stripped from every content field.

    Nested mappings and lists of mappings (batch / multi-edit payloads) are
    walked recursively. *args* itself is never modified.
    """
    result: dict[str, Any] = {}
    for key, value in args.items():
        if isinstance(value, str) and key in content_fields:
            result[key] = strip_hashes(value, prefix)
        elif isinstance(value, Mapping):
            result[key] = strip_hashes_from_args(value, prefix, content_fields)
        elif isinstance(value, list):
            result[key] = [
                strip_hashes_from_args(item, prefix, content_fields)
                if isinstance(item, Mapping)
                else item
                for item in value
            ]
        else:
            result[key] = value
    return result


class BoundedIdSet:
    """Set of recent call ids; the oldest id is dropped once full."""

    def __init__(self, max_size: int = MAX_TRACKED_CALLS):
        self.max_size = max_size
        self._ids: OrderedDict[str, None] = OrderedDict()

    def add(self, value: str) -> bool:
        """Record *value*. Returns ``False`` if it was already present."""
        if value in self._ids:
            return False
        if len(self._ids) >= self.max_size:
            self._ids.popitem(last=False)
        self._ids[value] = None
        return True

    def __contains__(self, value: object) -> bool:
        return value in self._ids

    def __len__(self) -> int:
        return len(self._ids)


class HashlineToolHooks:
    """Before/after tool-call hooks bound to one :class:`Hashline` instance."""

    def __init__(
        self,
        hashline: Hashline,
        classifier: ToolClassifier | None = None,
        max_tracked_calls: int = MAX_TRACKED_CALLS,
    ):
        self.hashline = hashline
        self.classifier = classifier or ToolClassifier()
        self._seen_after = BoundedIdSet(max_tracked_calls)
        self._seen_before = BoundedIdSet(max_tracked_calls)

    def _trace(self, msg: str, *args: Any) -> None:
        # Per-call tracing is opt-in; logger levels stay with the host.
        if self.hashline.config.debug:
            logger.debug(msg, *args)

    def after_tool_call(
        self,
        tool_name: str,
        args: Mapping[str, Any] | None,
        output: Any,
        call_id: str | None = None,
    ) -> Any:
        """Return *output* tagged when it is readable file content, else unchanged."""
        if call_id and not self._seen_after.add(call_id):
            self._trace("Skipped %s: duplicate call id %s", tool_name, call_id)
            return output
        if not self.classifier.is_file_read(tool_name, args):
            self._trace("Skipped %s: not a file-read tool", tool_name)
            return output
        if not isinstance(output, str) or not output:
            self._trace("Skipped %s: no string output", tool_name)
            return output
        if self.hashline.exceeds_max_size(output):
            self._trace("Skipped %s: output over max_file_size", tool_name)
            return output

        file_path = self.classifier.extract_path(args)
        if file_path is not None and self.hashline.should_exclude(file_path):
            self._trace("Skipped %s: excluded path %s", tool_name, file_path)
            return output

        annotated = self.hashline.format(output, key=file_path)
        self._trace(
            "Annotated %s (%d lines)", file_path or tool_name, output.count("\n") + 1
        )
        return annotated

    def before_tool_call(
        self,
        tool_name: str,
        args: Mapping[str, Any] | None,
        call_id: str | None = None,
    ) -> Any:
        """Return edit-tool *args* with tags stripped; other args pass through."""
        if call_id and not self._seen_before.add(call_id):
            return args
        if not self.classifier.is_file_edit(tool_name):
            return args
        if not isinstance(args, Mapping):
            return args
        return strip_hashes_from_args(args, self.hashline.config.prefix)
