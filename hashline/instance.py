"""A configured hashline engine that owns its annotation cache."""

import logging
from collections.abc import Mapping
from typing import Any

from hashline.annotator import format_file_with_hashes, get_byte_length, strip_hashes
from hashline.cache import HashlineCache
from hashline.config import HashlineConfig
from hashline.edits import HashEdit, HashEditResult, apply_hash_edit
from hashline.hasher import compute_line_hash
from hashline.path_filter import should_exclude
from hashline.ranges import ResolvedRange, replace_range, resolve_range
from hashline.references import (
    HashRef,
    build_hash_map,
    normalize_hash_ref,
    parse_hash_ref,
)
from hashline.verify import VerifyResult, verify_hash

logger = logging.getLogger(__name__)


class Hashline:
    """Hashline operations bound to one :class:`HashlineConfig`.

    The configured ``hash_length`` applies when tagging documents and
    building hash maps. Verification always uses each reference's own hash
    width, so collision-widened tags stay editable.
    """

    def __init__(
        self,
        config: HashlineConfig | None = None,
        cache: HashlineCache | None = None,
    ):
        self.config = config or HashlineConfig()
        self.cache = cache if cache is not None else HashlineCache(self.config.cache_size)

    @property
    def hash_length(self) -> int | None:
        return self.config.hash_length or None

    def format(self, content: str, key: str | None = None) -> str:
        """Tag *content*; with a *key*, reuse or refresh the cached result."""
        if key is not None:
            cached = self.cache.get(key, content)
            if cached is not None:
                logger.debug("Cache hit for %s", key)
                return cached

        annotated = format_file_with_hashes(content, self.hash_length, self.config.prefix)
        if key is not None:
            self.cache.set(key, content, annotated)
        return annotated

    def strip(self, content: str) -> str:
        return strip_hashes(content, self.config.prefix)

    def compute_line_hash(self, index: int, content: str) -> str:
        return compute_line_hash(index, content, self.hash_length or 3)

    def build_hash_map(self, content: str) -> dict[str, int]:
        return build_hash_map(content, self.hash_length)

    def verify_hash(self, line_number: int, hash: str, content: str) -> VerifyResult:
        return verify_hash(line_number, hash, content)

    def resolve_range(self, start_ref: str, end_ref: str, content: str) -> ResolvedRange:
        return resolve_range(start_ref, end_ref, content)

    def replace_range(
        self, start_ref: str, end_ref: str, content: str, replacement: str
    ) -> str:
        return replace_range(start_ref, end_ref, content, replacement)

    def apply_edit(
        self, edit: HashEdit | Mapping[str, Any], content: str
    ) -> HashEditResult:
        return apply_hash_edit(edit, content, prefix=self.config.prefix)

    def parse_ref(self, ref: str) -> HashRef:
        return parse_hash_ref(ref)

    def normalize_ref(self, ref: str) -> str:
        return normalize_hash_ref(ref, self.config.prefix)

    def should_exclude(self, file_path: str) -> bool:
        return should_exclude(file_path, self.config.exclude)

    def exceeds_max_size(self, content: str) -> bool:
        """True when *content* is over the configured byte limit (0 = unlimited)."""
        limit = self.config.max_file_size
        return limit > 0 and get_byte_length(content) > limit

    def invalidate(self, *keys: str) -> None:
        """Drop every given cache key, e.g. all path spellings of one file."""
        for key in dict.fromkeys(keys):
            self.cache.invalidate(key)
