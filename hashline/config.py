"""Hashline configuration.

Settings come from a plain mapping (already loaded by the host) or from
environment variables; defaults cover everything else.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from hashline.annotator import DEFAULT_PREFIX, Prefix
from hashline.cache import DEFAULT_CACHE_SIZE
from hashline.hasher import MAX_HASH_LENGTH, MIN_HASH_LENGTH
from hashline.path_filter import DEFAULT_EXCLUDE_PATTERNS

DEFAULT_MAX_FILE_SIZE = 1_048_576  # 1 MB

_TRUTHY = ("true", "1", "yes")

# camelCase spellings accepted by from_dict
_ALIASES = {
    "maxFileSize": "max_file_size",
    "hashLength": "hash_length",
    "cacheSize": "cache_size",
}


@dataclass(frozen=True)
class HashlineConfig:
    """Immutable hashline settings.

    Attributes:
        exclude: Glob patterns whose paths are never tagged.
        max_file_size: Skip tagging above this many UTF-8 bytes (0 = no limit).
        hash_length: Fixed hash width 3-8, or 0 for adaptive.
        cache_size: Number of documents kept in the annotation cache.
        prefix: Tag prefix, or ``False`` for bare ``<n>:<hash>|`` tags.
        debug: Emit per-call trace records from the tool hooks. Logger
            levels and handlers are left to the host.
    """

    exclude: tuple[str, ...] = field(default=DEFAULT_EXCLUDE_PATTERNS)
    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    hash_length: int = 0
    cache_size: int = DEFAULT_CACHE_SIZE
    prefix: Prefix = DEFAULT_PREFIX
    debug: bool = False

    def __post_init__(self):
        # Lists from JSON-ish sources are frozen into tuples.
        object.__setattr__(self, "exclude", tuple(self.exclude))
        if self.prefix is None:
            object.__setattr__(self, "prefix", False)

        if self.hash_length != 0 and not (
            MIN_HASH_LENGTH <= self.hash_length <= MAX_HASH_LENGTH
        ):
            raise ValueError(
                f"hash_length must be 0 (adaptive) or between {MIN_HASH_LENGTH} "
                f"and {MAX_HASH_LENGTH}, got: {self.hash_length}"
            )
        if self.cache_size < 1:
            raise ValueError(f"cache_size must be >= 1, got: {self.cache_size}")
        if self.max_file_size < 0:
            raise ValueError(f"max_file_size must be >= 0, got: {self.max_file_size}")
        if self.prefix is not False and not isinstance(self.prefix, str):
            raise ValueError(f"prefix must be a string or False, got: {self.prefix!r}")

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "HashlineConfig":
        """Build a config from a mapping; unknown keys are ignored."""
        known = {f for f in cls.__dataclass_fields__}
        values: dict[str, Any] = {}
        for key, value in config_dict.items():
            name = _ALIASES.get(key, key)
            if name in known and value is not None:
                values[name] = value
        return cls(**values)

    @staticmethod
    def _safe_int(value: str | None, default: int) -> int:
        """Parse an integer from string, returning *default* on failure."""
        try:
            return int(value) if value is not None else default
        except (ValueError, TypeError):
            return default

    @classmethod
    def from_env(cls) -> "HashlineConfig":
        """Build config from environment variables.

        Environment variables:
            HASHLINE_EXCLUDE:       comma-separated globs (default: built-in list)
            HASHLINE_MAX_FILE_SIZE: bytes, 0 disables the limit (default: 1048576)
            HASHLINE_HASH_LENGTH:   3-8, or 0 for adaptive (default: 0)
            HASHLINE_CACHE_SIZE:    cached documents (default: 100)
            HASHLINE_PREFIX:        tag prefix; "false" or "" disables (default: "#HL ")
            HASHLINE_DEBUG:         "true" / "false" (default: "false")
        """
        exclude_env = os.getenv("HASHLINE_EXCLUDE")
        exclude = (
            tuple(p.strip() for p in exclude_env.split(",") if p.strip())
            if exclude_env is not None
            else DEFAULT_EXCLUDE_PATTERNS
        )
        prefix_env = os.getenv("HASHLINE_PREFIX")
        if prefix_env is None:
            prefix: Prefix = DEFAULT_PREFIX
        elif prefix_env == "" or prefix_env.lower() == "false":
            prefix = False
        else:
            prefix = prefix_env

        return cls(
            exclude=exclude,
            max_file_size=cls._safe_int(
                os.getenv("HASHLINE_MAX_FILE_SIZE"), DEFAULT_MAX_FILE_SIZE
            ),
            hash_length=cls._safe_int(os.getenv("HASHLINE_HASH_LENGTH"), 0),
            cache_size=cls._safe_int(
                os.getenv("HASHLINE_CACHE_SIZE"), DEFAULT_CACHE_SIZE
            ),
            prefix=prefix,
            debug=os.getenv("HASHLINE_DEBUG", "false").lower() in _TRUTHY,
        )
