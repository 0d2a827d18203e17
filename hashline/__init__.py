"""Content-addressable line references for safe, machine-driven text edits."""

from hashline.annotator import (
    DEFAULT_PREFIX,
    detect_line_ending,
    format_file_with_hashes,
    get_byte_length,
    strip_hashes,
)
from hashline.cache import HashlineCache
from hashline.config import HashlineConfig
from hashline.edits import HashEdit, HashEditResult, apply_hash_edit
from hashline.errors import (
    HashlineError,
    InvalidRangeError,
    InvalidReferenceError,
    MissingReplacementError,
    OutOfRangeError,
    StaleReferenceError,
)
from hashline.hasher import compute_line_hash, fnv1a_hash, get_adaptive_hash_length
from hashline.instance import Hashline
from hashline.path_filter import DEFAULT_EXCLUDE_PATTERNS, matches_glob, should_exclude
from hashline.ranges import ResolvedRange, replace_range, resolve_range
from hashline.references import (
    HashRef,
    build_hash_map,
    normalize_hash_ref,
    parse_hash_ref,
)
from hashline.verify import VerifyResult, verify_hash

__all__ = [
    "DEFAULT_EXCLUDE_PATTERNS",
    "DEFAULT_PREFIX",
    "HashEdit",
    "HashEditResult",
    "HashRef",
    "Hashline",
    "HashlineCache",
    "HashlineConfig",
    "HashlineError",
    "InvalidRangeError",
    "InvalidReferenceError",
    "MissingReplacementError",
    "OutOfRangeError",
    "ResolvedRange",
    "StaleReferenceError",
    "VerifyResult",
    "apply_hash_edit",
    "build_hash_map",
    "compute_line_hash",
    "detect_line_ending",
    "fnv1a_hash",
    "format_file_with_hashes",
    "get_adaptive_hash_length",
    "get_byte_length",
    "matches_glob",
    "normalize_hash_ref",
    "parse_hash_ref",
    "replace_range",
    "resolve_range",
    "should_exclude",
    "strip_hashes",
    "verify_hash",
]
