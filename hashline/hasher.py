"""Line hashing.

Each line's tag is derived from its 0-based index and its content with
trailing whitespace removed, so indentation changes are detected while
trailing-space noise is not.
"""

from functools import lru_cache

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193
_UINT32 = 0xFFFFFFFF

MIN_HASH_LENGTH = 3
MAX_HASH_LENGTH = 8
ADAPTIVE_THRESHOLD = 4096


def fnv1a_hash(text: str) -> int:
    """Return the 32-bit FNV-1a hash of *text* over its UTF-16 code units.

    Characters outside the BMP contribute both surrogate halves, so tags
    agree with hosts that index strings by UTF-16 code unit.
    """
    data = text.encode("utf-16-le", errors="surrogatepass")
    h = FNV_OFFSET_BASIS
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * FNV_PRIME) & _UINT32
    return h


@lru_cache(maxsize=None)
def _modulus(length: int) -> int:
    return 16**length


def get_adaptive_hash_length(line_count: int) -> int:
    """Pick a hash width for a document of *line_count* lines.

    - <=4096 lines -> 3 hex chars (4096 values)
    - >4096 lines  -> 4 hex chars (65536 values)
    """
    if line_count <= ADAPTIVE_THRESHOLD:
        return 3
    return 4


def compute_line_hash(index: int, content: str, length: int = 3) -> str:
    """Return the *length*-char lowercase hex tag for line *index* (0-based)."""
    raw = fnv1a_hash(f"{index}:{content.rstrip()}")
    return format(raw % _modulus(length), "x").zfill(length)
