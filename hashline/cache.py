"""Bounded LRU cache of annotated document text, keyed by caller identity."""

import logging
import threading
from collections import OrderedDict
from typing import NamedTuple

from hashline.hasher import fnv1a_hash

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 100


class CacheEntry(NamedTuple):
    fingerprint: int
    annotated: str


class HashlineCache:
    """LRU map of ``key -> (content fingerprint, annotated text)``.

    A lookup whose content no longer matches the stored fingerprint is a
    miss and drops the entry. Reads and writes both refresh recency.
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE):
        if max_size < 1:
            raise ValueError(f"Cache size must be >= 1, got: {max_size}")
        self.max_size = max_size
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str, content: str) -> str | None:
        """Return cached annotated text for *key*, or ``None`` if missing/stale."""
        fingerprint = fnv1a_hash(content)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.fingerprint != fingerprint:
                del self._entries[key]
                logger.debug("Cache entry for %s is stale, dropped", key)
                return None
            self._entries.move_to_end(key)
            return entry.annotated

    def set(self, key: str, content: str, annotated: str) -> None:
        """Store *annotated* for *key*, evicting the oldest entry when full."""
        entry = CacheEntry(fnv1a_hash(content), annotated)
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            elif len(self._entries) >= self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache full (%d), evicted %s", self.max_size, evicted)
            self._entries[key] = entry

    def invalidate(self, key: str) -> None:
        """Remove *key*; missing keys are ignored."""
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    @property
    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
