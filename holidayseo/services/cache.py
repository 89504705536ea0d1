"""Rendered-HTML response cache.

Concurrent writers for the same key overwrite each other (last write wins);
there is no locking.  The cache is passed around as a dependency; tests
substitute their own instance with a fake clock.
"""

import time
from typing import Callable, Dict, List, NamedTuple, Optional, Protocol

NAMESPACES = ("tour", "package", "destination", "blog", "static", "holiday-deals")


def cache_key(namespace: str, identifier: str) -> str:
    """Return the namespaced key for *identifier* (e.g. ``package:rome-break``)."""
    if namespace not in NAMESPACES:
        raise ValueError(f"Unknown cache namespace '{namespace}'.")
    return f"{namespace}:{identifier}"


class CacheEntry(NamedTuple):
    key: str
    html: str
    created_at: float


class ResponseCache(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, html: str) -> None: ...


class InMemoryResponseCache:
    """Process-local cache with an optional TTL (``ttl_seconds=0`` never expires)."""

    def __init__(self, ttl_seconds: float = 300, clock: Callable[[], float] = time.monotonic):
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._ttl and self._clock() - entry.created_at > self._ttl:
            self._entries.pop(key, None)
            return None
        return entry.html

    def set(self, key: str, html: str) -> None:
        self._entries[key] = CacheEntry(key=key, html=html, created_at=self._clock())

    def invalidate(self, key: str) -> bool:
        return self._entries.pop(key, None) is not None

    def invalidate_prefix(self, prefix: str) -> int:
        """Drop every entry whose key starts with *prefix*; return how many."""
        doomed = [k for k in self._entries if k.startswith(prefix)]
        for key in doomed:
            del self._entries[key]
        return len(doomed)

    def clear(self) -> None:
        self._entries.clear()

    def stats(self) -> Dict[str, object]:
        keys: List[str] = sorted(self._entries)
        return {"size": len(keys), "keys": keys}
