"""In-process response cache with per-entry expiry."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Any
    created_at: float


def make_key(kind: str, latitude: float, longitude: float, precision: int = 4) -> str:
    """Build a cache key from an endpoint name and rounded coordinates."""
    return f"{kind}-{latitude:.{precision}f}-{longitude:.{precision}f}"


class ResponseCache:
    """Keep upstream responses around for a short time so repeat lookups skip the fetch.

    Stale entries are not purged; they read as a miss until a new ``put`` replaces
    them. A miss is reported as ``None``, so ``None`` payloads should not be stored.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
        if entry is None:
            LOGGER.debug("Cache miss for %s", key)
            return None
        if self._clock() - entry.created_at >= self.ttl_seconds:
            LOGGER.debug("Cache entry for %s is stale", key)
            return None
        LOGGER.debug("Cache hit for %s", key)
        return entry.payload

    def put(self, key: str, payload: Any) -> CacheEntry:
        entry = CacheEntry(key=key, payload=payload, created_at=self._clock())
        with self._lock:
            self._entries[key] = entry
        return entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
