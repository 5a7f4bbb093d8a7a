"""Response caches keyed by request URL."""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional, Protocol


class ResponseCache(Protocol):
    """Minimal cache capability used by the HTTP clients."""

    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def has(self, key: str) -> bool: ...


class MemoryCache:
    """In-memory cache with an optional time-to-live.

    ``ttl=None`` keeps entries for the lifetime of the process.
    """

    def __init__(
        self,
        ttl: Optional[float] = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        cached = self._entries.get(key)
        if cached is None:
            return None
        stored_at, value = cached
        if self.ttl is not None and self._clock() - stored_at >= self.ttl:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
