import threading
from collections import OrderedDict
from dataclasses import dataclass
from time import monotonic
from typing import Any, Callable


@dataclass
class _CacheEntry:
    value: Any
    expires_at: float


class TtlCache:
    """Bounded in-memory cache with per-entry expiry.

    Constructed explicitly and handed to whoever needs it; there is no module-level instance.
    """

    def __init__(self, max_size: int = 1000, ttl: float = 300.0, clock: Callable[[], float] = monotonic) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        with self._lock:
            self._evict_expired()
            if key in self._entries:
                del self._entries[key]
            while len(self._entries) >= self.max_size:
                # Oldest insertion goes first.
                self._entries.popitem(last=False)
            self._entries[key] = _CacheEntry(value=value, expires_at=self._clock() + (ttl or self.ttl))

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._evict_expired()
            return len(self._entries)

    def _evict_expired(self) -> None:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]
