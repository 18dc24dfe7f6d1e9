# services/ttl_cache.py
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

ONE_DAY_SECONDS = 24 * 60 * 60


@dataclass
class CacheEntry:
    data: Any
    fetched_at: float


class TTLCache:
    """
    Process-lifetime map of key -> (payload, fetched_at).

    An entry is served only while now - fetched_at < ttl. Expired entries
    stay in the map until the next successful refresh overwrites them.
    """

    def __init__(self, ttl_seconds: float = ONE_DAY_SECONDS, clock: Callable[[], float] = time.time):
        self.ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def now(self) -> float:
        return self._clock()

    def get(self, key: str) -> Optional[Any]:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
        if entry is None or now - entry.fetched_at >= self.ttl_seconds:
            return None
        return entry.data

    def set(self, key: str, data: Any, fetched_at: Optional[float] = None) -> None:
        entry = CacheEntry(data=data, fetched_at=self._clock() if fetched_at is None else fetched_at)
        with self._lock:
            self._entries[key] = entry

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
