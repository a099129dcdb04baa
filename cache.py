import threading
from typing import Optional
from cachetools import TTLCache
from models import CacheEntry

DEFAULT_TTL_SECONDS = 300  # 5 minutes
DEFAULT_MAXSIZE = 1024


def normalize_key(query: str) -> str:
    return query.strip().lower()


class ResponseCache:
    """
    Formatted responses keyed by normalized query. Entries expire a fixed
    interval after insertion; once maxsize is reached the least recently
    used entries are dropped first.
    """

    def __init__(self, ttl: float = DEFAULT_TTL_SECONDS, maxsize: int = DEFAULT_MAXSIZE, timer=None):
        kwargs = {"maxsize": maxsize, "ttl": ttl}
        if timer is not None:
            kwargs["timer"] = timer
        self._entries = TTLCache(**kwargs)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[key] = entry

    def expire(self) -> None:
        """Drop every entry whose lifetime has elapsed."""
        with self._lock:
            self._entries.expire()

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
