"""In-process key-value store used when Redis is disabled or unreachable."""

from asyncio import Lock
from collections import OrderedDict
from logging import getLogger
from time import time

from app.configs import file_logger

logger = file_logger(getLogger(__name__))


class MemoryClient:
    """
    Async dictionary with per-key expiry that mimics the RedisClient surface.

    Expired entries are dropped lazily when touched. Once ``max_entries`` is
    reached the least recently used entry is evicted to make room.
    """

    DEFAULT_MAX_ENTRIES: int = 10_000

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self._data: OrderedDict[str, str] = OrderedDict()
        self._expires_at: dict[str, float] = {}
        self._max_entries = max_entries
        self._lock = Lock()
        self.is_connected: bool = True

    def _expired(self, key: str) -> bool:
        deadline = self._expires_at.get(key)
        return deadline is not None and time() >= deadline

    def _drop(self, key: str) -> bool:
        self._expires_at.pop(key, None)
        return self._data.pop(key, None) is not None

    def _live(self, key: str) -> bool:
        """Return True when the key exists, evicting it first if it expired."""
        if self._expired(key):
            self._drop(key)
            return False
        return key in self._data

    async def get(self, key: str) -> str | None:
        async with self._lock:
            if not self._live(key):
                return None
            self._data.move_to_end(key)
            return self._data[key]

    async def set(self, key: str, value: str, ex: int | None = None) -> bool:
        """Store a value. Like Redis SET, a write without ``ex`` clears the expiry."""
        async with self._lock:
            if key not in self._data:
                while len(self._data) >= self._max_entries:
                    oldest, _ = self._data.popitem(last=False)
                    self._expires_at.pop(oldest, None)
                    logger.debug(f"Evicted {oldest} from memory cache")
            self._data[key] = value
            self._data.move_to_end(key)
            if ex:
                self._expires_at[key] = time() + ex
            else:
                self._expires_at.pop(key, None)
            return True

    async def delete(self, *keys: str) -> int:
        async with self._lock:
            return sum(self._drop(key) for key in keys)

    async def exists(self, *keys: str) -> int:
        async with self._lock:
            return sum(self._live(key) for key in keys)

    async def ttl(self, key: str) -> int:
        async with self._lock:
            if not self._live(key):
                return -2
            if key not in self._expires_at:
                return -1
            return max(int(self._expires_at[key] - time()), 0)

    async def ping(self) -> bool:
        return self.is_connected

    async def info(self) -> dict[str, str | int]:
        async with self._lock:
            return {
                "server": "In-Memory Cache",
                "total_keys": len(self._data),
                "max_entries": self._max_entries,
            }

    async def flush_all(self) -> bool:
        async with self._lock:
            self._data.clear()
            self._expires_at.clear()
            return True

    async def close(self) -> None:
        async with self._lock:
            self.is_connected = False
