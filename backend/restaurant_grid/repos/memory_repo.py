import time
from typing import Any, Optional

from restaurant_grid.repos.base_repo import CacheStore, Clock


class MemoryCacheStore(CacheStore):
    """Process-local cache. Entries are dropped lazily once expired."""

    def __init__(self, clock: Clock = time.time):
        super().__init__(clock)
        self._entries: dict[str, tuple[float, Any]] = {}

    async def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        if self.clock() >= expires_at:
            self._entries.pop(key, None)
            return None
        return value

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        self._entries[key] = (self.clock() + ttl_seconds, value)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
