"""
Cache store interface shared by the memory, local file and MongoDB backends.
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional

from restaurant_grid.core.logger import logs

Clock = Callable[[], float]


class CacheStore(ABC):
    """Key/value store with per-entry TTL. Values must be JSON serializable."""

    def __init__(self, clock: Clock = time.time):
        self.clock = clock

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None when missing or expired."""
        pass

    @abstractmethod
    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        pass

    async def remember(
        self, key: str, ttl_seconds: int, producer: Callable[[], Awaitable[Any]]
    ) -> Any:
        """
        Get-or-compute. On a miss the producer is awaited and its result stored.
        A None result is handed back to the caller but never stored, so the next
        call runs the producer again.
        """
        cached = await self.get(key)
        if cached is not None:
            logs.log(logging.DEBUG, f"✓ Cache HIT for {key}")
            return cached

        logs.log(logging.DEBUG, f"✗ Cache MISS for {key}")
        value = await producer()
        if value is not None:
            await self.put(key, value, ttl_seconds)
        return value
