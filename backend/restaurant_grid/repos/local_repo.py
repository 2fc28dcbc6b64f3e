"""
Local file-based cache store.
Each entry is a JSON file under the cache directory.
"""
import json
import logging
import time
from pathlib import Path
from typing import Any, Optional

from restaurant_grid.core.logger import logs
from restaurant_grid.repos.base_repo import CacheStore, Clock


class LocalCacheStore(CacheStore):
    """Cache store backed by JSON files instead of MongoDB."""

    def __init__(self, cache_dir: str | Path = "data/cache", clock: Clock = time.time):
        super().__init__(clock)
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        logs.log(logging.INFO, f"Local file cache initialized at {self.cache_dir}")

    def _get_cache_file(self, cache_key: str) -> Path:
        """Get the file path for cached data."""
        # Sanitize cache key for filename
        safe_key = cache_key.replace(":", "_").replace("/", "_")
        return self.cache_dir / f"{safe_key}.json"

    async def get(self, key: str) -> Optional[Any]:
        cache_file = self._get_cache_file(key)
        if not cache_file.exists():
            return None

        try:
            with open(cache_file, 'r', encoding="utf-8") as f:
                cached = json.load(f)
            value = cached["value"]
            expired = self.clock() >= cached["expires_at"]
        except Exception as e:
            # Unreadable or malformed entries count as a miss and get overwritten
            logs.log(logging.ERROR, f"Failed to read cache entry {key}: {e!r}")
            return None

        if expired:
            cache_file.unlink(missing_ok=True)  # Delete expired cache
            return None

        return value

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        cache_file = self._get_cache_file(key)
        cached = {
            "key": key,
            "value": value,
            "expires_at": self.clock() + ttl_seconds,
        }
        try:
            with open(cache_file, 'w', encoding="utf-8") as f:
                json.dump(cached, f, ensure_ascii=False, indent=2)
        except OSError as e:
            # A failed write only costs a future cache miss
            logs.log(logging.ERROR, f"Failed to write cache entry {key}: {str(e)}")
