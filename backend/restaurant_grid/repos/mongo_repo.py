from motor.motor_asyncio import AsyncIOMotorDatabase
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
import time

from restaurant_grid.repos.base_repo import CacheStore, Clock

class MongoCacheStore(CacheStore):
    def __init__(self, db: AsyncIOMotorDatabase, clock: Clock = time.time):
        super().__init__(clock)
        self.collection = db["cache"]

    def _now(self) -> datetime:
        return datetime.fromtimestamp(self.clock(), tz=timezone.utc)

    async def get(self, key: str) -> Optional[Any]:
        """
        Finds the entry for this key that has not yet expired.
        """
        doc = await self.collection.find_one({
            "_id": key,
            "expires_at": {"$gt": self._now()}
        })
        if doc is None:
            return None
        return doc["value"]

    async def put(self, key: str, value: Any, ttl_seconds: int) -> None:
        """
        Upserts (Update or Insert) the entry with a fresh expiry.
        """
        await self.collection.update_one(
            {"_id": key},
            {
                "$set": {
                    "value": value,
                    "expires_at": self._now() + timedelta(seconds=ttl_seconds)
                }
            },
            upsert=True
        )
