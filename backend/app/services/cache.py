import redis.asyncio as redis
import json
import logging
from typing import Optional, Any
from datetime import datetime, date

from app.config import settings

logger = logging.getLogger(__name__)

# Keys for the public list reads served to the homepage
CATEGORIES_ALL = "categories:all"
CATEGORIES_TREE = "categories:tree"
SLIDERS_ALL = "sliders:all"
SUBCATEGORIES_ALL = "subcategories:all"


class CacheService:
    """Redis cache for public list reads. A missing Redis turns every call into a no-op."""

    def __init__(self):
        self.redis_client: Optional[redis.Redis] = None
        self.ttl = settings.cache_ttl

    async def connect(self):
        """Connect to Redis"""
        if not settings.enable_cache:
            logger.info("Caching disabled by configuration")
            return

        try:
            self.redis_client = redis.from_url(
                settings.redis_url,
                encoding="utf-8",
                decode_responses=True
            )
            await self.redis_client.ping()
            logger.info("Connected to Redis successfully")
        except Exception as e:
            logger.warning(f"Failed to connect to Redis: {e}. Caching will be disabled.")
            self.redis_client = None

    async def disconnect(self):
        if self.redis_client:
            await self.redis_client.aclose()
            self.redis_client = None

    async def get(self, key: str) -> Optional[Any]:
        if not self.redis_client:
            return None

        try:
            value = await self.redis_client.get(key)
            if value:
                return json.loads(value)
        except Exception as e:
            logger.error(f"Cache get error for {key}: {e}")
        return None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None):
        if not self.redis_client:
            return

        try:
            serialized = json.dumps(value, default=self._json_serializer)
            await self.redis_client.setex(key, ttl or self.ttl, serialized)
        except Exception as e:
            logger.error(f"Cache set error for {key}: {e}")

    @staticmethod
    def _json_serializer(obj: Any) -> Any:
        """Serialize datetime and date objects as ISO strings"""
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        raise TypeError(f"Type {type(obj)} not serializable")

    async def invalidate(self, *keys: str):
        """Drop cached entries after a write"""
        if not self.redis_client or not keys:
            return

        try:
            await self.redis_client.delete(*keys)
            logger.debug(f"Invalidated cache keys: {', '.join(keys)}")
        except Exception as e:
            logger.error(f"Cache invalidate error: {e}")


# Singleton instance
cache_service = CacheService()
