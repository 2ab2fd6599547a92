# ============================================================================
# FILE: app/core/cache.py
# ============================================================================
import redis
import json
from typing import Optional, Any, Callable
from app.config import settings
import logging

logger = logging.getLogger(__name__)

class RedisCache:
    """JSON cache for catalog responses, backed by Redis when it is reachable"""

    def __init__(self, url: str = None, enabled: bool = None, prefix: str = "catalog"):
        self.prefix = prefix
        self.redis_client = None

        if enabled is None:
            enabled = settings.CACHE_ENABLED
        if not enabled:
            logger.info("Response cache disabled by configuration")
            return

        try:
            self.redis_client = redis.from_url(url or settings.REDIS_URL, decode_responses=True)
            self.redis_client.ping()
            logger.info("Redis connection established")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")
            self.redis_client = None

    @property
    def available(self) -> bool:
        return self.redis_client is not None

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def set_cache(self, key: str, value: Any, expire: int = None) -> bool:
        """Set a cache value with optional expiration"""
        if not self.redis_client:
            return False

        try:
            serialized = json.dumps(value, default=str)
            if expire:
                self.redis_client.setex(self._key(key), expire, serialized)
            else:
                self.redis_client.set(self._key(key), serialized)
            return True
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Cache set error: {e}")
            return False

    def get_cache(self, key: str) -> Optional[Any]:
        """Get a cache value"""
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(self._key(key))
            if value:
                return json.loads(value)
            return None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"Cache get error: {e}")
            return None

    def cached(self, key: str, loader: Callable[[], Any], expire: int = None) -> Any:
        """
        Return the cached value for `key`, or call `loader` and cache its result
        Empty results (None, [], {}) are never cached so a catalog outage
        does not stick around for the whole expiry window
        """
        hit = self.get_cache(key)
        if hit is not None:
            logger.debug(f"Cache hit: {key}")
            return hit

        value = loader()
        if value:
            self.set_cache(key, value, expire or settings.CACHE_EXPIRE_SECONDS)
        return value

# Singleton instance
cache = RedisCache()
