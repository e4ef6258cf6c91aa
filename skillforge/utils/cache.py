"""
Redis cache utility for generated questions
"""
import redis
import json
import logging
from typing import Optional, Any
from skillforge.config import settings

logger = logging.getLogger(__name__)


class CacheService:
    """Redis-based cache for raw question-generation payloads"""

    def __init__(self, url: str = None):
        try:
            self.redis_client = redis.from_url(
                url or settings.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=5
            )
            # Test connection
            self.redis_client.ping()
            logger.info("Redis connection established")
        except redis.RedisError as e:
            logger.warning(f"Redis connection failed: {str(e)}. Caching disabled.")
            self.redis_client = None

    @property
    def enabled(self) -> bool:
        return self.redis_client is not None

    def questions_key(self, topic: str, difficulty: str, count: int) -> str:
        """Same generation parameters -> same key"""
        return f"questions:{topic.strip().lower()}:{difficulty}:{count}"

    def get(self, key: str) -> Optional[Any]:
        """
        Get value from cache

        Args:
            key: Cache key

        Returns:
            Cached value or None
        """
        if not self.redis_client:
            return None

        try:
            value = self.redis_client.get(key)
            if value:
                logger.info(f"Cache hit: {key}")
                return json.loads(value)
            logger.info(f"Cache miss: {key}")
            return None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"Cache get error: {str(e)}")
            return None

    def set(self, key: str, value: Any, ttl: int = None) -> bool:
        """Store a JSON-serializable value; ttl defaults to QUESTION_CACHE_TTL"""
        if not self.redis_client:
            return False

        try:
            ttl = ttl or settings.QUESTION_CACHE_TTL
            self.redis_client.setex(key, ttl, json.dumps(value))
            logger.info(f"Cache set: {key} (TTL: {ttl}s)")
            return True
        except (redis.RedisError, TypeError) as e:
            logger.error(f"Cache set error: {str(e)}")
            return False


# Global instance
cache_service = CacheService()
