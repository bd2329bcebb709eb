"""
Redis Storage Adapter - Redis-backed key-value store.
"""

from typing import Optional
from mro_auth.ports.storage_port import StoragePort


class RedisStorageAdapter(StoragePort):
    """
    Redis-backed key-value store.

    Keys are namespaced under a prefix so several device profiles can
    share one Redis database.
    """

    def __init__(
        self,
        redis_client=None,
        redis_url: Optional[str] = None,
        namespace: str = "mro:auth:",
    ):
        """
        Initialize Redis storage adapter.

        Args:
            redis_client: Redis client instance (redis.Redis, decode_responses=True)
            redis_url: URL used when no client is given (default localhost)
            namespace: Key namespace
        """
        self._redis = redis_client
        self._redis_url = redis_url
        self._namespace = namespace

    def _get_redis(self):
        """Lazy load Redis client."""
        if self._redis is None:
            try:
                import redis
            except ImportError:
                raise ImportError("redis package required: pip install redis")
            if self._redis_url:
                self._redis = redis.Redis.from_url(self._redis_url, decode_responses=True)
            else:
                self._redis = redis.Redis(
                    host="localhost",
                    port=6379,
                    db=0,
                    decode_responses=True,
                )
        return self._redis

    def _key(self, key: str) -> str:
        """Generate namespaced Redis key."""
        return f"{self._namespace}{key}"

    def get(self, key: str) -> Optional[str]:
        value = self._get_redis().get(self._key(key))
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set(self, key: str, value: str) -> None:
        self._get_redis().set(self._key(key), value)

    def delete(self, key: str) -> bool:
        return bool(self._get_redis().delete(self._key(key)))
