"""
Redis cache client configuration.

Cache failures never break a request: reads fall back to the loader and
writes are logged and skipped. Used for read-mostly data such as the
SystemConfig snapshot.
"""
from django.core.cache import cache
from typing import Any, Callable, Optional
import logging

logger = logging.getLogger(__name__)

KEY_PREFIX = 'hairone'


class RedisClient:
    """
    Wrapper for Redis cache operations

    Example usage:
        key = redis_client.make_key('system_config', 'global')
        redis_client.get_or_set(key, load_config, timeout=300)
    """

    @staticmethod
    def make_key(*parts) -> str:
        """Namespaced key, e.g. ``hairone:system_config:global``."""
        return ':'.join([KEY_PREFIX] + [str(part) for part in parts])

    @staticmethod
    def get(key: str) -> Optional[Any]:
        try:
            return cache.get(key)
        except Exception as e:
            logger.error(f"Error getting {key} from cache: {str(e)}")
            return None

    @staticmethod
    def set(key: str, value: Any, timeout: int = 300) -> bool:
        try:
            cache.set(key, value, timeout)
            return True
        except Exception as e:
            logger.error(f"Error setting {key} in cache: {str(e)}")
            return False

    @staticmethod
    def delete(key: str) -> bool:
        """
        Drop a cached value so the next read reloads it.

        Returns:
            True if successful, False otherwise
        """
        try:
            cache.delete(key)
            return True
        except Exception as e:
            logger.error(f"Error deleting {key} from cache: {str(e)}")
            return False

    def get_or_set(self, key: str, loader: Callable[[], Any], timeout: int = 300) -> Any:
        """
        Return the cached value, or call ``loader`` and cache its result.

        Args:
            key: Cache key
            loader: Zero-argument function producing the value
            timeout: Timeout in seconds

        Returns:
            Cached or freshly loaded value
        """
        value = self.get(key)
        if value is None:
            value = loader()
            self.set(key, value, timeout)
        return value


# Singleton instance
redis_client = RedisClient()
