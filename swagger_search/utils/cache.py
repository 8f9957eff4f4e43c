"""In-memory caching with per-entry expiry."""

import logging
import time
from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class BaseCache(Generic[T]):
    """Base cache interface."""

    def get(self, key: str) -> Optional[T]:
        """Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        raise NotImplementedError

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Optional TTL in seconds
        """
        raise NotImplementedError

    def delete(self, key: str) -> None:
        """Delete value from cache.

        Args:
            key: Cache key
        """
        raise NotImplementedError

    def clear(self) -> None:
        """Clear all cached values."""
        raise NotImplementedError


class TTLCache(BaseCache[T]):
    """Memory cache whose entries expire a fixed time after being stored."""

    def __init__(self, ttl: float = 1800, clock: Callable[[], float] = time.monotonic):
        """Initialize memory cache.

        Args:
            ttl: Default entry lifetime in seconds
            clock: Time source, injectable for tests
        """
        self.ttl = ttl
        self._clock = clock
        # key -> (stored at, ttl or None for the default, value)
        self._entries: Dict[str, Tuple[float, Optional[float], T]] = {}

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def _is_expired(self, stored_at: float, ttl: Optional[float]) -> bool:
        if ttl is None:
            ttl = self.ttl
        return self._clock() - stored_at >= ttl

    def get(self, key: str) -> Optional[T]:
        """Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value if found and not expired
        """
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, ttl, value = entry
        if self._is_expired(stored_at, ttl):
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: T, ttl: Optional[float] = None) -> None:
        """Set value in cache.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Optional TTL in seconds (overrides default)
        """
        self._entries[key] = (self._clock(), ttl, value)

    def delete(self, key: str) -> None:
        """Delete value from cache."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Clear all cached values."""
        self._entries.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary of cache statistics
        """
        expired = sum(
            1
            for stored_at, ttl, _ in self._entries.values()
            if self._is_expired(stored_at, ttl)
        )
        return {
            "total_entries": len(self._entries),
            "expired_entries": expired,
            "ttl": self.ttl,
        }


__all__ = ["BaseCache", "TTLCache"]
