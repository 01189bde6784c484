"""
Reference data cache for the Rookie Draft Board

Holds one large, rarely changing dataset (the Sleeper NFL player dump) for
whoever owns the cache object. It is filled on first access and stays until
invalidate() is called or the optional TTL expires.
"""
import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(f'{__name__}.CacheUtils')

T = TypeVar('T')


class ReferenceCache(Generic[T]):
    """
    Lazily populated single-value cache.

    Concurrent first accesses share one load.
    """

    def __init__(self, loader: Callable[[], Awaitable[T]], name: str = "reference", ttl: Optional[int] = None):
        """
        Initialize reference cache.

        Args:
            loader: Coroutine function producing the data
            name: Label used in log messages
            ttl: Seconds before the value is considered stale (None or 0 keeps it until invalidated)
        """
        self._loader = loader
        self.name = name
        self.ttl = ttl or None
        self._value: Optional[T] = None
        self._loaded_at: Optional[float] = None
        self._lock = asyncio.Lock()
        self.load_count = 0

    @property
    def is_populated(self) -> bool:
        """True if a fresh value is held."""
        if self._loaded_at is None:
            return False
        if self.ttl is not None and time.monotonic() - self._loaded_at > self.ttl:
            return False
        return True

    async def get(self) -> T:
        """
        Get cached data, loading it on first access.

        Raises:
            Whatever the loader raises; nothing is cached on failure
        """
        if self.is_populated:
            logger.debug(f"Cache hit: {self.name}")
            return self._value

        async with self._lock:
            if self.is_populated:
                return self._value

            logger.debug(f"Cache miss: {self.name}")
            value = await self._loader()
            self._value = value
            self._loaded_at = time.monotonic()
            self.load_count += 1
            logger.info(f"Loaded {self.name} into cache")
            return value

    def peek(self) -> Optional[Any]:
        """Return the cached value without loading (None if empty)."""
        return self._value if self.is_populated else None

    def invalidate(self) -> None:
        """Drop the cached value so the next get() reloads it."""
        if self._loaded_at is not None:
            logger.info(f"Invalidated {self.name} cache")
        self._value = None
        self._loaded_at = None
