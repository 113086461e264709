"""
Durable storage for the remote cart pointer.

The pointer is a single value (the remote cart id) under a fixed key.
Every operation reports failure through ``StorageResult`` instead of
raising, so callers decide whether a storage outage matters.
"""
from dataclasses import dataclass
from typing import Optional, Protocol

from storefront.db import RedisKeys, get_redis
from storefront.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class StorageResult:
    """Outcome of a storage operation."""
    ok: bool
    value: Optional[str] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, value: Optional[str] = None) -> "StorageResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: Exception) -> "StorageResult":
        return cls(ok=False, error=error)


class CartIdStore(Protocol):
    """Fallible key-value capability holding the current remote cart id."""

    async def get(self) -> StorageResult: ...

    async def set(self, cart_id: str) -> StorageResult: ...

    async def clear(self) -> StorageResult: ...


class MemoryCartIdStore:
    """Process-local pointer storage (tests, single-process scripts)."""

    def __init__(self, cart_id: Optional[str] = None):
        self.cart_id = cart_id

    async def get(self) -> StorageResult:
        return StorageResult.success(self.cart_id)

    async def set(self, cart_id: str) -> StorageResult:
        self.cart_id = cart_id
        return StorageResult.success(cart_id)

    async def clear(self) -> StorageResult:
        self.cart_id = None
        return StorageResult.success()


class RedisCartIdStore:
    """
    Pointer storage in Upstash Redis.

    No TTL is set: the remote cart decides its own lifetime, and a stale id
    is only discovered when using it fails.
    """

    def __init__(self, session_id: Optional[str] = None, redis=None):
        self.key = RedisKeys.cart_id_key(session_id)
        self._redis = redis  # Lazy initialization

    @property
    def redis(self):
        if self._redis is None:
            self._redis = get_redis()
        return self._redis

    async def get(self) -> StorageResult:
        try:
            value = await self.redis.get(self.key)
        except Exception as e:
            logger.warning("Failed to read cart pointer %s: %s", self.key, e)
            return StorageResult.failure(e)
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return StorageResult.success(value or None)

    async def set(self, cart_id: str) -> StorageResult:
        try:
            await self.redis.set(self.key, cart_id)
        except Exception as e:
            logger.warning("Failed to store cart pointer %s: %s", self.key, e)
            return StorageResult.failure(e)
        return StorageResult.success(cart_id)

    async def clear(self) -> StorageResult:
        try:
            await self.redis.delete(self.key)
        except Exception as e:
            logger.warning("Failed to clear cart pointer %s: %s", self.key, e)
            return StorageResult.failure(e)
        return StorageResult.success()
