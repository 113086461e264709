"""
Redis Client - durable storage for the remote cart pointer.

Provides a singleton async Upstash Redis client. The only value stored is
the identifier of the shopper's remote cart.
"""

import os
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis


# Environment variables (Upstash uses REST_URL and REST_TOKEN)
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Raises:
        ValueError: If UPSTASH_REDIS_REST_URL or UPSTASH_REDIS_REST_TOKEN is missing
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis key names."""

    CART_ID = "shopify_cart_id"  # shopify_cart_id[:{session_id}]

    @staticmethod
    def cart_id_key(session_id: Optional[str] = None) -> str:
        if not session_id:
            return RedisKeys.CART_ID
        return f"{RedisKeys.CART_ID}:{session_id}"
