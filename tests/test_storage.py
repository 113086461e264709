"""Tests for cart pointer storage"""
from typing import Dict, Optional

import pytest

from storefront.cart import MemoryCartIdStore, RedisCartIdStore, StorageResult
from storefront.db import RedisKeys


class FakeRedis:
    """In-memory stand-in for the async Upstash client"""

    def __init__(self, fail: bool = False):
        self.data: Dict[str, object] = {}
        self.fail = fail

    def _check(self):
        if self.fail:
            raise ConnectionError("upstash unreachable")

    async def get(self, key: str) -> Optional[object]:
        self._check()
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self._check()
        self.data[key] = value
        return True

    async def delete(self, key: str) -> int:
        self._check()
        return 1 if self.data.pop(key, None) is not None else 0


def test_cart_id_key():
    assert RedisKeys.cart_id_key() == "shopify_cart_id"
    assert RedisKeys.cart_id_key("sess-1") == "shopify_cart_id:sess-1"


def test_storage_result_constructors():
    ok = StorageResult.success("cart-A")
    err = StorageResult.failure(ConnectionError("down"))

    assert ok.ok and ok.value == "cart-A" and ok.error is None
    assert not err.ok and err.value is None
    assert isinstance(err.error, ConnectionError)


class TestMemoryCartIdStore:
    @pytest.mark.asyncio
    async def test_set_get_clear(self):
        store = MemoryCartIdStore()

        assert (await store.get()).value is None
        await store.set("cart-A")
        assert (await store.get()).value == "cart-A"
        await store.clear()
        assert (await store.get()).value is None


class TestRedisCartIdStore:
    @pytest.mark.asyncio
    async def test_round_trip_under_fixed_key(self):
        redis = FakeRedis()
        store = RedisCartIdStore(redis=redis)

        result = await store.set("gid://shopify/Cart/abc")

        assert result.ok
        assert redis.data == {"shopify_cart_id": "gid://shopify/Cart/abc"}
        assert (await store.get()).value == "gid://shopify/Cart/abc"

    @pytest.mark.asyncio
    async def test_sessions_use_separate_keys(self):
        redis = FakeRedis()
        await RedisCartIdStore("a", redis=redis).set("cart-A")
        await RedisCartIdStore("b", redis=redis).set("cart-B")

        assert (await RedisCartIdStore("a", redis=redis).get()).value == "cart-A"
        assert set(redis.data) == {"shopify_cart_id:a", "shopify_cart_id:b"}

    @pytest.mark.asyncio
    async def test_bytes_are_decoded(self):
        redis = FakeRedis()
        redis.data["shopify_cart_id"] = b"cart-A"

        assert (await RedisCartIdStore(redis=redis).get()).value == "cart-A"

    @pytest.mark.asyncio
    async def test_clear(self):
        redis = FakeRedis()
        store = RedisCartIdStore(redis=redis)
        await store.set("cart-A")

        assert (await store.clear()).ok
        result = await store.get()

        assert result.ok and result.value is None

    @pytest.mark.asyncio
    async def test_failures_are_reported_not_raised(self):
        store = RedisCartIdStore(redis=FakeRedis(fail=True))

        for result in (await store.get(), await store.set("cart-A"), await store.clear()):
            assert not result.ok
            assert isinstance(result.error, ConnectionError)
