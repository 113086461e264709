"""Pytest configuration and fixtures"""
import asyncio
import os
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

# Set test environment variables
os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_redis_token")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from storefront.shopify.client import StorefrontClient  # noqa: E402
from storefront.shopify.models import Checkout, RemoteCart, RemoteCartLine  # noqa: E402

TEST_SHOP = "test-shop.myshopify.com"
TEST_TOKEN = "test-storefront-token"
TEST_PROXY_URL = "http://testserver"


def _product_node(
    product_id: str = "gid://shopify/Product/1",
    handle: str = "classic-tee",
    title: str = "Classic Tee",
    description: str = "Soft cotton tee",
    image_url: Optional[str] = "https://cdn.shopify.com/classic-tee.jpg",
    variants: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    if variants is None:
        variants = [
            {
                "id": "gid://shopify/ProductVariant/11",
                "title": "Small",
                "priceV2": {"amount": "25.0", "currencyCode": "USD"},
            }
        ]
    return {
        "id": product_id,
        "handle": handle,
        "title": title,
        "description": description,
        "featuredImage": {"url": image_url, "altText": "Front view"} if image_url else None,
        "priceRange": {"minVariantPrice": {"amount": "25.0", "currencyCode": "USD"}},
        "variants": {"edges": [{"node": v} for v in variants]},
    }


def _cart_node(
    cart_id: str = "gid://shopify/Cart/abc123",
    checkout_url: Optional[str] = "https://test-shop.myshopify.com/cart/c/abc123",
    lines: Optional[List[tuple]] = None,
) -> Dict[str, Any]:
    if lines is None:
        lines = [("gid://shopify/CartLine/1", "gid://shopify/ProductVariant/11", 1)]
    return {
        "id": cart_id,
        "checkoutUrl": checkout_url,
        "lines": {
            "edges": [
                {"node": {"id": line_id, "quantity": qty, "merchandise": {"id": variant_id}}}
                for line_id, variant_id, qty in lines
            ]
        },
    }


@pytest.fixture
def product_node():
    """Factory for Storefront API product nodes"""
    return _product_node


@pytest.fixture
def cart_node():
    """Factory for Storefront API cart nodes"""
    return _cart_node


@pytest.fixture
def make_client() -> Callable[..., StorefrontClient]:
    """Build a configured client whose HTTP calls go to ``handler``"""
    def _make(handler, **kwargs) -> StorefrontClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        kwargs.setdefault("shop", TEST_SHOP)
        kwargs.setdefault("token", TEST_TOKEN)
        return StorefrontClient(proxy_url=TEST_PROXY_URL, http_client=http_client, **kwargs)
    return _make


def make_remote_cart(cart_id: str, checkout_url: Optional[str] = None) -> RemoteCart:
    return RemoteCart(
        id=cart_id,
        checkout_url=checkout_url or f"https://{TEST_SHOP}/cart/c/{cart_id}",
        lines=[RemoteCartLine(id="gid://shopify/CartLine/1", variant_id="v-1", quantity=1)],
    )


class FakeStorefrontClient:
    """Records cart calls; results are queued per operation (exceptions are raised)"""

    def __init__(
        self,
        create_results: Optional[List[Any]] = None,
        add_results: Optional[List[Any]] = None,
        carts: Optional[Dict[str, Optional[RemoteCart]]] = None,
    ):
        self.create_results = list(create_results or [])
        self.add_results = list(add_results or [])
        self.carts = dict(carts or {})
        self.create_calls: List[list] = []
        self.add_calls: List[tuple] = []
        self.get_calls: List[str] = []
        self.checkout_calls: List[list] = []

    @staticmethod
    def _next(queue: List[Any], default: Any) -> Any:
        result = queue.pop(0) if queue else default
        if isinstance(result, Exception):
            raise result
        return result

    async def create_remote_cart(self, lines):
        self.create_calls.append(list(lines))
        await asyncio.sleep(0)
        return self._next(self.create_results, make_remote_cart(f"cart-{len(self.create_calls)}"))

    async def cart_lines_add(self, cart_id, lines):
        self.add_calls.append((cart_id, list(lines)))
        await asyncio.sleep(0)
        return self._next(self.add_results, make_remote_cart(cart_id))

    async def get_remote_cart(self, cart_id):
        self.get_calls.append(cart_id)
        return self.carts.get(cart_id)

    async def create_checkout(self, line_items):
        self.checkout_calls.append(list(line_items))
        return Checkout(id="gid://shopify/Checkout/1", web_url=f"https://{TEST_SHOP}/checkouts/1")

    async def get_products(self, first=12):
        from storefront.shopify.models import Product
        return [Product.from_node(_product_node())][:first]

    async def aclose(self):
        pass


@pytest.fixture
def fake_client():
    """Factory for FakeStorefrontClient"""
    return FakeStorefrontClient
