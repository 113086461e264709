"""
Storefront Module

Front-end services for a Shopify storefront:
- shopify: Storefront API client over the same-origin GraphQL proxy
- cart: local cart, durable remote-cart pointer, synchronization
- presentation: product card rendering
- performance: lazy images and scroll-aware header
- offline: cache-first transport with offline fallback
- routers: the GraphQL proxy endpoint

Note: Imports are lazy so the serverless gateway does not load the client
stack on cold start.
"""

__all__ = [
    "StorefrontClient",
    "StorefrontSession",
    "LocalCart",
    "CartSynchronizer",
    "render_product_card",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "StorefrontClient":
        from storefront.shopify.client import StorefrontClient
        return StorefrontClient
    elif name == "StorefrontSession":
        from storefront.session import StorefrontSession
        return StorefrontSession
    elif name == "LocalCart":
        from storefront.cart.local import LocalCart
        return LocalCart
    elif name == "CartSynchronizer":
        from storefront.cart.sync import CartSynchronizer
        return CartSynchronizer
    elif name == "render_product_card":
        from storefront.presentation.cards import render_product_card
        return render_product_card
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
