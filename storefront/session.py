"""Shopper session facade.

One object per shopper that owns the client, the local cart and the
remote-cart synchronizer, instead of module-level state.
"""
from decimal import Decimal
from typing import List, Optional, Union

from storefront.cart.local import LocalCart
from storefront.cart.storage import CartIdStore
from storefront.cart.sync import CartSynchronizer
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.presentation.cards import render_product_card
from storefront.shopify.client import DEFAULT_PRODUCTS_PAGE, StorefrontClient
from storefront.shopify.models import RemoteCart

logger = get_logger(__name__)


class StorefrontSession:
    """
    Usage:
        session = StorefrontSession(StorefrontClient.from_settings())
        await session.add_to_cart(variant.id, product.title, variant.price.amount)
        url = await session.checkout_url()
    """

    def __init__(
        self,
        client: StorefrontClient,
        store: Optional[CartIdStore] = None,
        serialize_adds: bool = False,
    ):
        self.client = client
        self.cart = LocalCart()
        self.synchronizer = CartSynchronizer(client, store, serialize=serialize_adds)

    async def product_cards(self, first: int = DEFAULT_PRODUCTS_PAGE) -> List[str]:
        """Fetch a catalog page and render it as HTML cards."""
        products = await self.client.get_products(first)
        return [render_product_card(p) for p in products]

    async def add_to_cart(
        self,
        variant_id: str,
        title: str,
        price: Union[str, int, float, Decimal],
        quantity: int = 1,
    ) -> RemoteCart:
        """
        Add to the local cart first, then to the remote cart.

        The local line stays even if the remote add fails; the error is
        re-raised for the caller to report.
        """
        self.cart.add(variant_id, title, price, quantity)
        try:
            return await self.synchronizer.add_to_cart(variant_id, quantity)
        except Exception:
            logger.warning("Remote add failed; local cart keeps %s", sanitize_string_for_logging(title))
            raise

    async def checkout_url(self) -> Optional[str]:
        """
        URL to send the shopper to.

        The stored remote cart's checkout URL if there is one, otherwise a
        checkout created from the local cart. None when both are empty.
        """
        url = await self.synchronizer.get_checkout_url()
        if url:
            return url
        if not self.cart:
            return None
        checkout = await self.client.create_checkout(self.cart.to_line_inputs())
        return checkout.web_url or None

    async def aclose(self) -> None:
        await self.client.aclose()
