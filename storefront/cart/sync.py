"""Remote cart synchronization.

Keeps a durable pointer to one remote cart and adds lines to it. The pointer
can outlive the cart it names (the remote decides cart lifetime), so a
failed add against a stored id drops the pointer and creates a fresh cart
once. That single retry is the only recovery in the client stack; every
other failure propagates unchanged.
"""
import asyncio
from typing import Optional

from storefront.errors import ERROR_MISSING_VARIANT
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.shopify.client import StorefrontClient
from storefront.shopify.errors import RemoteQueryError, TransportError
from storefront.shopify.models import LineInput, RemoteCart

from .storage import CartIdStore, MemoryCartIdStore

logger = get_logger(__name__)


class CartSynchronizer:
    """
    Reconciles add-to-cart calls with the shopper's remote cart.

    Per call:
        no pointer   -> cartCreate, store the new id
        pointer      -> cartLinesAdd
        add failed   -> clear pointer, cartCreate once; a second failure propagates

    Concurrent calls are not serialized by default: two calls that both see
    "no pointer" each create a cart and the last write wins. Pass
    ``serialize=True`` to run adds one at a time.
    """

    def __init__(
        self,
        client: StorefrontClient,
        store: Optional[CartIdStore] = None,
        serialize: bool = False,
    ):
        self.client = client
        self.store = store if store is not None else MemoryCartIdStore()
        self._lock: Optional[asyncio.Lock] = asyncio.Lock() if serialize else None

    async def stored_cart_id(self) -> Optional[str]:
        """Current pointer; an unreadable store counts as no pointer."""
        result = await self.store.get()
        if not result.ok:
            logger.warning("Cart pointer unreadable, treating as absent: %s", result.error)
            return None
        return result.value or None

    async def _create(self, line: LineInput) -> RemoteCart:
        cart = await self.client.create_remote_cart([line])
        result = await self.store.set(cart.id)
        if not result.ok:
            logger.warning(
                "Created cart %s but could not persist its id: %s",
                sanitize_id_for_logging(cart.id), result.error,
            )
        return cart

    async def _discard_pointer(self) -> None:
        result = await self.store.clear()
        if not result.ok:
            logger.warning("Could not clear stale cart pointer: %s", result.error)

    async def _add(self, line: LineInput) -> RemoteCart:
        cart_id = await self.stored_cart_id()
        if not cart_id:
            return await self._create(line)

        try:
            return await self.client.cart_lines_add(cart_id, [line])
        except (RemoteQueryError, TransportError) as e:
            logger.warning(
                "cartLinesAdd failed for cart %s, recreating cart: %s",
                sanitize_id_for_logging(cart_id), e,
            )

        await self._discard_pointer()
        return await self._create(line)

    async def add_to_cart(self, variant_id: str, quantity: int = 1) -> RemoteCart:
        """
        Add ``quantity`` of ``variant_id`` to the remote cart.

        Returns:
            The remote cart after the add

        Raises:
            ValueError: missing variant id or non-positive quantity
            StorefrontError: creation failed, or the recovery attempt failed
        """
        if not variant_id:
            raise ValueError(ERROR_MISSING_VARIANT)
        line = LineInput(variant_id=variant_id, quantity=quantity)

        if self._lock is None:
            return await self._add(line)
        async with self._lock:
            return await self._add(line)

    async def get_checkout_url(self) -> Optional[str]:
        """Checkout URL of the stored cart, or None without a usable cart."""
        cart_id = await self.stored_cart_id()
        if not cart_id:
            return None
        cart = await self.client.get_remote_cart(cart_id)
        if cart is None:
            return None
        return cart.checkout_url or None
