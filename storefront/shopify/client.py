"""Shopify Storefront API client.

Talks to the same-origin GraphQL proxy (``/api/graphql``) which holds the
Storefront access token server-side. The shop/token pair configured here is
only a guard: the client refuses to run until it has been initialized.
"""
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import httpx
from pydantic import ValidationError

from storefront.config import (
    DEFAULT_PROXY_URL,
    GRAPHQL_PROXY_PATH,
    ClientSettings,
)
from storefront.errors import ERROR_CLIENT_NOT_CONFIGURED
from storefront.logging import (
    get_logger,
    sanitize_id_for_logging,
    sanitize_string_for_logging,
    summarize_errors_for_logging,
)

from . import queries
from .errors import ConfigurationError, RemoteQueryError, TransportError, normalize_error_list
from .models import Checkout, LineInput, Product, RemoteCart

logger = get_logger(__name__)

DEFAULT_PRODUCTS_PAGE = 12
MAX_PRODUCTS_PAGE = 250  # Storefront API connection limit

# Raised by from_node on payloads that do not have the queried shape
PARSE_ERRORS = (KeyError, TypeError, AttributeError, ValidationError)

T = TypeVar("T")


def _parse(operation: str, parser: Callable[[Any], T], payload: Any) -> T:
    """Run ``parser`` on a reply payload; shape errors become TransportError."""
    try:
        return parser(payload)
    except PARSE_ERRORS as e:
        logger.error("Malformed %s payload: %s: %s", operation, type(e).__name__, e)
        raise TransportError(f"Malformed {operation} payload") from e


class StorefrontClient:
    """
    Typed queries and mutations over the GraphQL proxy.

    The API version is chosen by the proxy (``SHOPIFY_API_VERSION``), not here.

    Usage:
        client = StorefrontClient(shop="demo.myshopify.com", token="...")
        products = await client.get_products(first=12)
        cart = await client.create_remote_cart([LineInput(variant_id=vid, quantity=1)])
        await client.aclose()
    """

    def __init__(
        self,
        shop: str = "",
        token: str = "",
        proxy_url: str = DEFAULT_PROXY_URL,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.shop = shop
        self.storefront_token = token
        self.endpoint = proxy_url.rstrip("/") + GRAPHQL_PROXY_PATH
        self._http_client = http_client
        self._owns_http_client = http_client is None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[ClientSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "StorefrontClient":
        settings = settings or ClientSettings.from_env()
        return cls(
            shop=settings.shop,
            token=settings.storefront_token,
            proxy_url=settings.proxy_url,
            http_client=http_client,
        )

    def configure(self, shop: str, token: str) -> None:
        """Set shop and token after construction."""
        self.shop = shop
        self.storefront_token = token

    @property
    def is_configured(self) -> bool:
        return bool(self.shop and self.storefront_token)

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazily create the shared client. No timeout: callers impose their own."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(None),
                headers={"Content-Type": "application/json"},
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    # ==================== TRANSPORT ====================

    async def graphql(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Send a GraphQL document through the proxy and return its ``data``.

        Raises:
            ConfigurationError: shop or token not set
            RemoteQueryError: the reply carries an ``errors`` array (any HTTP status)
            TransportError: network failure, non-JSON reply, or no ``data``
        """
        if not self.is_configured:
            logger.error("Storefront client used before shop/token were configured")
            raise ConfigurationError(ERROR_CLIENT_NOT_CONFIGURED)

        client = await self._get_http_client()
        try:
            response = await client.post(
                self.endpoint,
                json={"query": query, "variables": variables or {}},
            )
        except httpx.HTTPError as e:
            logger.error("GraphQL proxy request failed: %s", e)
            raise TransportError(f"Failed to reach GraphQL proxy: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("GraphQL proxy returned non-JSON body (status %s)", response.status_code)
            raise TransportError(
                f"Invalid JSON from GraphQL proxy (status {response.status_code})"
            ) from e

        if not isinstance(payload, dict):
            logger.error("GraphQL proxy returned %s instead of an object", type(payload).__name__)
            raise TransportError("Unexpected GraphQL reply shape")

        errors = payload.get("errors")
        if errors is not None:
            details = normalize_error_list(errors)
            logger.error(
                "Shopify GraphQL API error (status %s): %s variables=%s",
                response.status_code, summarize_errors_for_logging(details), variables,
            )
            raise RemoteQueryError("Shopify GraphQL errors", details)

        data = payload.get("data")
        if not isinstance(data, dict):
            logger.error(
                "GraphQL proxy returned status %s without data: %s",
                response.status_code, sanitize_string_for_logging(str(payload.get("error"))),
            )
            raise TransportError(
                f"GraphQL proxy returned status {response.status_code} without data",
                [payload] if payload else [],
            )
        return data

    @staticmethod
    def _operation_result(data: Dict[str, Any], operation: str) -> Dict[str, Any]:
        """The mutation payload object, or {} when the remote sent null."""
        result = data.get(operation)
        if result is None:
            return {}
        if not isinstance(result, dict):
            logger.error("Malformed %s payload: %s", operation, type(result).__name__)
            raise TransportError(f"Malformed {operation} payload")
        return result

    @staticmethod
    def _raise_on_user_errors(result: Dict[str, Any], operation: str, context: Dict[str, Any]) -> None:
        user_errors = result.get("userErrors") or []
        if user_errors:
            details = normalize_error_list(user_errors)
            logger.error(
                "Shopify %s userErrors: %s %s",
                operation, summarize_errors_for_logging(details), context,
            )
            raise RemoteQueryError(f"{operation} error", details)

    @staticmethod
    def _line_payload(lines: Iterable[LineInput]) -> List[Dict[str, Any]]:
        return [{"merchandiseId": line.variant_id, "quantity": line.quantity} for line in lines]

    # ==================== CATALOG ====================

    async def get_products(self, first: int = DEFAULT_PRODUCTS_PAGE) -> List[Product]:
        """List the first ``first`` products (clamped to 1..250)."""
        first = max(1, min(int(first), MAX_PRODUCTS_PAGE))
        data = await self.graphql(queries.PRODUCTS_QUERY, {"first": first})
        return _parse(
            "products",
            lambda d: [Product.from_node(edge["node"]) for edge in (d.get("products") or {}).get("edges") or []],
            data,
        )

    async def get_product_by_handle(self, handle: str) -> Optional[Product]:
        """Fetch one product with images and up to 20 variants, or None."""
        data = await self.graphql(queries.PRODUCT_BY_HANDLE_QUERY, {"handle": handle})
        node = data.get("productByHandle")
        if not node:
            logger.info("No product for handle %s", sanitize_string_for_logging(handle))
            return None
        return _parse("productByHandle", Product.from_node, node)

    # ==================== CHECKOUT ====================

    async def create_checkout(self, line_items: Iterable[LineInput]) -> Checkout:
        """Create a legacy checkout and return it (``web_url`` is the payment page)."""
        line_items = list(line_items)
        variables = {
            "input": {
                "lineItems": [
                    {"variantId": li.variant_id, "quantity": li.quantity} for li in line_items
                ]
            }
        }
        data = await self.graphql(queries.CHECKOUT_CREATE_MUTATION, variables)
        result = self._operation_result(data, "checkoutCreate")
        self._raise_on_user_errors(result, "checkoutCreate", {"line_items": len(line_items)})
        checkout = result.get("checkout")
        if not checkout:
            raise RemoteQueryError("checkoutCreate returned no checkout")
        return _parse("checkoutCreate", Checkout.from_node, checkout)

    # ==================== CART ====================

    async def create_remote_cart(self, lines: Iterable[LineInput] = ()) -> RemoteCart:
        """Create a remote cart with optional initial lines."""
        lines = list(lines)
        data = await self.graphql(
            queries.CART_CREATE_MUTATION, {"input": {"lines": self._line_payload(lines)}}
        )
        result = self._operation_result(data, "cartCreate")
        self._raise_on_user_errors(result, "cartCreate", {"lines": len(lines)})
        cart = result.get("cart")
        if not cart:
            raise RemoteQueryError("cartCreate returned no cart")
        remote_cart = _parse("cartCreate", RemoteCart.from_node, cart)
        logger.info("Created remote cart %s", sanitize_id_for_logging(remote_cart.id))
        return remote_cart

    async def cart_lines_add(self, cart_id: str, lines: Iterable[LineInput]) -> RemoteCart:
        """Add lines to an existing remote cart."""
        lines = list(lines)
        data = await self.graphql(
            queries.CART_LINES_ADD_MUTATION,
            {"cartId": cart_id, "lines": self._line_payload(lines)},
        )
        result = self._operation_result(data, "cartLinesAdd")
        self._raise_on_user_errors(
            result, "cartLinesAdd", {"cart_id": sanitize_id_for_logging(cart_id)}
        )
        cart = result.get("cart")
        if not cart:
            logger.warning("cartLinesAdd returned no cart for %s", sanitize_id_for_logging(cart_id))
            raise RemoteQueryError("cartLinesAdd returned no cart", [{"message": "Cart not found"}])
        return _parse("cartLinesAdd", RemoteCart.from_node, cart)

    async def get_remote_cart(self, cart_id: str) -> Optional[RemoteCart]:
        """Fetch a remote cart; None when it no longer exists."""
        data = await self.graphql(queries.CART_QUERY, {"id": cart_id})
        cart = data.get("cart")
        if not cart:
            return None
        return _parse("cart", RemoteCart.from_node, cart)
