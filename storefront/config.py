"""
Storefront configuration.

All settings come from environment variables. The gateway reads its
settings on every request so a redeploy with new variables (or a test
using monkeypatch) takes effect without re-importing modules.
"""
import os
from dataclasses import dataclass

# checkoutCreate only exists on Storefront API versions before 2024-04
DEFAULT_API_VERSION = "2023-07"
DEFAULT_PROXY_URL = "http://localhost:3000"
GRAPHQL_PROXY_PATH = "/api/graphql"


@dataclass(frozen=True)
class GatewaySettings:
    """Server-side settings for the GraphQL proxy."""
    shop: str = ""
    storefront_token: str = ""
    api_version: str = DEFAULT_API_VERSION

    @classmethod
    def from_env(cls) -> "GatewaySettings":
        return cls(
            shop=os.environ.get("SHOPIFY_SHOP", "").strip(),
            storefront_token=os.environ.get("SHOPIFY_STOREFRONT_TOKEN", "").strip(),
            api_version=os.environ.get("SHOPIFY_API_VERSION", "").strip() or DEFAULT_API_VERSION,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.shop and self.storefront_token)

    @property
    def graphql_url(self) -> str:
        return f"https://{self.shop}/api/{self.api_version}/graphql.json"

    def __repr__(self) -> str:
        # The token must never reach logs or error payloads
        return (
            f"GatewaySettings(shop={self.shop!r}, api_version={self.api_version!r}, "
            f"storefront_token={'***' if self.storefront_token else ''!r})"
        )


@dataclass(frozen=True)
class ClientSettings:
    """Settings for code that talks to the gateway."""
    shop: str = ""
    storefront_token: str = ""
    proxy_url: str = DEFAULT_PROXY_URL

    @classmethod
    def from_env(cls) -> "ClientSettings":
        return cls(
            shop=os.environ.get("SHOPIFY_SHOP", "").strip(),
            storefront_token=os.environ.get("SHOPIFY_STOREFRONT_TOKEN", "").strip(),
            proxy_url=os.environ.get("STOREFRONT_PROXY_URL", "").strip() or DEFAULT_PROXY_URL,
        )

    def __repr__(self) -> str:
        return (
            f"ClientSettings(shop={self.shop!r}, proxy_url={self.proxy_url!r})"
        )
