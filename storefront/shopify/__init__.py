"""Shopify Storefront API: client, payload models and error taxonomy."""
from .client import StorefrontClient
from .errors import (
    ConfigurationError,
    ErrorKind,
    RemoteQueryError,
    StorefrontError,
    TransportError,
)
from .models import Checkout, Image, LineInput, MoneyV2, Product, ProductVariant, RemoteCart, RemoteCartLine

__all__ = [
    "StorefrontClient",
    "StorefrontError",
    "ConfigurationError",
    "RemoteQueryError",
    "TransportError",
    "ErrorKind",
    "Checkout",
    "Image",
    "LineInput",
    "MoneyV2",
    "Product",
    "ProductVariant",
    "RemoteCart",
    "RemoteCartLine",
]
