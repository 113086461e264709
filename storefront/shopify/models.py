"""
Pydantic models for Storefront API payloads.

Remote payloads use GraphQL connections (``edges { node }``) and camelCase
keys; the ``from_node`` constructors flatten them into plain models.
"""
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from storefront.money import to_decimal


def _nodes(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Unwrap a GraphQL connection into its nodes."""
    if not connection:
        return []
    return [edge["node"] for edge in connection.get("edges") or [] if edge and edge.get("node")]


class MoneyV2(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: Decimal
    currency_code: str = "USD"

    @classmethod
    def from_node(cls, node: Optional[Dict[str, Any]]) -> Optional["MoneyV2"]:
        if not node:
            return None
        return cls(
            amount=to_decimal(node.get("amount")),
            currency_code=node.get("currencyCode") or "USD",
        )


class Image(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    alt_text: Optional[str] = None

    @classmethod
    def from_node(cls, node: Optional[Dict[str, Any]]) -> Optional["Image"]:
        if not node or not node.get("url"):
            return None
        return cls(url=node["url"], alt_text=node.get("altText"))


class ProductVariant(BaseModel):
    """A purchasable configuration of a product (size, color...)."""
    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    price: Optional[MoneyV2] = None
    available_for_sale: Optional[bool] = None  # only present on product detail

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "ProductVariant":
        return cls(
            id=node["id"],
            title=node.get("title") or "",
            price=MoneyV2.from_node(node.get("priceV2")),
            available_for_sale=node.get("availableForSale"),
        )


class Product(BaseModel):
    """Read-only product projection, re-fetched on every query."""
    model_config = ConfigDict(frozen=True)

    id: str
    handle: str = ""
    title: str = ""
    description: str = ""
    featured_image: Optional[Image] = None
    images: List[Image] = Field(default_factory=list)
    min_price: Optional[MoneyV2] = None
    variants: List[ProductVariant] = Field(default_factory=list)

    @property
    def first_variant(self) -> Optional[ProductVariant]:
        return self.variants[0] if self.variants else None

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "Product":
        price_range = node.get("priceRange") or {}
        images = [Image.from_node(n) for n in _nodes(node.get("images"))]
        return cls(
            id=node["id"],
            handle=node.get("handle") or "",
            title=node.get("title") or "",
            description=node.get("description") or "",
            featured_image=Image.from_node(node.get("featuredImage")),
            images=[img for img in images if img is not None],
            min_price=MoneyV2.from_node(price_range.get("minVariantPrice")),
            variants=[ProductVariant.from_node(n) for n in _nodes(node.get("variants"))],
        )


class LineInput(BaseModel):
    """(variant, quantity) pair sent to cart and checkout mutations."""
    model_config = ConfigDict(frozen=True)

    variant_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class RemoteCartLine(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    variant_id: Optional[str] = None
    quantity: int = 0


class RemoteCart(BaseModel):
    """Server-side cart. Only its id is kept locally."""
    model_config = ConfigDict(frozen=True)

    id: str
    checkout_url: Optional[str] = None
    lines: List[RemoteCartLine] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "RemoteCart":
        lines = [
            RemoteCartLine(
                id=line["id"],
                variant_id=(line.get("merchandise") or {}).get("id"),
                quantity=int(line.get("quantity") or 0),
            )
            for line in _nodes(node.get("lines"))
        ]
        return cls(id=node["id"], checkout_url=node.get("checkoutUrl") or None, lines=lines)


class Checkout(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    web_url: str

    @classmethod
    def from_node(cls, node: Dict[str, Any]) -> "Checkout":
        return cls(id=node["id"], web_url=node.get("webUrl") or "")
