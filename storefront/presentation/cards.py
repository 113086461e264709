"""Product card rendering.

Cards are rendered with Jinja2 autoescaping, so ``& < > " '`` in product
titles, descriptions and alt text are escaped before they reach markup.
"""
from pathlib import Path
from typing import Iterable, List

from jinja2 import Environment, FileSystemLoader, select_autoescape

from storefront.money import format_money
from storefront.shopify.models import Product

# Resolve template directory relative to this file
TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"
env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/800x600?text=No+Image"
DESCRIPTION_PREVIEW_LENGTH = 80
NO_VARIANT_NOTICE = "No variant available for this product"


def _price_label(product: Product) -> str:
    if product.min_price is None:
        return ""
    return format_money(product.min_price.amount, product.min_price.currency_code)


def build_card_context(product: Product) -> dict:
    """Template values for one product. The product itself is not modified."""
    image = product.featured_image
    variant = product.first_variant
    return {
        "handle": product.handle,
        "title": product.title,
        "description": (product.description or "")[:DESCRIPTION_PREVIEW_LENGTH],
        "image_url": image.url if image else PLACEHOLDER_IMAGE_URL,
        "image_alt": (image.alt_text if image and image.alt_text else product.title) or "",
        "placeholder_url": PLACEHOLDER_IMAGE_URL,
        "price_label": _price_label(product),
        "has_variant": variant is not None,
        "variant_id": variant.id if variant else "",
        "variant_title": variant.title if variant else "",
        "no_variant_notice": NO_VARIANT_NOTICE,
    }


def render_product_card(product: Product) -> str:
    """Render a product as an HTML ``<article>`` fragment."""
    template = env.get_template("product_card.html")
    return template.render(**build_card_context(product))


def render_product_grid(products: Iterable[Product]) -> List[str]:
    return [render_product_card(p) for p in products]
