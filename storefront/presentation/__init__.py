"""HTML fragments for catalog pages."""
from .cards import (
    DESCRIPTION_PREVIEW_LENGTH,
    NO_VARIANT_NOTICE,
    PLACEHOLDER_IMAGE_URL,
    build_card_context,
    render_product_card,
    render_product_grid,
)

__all__ = [
    "DESCRIPTION_PREVIEW_LENGTH",
    "NO_VARIANT_NOTICE",
    "PLACEHOLDER_IMAGE_URL",
    "build_card_context",
    "render_product_card",
    "render_product_grid",
]
