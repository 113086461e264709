"""Tests for product card rendering"""
from storefront.presentation import (
    DESCRIPTION_PREVIEW_LENGTH,
    NO_VARIANT_NOTICE,
    PLACEHOLDER_IMAGE_URL,
    build_card_context,
    render_product_card,
    render_product_grid,
)
from storefront.shopify.models import Product


def _product(product_node, **overrides) -> Product:
    return Product.from_node(product_node(**overrides))


class TestProductCard:
    def test_renders_basic_fields(self, product_node):
        html = render_product_card(_product(product_node))

        assert html.lstrip().startswith("<article")
        assert 'data-handle="classic-tee"' in html
        assert 'data-variant-id="gid://shopify/ProductVariant/11"' in html
        assert 'data-variant-title="Small"' in html
        assert 'src="https://cdn.shopify.com/classic-tee.jpg"' in html
        assert 'alt="Front view"' in html
        assert "Classic Tee" in html
        assert "$25.00" in html
        assert "disabled" not in html
        assert NO_VARIANT_NOTICE not in html

    def test_escapes_markup_in_title_and_description(self, product_node):
        product = _product(
            product_node,
            title='<script>alert("x")</script> & Co',
            description="<b>bold</b> 'quoted'",
        )

        html = render_product_card(product)

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&amp; Co" in html
        assert "&lt;b&gt;bold&lt;/b&gt;" in html
        assert "&#39;quoted&#39;" in html
        assert "&#34;x&#34;" in html

    def test_escapes_attribute_values(self, product_node):
        product = _product(product_node, handle='tee" onclick="steal()')

        html = render_product_card(product)

        assert 'onclick="steal()"' not in html
        assert 'data-handle="tee&#34; onclick=&#34;steal()"' in html

    def test_missing_image_uses_placeholder_and_title_alt(self, product_node):
        html = render_product_card(_product(product_node, image_url=None))

        assert f'src="{PLACEHOLDER_IMAGE_URL}"' in html
        assert 'alt="Classic Tee"' in html

    def test_description_truncated(self, product_node):
        description = "x" * 200
        context = build_card_context(_product(product_node, description=description))

        assert context["description"] == "x" * DESCRIPTION_PREVIEW_LENGTH

    def test_product_without_variants_has_disabled_button(self, product_node):
        html = render_product_card(_product(product_node, variants=[]))

        assert "disabled" in html
        assert 'data-variant-id=""' in html
        assert NO_VARIANT_NOTICE in html

    def test_rendering_does_not_modify_product(self, product_node):
        product = _product(product_node, title="A & B")
        before = product.model_dump()

        render_product_card(product)

        assert product.model_dump() == before


def test_render_product_grid(product_node):
    products = [
        _product(product_node, handle="one"),
        _product(product_node, handle="two"),
    ]

    cards = render_product_grid(products)

    assert len(cards) == 2
    assert 'data-handle="one"' in cards[0]
    assert 'data-handle="two"' in cards[1]
