"""GraphQL documents for the Shopify Storefront API."""

PRODUCTS_QUERY = """
query getProducts($first: Int!) {
  products(first: $first) {
    edges {
      node {
        id
        handle
        title
        description
        featuredImage { url altText }
        priceRange { minVariantPrice { amount currencyCode } }
        variants(first: 5) { edges { node { id title priceV2 { amount currencyCode } } } }
      }
    }
  }
}
"""

PRODUCT_BY_HANDLE_QUERY = """
query getProductByHandle($handle: String!) {
  productByHandle(handle: $handle) {
    id
    handle
    title
    description
    featuredImage { url altText }
    images(first: 10) { edges { node { url altText } } }
    priceRange { minVariantPrice { amount currencyCode } }
    variants(first: 20) {
      edges { node { id title priceV2 { amount currencyCode } availableForSale } }
    }
  }
}
"""

CHECKOUT_CREATE_MUTATION = """
mutation checkoutCreate($input: CheckoutCreateInput!) {
  checkoutCreate(input: $input) {
    checkout { id webUrl }
    userErrors { field message }
  }
}
"""

_CART_FIELDS = """
  id
  checkoutUrl
  lines(first: 50) {
    edges { node { id quantity merchandise { ... on ProductVariant { id } } } }
  }
"""

CART_CREATE_MUTATION = """
mutation cartCreate($input: CartInput!) {
  cartCreate(input: $input) {
    cart { %s }
    userErrors { field message }
  }
}
""" % _CART_FIELDS

CART_LINES_ADD_MUTATION = """
mutation cartLinesAdd($cartId: ID!, $lines: [CartLineInput!]!) {
  cartLinesAdd(cartId: $cartId, lines: $lines) {
    cart { %s }
    userErrors { field message }
  }
}
""" % _CART_FIELDS

CART_QUERY = """
query getCart($id: ID!) {
  cart(id: $id) { %s }
}
""" % _CART_FIELDS
