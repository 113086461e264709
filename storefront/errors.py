"""
Common Error Constants

Short messages returned by the GraphQL gateway. Kept in one place so the
gateway and its tests agree on the wording.
"""

# Gateway errors
ERROR_METHOD_NOT_ALLOWED = "Method not allowed"
ERROR_SERVER_CONFIGURATION = "Server configuration error"
ERROR_MISSING_QUERY = "Missing query in request body"
ERROR_UPSTREAM_FAILED = "Failed to fetch from Shopify"

# Client errors
ERROR_CLIENT_NOT_CONFIGURED = "Shopify config not initialized"
ERROR_MISSING_VARIANT = "Missing variantId"
