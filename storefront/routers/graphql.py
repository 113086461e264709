"""
GraphQL Proxy Router

Forwards ``{query, variables}`` from the browser to the Shopify Storefront
API, adding the access token server-side so it never reaches the client.
Upstream status and JSON body (including ``errors``) are mirrored verbatim.
"""

from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from storefront.config import GRAPHQL_PROXY_PATH, GatewaySettings
from storefront.errors import (
    ERROR_METHOD_NOT_ALLOWED,
    ERROR_MISSING_QUERY,
    ERROR_SERVER_CONFIGURATION,
    ERROR_UPSTREAM_FAILED,
)
from storefront.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["graphql"])

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


# ==================== DEPENDENCIES ====================

_upstream_client: Optional[httpx.AsyncClient] = None


def get_upstream_client() -> httpx.AsyncClient:
    """Shared httpx client for Shopify (lazy loaded). No timeout is imposed."""
    global _upstream_client
    if _upstream_client is None:
        _upstream_client = httpx.AsyncClient(timeout=httpx.Timeout(None))
    return _upstream_client


async def close_upstream_client() -> None:
    global _upstream_client
    if _upstream_client is not None:
        await _upstream_client.aclose()
        _upstream_client = None


def get_gateway_settings() -> GatewaySettings:
    """Read on every request so new environment values apply immediately."""
    return GatewaySettings.from_env()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


# ==================== PROXY ====================

@router.api_route(GRAPHQL_PROXY_PATH, methods=ALL_METHODS)
async def graphql_proxy(
    request: Request,
    settings: GatewaySettings = Depends(get_gateway_settings),
    client: httpx.AsyncClient = Depends(get_upstream_client),
):
    """Proxy a GraphQL request to Shopify."""
    if request.method != "POST":
        return _error(405, ERROR_METHOD_NOT_ALLOWED)

    if not settings.is_configured:
        logger.error("Missing Shopify credentials in environment variables")
        return _error(500, ERROR_SERVER_CONFIGURATION)

    try:
        body = await request.json()
    except ValueError:
        body = None

    if not isinstance(body, dict) or not body.get("query"):
        return _error(400, ERROR_MISSING_QUERY)

    try:
        response = await client.post(
            settings.graphql_url,
            json={"query": body["query"], "variables": body.get("variables") or {}},
            headers={
                "Content-Type": "application/json",
                "X-Shopify-Storefront-Access-Token": settings.storefront_token,
            },
        )
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("GraphQL proxy error for %s: %s", settings.shop, type(e).__name__)
        return _error(500, ERROR_UPSTREAM_FAILED)

    return JSONResponse(status_code=response.status_code, content=data)
