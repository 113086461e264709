"""
Storefront GraphQL Proxy - Vercel Serverless Function

Same-origin relay from the browser to Shopify's Storefront API. The
browser posts ``{query, variables}`` to ``/api/graphql``; the access token
stays on the server.
"""
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

# Vercel runs this file directly; make the repo root importable
_base_path = Path(__file__).parent.parent
if str(_base_path) not in sys.path:
    sys.path.insert(0, str(_base_path))

from storefront.routers.graphql import close_upstream_client, router as graphql_router  # noqa: E402


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    yield
    await close_upstream_client()


app = FastAPI(
    title="Storefront GraphQL Proxy",
    description="Same-origin relay to the Shopify Storefront API",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(graphql_router)


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront-graphql-proxy"}
