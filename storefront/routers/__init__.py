"""
FastAPI Routers Package

Routers are mounted by the serverless entry points under ``api/``.
"""

from storefront.routers.graphql import router as graphql_router

__all__ = [
    "graphql_router",
]
