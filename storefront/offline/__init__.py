"""Offline caching for page assets."""
from .worker import (
    CACHE_NAME,
    CORE_ASSETS,
    OFFLINE_PAGES,
    CacheQuotaExceeded,
    CacheStorage,
    CachedResponse,
    OfflineCacheError,
    OfflineCacheWorker,
    ResponseCache,
    is_page_request,
)

__all__ = [
    "CACHE_NAME",
    "CORE_ASSETS",
    "OFFLINE_PAGES",
    "CacheQuotaExceeded",
    "CacheStorage",
    "CachedResponse",
    "OfflineCacheError",
    "OfflineCacheWorker",
    "ResponseCache",
    "is_page_request",
]
