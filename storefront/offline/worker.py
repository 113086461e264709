"""
Offline Cache Worker - cache-first httpx transport.

Wraps a network transport:
- install(): repopulates the versioned cache namespace with the core assets
- activate(): purges every other namespace
- GET requests are served from cache first; 200 responses fetched from the
  network are stored for later (best-effort)
- when the network is down, page requests get the offline page and
  everything else an empty 504

Usage:
    worker = OfflineCacheWorker(httpx.AsyncHTTPTransport(), base_url="https://shop.example")
    await worker.install()
    await worker.activate()
    async with httpx.AsyncClient(transport=worker) as client:
        await client.get("https://shop.example/index.html")
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import httpx

from storefront.logging import get_logger

logger = get_logger(__name__)

CACHE_NAME = "storefront-v1"
CORE_ASSETS: Tuple[str, ...] = (
    "/",
    "/index.html",
    "/pages/homepage.html",
    "/css/main.css",
    "/js/performance.js",
)
OFFLINE_PAGES: Tuple[str, ...] = ("/pages/homepage.html", "/index.html")

# Recomputed from the stored (decoded) body
_DROPPED_HEADERS = {"content-encoding", "content-length", "transfer-encoding"}


class OfflineCacheError(Exception):
    """Install could not fetch every core asset."""


class CacheQuotaExceeded(Exception):
    """A cache namespace is full."""


@dataclass(frozen=True)
class CachedResponse:
    status_code: int
    headers: Tuple[Tuple[str, str], ...]
    content: bytes

    @classmethod
    async def from_response(cls, response: httpx.Response) -> "CachedResponse":
        await response.aread()
        headers = tuple(
            (k, v) for k, v in response.headers.items() if k.lower() not in _DROPPED_HEADERS
        )
        return cls(status_code=response.status_code, headers=headers, content=response.content)

    def to_response(self, request: httpx.Request) -> httpx.Response:
        """A fresh response object; cached bodies are never shared."""
        return httpx.Response(
            self.status_code,
            headers=list(self.headers),
            content=self.content,
            request=request,
        )


def cache_key(url: httpx.URL) -> str:
    return str(url.copy_with(fragment=None))


class ResponseCache:
    """One cache namespace: URL -> response."""

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max_entries
        self._entries: Dict[str, CachedResponse] = {}

    def match(self, key: str) -> Optional[CachedResponse]:
        return self._entries.get(key)

    def put(self, key: str, response: CachedResponse) -> None:
        if (
            self.max_entries is not None
            and key not in self._entries
            and len(self._entries) >= self.max_entries
        ):
            raise CacheQuotaExceeded(f"cache is full ({self.max_entries} entries)")
        self._entries[key] = response

    def keys(self) -> List[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class CacheStorage:
    """All cache namespaces, in creation order."""

    def __init__(self, max_entries: Optional[int] = None):
        self.max_entries = max_entries
        self._caches: Dict[str, ResponseCache] = {}

    def open(self, name: str) -> ResponseCache:
        if name not in self._caches:
            self._caches[name] = ResponseCache(self.max_entries)
        return self._caches[name]

    def has(self, name: str) -> bool:
        return name in self._caches

    def delete(self, name: str) -> bool:
        return self._caches.pop(name, None) is not None

    def keys(self) -> List[str]:
        return list(self._caches)

    def match(self, key: str) -> Optional[CachedResponse]:
        for cache in self._caches.values():
            hit = cache.match(key)
            if hit is not None:
                return hit
        return None


def is_page_request(request: httpx.Request) -> bool:
    """Navigation requests, or anything that accepts HTML."""
    if request.headers.get("sec-fetch-mode", "").lower() == "navigate":
        return True
    return "text/html" in request.headers.get("accept", "")


class OfflineCacheWorker(httpx.AsyncBaseTransport):
    """Cache-first transport with an offline fallback page."""

    def __init__(
        self,
        network: httpx.AsyncBaseTransport,
        base_url: str,
        storage: Optional[CacheStorage] = None,
        cache_name: str = CACHE_NAME,
        core_assets: Sequence[str] = CORE_ASSETS,
        offline_pages: Sequence[str] = OFFLINE_PAGES,
    ):
        self.network = network
        self.base_url = httpx.URL(base_url)
        self.storage = storage if storage is not None else CacheStorage()
        self.cache_name = cache_name
        self.core_assets = tuple(core_assets)
        self.offline_pages = tuple(offline_pages)

    def _key_for(self, path: str) -> str:
        return cache_key(self.base_url.join(path))

    # ==================== LIFECYCLE ====================

    async def install(self) -> None:
        """
        Fetch every core asset and replace the current namespace with them.

        Raises:
            OfflineCacheError: an asset failed to download or was not a 200;
                the previous namespace is left untouched
        """
        fetched: Dict[str, CachedResponse] = {}
        for path in self.core_assets:
            url = self.base_url.join(path)
            try:
                response = await self.network.handle_async_request(httpx.Request("GET", url))
                cached = await CachedResponse.from_response(response)
            except httpx.TransportError as e:
                logger.error("Install failed fetching %s: %s", path, e)
                raise OfflineCacheError(f"Failed to fetch {path}: {e}") from e
            if cached.status_code != 200:
                logger.error("Install failed: %s returned %s", path, cached.status_code)
                raise OfflineCacheError(f"Failed to fetch {path}: status {cached.status_code}")
            fetched[cache_key(url)] = cached

        self.storage.delete(self.cache_name)
        cache = self.storage.open(self.cache_name)
        for key, cached in fetched.items():
            cache.put(key, cached)
        logger.info("Installed %d core assets into %s", len(fetched), self.cache_name)

    async def activate(self) -> List[str]:
        """Delete every namespace except the current one. Returns the purged names."""
        purged = [name for name in self.storage.keys() if name != self.cache_name]
        for name in purged:
            self.storage.delete(name)
        if purged:
            logger.info("Purged old caches: %s", purged)
        return purged

    # ==================== FETCH ====================

    async def _store(self, key: str, cached: CachedResponse) -> None:
        try:
            self.storage.open(self.cache_name).put(key, cached)
        except Exception as e:
            # Storage is best-effort; the response is still served
            logger.warning("Could not cache %s: %s", key, e)

    def _offline_fallback(self, request: httpx.Request) -> httpx.Response:
        if is_page_request(request):
            for path in self.offline_pages:
                page = self.storage.match(self._key_for(path))
                if page is not None:
                    return page.to_response(request)
        return httpx.Response(
            504,
            content=b"",
            request=request,
            extensions={"reason_phrase": b"Gateway Timeout"},
        )

    async def handle_fetch(self, request: httpx.Request) -> Optional[httpx.Response]:
        """Cache-first handling; None for requests this worker does not intercept."""
        if request.method != "GET":
            return None

        key = cache_key(request.url)
        cached = self.storage.match(key)
        if cached is not None:
            return cached.to_response(request)

        try:
            response = await self.network.handle_async_request(request)
            await response.aread()
        except httpx.TransportError as e:
            logger.warning("Network unavailable for %s: %s", key, e)
            return self._offline_fallback(request)

        if response.status_code == 200:
            await self._store(key, await CachedResponse.from_response(response))
        return response

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        response = await self.handle_fetch(request)
        if response is None:
            return await self.network.handle_async_request(request)
        return response

    async def aclose(self) -> None:
        await self.network.aclose()
