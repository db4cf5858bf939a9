"""HTTP loaders that share in-flight requests and cache responses for a day."""

import asyncio
import logging
from datetime import timedelta
from typing import Optional

import httpx

from moviebook.cache import DEFAULT_LIFETIME, CacheEntry, MemoryCache, PersistentCache

logger = logging.getLogger(__name__)

HEADERS = {
    "Accept": "application/json",
    "User-Agent": "moviebook",
}

REQUEST_TIMEOUT = 10.0
RESOURCE_TIMEOUT = 20.0


class RequestLoader:
    """
    Load URLs, reusing the in-flight request for concurrent callers of the same URL.

    Responses are served from memory until they are older than `lifetime`.
    A failed request is forgotten so the next call starts over.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        lifetime: timedelta = DEFAULT_LIFETIME,
        max_entries: int = 500,
        persistent_cache: Optional[PersistentCache] = None,
        log_requests: bool = False,
    ):
        self._client = client
        self._owns_client = client is None
        self._lifetime = lifetime
        self._cache = MemoryCache(max_entries)
        self._persistent_cache = persistent_cache
        self._in_flight: dict[str, asyncio.Task] = {}
        self.log_requests = log_requests

    async def __aenter__(self) -> "RequestLoader":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=REQUEST_TIMEOUT, headers=HEADERS, follow_redirects=True
            )
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def in_flight(self, url: str) -> bool:
        return url in self._in_flight

    async def request(self, url: str) -> bytes:
        """Return the body for `url`, fetching it at most once per lifetime."""
        cached = self._cached(url)
        if cached is not None:
            return cached.content

        task = self._in_flight.get(url)
        if task is None:
            task = asyncio.ensure_future(self._fetch(url))
            self._in_flight[url] = task
            task.add_done_callback(lambda done: self._forget(url, done))

        # Shielded so one caller going away does not cancel the shared request.
        return await asyncio.shield(task)

    def _forget(self, url: str, task: asyncio.Task) -> None:
        if self._in_flight.get(url) is task:
            del self._in_flight[url]

    def _cached(self, url: str) -> Optional[CacheEntry]:
        entry = self._cache.get(url)
        if entry is not None:
            return entry

        if self._persistent_cache is not None:
            try:
                entry = self._persistent_cache.get(url)
            except (OSError, ValueError, KeyError) as e:
                logger.warning("Ignoring unreadable cache entry for %s: %s", url, e)
                self._persistent_cache.delete(url)
                entry = None
            if entry is not None:
                self._cache.set(url, entry)
        return entry

    async def _fetch(self, url: str) -> bytes:
        if self.log_requests:
            logger.info("Request started: %s", url)

        try:
            response = await asyncio.wait_for(self.client.get(url), RESOURCE_TIMEOUT)
            response.raise_for_status()
        except httpx.HTTPError as e:
            if self.log_requests:
                logger.info("Request failed: %s (%s)", url, e)
            raise
        except asyncio.TimeoutError as e:
            if self.log_requests:
                logger.info("Request timed out: %s", url)
            raise httpx.TimeoutException(f"Timed out loading {url}") from e

        if self.log_requests:
            logger.info("Response from %s: %s", url, response.text[:500])

        entry = CacheEntry(content=response.content, lifetime=self._lifetime)
        self._cache.set(url, entry)
        if self._persistent_cache is not None:
            try:
                self._persistent_cache.set(url, entry)
            except OSError as e:
                logger.warning("Failed to persist %s: %s", url, e)
        return entry.content


class ImageLoader(RequestLoader):
    """Image bytes loader with a small bounded memory cache mirrored on disk."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        persistent_cache: Optional[PersistentCache] = None,
        max_entries: int = 100,
    ):
        super().__init__(
            client=client,
            max_entries=max_entries,
            persistent_cache=persistent_cache,
        )

    async def fetch(self, url: str) -> bytes:
        return await self.request(url)
