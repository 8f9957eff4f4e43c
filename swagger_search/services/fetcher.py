"""Fetching and caching of remote API specifications."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..errors import FetchError, ServiceNotFoundError
from ..utils.cache import TTLCache
from .registry import ServiceRegistry, SwaggerService

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 30 * 60
DEFAULT_TIMEOUT = 30.0


class SwaggerFetcher:
    """Fetches OpenAPI/Swagger documents of registered services.

    Documents are cached per slug for ``cache_ttl`` seconds. Fetch failures
    are logged and reported as ``None`` so that one unreachable service does
    not break callers iterating over the whole registry.
    """

    def __init__(
        self,
        registry: ServiceRegistry,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        timeout: float = DEFAULT_TIMEOUT,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize fetcher.

        Args:
            registry: Services to fetch from
            cache_ttl: Cache lifetime in seconds
            timeout: Request timeout in seconds
            client: Optional preconfigured HTTP client
        """
        self.registry = registry
        self.cache: TTLCache[Dict[str, Any]] = TTLCache(ttl=cache_ttl)
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(
            headers={"Accept": "application/json"},
            timeout=timeout,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "SwaggerFetcher":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def _download(self, service: SwaggerService) -> Dict[str, Any]:
        url = service.url
        try:
            response = await self.http_client.get(
                url, headers={"Accept": "application/json"}
            )
            response.raise_for_status()
            document = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"Failed to fetch swagger from {url}: {e.response.reason_phrase}",
                url=url,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FetchError(f"Failed to fetch swagger from {url}: {e}", url=url) from e
        except ValueError as e:
            raise FetchError(f"Invalid JSON returned by {url}: {e}", url=url) from e

        if not isinstance(document, dict):
            raise FetchError(f"Unexpected document type returned by {url}", url=url)
        return document

    async def fetch_swagger(self, slug: str) -> Optional[Dict[str, Any]]:
        """Fetch the specification of a service.

        Args:
            slug: Service slug

        Returns:
            Parsed specification, or None if fetching failed

        Raises:
            ServiceNotFoundError: If the slug is not registered
        """
        cached = self.cache.get(slug)
        if cached is not None:
            return cached

        service = self.registry.get_service(slug)
        if service is None:
            raise ServiceNotFoundError(slug)

        try:
            document = await self._download(service)
        except FetchError as e:
            logger.error(f"Error fetching swagger for {slug}: {e}")
            return None

        self.cache.set(slug, document)
        return document

    async def fetch_multiple(self, slugs: List[str]) -> Dict[str, Dict[str, Any]]:
        """Fetch several specifications concurrently.

        Args:
            slugs: Service slugs

        Returns:
            Mapping of slug to specification for the fetches that succeeded
        """
        documents = await asyncio.gather(*(self.fetch_swagger(slug) for slug in slugs))
        return {
            slug: document
            for slug, document in zip(slugs, documents)
            if document is not None
        }

    def clear_cache(self) -> None:
        """Drop all cached specifications."""
        self.cache.clear()

    def set_cache_timeout(self, timeout: float) -> None:
        """Change the cache lifetime in seconds."""
        self.cache.ttl = timeout
