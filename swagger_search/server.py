"""
MCP Server for Swagger Search

This module exposes the configured services to MCP clients. It wires together the
service registry, the specification fetcher, the semantic index and the
background indexer, and publishes them as MCP tools and resources.

Tools:
- list_services / search_services: browse the registry
- get_swagger / get_endpoints / search_endpoints / get_endpoint_details /
  get_schemas / compare_services: inspect fetched specifications
- semantic_search / find_similar: rank documents of all indexed services
- search_stats / indexing_status: index contents and background progress

Resources:
- swagger://{slug}: the raw specification of a service, also listed once per
  registered service

Example Usage:
    from swagger_search.server import SwaggerSearchApp, create_server

    app = SwaggerSearchApp.from_config()
    create_server(app).run()
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional

from mcp.server.fastmcp import FastMCP

from .api.api_spec import APISpec
from .config import Config, config
from .errors import (
    ConfigurationError,
    FetchError,
    InvalidResourceError,
    SwaggerSearchError,
)
from .indexing.background import BackgroundIndexer
from .indexing.indexer import SemanticIndex
from .indexing.progress import IndexingProgress
from .search.search_models import SearchResult, endpoint_document_id
from .services.fetcher import SwaggerFetcher
from .services.registry import ServiceRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "swagger-mcp"
RESOURCE_SCHEME = "swagger://"


def to_json(data: Any) -> str:
    """Serialize tool output."""
    return json.dumps(data, indent=2, default=str)


class SwaggerSearchApp:
    """Tool implementations shared by the MCP server and the CLI."""

    def __init__(
        self,
        registry: ServiceRegistry,
        fetcher: Optional[SwaggerFetcher] = None,
        index: Optional[SemanticIndex] = None,
        progress: Optional[IndexingProgress] = None,
        settings: Config = config,
    ):
        """Initialize application.

        Args:
            registry: Services to expose
            fetcher: Specification fetcher (created from settings if omitted)
            index: Semantic index (empty if omitted)
            progress: Background indexing progress
            settings: Configuration
        """
        self.settings = settings
        self.registry = registry
        self.fetcher = fetcher or SwaggerFetcher(
            registry, cache_ttl=settings.cache_ttl, timeout=settings.http_timeout
        )
        self.index = index or SemanticIndex()
        self.progress = progress or IndexingProgress(total=len(registry))
        self.indexer = BackgroundIndexer(
            self.fetcher,
            self.index,
            self.progress,
            start_delay=settings.index_start_delay,
            delay=settings.index_delay,
        )

    @classmethod
    def from_config(cls, settings: Config = config) -> "SwaggerSearchApp":
        """Create the application from the configured services file.

        An unreadable services file is logged and yields an empty registry.
        """
        try:
            registry = ServiceRegistry.from_file(settings.services_file)
        except ConfigurationError as e:
            logger.error(f"Failed to load services: {e}")
            registry = ServiceRegistry()
        return cls(registry, settings=settings)

    async def aclose(self) -> None:
        """Stop background indexing and release the HTTP client."""
        await self.indexer.stop()
        await self.fetcher.aclose()

    async def _require_swagger(self, slug: str) -> Dict[str, Any]:
        document = await self.fetcher.fetch_swagger(slug)
        if document is None:
            raise FetchError(f"Failed to fetch swagger for {slug}")
        return document

    def _format_results(self, results: List[SearchResult]) -> List[Dict[str, Any]]:
        formatted = []
        for result in results:
            metadata = result.document.metadata
            formatted.append(
                {
                    "service": metadata.service,
                    "type": metadata.type.value,
                    "path": metadata.path,
                    "method": metadata.method,
                    "operationId": metadata.operation_id,
                    "score": round(result.score, 4),
                    "preview": result.document.content[: self.settings.preview_length],
                }
            )
        return formatted

    def indexing_state(self) -> str:
        return self.progress.status.value

    # Registry

    def list_services(self, group: Optional[str] = None) -> List[Dict[str, Any]]:
        services = (
            self.registry.get_services_by_group(group)
            if group
            else self.registry.get_services()
        )
        return [service.to_dict() for service in services]

    def search_services(self, query: str) -> List[Dict[str, Any]]:
        return [service.to_dict() for service in self.registry.search_services(query)]

    # Specifications

    async def get_swagger(self, slug: str) -> Optional[Dict[str, Any]]:
        return await self.fetcher.fetch_swagger(slug)

    async def get_endpoints(self, slug: str) -> List[Dict[str, Any]]:
        return APISpec.extract_endpoints(await self._require_swagger(slug))

    async def search_endpoints(self, slug: str, query: str) -> List[Dict[str, Any]]:
        return APISpec.search_endpoints(await self._require_swagger(slug), query)

    async def get_endpoint_details(
        self, slug: str, path: str, method: str
    ) -> Optional[Dict[str, Any]]:
        document = await self._require_swagger(slug)
        return APISpec.get_endpoint_details(document, path, method)

    async def get_schemas(self, slug: str) -> Dict[str, Any]:
        return APISpec.extract_schemas(await self._require_swagger(slug))

    async def compare_services(self, slug1: str, slug2: str) -> Dict[str, Any]:
        documents = await self.fetcher.fetch_multiple([slug1, slug2])
        if slug1 not in documents or slug2 not in documents:
            raise FetchError("Failed to fetch one or both swagger documents")
        return APISpec.compare_services(slug1, documents[slug1], slug2, documents[slug2])

    async def read_resource(self, uri: str) -> Dict[str, Any]:
        """Read a ``swagger://{slug}`` resource."""
        if not uri.startswith(RESOURCE_SCHEME):
            raise InvalidResourceError("Invalid resource URI")
        return await self._require_swagger(uri[len(RESOURCE_SCHEME):])

    # Semantic search

    def semantic_search(self, query: str, limit: Optional[int] = None) -> Dict[str, Any]:
        """Rank indexed documents for a query.

        While background indexing runs, the payload is flagged partial and
        carries the indexing progress.
        """
        results = self.index.search(
            query,
            limit=limit or self.settings.top_k,
            threshold=self.settings.min_score,
        )
        payload: Dict[str, Any] = {"results": self._format_results(results)}
        if self.progress.in_progress:
            payload["partial"] = True
            payload["progress"] = self.progress.describe()
        return payload

    def find_similar(
        self, service: str, path: str, method: str, limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        document_id = endpoint_document_id(service, method, path)
        results = self.index.find_similar(
            document_id, limit=limit or self.settings.similar_top_k
        )
        return self._format_results(results)

    def suggestions(self, partial_query: str, limit: int = 5) -> List[str]:
        return self.index.suggestions(partial_query, limit=limit)

    def search_stats(self) -> Dict[str, Any]:
        stats = self.index.stats().to_dict()
        stats["indexingStatus"] = self.indexing_state()
        stats["indexingProgress"] = self.progress.to_dict()
        return stats

    def indexing_status(self) -> Dict[str, Any]:
        return {
            "status": self.indexing_state(),
            "progress": self.progress.to_dict(),
            "stats": self.index.stats().to_dict(),
        }


def create_server(app: SwaggerSearchApp, index_on_start: bool = True) -> FastMCP:
    """Build the MCP server exposing an application.

    Args:
        app: Application holding registry, fetcher and index
        index_on_start: Start background indexing when the server starts

    Returns:
        Configured FastMCP server
    """

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[SwaggerSearchApp]:
        if index_on_start:
            app.indexer.start()
            logger.info("Background indexing scheduled")
        try:
            yield app
        finally:
            await app.aclose()

    mcp = FastMCP(SERVER_NAME, lifespan=lifespan)

    async def guarded(call) -> str:
        try:
            return to_json(await call())
        except SwaggerSearchError as e:
            return f"Error: {e}"

    @mcp.tool()
    async def list_services(group: Optional[str] = None) -> str:
        """List all available microservices, optionally filtered by group."""
        return to_json(app.list_services(group))

    @mcp.tool()
    async def search_services(query: str) -> str:
        """Search for microservices by name, slug, or group."""
        return to_json(app.search_services(query))

    @mcp.tool()
    async def get_swagger(slug: str) -> str:
        """Get the full OpenAPI/Swagger documentation for a service."""

        async def call():
            document = await app.get_swagger(slug)
            if document is None:
                raise FetchError("Failed to fetch swagger")
            return document

        return await guarded(call)

    @mcp.tool()
    async def get_endpoints(slug: str) -> str:
        """Get all endpoints from a service's API."""
        return await guarded(lambda: app.get_endpoints(slug))

    @mcp.tool()
    async def search_endpoints(slug: str, query: str) -> str:
        """Search for specific endpoints in a service."""
        return await guarded(lambda: app.search_endpoints(slug, query))

    @mcp.tool()
    async def get_endpoint_details(slug: str, path: str, method: str) -> str:
        """Get detailed information about a specific endpoint."""

        async def call():
            details = await app.get_endpoint_details(slug, path, method)
            if details is None:
                raise SwaggerSearchError("Endpoint not found")
            return details

        return await guarded(call)

    @mcp.tool()
    async def get_schemas(slug: str) -> str:
        """Get all data schemas/models from a service."""
        return await guarded(lambda: app.get_schemas(slug))

    @mcp.tool()
    async def semantic_search(query: str, limit: int = 10) -> str:
        """Search across all API documentation using natural language queries."""
        payload = app.semantic_search(query, limit)
        if payload.get("partial"):
            return (
                f"Indexing in progress ({payload['progress']}). "
                f"Results may be incomplete.\n\nPartial results:\n"
                f"{to_json(payload['results'])}"
            )
        return to_json(payload["results"])

    @mcp.tool()
    async def find_similar(service: str, path: str, method: str, limit: int = 5) -> str:
        """Find endpoints similar to a given endpoint."""
        return to_json(app.find_similar(service, path, method, limit))

    @mcp.tool()
    async def search_suggestions(query: str, limit: int = 5) -> str:
        """Suggest search terms completing a partial query."""
        return to_json(app.suggestions(query, limit))

    @mcp.tool()
    async def search_stats() -> str:
        """Get statistics about indexed swagger documentation."""
        return to_json(app.search_stats())

    @mcp.tool()
    async def indexing_status() -> str:
        """Check the status of background indexing."""
        return to_json(app.indexing_status())

    @mcp.tool()
    async def compare_services(slug1: str, slug2: str) -> str:
        """Compare endpoints between two services."""
        return await guarded(lambda: app.compare_services(slug1, slug2))

    @mcp.resource(f"{RESOURCE_SCHEME}{{slug}}", mime_type="application/json")
    async def swagger_resource(slug: str) -> str:
        """OpenAPI documentation of a service."""
        return to_json(await app.read_resource(f"{RESOURCE_SCHEME}{slug}"))

    def service_reader(uri: str):
        async def read() -> str:
            return to_json(await app.read_resource(uri))

        return read

    # Concrete resources so clients can list them
    for service in app.registry:
        uri = f"{RESOURCE_SCHEME}{service.slug}"
        mcp.resource(
            uri,
            name=service.name,
            description=f"OpenAPI documentation for {service.name} ({service.group})",
            mime_type="application/json",
        )(service_reader(uri))

    return mcp
