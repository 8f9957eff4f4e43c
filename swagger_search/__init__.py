"""
Swagger Search - Semantic Search over OpenAPI/Swagger Services

This package exposes a fleet of remote OpenAPI/Swagger documents to MCP clients.
It discovers services from a registry file, fetches and caches their
specifications, extracts endpoints and schemas, and ranks them for natural
language queries with an in-memory TF-IDF index.

Key Features:
- TF-IDF vector index with cosine similarity search
- "Find similar" lookups between endpoints across services
- Prefix suggestions over the indexed vocabulary
- Background indexing with progress reporting
- Support for OpenAPI 3 and Swagger 2 documents

License: MIT
"""

import logging
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("swagger-search")
except PackageNotFoundError:
    __version__ = "0.0.0"

logger = logging.getLogger(__name__)

__all__ = ["__version__"]
