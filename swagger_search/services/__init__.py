"""Service registry and specification fetching."""

from .fetcher import SwaggerFetcher
from .registry import ServiceRegistry, SwaggerService

__all__ = ["ServiceRegistry", "SwaggerFetcher", "SwaggerService"]
