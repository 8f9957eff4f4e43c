"""
Service Registry for Swagger Search

This module holds the list of services whose OpenAPI/Swagger documents the server
exposes. The list is read from a JSON or YAML file of entries shaped like:

    [
        {
            "name": "Payments Service",
            "slug": "payments",
            "baseUrl": "https://payments.example.com",
            "openApiPath": "/v3/api-docs",
            "group": "Billing"
        }
    ]

Example Usage:
    from swagger_search.services.registry import ServiceRegistry

    registry = ServiceRegistry.from_file("swaggers.json")
    for service in registry.get_services_by_group("Billing"):
        print(service.slug, service.url)
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from ..errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwaggerService:
    """A service exposing an OpenAPI/Swagger document."""

    name: str
    slug: str
    base_url: str
    openapi_path: str
    group: str = ""

    @property
    def url(self) -> str:
        """Location of the service's specification."""
        return f"{self.base_url}{self.openapi_path}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SwaggerService":
        """Create from a registry entry.

        Raises:
            ConfigurationError: If a required key is missing
        """
        try:
            return cls(
                name=data["name"],
                slug=data["slug"],
                base_url=data["baseUrl"],
                openapi_path=data["openApiPath"],
                group=data.get("group", ""),
            )
        except (KeyError, TypeError) as e:
            raise ConfigurationError(f"Invalid service entry {data!r}: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert to registry entry format."""
        return {
            "name": self.name,
            "slug": self.slug,
            "baseUrl": self.base_url,
            "openApiPath": self.openapi_path,
            "group": self.group,
        }


class ServiceRegistry:
    """Lookup over the configured services."""

    def __init__(self, services: Optional[Iterable[SwaggerService]] = None):
        """Initialize registry.

        Args:
            services: Services in display order
        """
        self._services: List[SwaggerService] = list(services or [])

    def __len__(self) -> int:
        return len(self._services)

    def __iter__(self):
        return iter(self._services)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "ServiceRegistry":
        """Load services from a JSON or YAML file.

        Args:
            file_path: Registry file

        Returns:
            Loaded registry

        Raises:
            ConfigurationError: If the file cannot be read or has the wrong shape
        """
        file_path = Path(file_path)
        try:
            with open(file_path, encoding="utf-8") as f:
                if file_path.suffix in [".yaml", ".yml"]:
                    entries = yaml.safe_load(f)
                else:
                    entries = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load {file_path}: {e}") from e

        if not isinstance(entries, list):
            raise ConfigurationError(f"{file_path} must contain a list of services")

        registry = cls(SwaggerService.from_dict(entry) for entry in entries)
        logger.info(f"Loaded {len(registry)} services from {file_path}")
        return registry

    def get_services(self) -> List[SwaggerService]:
        """Get all services."""
        return list(self._services)

    def get_service(self, slug: str) -> Optional[SwaggerService]:
        """Get a service by slug."""
        for service in self._services:
            if service.slug == slug:
                return service
        return None

    def get_services_by_group(self, group: str) -> List[SwaggerService]:
        """Get the services of a group."""
        return [service for service in self._services if service.group == group]

    def get_groups(self) -> List[str]:
        """Get distinct groups in first-seen order."""
        return list(dict.fromkeys(service.group for service in self._services))

    def search_services(self, query: str) -> List[SwaggerService]:
        """Find services whose name, slug or group contains the query.

        Matching is case-insensitive.
        """
        lower_query = query.lower()
        return [
            service
            for service in self._services
            if lower_query in service.name.lower()
            or lower_query in service.slug.lower()
            or lower_query in service.group.lower()
        ]
