"""Exceptions raised by Swagger Search."""

from typing import Optional


class SwaggerSearchError(Exception):
    """Base class for Swagger Search errors."""


class ConfigurationError(SwaggerSearchError):
    """Raised when the service registry cannot be loaded."""


class ServiceNotFoundError(SwaggerSearchError):
    """Raised when a service slug is not in the registry."""

    def __init__(self, slug: str):
        super().__init__(f'Service with slug "{slug}" not found')
        self.slug = slug


class FetchError(SwaggerSearchError):
    """Raised when a specification cannot be fetched or decoded."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class InvalidResourceError(SwaggerSearchError):
    """Raised for resource URIs the server does not serve."""
