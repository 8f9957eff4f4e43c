"""
Configuration Management for Swagger Search

This module provides configuration management for the Swagger Search MCP server.
It implements a singleton pattern to ensure consistent configuration across the
application and loads settings from environment variables, including a local
``.env`` file when one exists.

Key Features:
- Singleton pattern for global configuration access
- Environment variable support with validation
- Default value management
- Type conversion
- Runtime updates

Example Usage:
    from swagger_search.config import config

    # Access settings
    services_file = config.services_file
    min_score = config.min_score

    # Update settings
    config.update({"top_k": 20})

Environment Variables:
    ENVIRONMENT: Environment name (development/staging/production)
    DEBUG: Enable debug mode (true/false)
    SERVICES_FILE: JSON or YAML file listing the services to expose
    CACHE_TTL: Specification cache lifetime in seconds
    HTTP_TIMEOUT: Timeout for specification requests in seconds
    MIN_SCORE: Minimum similarity score for semantic search
    TOP_K: Default number of search results
    SIMILAR_TOP_K: Default number of similar documents
    INDEX_START_DELAY: Seconds to wait before background indexing starts
    INDEX_DELAY: Seconds to pause between services while indexing
    PREVIEW_LENGTH: Characters of document content shown in results
    LOG_LEVEL: Logging level
    LOG_FORMAT: Logging format
"""

import logging
import os
from enum import Enum
from typing import Any, Dict

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Environment enumeration."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class Config:
    """Configuration settings."""

    _instance = None

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize configuration."""
        if self._initialized:
            return
        self._initialized = True

        # Environment
        self.environment = Environment.DEVELOPMENT.value
        self.debug = False

        # Services
        self.services_file = "swaggers.json"
        self.cache_ttl = 30 * 60
        self.http_timeout = 30.0

        # Search
        self.min_score = 0.1
        self.top_k = 10
        self.similar_top_k = 5
        self.preview_length = 200

        # Indexing
        self.index_start_delay = 1.0
        self.index_delay = 0.1

        # Logging
        self.log_level = "INFO"
        self.log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

        # Load environment variables
        self._load_from_env()

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        # Load environment from .env file if it exists
        if os.path.exists(".env"):
            from dotenv import load_dotenv

            load_dotenv()

        # Environment
        self.environment = os.getenv("ENVIRONMENT", self.environment)
        self.debug = os.getenv("DEBUG", str(self.debug)).lower() == "true"

        # Services
        self.services_file = os.getenv("SERVICES_FILE", self.services_file)
        self.cache_ttl = int(os.getenv("CACHE_TTL", str(self.cache_ttl)))
        self.http_timeout = float(os.getenv("HTTP_TIMEOUT", str(self.http_timeout)))

        # Search
        self.min_score = float(os.getenv("MIN_SCORE", str(self.min_score)))
        self.top_k = int(os.getenv("TOP_K", str(self.top_k)))
        self.similar_top_k = int(os.getenv("SIMILAR_TOP_K", str(self.similar_top_k)))
        self.preview_length = int(
            os.getenv("PREVIEW_LENGTH", str(self.preview_length))
        )

        # Indexing
        self.index_start_delay = float(
            os.getenv("INDEX_START_DELAY", str(self.index_start_delay))
        )
        self.index_delay = float(os.getenv("INDEX_DELAY", str(self.index_delay)))

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()
        self.log_format = os.getenv("LOG_FORMAT", self.log_format)

        # Validate environment
        if self.environment not in [e.value for e in Environment]:
            self.environment = Environment.DEVELOPMENT.value

        # Validate log level
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level not in valid_levels:
            self.log_level = "INFO"

    def update(self, values: Dict[str, Any]) -> None:
        """Update settings at runtime.

        Args:
            values: Mapping of attribute name to new value

        Raises:
            AttributeError: If a key is not a known setting
        """
        known = self.to_dict()
        for key, value in values.items():
            if key not in known:
                raise AttributeError(f"Unknown configuration key: {key}")
            setattr(self, key, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "services_file": self.services_file,
            "cache_ttl": self.cache_ttl,
            "http_timeout": self.http_timeout,
            "min_score": self.min_score,
            "top_k": self.top_k,
            "similar_top_k": self.similar_top_k,
            "preview_length": self.preview_length,
            "index_start_delay": self.index_start_delay,
            "index_delay": self.index_delay,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


# Create global instance
config = Config()

# Export configuration instance
__all__ = ["config", "Config", "Environment"]
