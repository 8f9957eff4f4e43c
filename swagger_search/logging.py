"""
Logging Configuration for Swagger Search

This module configures logging for the Swagger Search server. All output goes to
stderr: when the server runs over stdio, stdout carries the MCP protocol stream
and must not receive log lines.

Example Usage:
    from swagger_search.logging import init_logging

    init_logging(level="INFO")

    logger = logging.getLogger(__name__)
    logger.info("Server started")
"""

import logging
import sys
from typing import Optional

from .config import config

NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "mcp")


def init_logging(level: Optional[str] = None) -> None:
    """Initialize logging configuration.

    Args:
        level: Optional logging level (default: configured LOG_LEVEL)
    """
    if level is None:
        level = config.log_level

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Create console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(config.log_format))

    # Add handler to root logger
    root_logger.addHandler(console_handler)

    quiet_libraries()


def quiet_libraries() -> None:
    """Keep HTTP and protocol libraries at WARNING."""
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
