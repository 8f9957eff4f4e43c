"""Application initialization."""

import logging

from . import __version__
from .config import config

logger = logging.getLogger(__name__)


def initialize() -> None:
    """Initialize the package."""
    logger.debug(
        f"Initialized Swagger Search {__version__} in {config.environment} environment"
    )
