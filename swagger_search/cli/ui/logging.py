"""Rich log output for CLI commands.

Records go to stderr so the result tables printed on stdout stay pipeable.
``-v`` shows per-service indexing progress, ``-vv`` adds extraction and IDF
rebuild details.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from ...logging import quiet_libraries

console = Console(stderr=True)

VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def verbosity_level(verbosity: int) -> int:
    """Map a ``-v`` count to a logging level, clamped to DEBUG."""
    return VERBOSITY_LEVELS[min(max(verbosity, 0), len(VERBOSITY_LEVELS) - 1)]


def setup_logging(verbosity: int = 0) -> None:
    """Replace root handlers with a RichHandler on stderr.

    Args:
        verbosity: Number of ``-v`` flags
    """
    level = verbosity_level(verbosity)
    debugging = level == logging.DEBUG

    handler = RichHandler(
        console=console,
        show_path=debugging,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=debugging,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logging.basicConfig(level=level, handlers=[handler], force=True)
    quiet_libraries()

    logging.getLogger(__name__).debug(
        f"CLI logging at {logging.getLevelName(level)}"
    )
