"""Serve command."""

import logging

import click

from ...logging import init_logging
from ...server import SwaggerSearchApp, create_server

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--no-index",
    is_flag=True,
    help="Do not index services in the background",
)
def serve(no_index: bool) -> None:
    """Run the MCP server over stdio."""
    init_logging()

    app = SwaggerSearchApp.from_config()
    server = create_server(app, index_on_start=not no_index)

    logger.info("Swagger MCP server running on stdio")
    if not no_index:
        logger.info(
            f"Background indexing will start in {app.settings.index_start_delay} seconds..."
        )
    server.run()
