"""Index command."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import click
from rich.console import Console
from rich.table import Table

from ...config import config
from ...errors import SwaggerSearchError
from ...indexing.parser import load_specification
from ...server import SwaggerSearchApp
from ...services.registry import ServiceRegistry

logger = logging.getLogger(__name__)
console = Console()

spec_option = click.option(
    "--spec",
    "spec_files",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Index a local JSON/YAML specification instead of fetching services "
    "(repeatable; the file name is used as service id)",
)
services_option = click.option(
    "--services-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Services registry file (defaults to SERVICES_FILE)",
)


async def _index_registry(app: SwaggerSearchApp) -> None:
    try:
        for service in app.registry:
            try:
                count = await app.indexer.index_service(service.slug)
            except SwaggerSearchError as e:
                logger.error(f"Failed to index {service.slug}: {e}")
                continue
            except Exception:
                logger.exception(f"Unexpected error indexing {service.slug}")
                continue
            logger.info(f"Indexed {count} documents from {service.slug}")
    finally:
        await app.fetcher.aclose()


def build_app(
    spec_files: Sequence[Path] = (), services_file: Optional[Path] = None
) -> SwaggerSearchApp:
    """Create an application and populate its index.

    Local specification files are indexed directly; otherwise every service
    of the registry is fetched and indexed.

    Args:
        spec_files: Local specification files
        services_file: Registry file overriding the configured one

    Returns:
        Application with a populated index
    """
    if spec_files:
        app = SwaggerSearchApp(ServiceRegistry())
        for file_path in spec_files:
            app.index.index_batch(load_specification(file_path), file_path.stem)
        return app

    registry = ServiceRegistry.from_file(services_file or config.services_file)
    app = SwaggerSearchApp(registry)
    with console.status(f"Indexing {len(registry)} services..."):
        asyncio.run(_index_registry(app))
    return app


def print_stats(app: SwaggerSearchApp) -> None:
    """Print index statistics as a table."""
    stats = app.index.stats()

    table = Table(title="Index Statistics", show_header=True, header_style="bold magenta")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    table.add_row("Documents", str(stats.total_documents))
    table.add_row("Terms", str(stats.total_terms))
    table.add_row("Services", str(len(stats.services)))
    table.add_row("Endpoints", str(stats.endpoint_count))
    table.add_row("Schemas", str(stats.schema_count))

    console.print(table)


@click.command()
@spec_option
@services_option
def index(spec_files: Sequence[Path], services_file: Optional[Path]) -> None:
    """Index API specifications and show index statistics."""
    try:
        app = build_app(spec_files, services_file)
        print_stats(app)

    except (SwaggerSearchError, ValueError, OSError) as e:
        logger.error(f"Indexing failed: {e}")
        console.print(f"[red]Error:[/red] {str(e)}")
        sys.exit(1)
