"""Services command."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...config import config
from ...errors import ConfigurationError
from ...services.registry import ServiceRegistry
from .index import services_option

logger = logging.getLogger(__name__)
console = Console()


@click.command()
@click.option("--group", default=None, help="Only list services of this group")
@click.option("--query", default=None, help="Filter by name, slug or group")
@services_option
def services(
    group: Optional[str], query: Optional[str], services_file: Optional[Path]
) -> None:
    """List registered services."""
    try:
        registry = ServiceRegistry.from_file(services_file or config.services_file)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {str(e)}")
        sys.exit(1)

    selected = registry.search_services(query) if query else registry.get_services()
    if group:
        selected = [service for service in selected if service.group == group]

    table = Table(title="Services", show_header=True, header_style="bold magenta")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")
    table.add_column("Group", style="green")
    table.add_column("URL", style="blue")

    for service in selected:
        table.add_row(service.slug, service.name, service.group, service.url)

    console.print(table)
