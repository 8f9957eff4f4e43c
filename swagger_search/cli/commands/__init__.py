"""CLI commands package."""

import click

from ..ui.logging import setup_logging
from .index import index
from .search import search, similar
from .serve import serve
from .services import services


@click.group()
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v, -vv)")
def cli(verbose: int) -> None:
    """Swagger Search CLI."""
    setup_logging(verbose)


cli.add_command(index)
cli.add_command(search)
cli.add_command(serve)
cli.add_command(services)
cli.add_command(similar)
