"""
Search Command for Swagger Search CLI

This module provides the search commands of the Swagger Search CLI. Both commands
build a fresh in-memory index (from the configured services or from local
specification files) and print the ranked documents as a table.

Example Usage:
    $ swagger-search search "payment processing"
    $ swagger-search search --top-k 5 --min-score 0.2 "user management"
    $ swagger-search search --spec petstore.yaml "find pets by status"
    $ swagger-search similar petstore /pets GET --spec petstore.yaml
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import click
from rich.console import Console
from rich.table import Table

from ...config import config
from ...errors import SwaggerSearchError
from ...search.search_models import SearchResult, endpoint_document_id
from .index import build_app, services_option, spec_option

logger = logging.getLogger(__name__)
console = Console()


def print_results(title: str, results: List[SearchResult]) -> None:
    """Print ranked documents as a table."""
    table = Table(
        title=title,
        show_header=True,
        header_style="bold magenta",
    )

    table.add_column("Score", justify="right", style="cyan")
    table.add_column("Service", justify="left", style="yellow")
    table.add_column("Type", justify="left")
    table.add_column("Method", justify="left", style="green")
    table.add_column("Path", justify="left", style="blue")
    table.add_column("Content", justify="left")

    for result in results:
        metadata = result.document.metadata
        table.add_row(
            f"{result.score:.3f}",
            metadata.service,
            metadata.type.value,
            metadata.method or "",
            metadata.path or "",
            result.document.content[: config.preview_length],
        )

    console.print(table)


@click.command()
@click.argument("query")
@click.option(
    "--top-k",
    type=int,
    default=None,
    help="Number of results to return (defaults to TOP_K)",
)
@click.option(
    "--min-score",
    type=float,
    default=None,
    help="Minimum similarity score (defaults to MIN_SCORE)",
)
@spec_option
@services_option
def search(
    query: str,
    top_k: Optional[int],
    min_score: Optional[float],
    spec_files: Sequence[Path],
    services_file: Optional[Path],
) -> None:
    """Search API documentation with a natural language query."""
    try:
        app = build_app(spec_files, services_file)
        results = app.index.search(
            query,
            limit=config.top_k if top_k is None else top_k,
            threshold=config.min_score if min_score is None else min_score,
        )

        if not results:
            console.print("No results found.")
            suggestions = app.index.suggestions(query)
            if suggestions:
                console.print(f"Did you mean: {', '.join(suggestions)}", style="blue")
            return

        print_results(f"Search Results for: {query}", results)

    except (SwaggerSearchError, ValueError, OSError) as e:
        logger.error(f"Search failed: {e}")
        console.print(f"[red]Error:[/red] {str(e)}")
        sys.exit(1)


@click.command()
@click.argument("service")
@click.argument("path")
@click.argument("method")
@click.option(
    "--top-k",
    type=int,
    default=None,
    help="Number of similar documents to return (defaults to SIMILAR_TOP_K)",
)
@spec_option
@services_option
def similar(
    service: str,
    path: str,
    method: str,
    top_k: Optional[int],
    spec_files: Sequence[Path],
    services_file: Optional[Path],
) -> None:
    """Find documents similar to an endpoint."""
    try:
        app = build_app(spec_files, services_file)
        document_id = endpoint_document_id(service, method, path)
        results = app.index.find_similar(
            document_id,
            limit=config.similar_top_k if top_k is None else top_k,
        )

        if not results:
            console.print("No similar endpoints found.")
            return

        print_results(f"Similar to: {method.upper()} {path} ({service})", results)

    except (SwaggerSearchError, ValueError, OSError) as e:
        logger.error(f"Similar search failed: {e}")
        console.print(f"[red]Error:[/red] {str(e)}")
        sys.exit(1)
