"""
Main Entry Point for Swagger Search

This module serves as the main entry point when the package is run as a
command-line application.

Example Usage:
    $ python -m swagger_search serve
    $ python -m swagger_search search "find authentication endpoints"
    $ python -m swagger_search services --group Billing
"""

import sys
from typing import Optional, Sequence

import click

from .cli.commands import cli
from .initialize import initialize


def main(args: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Args:
        args: Command line arguments.
            Defaults to sys.argv[1:].

    Returns:
        Exit code.
    """
    try:
        # Initialize package
        initialize()

        # Run CLI
        cli.main(args=args, standalone_mode=False)
        return 0

    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.ClickException as e:
        e.show()
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
