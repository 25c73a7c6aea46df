"""Logging setup for the command line."""

import logging

from rich.logging import RichHandler

from platformrocks.console import console


def configure_logging(verbose: bool = False) -> None:
    """Route log records through rich; DEBUG when verbose, else WARNING."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=verbose)],
        force=True,
    )
