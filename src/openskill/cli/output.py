"""
Output formatting utilities for the CLI.

Provides consistent output formatting and error reporting across all
CLI commands.
"""

import contextlib
import logging
from collections.abc import Iterator

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from openskill.config.loader import ConfigurationError
from openskill.providers.exceptions import ProviderError
from openskill.skills.exceptions import SkillError
from openskill.sources import SourceError

# Global console instances
console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(message)s"


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗ {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]! {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]i[/blue] {message}")


def truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def describe_error(error: Exception) -> str:
    """Describe a failure for the user, naming the skill when known."""
    kind = type(error).__name__.removesuffix("Error") or type(error).__name__
    return f"{kind}: {error}"


@contextlib.contextmanager
def cli_errors() -> Iterator[None]:
    """Turn expected failures into a red message and exit status 1."""
    try:
        yield
    except (SkillError, ProviderError, SourceError, ConfigurationError) as e:
        print_error(describe_error(e))
        raise typer.Exit(1) from e


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """
    Configure logging for the openskill package.

    Args:
        level: Level name used when not verbose.
        verbose: Log everything at DEBUG.
    """
    logger = logging.getLogger("openskill")
    logger.setLevel(logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING))

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = RichHandler(
        console=err_console,
        rich_tracebacks=True,
        show_time=verbose,
        show_path=False,
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
