"""Shared helper functions for the CodeSync CLI."""

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from codesync.exceptions import (
    CodeSyncError,
    ConfigParseError,
    MissingConfigError,
    NotEmptyError,
    RepositoryIOError,
    RepositoryNotFoundError,
    UnsupportedFormatVersionError,
)

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Route codesync logging to stderr through rich.

    Only the codesync logger is touched; handlers on the root logger are left alone.

    Args:
        verbose: Show debug messages instead of warnings only.
    """
    logger = logging.getLogger("codesync")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=err_console, show_path=False))


def handle_codesync_error(error: CodeSyncError) -> None:
    """Print a CodeSync error, with a hint where one helps.

    Args:
        error: The CodeSync error to report.
    """
    err_console.print(f"[red]Error: {escape(str(error))}[/red]", highlight=False)

    if isinstance(error, RepositoryNotFoundError):
        err_console.print("[yellow]Create one with 'codesync init --path <dir>'[/yellow]")
    elif isinstance(error, NotEmptyError):
        err_console.print(
            "[yellow]Remove the directory or run 'codesync init' somewhere else[/yellow]",
        )
    elif isinstance(error, MissingConfigError):
        err_console.print("[yellow]The .codesync directory exists but has no config file[/yellow]")
    elif isinstance(error, ConfigParseError):
        err_console.print("[yellow]Fix or remove the config file and try again[/yellow]")
    elif isinstance(error, UnsupportedFormatVersionError):
        err_console.print("[yellow]This version of codesync only understands format version 0[/yellow]")
    elif isinstance(error, RepositoryIOError) and error.cause is not None:
        err_console.print(f"[dim]{escape(str(error.cause))}[/dim]", highlight=False)
