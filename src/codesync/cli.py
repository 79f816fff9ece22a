"""Main CLI entry point for the CodeSync tool."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from codesync import repository
from codesync.cli_helpers import configure_logging, console, handle_codesync_error
from codesync.exceptions import CodeSyncError

app = typer.Typer(
    name="codesync",
    help="CodeSync - a small version control system",
    add_completion=False,
)


# Global options callback
@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
) -> None:
    """Main callback - shows help if no command provided."""
    configure_logging(verbose)
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command()
def init(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Directory to create the repository in (default: current directory)",
    ),
) -> None:
    """Initialize a repository, unless one already exists at or above the path."""
    target = path or Path.cwd()

    try:
        repo, created = repository.initialize_repository(target)
    except CodeSyncError as e:
        handle_codesync_error(e)
        raise typer.Exit(code=1)

    with repo:
        if not created:
            console.print(
                f"[yellow]Repository already exists: {escape(str(repo.worktree))}[/yellow]",
                highlight=False,
            )
            return

        console.print(f"[green]Created {escape(str(repo.codesync_dir))}[/green]", highlight=False)
        console.print("\n[bold green]✓ Repository initialized successfully![/bold green]")


@app.command()
def root(
    path: Optional[Path] = typer.Option(
        None,
        "--path",
        "-p",
        help="Directory to search from (default: current directory)",
    ),
) -> None:
    """Show the work tree root of the enclosing repository."""
    try:
        repo = repository.discover_repository(path, required=True)
    except CodeSyncError as e:
        handle_codesync_error(e)
        raise typer.Exit(code=1)

    with repo:
        typer.echo(str(repo.worktree))


@app.command()
def version() -> None:
    """Show the version number."""
    from codesync import __version__

    typer.echo(f"codesync version {__version__}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
