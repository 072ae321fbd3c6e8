"""Main CLI entry point for SGit."""

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.text import Text

from sgit.constants import (
    ADDED_PREFIX,
    EXIT_DATA_ERROR,
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    REMOVED_PREFIX,
    SGIT_DIR,
)
from sgit.core import ChangeKind, FileChange, FileStatus, Repository
from sgit.errors import (
    AlreadyInitializedError,
    BrokenChainError,
    NotARepositoryError,
    NothingToCommitError,
    ObjectCorruptedError,
    SgitError,
)

console = Console()
app = typer.Typer(
    name="sgit",
    help="A minimal local version-control engine",
    add_completion=False,
)

logger = logging.getLogger(__name__)


@app.callback()
def cli(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
) -> None:
    """A minimal local version-control engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(error: Exception) -> NoReturn:
    """Report an error and exit with a matching exit code."""
    if isinstance(error, SgitError):
        message = error.message
    else:
        message = str(error)

    logger.debug("Command failed", exc_info=error)
    console.print(f"[bold red]Error:[/bold red] {escape(message)}", style="red", highlight=False)

    if isinstance(error, (BrokenChainError, ObjectCorruptedError)):
        raise typer.Exit(EXIT_DATA_ERROR)
    if isinstance(error, SgitError):
        raise typer.Exit(EXIT_USER_ERROR)
    raise typer.Exit(EXIT_SYSTEM_ERROR)


def _open_repository() -> Repository:
    workspace_root = Path.cwd()
    try:
        return Repository.open(workspace_root)
    except NotARepositoryError:
        console.print(
            "[bold red]Error:[/bold red] Not an SGit repository",
            style="red",
        )
        console.print(
            f"  No {SGIT_DIR}/ directory found in {workspace_root}",
            style="dim",
        )
        console.print(
            "\nRun [bold]sgit init[/bold] to initialize a repository",
            style="yellow",
        )
        raise typer.Exit(EXIT_USER_ERROR)


@app.command()
def version() -> None:
    """Show SGit version."""
    from sgit import __version__
    typer.echo(f"SGit version {__version__}")


@app.command()
def init(
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress output except errors",
    ),
) -> None:
    """Initialize an SGit repository in the current directory."""
    workspace_root = Path.cwd()

    try:
        repo = Repository.init(workspace_root)
    except AlreadyInitializedError as e:
        console.print(f"[yellow]{escape(e.message)}[/yellow]", highlight=False)
        return
    except OSError as e:
        _fail(e)

    if not quiet:
        console.print(
            f"[bold green]✓[/bold green] Initialized empty SGit repository in {escape(str(repo.sgit_dir))}",
            highlight=False,
        )


@app.command()
def add(
    paths: list[str] = typer.Argument(..., help="Files to add"),
) -> None:
    """Add file contents to the staging area."""
    repo = _open_repository()

    for path in paths:
        try:
            entry = repo.add(Path(path))
        except (SgitError, OSError) as e:
            _fail(e)

        console.print(entry.hash, highlight=False)
        console.print(f"[green]Added[/green] {escape(entry.path)}", highlight=False)


@app.command()
def commit(
    message: str = typer.Argument(..., help="Commit message"),
    allow_empty: bool = typer.Option(
        False,
        "--allow-empty",
        help="Allow a commit with nothing staged",
    ),
) -> None:
    """Record the staged files as a new commit."""
    repo = _open_repository()

    try:
        new_commit = repo.commit(message, allow_empty=allow_empty)
    except NothingToCommitError as e:
        console.print(
            f"[bold yellow]Warning:[/bold yellow] {escape(e.message)}",
            style="yellow",
        )
        console.print(
            "  Use [bold]sgit add <file>[/bold] to stage files",
            style="dim",
        )
        raise typer.Exit(EXIT_USER_ERROR)
    except (SgitError, OSError) as e:
        _fail(e)

    console.print(
        f"Commit successfully created: [bold cyan]{new_commit.hash}[/bold cyan]",
        highlight=False,
    )


@app.command()
def log(
    max_count: Optional[int] = typer.Option(
        None,
        "--max-count",
        "-n",
        help="Limit number of commits to show",
    ),
    oneline: bool = typer.Option(
        False,
        "--oneline",
        help="Show each commit on a single line",
    ),
) -> None:
    """Show commit history, newest first."""
    repo = _open_repository()

    shown = 0
    try:
        for entry in repo.log(max_count=max_count):
            if oneline:
                first_line = entry.message.split("\n")[0]
                console.print(
                    Text.assemble((entry.hash[:7], "yellow"), " ", first_line)
                )
            else:
                if shown:
                    console.print()
                console.print(f"[bold yellow]commit {entry.hash}[/bold yellow]")
                if entry.parent:
                    console.print(f"[dim]Parent: {entry.parent[:7]}[/dim]")
                else:
                    console.print("[dim]Parent: (root commit)[/dim]")
                console.print(f"[bold]Date:[/bold]   {entry.timestamp}", highlight=False)
                console.print()
                for line in entry.message.split("\n"):
                    console.print(Text(f"    {line}"))
            shown += 1
    except (SgitError, OSError) as e:
        _fail(e)

    if not shown:
        console.print("[dim]No commits yet[/dim]")


def _print_file_change(change: FileChange) -> None:
    console.print(f"[bold]File:[/bold] {escape(change.path)}  [dim]({change.hash[:8]})[/dim]")
    console.print(Text(change.content), end="" if change.content.endswith("\n") else "\n")

    if change.status is FileStatus.FIRST_COMMIT:
        console.print("[dim]First commit[/dim]")
    elif change.status is FileStatus.NEW_FILE:
        console.print("[green]New file in this commit[/green]")
    else:
        console.print("\n[bold]Diff:[/bold]")
        for chunk in change.chunks:
            for line in chunk.lines:
                line = line.rstrip("\r\n")
                if chunk.kind is ChangeKind.ADDED:
                    console.print(Text(f"{ADDED_PREFIX}{line}", style="green"))
                elif chunk.kind is ChangeKind.REMOVED:
                    console.print(Text(f"{REMOVED_PREFIX}{line}", style="red"))
                else:
                    console.print(Text(line, style="bright_black"))
    console.print()


@app.command()
def show(
    commit_hash: str = typer.Argument(..., help="Commit hash to show"),
) -> None:
    """Show a commit's files and their diff against the parent commit."""
    repo = _open_repository()

    try:
        result = repo.show(commit_hash)
    except (SgitError, OSError) as e:
        _fail(e)

    console.print(f"[bold yellow]commit {result.commit.hash}[/bold yellow]")
    console.print(f"[bold]Date:[/bold]   {result.commit.timestamp}", highlight=False)
    console.print(Text(f"\n    {result.commit.message}\n"))

    if not result.files:
        console.print("[dim]No files in this commit[/dim]")
        return

    console.print("Changes in this commit:\n")
    for change in result.files:
        _print_file_change(change)


@app.command()
def status() -> None:
    """Show the staging area."""
    repo = _open_repository()

    try:
        report = repo.status()
    except (SgitError, OSError) as e:
        _fail(e)

    if report.head:
        console.print(f"[bold]HEAD:[/bold] {report.head[:7]}  [dim]({report.head})[/dim]")
    else:
        console.print("[bold]HEAD:[/bold] [dim](no commits yet)[/dim]")
    console.print()

    if not report.staged:
        console.print("[red]No staged files[/red]")
        return

    console.print("[bold green]Changes to be committed:[/bold green]")
    for entry in report.staged:
        console.print(Text(f"  {entry.path}\t{entry.hash}", style="green"))


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
