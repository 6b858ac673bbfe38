"""
Version history commands.

Usage:
    openskill history code-review
    openskill history code-review --save
    openskill diff code-review
    openskill diff code-review --v1 1 --v2 2
    openskill rollback code-review 2
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from openskill.cli.output import cli_errors, console, print_success
from openskill.skills.history import CURRENT, line_diff
from openskill.skills.manager import get_skill_manager


def _label(version: int) -> str:
    return "current" if version == CURRENT else f"v{version}"


def history(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    save: Annotated[
        bool,
        typer.Option(
            "--save",
            "-s",
            help="Snapshot the current document before listing.",
        ),
    ] = False,
) -> None:
    """Show version history of a skill."""
    manager = get_skill_manager()

    with cli_errors():
        if not manager.skill_exists(name):
            console.print(f"[red]Skill not found: {escape(name)}[/red]")
            raise typer.Exit(1)

        if save:
            saved = manager.save_version(name)
            print_success(f"Saved version {saved.version}")

        versions = manager.list_versions(name)
        current = manager.store.document_path(name)

    console.print(f"\n[bold]Version history: {escape(name)}[/bold]")
    console.print(f"[dim]Current: {current}[/dim]\n")

    if not versions:
        console.print("[yellow]No previous versions saved.[/yellow]")
        console.print("[dim]Versions are saved when you edit a skill, or with --save.[/dim]")
        return

    table = Table()
    table.add_column("Version", style="cyan", justify="right")
    table.add_column("Saved")
    table.add_column("File", style="dim")

    for version in versions:
        table.add_row(
            f"v{version.version}",
            version.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
            version.path.name,
        )

    console.print(table)
    console.print(f"\n[dim]To restore a version: openskill rollback {escape(name)} <version>[/dim]")


def diff(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    v1: Annotated[
        int | None,
        typer.Option(
            "--v1",
            help="First version (default: latest snapshot, 0 for current).",
        ),
    ] = None,
    v2: Annotated[
        int,
        typer.Option(
            "--v2",
            help="Second version (default: 0, the current document).",
        ),
    ] = CURRENT,
) -> None:
    """Compare two versions of a skill line by line."""
    manager = get_skill_manager()

    with cli_errors():
        if v1 is None:
            latest = manager.history.latest_version(name)
            if latest is None:
                console.print(f"[yellow]No previous versions of '{escape(name)}' to compare.[/yellow]")
                return
            v1 = latest

        old, new = manager.diff(name, v1, v2)

    changes = line_diff(old, new)
    console.print(f"\n[bold]Diff {escape(name)}: {_label(v1)} -> {_label(v2)}[/bold]\n")

    if not changes:
        console.print("[dim]No differences found.[/dim]")
        return

    for change in changes:
        if change.old is not None:
            console.print(f"[red]- {change.line_number}: {escape(change.old)}[/red]")
        if change.new is not None:
            console.print(f"[green]+ {change.line_number}: {escape(change.new)}[/green]")


def rollback(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    version: Annotated[
        int,
        typer.Argument(
            help="Version number to restore.",
        ),
    ],
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation.",
        ),
    ] = False,
) -> None:
    """Restore a skill to a previous version."""
    manager = get_skill_manager()

    if not yes:
        console.print(f"[yellow]This will replace '{escape(name)}' with version {version}.[/yellow]")
        console.print("[dim]The current document is saved to history first.[/dim]")
        if not typer.confirm("Continue?"):
            console.print("[dim]Cancelled.[/dim]")
            return

    with cli_errors():
        safety = manager.rollback(name, version)

    print_success(f"Restored '{escape(name)}' to version {version}")
    console.print(f"[dim]Previous document saved as v{safety.version}[/dim]")
    console.print(f"[dim]Use 'openskill show {escape(name)}' to view the restored skill.[/dim]")
