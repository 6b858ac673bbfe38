"""
openskill tag - Tag management commands.

Usage:
    openskill tag list
    openskill tag show security
    openskill tag add code-review security review
    openskill tag remove code-review review
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from openskill.cli.output import cli_errors, console, print_success, truncate
from openskill.skills.manager import get_skill_manager

app = typer.Typer(
    name="tag",
    help="Organize skills with tags.",
    no_args_is_help=True,
)


@app.command("list")
def list_tags() -> None:
    """List all tags and how many skills use each."""
    manager = get_skill_manager()

    with cli_errors():
        tags = manager.get_all_tags()
        counts = {tag: len(manager.list_by_tag(tag)) for tag in tags}

    if not tags:
        console.print("[yellow]No tags defined.[/yellow]")
        console.print("[dim]Add tags to a skill with: openskill tag add <skill> <tag>[/dim]")
        return

    table = Table(title="Tags")
    table.add_column("Tag", style="cyan")
    table.add_column("Skills", justify="right")

    for tag in tags:
        table.add_row(escape(tag), str(counts[tag]))

    console.print(table)


@app.command()
def show(
    tag: Annotated[
        str,
        typer.Argument(
            help="Tag name.",
        ),
    ],
) -> None:
    """Show skills with a tag."""
    manager = get_skill_manager()

    with cli_errors():
        skills = manager.list_by_tag(tag)

    if not skills:
        console.print(f"[yellow]No skills found with tag '{escape(tag)}'[/yellow]")
        return

    console.print(f"\n[bold]Skills tagged '{escape(tag)}':[/bold]")
    for skill in skills:
        console.print(f"\n  [cyan]{escape(skill.name)}[/cyan]")
        console.print(f"    {escape(truncate(skill.description, 60))}")
        other_tags = [t for t in skill.tags if t.lower() != tag.lower()]
        if other_tags:
            console.print(f"    [dim]Other tags: {escape(', '.join(other_tags))}[/dim]")


@app.command()
def add(
    skill_name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    tags: Annotated[
        list[str],
        typer.Argument(
            help="Tags to add.",
        ),
    ],
) -> None:
    """Add tags to a skill."""
    manager = get_skill_manager()

    with cli_errors():
        before = manager.get_skill(skill_name).tags
        skill = manager.add_tags(skill_name, tags)

    added = skill.tags[len(before) :]
    if not added:
        console.print("[dim]All tags already exist on this skill.[/dim]")
        return

    print_success(f"Added tags to '{escape(skill.name)}': {escape(', '.join(added))}")


@app.command()
def remove(
    skill_name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    tags: Annotated[
        list[str],
        typer.Argument(
            help="Tags to remove.",
        ),
    ],
) -> None:
    """Remove tags from a skill."""
    manager = get_skill_manager()

    with cli_errors():
        before = manager.get_skill(skill_name).tags
        skill = manager.remove_tags(skill_name, tags)

    removed = [tag for tag in before if tag not in skill.tags]
    if not removed:
        console.print("[dim]None of the specified tags exist on this skill.[/dim]")
        return

    print_success(f"Removed tags from '{escape(skill.name)}': {escape(', '.join(removed))}")
