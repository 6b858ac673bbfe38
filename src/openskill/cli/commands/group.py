"""
openskill group - Skill group commands.

A skill belongs to at most one group.

Usage:
    openskill group list
    openskill group show backend
    openskill group set code-review backend
    openskill group unset code-review
"""

from typing import Annotated

import typer
from rich.markup import escape

from openskill.cli.output import cli_errors, console, print_success, truncate
from openskill.skills.manager import get_skill_manager

app = typer.Typer(
    name="group",
    help="Organize skills into groups.",
    no_args_is_help=True,
)


@app.command("list")
def list_groups() -> None:
    """List all groups with their skills."""
    manager = get_skill_manager()

    with cli_errors():
        groups = {group: manager.list_by_group(group) for group in manager.get_all_groups()}

    if not groups:
        console.print("[yellow]No groups defined.[/yellow]")
        console.print("[dim]Add a skill to a group with: openskill group set <skill> <group>[/dim]")
        return

    console.print("\n[bold]Skill Groups:[/bold]")
    for group, skills in groups.items():
        console.print(f"\n  [cyan]{escape(group)}[/cyan] ({len(skills)} skills)")
        for skill in skills:
            console.print(f"    - {escape(skill.name)}")


@app.command()
def show(
    group: Annotated[
        str,
        typer.Argument(
            help="Group name.",
        ),
    ],
) -> None:
    """Show the skills in a group."""
    manager = get_skill_manager()

    with cli_errors():
        skills = manager.list_by_group(group)

    if not skills:
        console.print(f"[yellow]No skills found in group '{escape(group)}'[/yellow]")
        return

    console.print(f"\n[bold]Group: {escape(group)}[/bold]")
    console.print(f"Skills: {len(skills)}")

    for skill in skills:
        console.print(f"\n  [cyan]{escape(skill.name)}[/cyan]")
        console.print(f"    {escape(truncate(skill.description, 60))}")
        details = f"Rules: {len(skill.rules)}"
        if skill.tags:
            details += f"  Tags: {', '.join(skill.tags)}"
        console.print(f"    [dim]{escape(details)}[/dim]")


@app.command("set")
def set_group(
    skill_name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    group: Annotated[
        str,
        typer.Argument(
            help="Group name.",
        ),
    ],
) -> None:
    """Put a skill in a group."""
    manager = get_skill_manager()

    with cli_errors():
        skill = manager.set_group(skill_name, group)

    print_success(f"Added '{escape(skill.name)}' to group '{escape(group)}'")


@app.command()
def unset(
    skill_name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
) -> None:
    """Remove a skill from its group."""
    manager = get_skill_manager()

    with cli_errors():
        old_group = manager.get_skill(skill_name).group
        if not old_group:
            console.print(f"[dim]'{escape(skill_name)}' is not in a group.[/dim]")
            return
        skill = manager.unset_group(skill_name)

    print_success(f"Removed '{escape(skill.name)}' from group '{escape(old_group)}'")
