"""
openskill workspace - Project workspace commands.

A workspace selects the skills active in the current project and
overrides their variables. It is stored in .claude/workspace.yaml.

Usage:
    openskill workspace init my-service
    openskill workspace add code-review
    openskill workspace set code-review max_issues 10
    openskill workspace show
    openskill workspace remove code-review
"""

from typing import Annotated

import typer
from rich.markup import escape

from openskill.cli.output import cli_errors, console, print_error, print_success
from openskill.skills.manager import get_skill_manager
from openskill.skills.workspace import DEFAULT_WORKSPACE_NAME, WorkspaceStore

app = typer.Typer(
    name="workspace",
    help="Manage project-specific skill configuration.",
    no_args_is_help=True,
)

SkillArgument = Annotated[
    str,
    typer.Argument(
        help="Skill name.",
    ),
]


@app.command()
def init(
    name: Annotated[
        str,
        typer.Argument(
            help="Workspace name.",
        ),
    ] = DEFAULT_WORKSPACE_NAME,
) -> None:
    """Initialize a workspace in the current project."""
    store = WorkspaceStore()

    with cli_errors():
        workspace = store.init(name)

    print_success(f"Workspace '{escape(workspace.name)}' created")
    console.print(f"  Location: {escape(str(store.path))}")
    console.print("\n[dim]Add skills with: openskill workspace add <skill>[/dim]")


@app.command()
def show() -> None:
    """Show the current workspace configuration."""
    with cli_errors():
        workspace = WorkspaceStore().load()

    if workspace is None:
        console.print("[yellow]No workspace configured.[/yellow]")
        console.print("[dim]Create one with: openskill workspace init[/dim]")
        return

    console.print(f"\n[bold]Workspace: {escape(workspace.name)}[/bold]")
    if workspace.description:
        console.print(f"Description: {escape(workspace.description)}")

    if workspace.skills:
        console.print("\n[bold]Enabled skills:[/bold]")
        for skill in workspace.skills:
            console.print(f"  - {escape(skill)}")
    else:
        console.print("\n[dim]No skills enabled.[/dim]")

    if workspace.groups:
        console.print("\n[bold]Enabled groups:[/bold]")
        for group in workspace.groups:
            console.print(f"  - {escape(group)}")

    if workspace.overrides:
        console.print("\n[bold]Variable overrides:[/bold]")
        for skill, variables in workspace.overrides.items():
            console.print(f"  [cyan]{escape(skill)}[/cyan]")
            for key, value in variables.items():
                console.print(f"    {escape(key)} = {escape(value)}")


@app.command()
def add(skill_name: SkillArgument) -> None:
    """Enable a skill in the workspace."""
    store = WorkspaceStore()

    with cli_errors():
        workspace = store.require()
        skill = get_skill_manager().get_skill(skill_name)
        if not workspace.add_skill(skill.name):
            print_error(f"Skill '{skill.name}' is already in the workspace")
            raise typer.Exit(1)
        store.save(workspace)

    print_success(f"Added '{escape(skill.name)}' to workspace")


@app.command("remove")
def remove(skill_name: SkillArgument) -> None:
    """Remove a skill from the workspace."""
    store = WorkspaceStore()

    with cli_errors():
        workspace = store.require()
        if not workspace.remove_skill(skill_name):
            print_error(f"Skill '{skill_name}' is not in the workspace")
            raise typer.Exit(1)
        store.save(workspace)

    print_success(f"Removed '{escape(skill_name)}' from workspace")


app.command("rm", hidden=True)(remove)


@app.command("set")
def set_variable(
    skill_name: SkillArgument,
    variable: Annotated[
        str,
        typer.Argument(
            help="Variable name.",
        ),
    ],
    value: Annotated[
        str,
        typer.Argument(
            help="Value used in this project.",
        ),
    ],
) -> None:
    """Override a skill variable for this project."""
    store = WorkspaceStore()

    with cli_errors():
        workspace = store.require()
        workspace.set_override(skill_name, variable, value)
        store.save(workspace)

    print_success(f"Set {escape(skill_name)}.{escape(variable)} = {escape(value)}")
