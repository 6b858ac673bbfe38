"""
openskill template - Built-in skill templates.

Usage:
    openskill template list
    openskill template show code-review
    openskill template use code-review my-review
"""

from itertools import groupby
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from openskill.cli.output import cli_errors, console, print_success
from openskill.skills.manager import get_skill_manager
from openskill.skills.templates import get_template, list_templates

app = typer.Typer(
    name="template",
    help="Create skills from built-in templates.",
    no_args_is_help=True,
)


@app.command("list")
def list_cmd() -> None:
    """List available templates by category."""
    templates = sorted(list_templates(), key=lambda t: (t.category, t.name))

    table = Table(title="Available Templates")
    table.add_column("Category", style="magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for category, members in groupby(templates, key=lambda t: t.category):
        for i, template in enumerate(members):
            table.add_row(category.upper() if i == 0 else "", template.name, template.description)

    console.print(table)
    console.print(f"\n[dim]Create a skill: openskill template use <template> {escape('[name]')}[/dim]")


@app.command()
def show(
    name: Annotated[
        str,
        typer.Argument(
            help="Template name.",
        ),
    ],
) -> None:
    """Show a template's description, tags and rules."""
    template = get_template(name)
    if template is None:
        console.print(f"[red]Template not found: {escape(name)}[/red]")
        console.print("[dim]See available templates with: openskill template list[/dim]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Template: {template.name}[/bold]")
    console.print(f"Category:    {template.category}")
    console.print(f"Description: {template.description}\n")
    console.print(f"[bold]Skill description:[/bold]\n  {template.skill.description}\n")

    if template.skill.tags:
        console.print(f"[bold]Tags:[/bold] {', '.join(template.skill.tags)}\n")

    console.print("[bold]Rules:[/bold]")
    for i, rule in enumerate(template.skill.rules, start=1):
        console.print(f"  {i}. {escape(rule)}")


@app.command()
def use(
    template_name: Annotated[
        str,
        typer.Argument(
            help="Template name.",
        ),
    ],
    name: Annotated[
        str | None,
        typer.Argument(
            help="Name of the new skill (default: the template name).",
        ),
    ] = None,
) -> None:
    """Create a skill from a template."""
    manager = get_skill_manager()

    with cli_errors():
        skill = manager.create_from_template(template_name, name)
        path = manager.store.document_path(skill.name)

    print_success(f"Created skill '{escape(skill.name)}' from template '{skill.template}'")
    console.print(f"[dim]Location: {path}[/dim]")
