"""
Skill commands.

Usage:
    openskill init
    openskill add code-review -d "Reviews code" --manual -r "Check nulls"
    openskill list --tag security
    openskill show code-review
    openskill edit code-review -d "New description"
    openskill remove code-review
    openskill validate code-review
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from openskill.cli.output import cli_errors, console, print_success, print_warning, truncate
from openskill.providers.generator import SkillGenerator
from openskill.providers.manager import get_provider_manager
from openskill.skills.exceptions import MalformedDocumentError, MalformedMetadataError
from openskill.skills.manager import get_skill_manager
from openskill.skills.models import Skill
from openskill.skills.validation import validate_skill

EXAMPLE_SKILL = Skill(
    name="example",
    description="An example skill to demonstrate the OpenSkill format",
    rules=[
        "Be helpful and concise in all responses",
        "Provide code examples when they would clarify the explanation",
        "Explain your reasoning step by step when solving problems",
        "Ask clarifying questions when the request is ambiguous",
    ],
)


def _print_rules(rules: list[str], indent: str = "  ") -> None:
    for i, rule in enumerate(rules, start=1):
        console.print(f"{indent}{i}. {escape(rule)}")


def init() -> None:
    """Initialize OpenSkill in the current project."""
    manager = get_skill_manager()

    with cli_errors():
        manager.skills_dir.mkdir(parents=True, exist_ok=True)
        print_success(f"Skills directory: {manager.skills_dir}")

        if manager.skill_exists(EXAMPLE_SKILL.name):
            console.print("[dim]Example skill already exists[/dim]")
        else:
            manager.create_skill(EXAMPLE_SKILL.model_copy(deep=True))
            print_success("Created example/SKILL.md")

        provider = get_provider_manager()

    if provider.is_configured():
        print_success(f"AI provider ready: {provider.name} ({provider.model})")
    else:
        print_warning(f"No API key found for {provider.name}.")
        console.print(f"[dim]Set one with: openskill config set providers.api_keys.{provider.name} <key>[/dim]")

    console.print("\nNext steps:")
    console.print('  1. Add a skill: [cyan]openskill add my-skill -d "What it does"[/cyan]')
    console.print("  2. Start from a template: [cyan]openskill template list[/cyan]")


def add(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    description: Annotated[
        str,
        typer.Option(
            "--desc",
            "-d",
            help="Skill description (or intent, when generating with AI).",
        ),
    ],
    rules: Annotated[
        list[str] | None,
        typer.Option(
            "--rule",
            "-r",
            help="Add a rule (manual mode only). Repeatable.",
        ),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option(
            "--tag",
            "-t",
            help="Add a tag. Repeatable.",
        ),
    ] = None,
    group: Annotated[
        str | None,
        typer.Option(
            "--group",
            "-g",
            help="Put the skill in a group.",
        ),
    ] = None,
    manual: Annotated[
        bool,
        typer.Option(
            "--manual",
            help="Skip AI generation, use the provided values.",
        ),
    ] = False,
    provider_name: Annotated[
        str | None,
        typer.Option(
            "--provider",
            "-p",
            help="AI provider to use (groq, openai, anthropic, ollama).",
        ),
    ] = None,
) -> None:
    """Add a new skill (uses AI to generate content unless --manual)."""
    manager = get_skill_manager()

    with cli_errors():
        if manual:
            skill = Skill(name=name, description=description, rules=rules or [])
        else:
            provider = get_provider_manager(provider_name)
            if not provider.is_configured():
                console.print(f"[red]No API key configured for {provider.name}.[/red]")
                console.print("[dim]Use --manual to skip AI generation.[/dim]")
                raise typer.Exit(1)

            console.print(f"[dim]Generating skill with {provider.name}...[/dim]")
            skill = SkillGenerator(provider).enhance_skill(name, description)

        if tags:
            skill.tags = list(tags)
        if group:
            skill.group = group

        path = manager.create_skill(skill)

    print_success(f"Added skill: {escape(skill.name)}")
    console.print(f"  Description: {escape(skill.description)}")
    if skill.rules:
        console.print("  Rules:")
        _print_rules(skill.rules, indent="    ")
    console.print(f"[dim]Location: {path}[/dim]")


def list_skills(
    tag: Annotated[
        str | None,
        typer.Option(
            "--tag",
            "-t",
            help="Only show skills with this tag.",
        ),
    ] = None,
    group: Annotated[
        str | None,
        typer.Option(
            "--group",
            "-g",
            help="Only show skills in this group.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Show tags and groups.",
        ),
    ] = False,
) -> None:
    """List skills, optionally filtered by tag or group."""
    manager = get_skill_manager()

    with cli_errors():
        result = manager.list_skills()
        if tag is not None:
            skills = manager.list_by_tag(tag)
            title = f"Skills tagged '{escape(tag)}'"
        elif group is not None:
            skills = manager.list_by_group(group)
            title = f"Skills in group '{escape(group)}'"
        else:
            skills = result.skills
            title = "Skills"

    for failure in result.failures:
        print_warning(f"Could not load '{failure.name}': {failure.error}")

    if not skills:
        if tag is not None:
            console.print(f"[yellow]No skills found with tag '{escape(tag)}'[/yellow]")
        elif group is not None:
            console.print(f"[yellow]No skills found in group '{escape(group)}'[/yellow]")
        else:
            console.print("[yellow]No skills found.[/yellow]")
            console.print('[dim]Create a skill: openskill add my-skill -d "What it does"[/dim]')
        return

    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Rules", justify="right", style="dim")

    if verbose:
        table.add_column("Group", style="dim")
        table.add_column("Tags", style="dim")

    for skill in skills:
        row = [escape(skill.name), escape(truncate(skill.description, 50)), str(len(skill.rules))]
        if verbose:
            row.append(escape(skill.group))
            row.append(escape(", ".join(skill.tags)))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n[dim]Total: {len(skills)} skill(s)[/dim]")


def show(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    raw: Annotated[
        bool,
        typer.Option(
            "--raw",
            help="Print the SKILL.md document as stored.",
        ),
    ] = False,
) -> None:
    """Show skill details."""
    manager = get_skill_manager()

    with cli_errors():
        if raw:
            console.print(manager.store.read_document(name), markup=False, highlight=False, soft_wrap=True, end="")
            return
        skill = manager.get_skill(name)

    lines = [
        f"[bold]Name:[/bold] {escape(skill.name)}",
        f"[bold]Description:[/bold] {escape(skill.description) or '(none)'}",
    ]

    if skill.version:
        lines.append(f"[bold]Version:[/bold] {escape(skill.version)}")
    if skill.author:
        lines.append(f"[bold]Author:[/bold] {escape(skill.author)}")
    if skill.group:
        lines.append(f"[bold]Group:[/bold] {escape(skill.group)}")
    if skill.tags:
        lines.append(f"[bold]Tags:[/bold] {escape(', '.join(skill.tags))}")
    if skill.template:
        lines.append(f"[bold]Template:[/bold] {escape(skill.template)}")
    if skill.extends:
        lines.append(f"[bold]Extends:[/bold] {escape(skill.extends)}")
    if skill.includes:
        lines.append(f"[bold]Includes:[/bold] {escape(', '.join(skill.includes))}")
    if skill.output_format:
        lines.append(f"[bold]Output format:[/bold] {escape(skill.output_format)}")

    lines.append("")
    lines.append(f"[bold]Path:[/bold] {manager.store.document_path(name)}")

    console.print(Panel("\n".join(lines), title=f"Skill: {escape(skill.name)}"))

    if skill.rules:
        console.print("\n[bold]Rules:[/bold]")
        _print_rules(skill.rules)


def edit(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    new_name: Annotated[
        str | None,
        typer.Option(
            "--name",
            help="New name for the skill.",
        ),
    ] = None,
    description: Annotated[
        str | None,
        typer.Option(
            "--desc",
            "-d",
            help="New description.",
        ),
    ] = None,
    rules: Annotated[
        list[str] | None,
        typer.Option(
            "--rule",
            "-r",
            help="Replace rules. Repeatable.",
        ),
    ] = None,
    add_rules: Annotated[
        list[str] | None,
        typer.Option(
            "--add-rule",
            help="Append a rule. Repeatable.",
        ),
    ] = None,
    snapshot: Annotated[
        bool,
        typer.Option(
            "--snapshot/--no-snapshot",
            help="Save the current version to history first.",
        ),
    ] = True,
) -> None:
    """Edit an existing skill."""
    manager = get_skill_manager()

    with cli_errors():
        skill = manager.get_skill(name)

        if new_name:
            skill.name = new_name
        if description:
            skill.description = description
        if rules:
            skill.rules = list(rules)
        if add_rules:
            skill.rules.extend(add_rules)

        version = manager.update_skill(name, skill, snapshot=snapshot)

    print_success(f"Updated skill: {escape(skill.name)}")
    if version:
        console.print(f"[dim]Previous version saved as v{version.version}[/dim]")


def remove(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name to remove.",
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
    """Remove a skill. Its version history is kept."""
    manager = get_skill_manager()

    with cli_errors():
        path = manager.store.skill_dir(name)
        if not manager.skill_exists(name):
            console.print(f"[red]Skill not found: {escape(name)}[/red]")
            raise typer.Exit(1)

        if not yes:
            console.print(f"[yellow]This will remove skill '{escape(name)}' from {path}[/yellow]")
            if not typer.confirm("Are you sure?"):
                console.print("[dim]Cancelled.[/dim]")
                return

        manager.remove_skill(name)

    print_success(f"Removed skill: {escape(name)}")


def validate(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
) -> None:
    """Validate a skill's metadata and rules."""
    manager = get_skill_manager()

    with cli_errors():
        try:
            skill = manager.get_skill(name)
        except (MalformedDocumentError, MalformedMetadataError) as e:
            console.print(f"[red]Validation failed: {escape(name)}[/red]")
            console.print(f"  [red]- {escape(str(e))}[/red]")
            raise typer.Exit(1)

    result = validate_skill(skill)

    if not result.errors and not result.warnings:
        print_success(f"Skill '{escape(name)}' is valid")
    elif not result.errors:
        console.print(f"[yellow]Skill '{escape(name)}' is valid with warnings[/yellow]")

    if result.errors:
        console.print(f"[red]Validation failed: {escape(name)}[/red]")
        for error in result.errors:
            console.print(f"  [red]- {escape(error)}[/red]")

    if result.warnings:
        console.print("[yellow]Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]- {escape(warning)}[/yellow]")

    console.print(f"\n[dim]Rules: {len(skill.rules)} defined[/dim]")

    if result.errors:
        raise typer.Exit(1)
