"""
openskill test - Try a skill against a sample prompt.

Usage:
    openskill test code-review --prompt "Review: def add(a, b): return a - b"
    openskill test commit-message --mock
"""

from typing import Annotated

import typer
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from openskill.cli.commands.ai import ProviderOption, configured_provider
from openskill.cli.output import cli_errors, console, print_error
from openskill.providers.generator import SkillGenerator, build_skill_context
from openskill.skills.manager import get_skill_manager
from openskill.skills.workspace import WorkspaceStore


def try_skill(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    prompt: Annotated[
        str | None,
        typer.Option(
            "--prompt",
            help="Sample prompt to run with the skill active.",
        ),
    ] = None,
    mock: Annotated[
        bool,
        typer.Option(
            "--mock",
            help="Show the context that would be sent without calling a provider.",
        ),
    ] = False,
    provider_name: ProviderOption = None,
) -> None:
    """Test a skill by running it against a sample prompt."""
    manager = get_skill_manager()

    with cli_errors():
        skill = manager.get_skill(name)
        workspace = WorkspaceStore().load()

    variables = workspace.resolve_variables(skill) if workspace else dict(skill.variables)

    console.print(f"\n[bold]Testing skill: {escape(skill.name)}[/bold]")

    if mock:
        console.print("[dim]Mock mode, no provider call made[/dim]\n")
        console.print(Panel(escape(build_skill_context(skill, variables).rstrip()), title="Skill context"))
        if prompt:
            console.print(Panel(escape(prompt), title="User prompt"))
        return

    if not prompt:
        print_error("--prompt is required (or use --mock for a dry run)")
        raise typer.Exit(1)

    with cli_errors():
        provider = configured_provider(provider_name)
        console.print(f"[dim]Running with {provider.name}...[/dim]\n")
        response = SkillGenerator(provider).run_skill(skill, prompt, variables)

    console.print(Panel(Markdown(response), title="Response"))
