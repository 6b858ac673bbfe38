"""
AI-assisted commands.

Usage:
    openskill improve code-review
    openskill improve code-review --apply
    openskill explain code-review --verbose
"""

from typing import Annotated

import typer
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel

from openskill.cli.output import cli_errors, console, print_success
from openskill.providers.generator import SkillGenerator, apply_suggestion
from openskill.providers.manager import ProviderManager, get_provider_manager
from openskill.skills.manager import get_skill_manager

ProviderOption = Annotated[
    str | None,
    typer.Option(
        "--provider",
        "-p",
        help="AI provider to use (groq, openai, anthropic, ollama).",
    ),
]


def configured_provider(provider_name: str | None) -> ProviderManager:
    provider = get_provider_manager(provider_name)
    if not provider.is_configured():
        console.print(f"[red]No API key configured for {provider.name}.[/red]")
        console.print(f"[dim]Set one with: openskill config set providers.api_keys.{provider.name} <key>[/dim]")
        raise typer.Exit(1)
    return provider


def improve(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    apply: Annotated[
        bool,
        typer.Option(
            "--apply",
            help="Apply the suggested rules and description (the old version is saved to history).",
        ),
    ] = False,
    provider_name: ProviderOption = None,
) -> None:
    """Get AI suggestions for improving a skill."""
    manager = get_skill_manager()

    with cli_errors():
        skill = manager.get_skill(name)
        provider = configured_provider(provider_name)

        console.print(f"[dim]Analyzing '{escape(skill.name)}' with {provider.name}...[/dim]\n")
        suggestion = SkillGenerator(provider).suggest_improvements(skill)

    if suggestion.assessment:
        console.print(Panel(escape(suggestion.assessment), title="Assessment"))

    if suggestion.issues:
        console.print("\n[bold]Issues:[/bold]")
        for issue in suggestion.issues:
            console.print(f"  [yellow]- {escape(issue)}[/yellow]")

    if suggestion.improved_description and suggestion.improved_description != skill.description:
        console.print("\n[bold]Suggested description:[/bold]")
        console.print(f"  {escape(suggestion.improved_description)}")

    if suggestion.improved_rules:
        console.print("\n[bold]Suggested rules:[/bold]")
        for i, rule in enumerate(suggestion.improved_rules, start=1):
            console.print(f"  {i}. {escape(rule)}")

    if not suggestion.has_changes(skill.description):
        console.print("\n[dim]No changes suggested.[/dim]")
        return

    if not apply:
        console.print(f"\n[dim]Run 'openskill improve {escape(name)} --apply' to apply these changes.[/dim]")
        return

    with cli_errors():
        version = manager.update_skill(name, apply_suggestion(skill, suggestion), snapshot=True)

    print_success(f"Applied improvements to '{escape(skill.name)}'")
    if version:
        console.print(f"[dim]Previous version saved as v{version.version}[/dim]")


def explain(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Include example scenarios and edge cases.",
        ),
    ] = False,
    provider_name: ProviderOption = None,
) -> None:
    """Explain a skill in plain language."""
    manager = get_skill_manager()

    with cli_errors():
        skill = manager.get_skill(name)
        provider = configured_provider(provider_name)

        console.print(f"[dim]Explaining '{escape(skill.name)}' with {provider.name}...[/dim]\n")
        explanation = SkillGenerator(provider).explain_skill(skill, verbose=verbose)

    console.print(Panel(Markdown(explanation), title=f"Skill: {escape(skill.name)}"))
