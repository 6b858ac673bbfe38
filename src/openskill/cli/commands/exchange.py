"""
Import and export commands.

Usage:
    openskill export code-review --format json -o code-review.json
    openskill import code-review.yaml
    openskill import https://example.com/skills/review.md --name review
    openskill import owner/repo --all
    cat skill.json | openskill import - --format json
"""

import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape

from openskill.cli.output import cli_errors, console, describe_error, print_error, print_success, print_warning
from openskill.providers.exceptions import ProviderError
from openskill.providers.generator import SkillGenerator, apply_suggestion
from openskill.providers.manager import get_provider_manager
from openskill.skills.exceptions import SkillError, SkillExistsError
from openskill.skills.manager import SkillManager, get_skill_manager
from openskill.skills.models import Skill
from openskill.sources import (
    SourceError,
    fetch_source,
    fetch_url,
    find_skills_in_repo,
    is_github_repo,
    parse_github_source,
)

DEFAULT_IMPORT_FORMAT = "yaml"


def export(
    name: Annotated[
        str,
        typer.Argument(
            help="Skill name.",
        ),
    ],
    fmt: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Export format (json, yaml, md).",
        ),
    ] = "yaml",
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path (default: stdout).",
        ),
    ] = None,
) -> None:
    """Export a skill to JSON, YAML or markdown."""
    manager = get_skill_manager()

    with cli_errors():
        content = manager.export_skill(name, fmt)

    if output is None:
        console.print(content, markup=False, highlight=False, soft_wrap=True, end="")
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Failed to write {output}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    print_success(f"Exported '{escape(name)}' to {output}")


def _improve_imported(manager: SkillManager, skill: Skill, provider_name: str | None) -> None:
    """Run AI improvement on a freshly imported skill. Failures only warn."""
    provider = get_provider_manager(provider_name)
    if not provider.is_configured():
        print_warning(f"Skipping AI improvement: no API key for {provider.name}")
        return

    console.print(f"[dim]Improving with {provider.name}...[/dim]")
    try:
        suggestion = SkillGenerator(provider).suggest_improvements(skill)
        if not suggestion.has_changes(skill.description):
            console.print("[dim]No improvements suggested.[/dim]")
            return
        manager.update_skill(skill.name, apply_suggestion(skill, suggestion), snapshot=True)
    except (ProviderError, SkillError) as e:
        print_warning(f"Could not improve skill: {describe_error(e)}")
        return

    print_success("Enhanced with AI")


def _import_repo(
    manager: SkillManager,
    reference: str,
    fmt: str | None,
    overwrite: bool,
    improve: bool,
    provider_name: str | None,
) -> None:
    owner, repo = parse_github_source(reference)
    console.print(f"Fetching skills from github.com/{escape(owner)}/{escape(repo)}...\n")

    found = find_skills_in_repo(owner, repo)
    if not found:
        console.print("[yellow]No SKILL.md files found in repository.[/yellow]")
        return

    console.print(f"Found {len(found)} skill(s):")
    for remote in found:
        console.print(f"  - {escape(remote.path)}")
    console.print()

    imported = 0
    for remote in found:
        try:
            content = fetch_url(remote.download_url)
            skill = manager.import_skill(
                content,
                fmt or "markdown",
                overwrite=overwrite,
                fallback_name=remote.name,
            )
        except SkillExistsError as e:
            console.print(f"  [yellow]Skipped {escape(e.name or remote.name)} (already exists, use --all to overwrite)[/yellow]")
            continue
        except (SkillError, SourceError) as e:
            print_error(f"Failed to import {remote.path}: {describe_error(e)}")
            continue

        print_success(f"Imported: {escape(skill.name)}")
        imported += 1
        if improve:
            _improve_imported(manager, skill, provider_name)

    console.print(f"\nImported {imported}/{len(found)} skills")


def import_(
    source: Annotated[
        str,
        typer.Argument(
            help="File path, URL, GitHub repository (owner/repo) or '-' for stdin.",
        ),
    ],
    fmt: Annotated[
        str | None,
        typer.Option(
            "--format",
            "-f",
            help="Import format (json, yaml, md). Detected from the extension if omitted.",
        ),
    ] = None,
    name: Annotated[
        str | None,
        typer.Option(
            "--name",
            "-n",
            help="Override skill name.",
        ),
    ] = None,
    overwrite: Annotated[
        bool,
        typer.Option(
            "--all",
            "--overwrite",
            help="Overwrite existing skills (the old version is saved to history).",
        ),
    ] = False,
    improve: Annotated[
        bool,
        typer.Option(
            "--improve",
            help="Enhance imported skills with AI.",
        ),
    ] = False,
    provider_name: Annotated[
        str | None,
        typer.Option(
            "--provider",
            "-p",
            help="AI provider to use with --improve.",
        ),
    ] = None,
) -> None:
    """Import a skill from a file, URL, GitHub repository or stdin."""
    manager = get_skill_manager()

    with cli_errors():
        if source != "-" and is_github_repo(source):
            _import_repo(manager, source, fmt, overwrite, improve, provider_name)
            return

        if source == "-":
            content = sys.stdin.read()
            resolved = fmt or DEFAULT_IMPORT_FORMAT
            name_hint = None
        else:
            remote = fetch_source(source, fmt)
            content = remote.content
            resolved = remote.format or DEFAULT_IMPORT_FORMAT
            name_hint = remote.name_hint

        skill = manager.import_skill(content, resolved, name=name, overwrite=overwrite, fallback_name=name_hint)

    print_success(f"Imported skill: {escape(skill.name)}")
    console.print(f"  Description: {escape(skill.description)}")
    console.print(f"  Rules: {len(skill.rules)}")

    if improve:
        _improve_imported(manager, skill, provider_name)
