"""
openskill config - Configuration management commands.

Usage:
    openskill config show
    openskill config show providers --json
    openskill config get providers.default
    openskill config set providers.default openai
    openskill config set storage.skills_dir skills --scope project
    openskill config path
"""

import json
from typing import Annotated, Any

import typer
import yaml
from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from openskill.cli.output import console
from openskill.config.loader import (
    ConfigurationError,
    get_config_sources,
    load_config,
    load_yaml_file,
    save_yaml_file,
)
from openskill.config.merger import get_nested_value, set_nested_value
from openskill.config.schema import Config
from openskill.storage.paths import find_project_config, get_global_config_path, get_project_config_path

app = typer.Typer(
    name="config",
    help="Configuration management.",
    no_args_is_help=True,
)

def _parse_value(value: str) -> Any:
    """
    Parse a string value to the appropriate Python type.

    Args:
        value: String value to parse.

    Returns:
        Parsed value (bool, int, float, list, dict, None or string).
    """
    if value.lower() in ("true", "yes", "on"):
        return True
    if value.lower() in ("false", "no", "off"):
        return False
    if value.lower() in ("null", "none"):
        return None

    try:
        return int(value)
    except ValueError:
        pass

    try:
        return float(value)
    except ValueError:
        pass

    # JSON for lists and mappings
    if value.startswith("[") or value.startswith("{"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    return value


def _dump(value: Any, as_json: bool) -> str:
    if as_json:
        return json.dumps(value, indent=2, default=str)
    return yaml.safe_dump(value, default_flow_style=False, sort_keys=False, allow_unicode=True)


def _load_or_exit() -> Config:
    try:
        return load_config()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {escape(str(e))}[/red]")
        raise typer.Exit(1)


@app.command()
def show(
    section: Annotated[
        str | None,
        typer.Argument(
            help="Config section or key to show (e.g., 'providers', 'storage.skills_dir').",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
    sources: Annotated[
        bool,
        typer.Option(
            "--sources",
            help="Show configuration source files.",
        ),
    ] = False,
) -> None:
    """Show the effective configuration."""
    if sources:
        table = Table(title="Configuration Sources")
        table.add_column("Source", style="cyan")
        table.add_column("Path", style="green")
        table.add_column("Status")

        for source_name, source_path in get_config_sources().items():
            if source_path:
                table.add_row(source_name, str(source_path), "[green]loaded[/green]")
            else:
                table.add_row(source_name, "-", "[dim]not found[/dim]")

        console.print(table)
        return

    value: Any = _load_or_exit().model_dump(mode="json")

    if section:
        value = get_nested_value(value, section)
        if value is None:
            console.print(f"[red]Section '{escape(section)}' not found in configuration.[/red]")
            raise typer.Exit(1)

    syntax = Syntax(_dump(value, json_output), "json" if json_output else "yaml", theme="monokai")
    if section:
        console.print(Panel(syntax, title=f"[cyan]{escape(section)}[/cyan]"))
    else:
        console.print(syntax)


@app.command()
def get(
    key: Annotated[
        str,
        typer.Argument(
            help="Configuration key (e.g., 'providers.default').",
        ),
    ],
) -> None:
    """Print a single configuration value."""
    value = get_nested_value(_load_or_exit().model_dump(mode="json"), key)
    if value is None:
        console.print(f"[red]Key '{escape(key)}' is not set.[/red]")
        raise typer.Exit(1)

    if isinstance(value, (dict, list)):
        console.print(_dump(value, as_json=False), markup=False, highlight=False, soft_wrap=True, end="")
    else:
        console.print(str(value), markup=False, highlight=False, soft_wrap=True)


@app.command("set")
def set_value(
    key: Annotated[
        str,
        typer.Argument(
            help="Configuration key (e.g., 'providers.default').",
        ),
    ],
    value: Annotated[
        str,
        typer.Argument(
            help="Value to set.",
        ),
    ],
    scope: Annotated[
        str,
        typer.Option(
            "--scope",
            "-s",
            help="Config scope: global or project.",
        ),
    ] = "global",
) -> None:
    """Set a configuration value."""
    if scope == "global":
        config_path = get_global_config_path()
    elif scope == "project":
        config_path = get_project_config_path()
    else:
        console.print(f"[red]Invalid scope: {escape(scope)}. Use 'global' or 'project'.[/red]")
        raise typer.Exit(1)

    section = key.split(".", 1)[0]
    if section not in Config.model_fields:
        console.print(f"[red]Unknown configuration section: {escape(section)}[/red]")
        console.print(f"[dim]Sections: {', '.join(Config.model_fields)}[/dim]")
        raise typer.Exit(1)

    try:
        config_dict = load_yaml_file(config_path)
    except ConfigurationError:
        config_dict = {}

    parsed_value = _parse_value(value)
    config_dict = set_nested_value(config_dict, key, parsed_value)

    try:
        Config.model_validate(config_dict)
    except ValidationError as e:
        console.print(f"[red]Invalid value for {escape(key)}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        save_yaml_file(config_path, config_dict)
    except ConfigurationError as e:
        console.print(f"[red]Failed to save configuration: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Set {escape(key)} = {escape(repr(parsed_value))} in {scope} config[/green]")
    console.print(f"[dim]File: {config_path}[/dim]")


@app.command()
def path() -> None:
    """Show configuration file locations."""
    project = find_project_config()

    console.print(f"Global:  {get_global_config_path()}")
    if project:
        console.print(f"Project: {project}")
    else:
        console.print(f"Project: [dim]{get_project_config_path()} (not found)[/dim]")
