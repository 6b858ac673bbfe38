"""
Main Typer application for openskill CLI.

This module defines the root CLI application and registers all commands
and command groups.
"""

from typing import Annotated

import typer

from openskill import __version__
from openskill.cli.commands import ai, config, exchange, group, history, run, skills, tag, template, workspace
from openskill.cli.output import print_info, setup_logging
from openskill.config.loader import ConfigurationError, get_config

# Create the main Typer app
app = typer.Typer(
    name="openskill",
    help="Create, version, and organize skills for AI assistants.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=True,
    pretty_exceptions_show_locals=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        print_info(f"openskill version [green]{__version__}[/green]")
        raise typer.Exit()


# noinspection PyUnusedLocal
@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """
    [bold blue]openskill[/bold blue] - Skill management for AI assistants

    Skills are stored as SKILL.md files under [bold].claude/skills[/bold].
    Use [bold]openskill --help[/bold] to see all commands.
    """
    try:
        level = get_config().logging.level
    except ConfigurationError:
        level = "WARNING"
    setup_logging(level, verbose)


# Skill commands
app.command("init")(skills.init)
app.command("add")(skills.add)
app.command("list")(skills.list_skills)
app.command("show")(skills.show)
app.command("edit")(skills.edit)
app.command("remove")(skills.remove)
app.command("validate")(skills.validate)

# Version history
app.command("history")(history.history)
app.command("diff")(history.diff)
app.command("rollback")(history.rollback)

# Import / export
app.command("export")(exchange.export)
app.command("import")(exchange.import_)

# AI assistance
app.command("improve")(ai.improve)
app.command("explain")(ai.explain)
app.command("test")(run.try_skill)

# Command groups
app.add_typer(tag.app, name="tag")
app.add_typer(group.app, name="group")
app.add_typer(template.app, name="template")
app.add_typer(workspace.app, name="workspace")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
