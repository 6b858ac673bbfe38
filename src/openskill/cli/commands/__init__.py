"""CLI command modules."""

from openskill.cli.commands import ai, config, exchange, group, history, skills, tag, template

__all__ = ["ai", "config", "exchange", "group", "history", "skills", "tag", "template"]
