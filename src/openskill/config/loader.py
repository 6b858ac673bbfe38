"""
Layered configuration for OpenSkill.

Each layer is merged over the previous one, later layers win:

    defaults -> ~/.openskill/config.yaml -> .claude/openskill.yaml -> OPENSKILL_*
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from openskill.config.merger import deep_merge, set_nested_value
from openskill.config.schema import Config
from openskill.storage.paths import find_project_config, get_global_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "OPENSKILL_"

ENV_SHORTCUTS = {
    "OPENSKILL_PROVIDER": "providers.default",
    "OPENSKILL_MODEL": "providers.model",
}

# Consumed by storage.paths, not a config key
ENV_RESERVED = {"OPENSKILL_HOME"}


class ConfigurationError(Exception):
    """A config file could not be read, parsed or validated."""


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Read one config file. A missing or empty file is an empty mapping.

    Raises:
        ConfigurationError: On unreadable files, bad YAML or a non-mapping
            top level.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping, got {type(data).__name__}")
    return data


def save_yaml_file(path: Path, data: dict[str, Any]) -> None:
    """Write a config mapping, creating parent directories."""
    text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write {path}: {e}") from e


def env_key_path(variable: str) -> str | None:
    """Dotted config key for an OPENSKILL_* variable, or None if it names nothing.

    The first word after the prefix is the section and the remainder is the
    field, so OPENSKILL_STORAGE_SKILLS_DIR maps to ``storage.skills_dir``.
    """
    if variable in ENV_SHORTCUTS:
        return ENV_SHORTCUTS[variable]

    section, _, field = variable.removeprefix(ENV_PREFIX).lower().partition("_")
    if field and section in Config.model_fields:
        return f"{section}.{field}"
    return None


def _coerce(value: str) -> Any:
    # YAML scalar rules: 512 -> int, 0.2 -> float, yes/off -> bool
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        return value
    return parsed if isinstance(parsed, (bool, int, float)) else value


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Merge OPENSKILL_* environment variables into a config mapping."""
    for variable, value in os.environ.items():
        if not variable.startswith(ENV_PREFIX) or variable in ENV_RESERVED:
            continue

        key = env_key_path(variable)
        if key is None:
            logger.debug(f"Ignoring unrecognized environment variable {variable}")
            continue
        config = set_nested_value(config, key, _coerce(value))

    return config


def _file_layers(project_path: Path | None, skip_project: bool) -> Iterator[Path]:
    yield get_global_config_path()
    if not skip_project:
        project = find_project_config(project_path)
        if project is not None:
            yield project


def load_config(
    project_path: Path | None = None,
    skip_project: bool = False,
    skip_env: bool = False,
) -> Config:
    """
    Build the effective configuration.

    Args:
        project_path: Directory to start the project config search from.
        skip_project: Ignore .claude/openskill.yaml.
        skip_env: Ignore OPENSKILL_* variables.

    Raises:
        ConfigurationError: If a file is broken or the merged result does
            not validate.
    """
    merged = Config().model_dump()

    for path in _file_layers(project_path, skip_project):
        layer = load_yaml_file(path)
        if layer:
            logger.debug(f"Loaded config from {path}")
            merged = deep_merge(merged, layer)

    if not skip_env:
        merged = apply_env_overrides(merged)

    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def get_config_sources() -> dict[str, Path | None]:
    """Config files that exist, keyed by scope."""
    global_path = get_global_config_path()
    return {
        "global": global_path if global_path.is_file() else None,
        "project": find_project_config(),
    }


_config: Config | None = None


def get_config(reload: bool = False) -> Config:
    """Cached effective configuration."""
    global _config
    if _config is None or reload:
        _config = load_config()
    return _config


def clear_config_cache() -> None:
    global _config
    _config = None
