"""
Path utilities for OpenSkill.

Skills live in the project (``.claude/skills`` under the working
directory by default); user-level configuration lives in the OpenSkill
home directory.
"""

import os
from pathlib import Path

DEFAULT_SKILLS_DIR = Path(".claude") / "skills"
PROJECT_CONFIG_RELATIVE = Path(".claude") / "openskill.yaml"
WORKSPACE_RELATIVE = Path(".claude") / "workspace.yaml"
HISTORY_DIRNAME = ".history"


def get_openskill_home() -> Path:
    """
    Get the OpenSkill home directory.

    Resolution order:
    1. OPENSKILL_HOME environment variable
    2. Default: ~/.openskill

    Returns:
        Path to the OpenSkill home directory.
    """
    env_home = os.environ.get("OPENSKILL_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".openskill"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.openskill/config.yaml
    """
    return get_openskill_home() / "config.yaml"


def find_project_config(start_path: Path | None = None) -> Path | None:
    """
    Find the project configuration file by traversing up the directory tree.

    Looks for .claude/openskill.yaml starting from the given path
    (or current directory) and moving up to the root.

    Args:
        start_path: Starting directory to search from. Defaults to cwd.

    Returns:
        Path to the project config if found, None otherwise.
    """
    current = Path.cwd() if start_path is None else Path(start_path).resolve()

    while True:
        candidate = current / PROJECT_CONFIG_RELATIVE
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def get_project_config_path(start_path: Path | None = None) -> Path:
    """
    Get the project configuration path for writing.

    Returns the existing file if one is found up the tree, otherwise
    ./.claude/openskill.yaml under the start directory.
    """
    found = find_project_config(start_path)
    if found:
        return found
    base = Path.cwd() if start_path is None else Path(start_path).resolve()
    return base / PROJECT_CONFIG_RELATIVE


def get_skills_dir(configured: str | Path | None = None) -> Path:
    """
    Get the skills directory.

    Args:
        configured: Directory from configuration. Relative paths are
            resolved against the working directory.

    Returns:
        Path to the skills directory (default ./.claude/skills).
    """
    if configured:
        return expand_path(configured)
    return Path.cwd() / DEFAULT_SKILLS_DIR


def get_history_dir(skills_dir: Path, configured: str | Path | None = None) -> Path:
    """
    Get the version history directory.

    Returns:
        The configured directory, or <skills_dir>/.history.
    """
    if configured:
        return expand_path(configured)
    return skills_dir / HISTORY_DIRNAME


def get_workspace_path(project_dir: Path | None = None) -> Path:
    """Path to the project workspace file, .claude/workspace.yaml under the project."""
    return (Path.cwd() if project_dir is None else Path(project_dir)) / WORKSPACE_RELATIVE


def expand_path(path: str | Path) -> Path:
    """Expand ``~`` and ``$VARS`` and resolve against the working directory."""
    return Path(os.path.expandvars(str(path))).expanduser().resolve()
