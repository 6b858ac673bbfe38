"""Storage utilities for OpenSkill."""

from openskill.storage.paths import (
    DEFAULT_SKILLS_DIR,
    expand_path,
    find_project_config,
    get_global_config_path,
    get_history_dir,
    get_openskill_home,
    get_project_config_path,
    get_skills_dir,
    get_workspace_path,
)

__all__ = [
    "DEFAULT_SKILLS_DIR",
    "expand_path",
    "find_project_config",
    "get_global_config_path",
    "get_history_dir",
    "get_openskill_home",
    "get_project_config_path",
    "get_skills_dir",
    "get_workspace_path",
]
