"""
Project workspaces.

A workspace is the per-project selection of skills kept in
``.claude/workspace.yaml``: which skills and groups are enabled, and
variable values that override a skill's own defaults in this project.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from openskill.skills.exceptions import WorkspaceError
from openskill.skills.models import Skill
from openskill.skills.naming import normalize_name
from openskill.skills.store import read_text, write_text_atomic
from openskill.storage.paths import get_workspace_path

logger = logging.getLogger(__name__)

DEFAULT_WORKSPACE_NAME = "default"


class Workspace(BaseModel):
    """Skills enabled for one project."""

    name: str = Field(default=DEFAULT_WORKSPACE_NAME, description="Workspace name")
    description: str = Field(default="", description="What the workspace is for")
    skills: list[str] = Field(default_factory=list, description="Enabled skills, in the order added")
    groups: list[str] = Field(default_factory=list, description="Enabled skill groups")
    overrides: dict[str, dict[str, str]] = Field(
        default_factory=dict, description="Variable overrides keyed by normalized skill name"
    )

    @field_validator("overrides", mode="before")
    @classmethod
    def _overrides_to_str(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        result = {}
        for skill, variables in value.items():
            if variables is None:
                variables = {}
            elif isinstance(variables, dict):
                variables = {str(k): "" if v is None else str(v) for k, v in variables.items()}
            result[str(skill)] = variables
        return result

    def has_skill(self, name: str) -> bool:
        """Whether a skill is enabled, comparing normalized names."""
        key = normalize_name(name)
        return any(normalize_name(s) == key for s in self.skills)

    def add_skill(self, name: str) -> bool:
        """Enable a skill. Returns False if it was already enabled."""
        if self.has_skill(name):
            return False
        self.skills.append(name)
        return True

    def remove_skill(self, name: str) -> bool:
        """Disable a skill. Returns False if it was not enabled."""
        key = normalize_name(name)
        kept = [s for s in self.skills if normalize_name(s) != key]
        if len(kept) == len(self.skills):
            return False
        self.skills = kept
        return True

    def set_override(self, skill_name: str, variable: str, value: str) -> None:
        self.overrides.setdefault(normalize_name(skill_name), {})[variable] = value

    def overrides_for(self, skill_name: str) -> dict[str, str]:
        return dict(self.overrides.get(normalize_name(skill_name), {}))

    def resolve_variables(self, skill: Skill) -> dict[str, str]:
        """A skill's variables with this workspace's overrides applied."""
        return {**skill.variables, **self.overrides_for(skill.name)}


class WorkspaceStore:
    """Reads and writes the workspace file of one project."""

    def __init__(self, path: Path | None = None):
        self.path = path or get_workspace_path()

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Workspace | None:
        """
        Load the workspace.

        Returns:
            The workspace, or None if the project has none.

        Raises:
            WorkspaceError: If the file cannot be parsed.
        """
        if not self.exists():
            return None

        try:
            data = yaml.safe_load(read_text(self.path))
        except yaml.YAMLError as e:
            raise WorkspaceError(f"Invalid YAML in workspace file: {e}", path=self.path) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise WorkspaceError("Workspace file must contain a mapping", path=self.path)

        try:
            return Workspace.model_validate(data)
        except ValidationError as e:
            raise WorkspaceError(f"Invalid workspace file: {e}", path=self.path) from e

    def require(self) -> Workspace:
        """Load the workspace, failing if the project has none."""
        workspace = self.load()
        if workspace is None:
            raise WorkspaceError("No workspace configured. Run 'openskill workspace init'", path=self.path)
        return workspace

    def save(self, workspace: Workspace) -> None:
        # Empty fields are left out; the name is always written
        data = {k: v for k, v in workspace.model_dump().items() if v or k == "name"}
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
        try:
            write_text_atomic(self.path, text)
        except OSError as e:
            raise WorkspaceError(f"Cannot write workspace file: {e}", path=self.path) from e
        logger.debug(f"Saved workspace '{workspace.name}' to {self.path}")

    def init(self, name: str = DEFAULT_WORKSPACE_NAME) -> Workspace:
        """
        Create an empty workspace.

        Raises:
            WorkspaceError: If the project already has one.
        """
        existing = self.load()
        if existing is not None:
            raise WorkspaceError(f"Workspace already exists: {existing.name}", path=self.path)

        workspace = Workspace(name=name, description=f"Workspace for {name}")
        self.save(workspace)
        return workspace
