"""
Skill manager for OpenSkill.

Provides the main interface for working with skills: the store and the
version history behind one object, plus the tag, group, template and
import/export operations the CLI needs.
"""

import logging
from pathlib import Path

from openskill.skills import exchange
from openskill.skills.exceptions import (
    InvalidSkillNameError,
    SkillExistsError,
    SkillNotFoundError,
    TemplateNotFoundError,
)
from openskill.skills.history import VersionHistory
from openskill.skills.models import ListResult, Skill, SkillVersion
from openskill.skills.store import SkillStore
from openskill.skills.templates import get_template

logger = logging.getLogger(__name__)


def _merge_tags(existing: list[str], added: list[str]) -> list[str]:
    """Append tags not already present (case-insensitive), keeping order."""
    result = list(existing)
    seen = {tag.lower() for tag in existing}
    for tag in added:
        tag = tag.strip()
        if tag and tag.lower() not in seen:
            result.append(tag)
            seen.add(tag.lower())
    return result


class SkillManager:
    """
    Main interface for skill management.

    Snapshots are only taken when a caller asks for one; the mutating
    helpers below default to ``snapshot=True`` because they back user
    commands that should be undoable with `openskill rollback`.
    """

    def __init__(self, skills_dir: Path, history_dir: Path | None = None):
        """
        Initialize the skill manager.

        Args:
            skills_dir: Directory holding one subdirectory per skill.
            history_dir: Version history root (default <skills_dir>/.history).
        """
        self.store = SkillStore(skills_dir, history_dir)
        self.history = VersionHistory(self.store, self.store.history_dir)

    @property
    def skills_dir(self) -> Path:
        return self.store.skills_dir

    @property
    def history_dir(self) -> Path:
        return self.history.history_dir

    # =========================================================================
    # Basic Operations
    # =========================================================================

    def get_skill(self, name: str) -> Skill:
        return self.store.get(name)

    def list_skills(self) -> ListResult:
        return self.store.list()

    def skill_exists(self, name: str) -> bool:
        return self.store.exists(name)

    def create_skill(self, skill: Skill) -> Path:
        """
        Add a new skill to the store.

        Raises:
            SkillExistsError: If the name is taken.
            InvalidSkillNameError: If the name cannot be stored.
        """
        path = self.store.add(skill)
        logger.info(f"Created skill '{skill.name}'")
        return path

    def update_skill(self, name: str, skill: Skill, snapshot: bool = True) -> SkillVersion | None:
        """
        Replace a skill, optionally snapshotting the current document first.

        The snapshot is kept under the old name when the skill is renamed.

        Args:
            name: Current skill name.
            skill: New content (its name may differ).
            snapshot: Save the current document to history before writing.

        Returns:
            The snapshot taken, if any.

        Raises:
            SkillNotFoundError: If the skill does not exist.
            SkillExistsError: If the new name is taken by another skill.
        """
        # An update that cannot succeed writes no snapshot
        current_dir = self.store.skill_dir(name)
        if not current_dir.is_dir():
            raise SkillNotFoundError(name, current_dir)
        target_dir = self.store.skill_dir(skill.name)
        if target_dir != current_dir and target_dir.exists():
            raise SkillExistsError(skill.name, target_dir)

        version = self.history.save_version(name) if snapshot else None
        self.store.edit(name, skill)
        return version

    def remove_skill(self, name: str) -> None:
        """Remove a skill. Its version history is kept."""
        self.store.remove(name)
        logger.info(f"Removed skill '{name}'")

    # =========================================================================
    # Templates
    # =========================================================================

    def create_from_template(self, template_name: str, name: str | None = None) -> Skill:
        """
        Create a skill from a built-in template.

        Args:
            template_name: Template to copy.
            name: Name of the new skill (defaults to the template name).

        Returns:
            The created skill.

        Raises:
            TemplateNotFoundError: If the template does not exist.
            SkillExistsError: If the name is taken.
        """
        template = get_template(template_name)
        if template is None:
            raise TemplateNotFoundError(template_name)

        skill = template.skill.model_copy(deep=True)
        skill.template = template.name
        if template.variables:
            skill.variables = dict(template.variables)
        if name:
            skill.name = name

        self.create_skill(skill)
        return skill

    # =========================================================================
    # Tags and Groups
    # =========================================================================

    def add_tags(self, name: str, tags: list[str], snapshot: bool = True) -> Skill:
        """Add tags to a skill. Tags already present are left alone."""
        skill = self.store.get(name)
        merged = _merge_tags(skill.tags, tags)
        if merged != skill.tags:
            skill.tags = merged
            self.update_skill(name, skill, snapshot=snapshot)
        return skill

    def remove_tags(self, name: str, tags: list[str], snapshot: bool = True) -> Skill:
        """Remove tags from a skill (case-insensitive)."""
        skill = self.store.get(name)
        removed = {tag.strip().lower() for tag in tags}
        remaining = [tag for tag in skill.tags if tag.lower() not in removed]
        if remaining != skill.tags:
            skill.tags = remaining
            self.update_skill(name, skill, snapshot=snapshot)
        return skill

    def set_group(self, name: str, group: str, snapshot: bool = True) -> Skill:
        skill = self.store.get(name)
        if skill.group != group:
            skill.group = group
            self.update_skill(name, skill, snapshot=snapshot)
        return skill

    def unset_group(self, name: str, snapshot: bool = True) -> Skill:
        return self.set_group(name, "", snapshot=snapshot)

    def list_by_tag(self, tag: str) -> list[Skill]:
        return self.store.list_by_tag(tag)

    def list_by_group(self, group: str) -> list[Skill]:
        return self.store.list_by_group(group)

    def get_all_tags(self) -> list[str]:
        return self.store.get_all_tags()

    def get_all_groups(self) -> list[str]:
        return self.store.get_all_groups()

    # =========================================================================
    # Import / Export
    # =========================================================================

    def export_skill(self, name: str, fmt: str) -> str:
        return exchange.export_skill(self.store.get(name), fmt)

    def import_skill(
        self,
        content: str,
        fmt: str,
        name: str | None = None,
        overwrite: bool = False,
        fallback_name: str | None = None,
    ) -> Skill:
        """
        Parse an external payload and store it.

        Args:
            content: Payload text.
            fmt: json, yaml/yml or markdown/md.
            name: Name to use instead of the one in the payload.
            overwrite: Replace an existing skill (snapshotting it first)
                instead of failing.
            fallback_name: Name to use when the payload has none, such as
                the directory a SKILL.md was found in.

        Returns:
            The stored skill.

        Raises:
            InvalidSkillNameError: If the payload has no name and none is given.
            SkillExistsError: If the skill exists and overwrite is False.
        """
        skill = exchange.import_skill(content, fmt)
        if name:
            skill.name = name
        elif not skill.name.strip() and fallback_name:
            skill.name = fallback_name
        if not skill.name.strip():
            raise InvalidSkillNameError("", "skill name is required (use --name)")

        if self.store.exists(skill.name):
            if not overwrite:
                raise SkillExistsError(skill.name, self.store.skill_dir(skill.name))
            self.update_skill(skill.name, skill, snapshot=True)
        else:
            self.store.add(skill)

        logger.info(f"Imported skill '{skill.name}'")
        return skill

    # =========================================================================
    # Version History
    # =========================================================================

    def save_version(self, name: str) -> SkillVersion:
        return self.history.save_version(name)

    def list_versions(self, name: str) -> list[SkillVersion]:
        return self.history.list_versions(name)

    def rollback(self, name: str, version: int) -> SkillVersion:
        return self.history.rollback(name, version)

    def diff(self, name: str, v1: int, v2: int) -> tuple[str, str]:
        return self.history.diff(name, v1, v2)


# Singleton instance for convenience
_manager: SkillManager | None = None


def get_skill_manager(reload: bool = False) -> SkillManager:
    """
    Get the skill manager singleton, built from configuration.

    Args:
        reload: Rebuild the manager from freshly loaded configuration.

    Returns:
        SkillManager instance.
    """
    global _manager

    if _manager is None or reload:
        from openskill.config.loader import get_config
        from openskill.storage.paths import get_history_dir, get_skills_dir

        storage = get_config(reload=reload).storage
        skills_dir = get_skills_dir(storage.skills_dir)
        _manager = SkillManager(skills_dir, get_history_dir(skills_dir, storage.history_dir))

    return _manager


def clear_skill_manager() -> None:
    """Clear the skill manager singleton."""
    global _manager
    _manager = None
