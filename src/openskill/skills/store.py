"""
Skill store for OpenSkill.

CRUD over a directory tree holding one subdirectory per skill:

    <skills_dir>/
        code-review/
            SKILL.md
        commit-message/
            SKILL.md
        .history/          # version snapshots, see openskill.skills.history

Subdirectories are keyed by the normalized skill name.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from openskill.skills.exceptions import (
    InvalidSkillNameError,
    MalformedDocumentError,
    MalformedMetadataError,
    SkillExistsError,
    SkillNotFoundError,
)
from openskill.skills.models import ListResult, Skill, SkillLoadFailure
from openskill.skills.naming import normalize_name
from openskill.skills.parser import decode_skill, encode_skill

logger = logging.getLogger(__name__)

SKILL_FILENAME = "SKILL.md"
HISTORY_DIRNAME = ".history"


def write_text_atomic(path: Path, content: str) -> None:
    """Write a file through a temporary sibling and an atomic rename.

    A crash mid-write leaves the previous content in place instead of a
    truncated document.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content.encode("utf-8"))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_text(path: Path, name: str | None = None) -> str:
    """Read a document exactly as stored (no newline translation).

    Raises:
        MalformedDocumentError: If the file is not valid UTF-8.
    """
    try:
        return path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDocumentError(
            f"Invalid SKILL.md: not valid UTF-8 ({e.reason} at byte {e.start})", name=name, path=path
        ) from e


class SkillStore:
    """Directory-backed skill storage.

    Provides methods to:
    - Add, get, edit and remove skills by name
    - List every stored skill, optionally filtered by tag or group
    - Read and write the raw document of a skill (used by version history)
    """

    def __init__(self, skills_dir: Path, history_dir: Path | None = None):
        """Initialize the store.

        Args:
            skills_dir: Root directory holding one subdirectory per skill.
            history_dir: Version history root. Skipped when listing if it
                lives inside skills_dir. Defaults to skills_dir/.history.
        """
        self.skills_dir = Path(skills_dir)
        self.history_dir = Path(history_dir) if history_dir else self.skills_dir / HISTORY_DIRNAME

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def key_for(self, name: str) -> str:
        """Get the storage key for a skill name.

        Raises:
            InvalidSkillNameError: If the normalized name cannot be used
                as a directory name.
        """
        key = normalize_name(name)
        if not key.strip():
            raise InvalidSkillNameError(name, "name is empty")
        if "/" in key or "\\" in key or os.sep in key:
            raise InvalidSkillNameError(name, "name contains a path separator")
        if key.startswith("."):
            raise InvalidSkillNameError(name, "name cannot start with '.'")
        return key

    def skill_dir(self, name: str) -> Path:
        """Get the directory of a skill."""
        return self.skills_dir / self.key_for(name)

    def document_path(self, name: str) -> Path:
        """Get the path of a skill's SKILL.md document."""
        return self.skill_dir(name) / SKILL_FILENAME

    def exists(self, name: str) -> bool:
        """Check whether a skill directory exists."""
        return self.skill_dir(name).is_dir()

    # ------------------------------------------------------------------
    # Raw documents
    # ------------------------------------------------------------------

    def read_document(self, name: str) -> str:
        """Read the current encoded document of a skill.

        Raises:
            SkillNotFoundError: If the skill has no document.
        """
        path = self.document_path(name)
        if not path.is_file():
            raise SkillNotFoundError(name, path)
        return read_text(path, name)

    def write_document(self, name: str, content: str) -> Path:
        """Overwrite the current document of an existing skill.

        Raises:
            SkillNotFoundError: If the skill directory does not exist.
        """
        skill_dir = self.skill_dir(name)
        if not skill_dir.is_dir():
            raise SkillNotFoundError(name, skill_dir)
        path = skill_dir / SKILL_FILENAME
        write_text_atomic(path, content)
        return path

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def add(self, skill: Skill) -> Path:
        """Add a new skill.

        Args:
            skill: The skill to store.

        Returns:
            Path to the written SKILL.md.

        Raises:
            SkillExistsError: If a skill with the same normalized name exists.
        """
        skill_dir = self.skill_dir(skill.name)
        if skill_dir.exists():
            raise SkillExistsError(skill.name, skill_dir)

        skill_dir.mkdir(parents=True)
        path = skill_dir / SKILL_FILENAME
        write_text_atomic(path, encode_skill(skill))

        logger.debug(f"Added skill '{skill.name}' at {path}")
        return path

    def get(self, name: str) -> Skill:
        """Load a skill by name.

        Raises:
            SkillNotFoundError: If no document exists for the name.
            MalformedDocumentError: If the document has no metadata block or
                is not valid UTF-8.
            MalformedMetadataError: If the metadata block cannot be parsed.
        """
        path = self.document_path(name)
        if not path.is_file():
            raise SkillNotFoundError(name, path)

        try:
            return decode_skill(read_text(path, name), path)
        except (MalformedDocumentError, MalformedMetadataError) as e:
            e.name = e.name or name
            raise

    def edit(self, name: str, skill: Skill) -> Path:
        """Replace an existing skill, renaming it if its name changed.

        The directory move and the document write are separate steps:
        a crash in between leaves the skill under its new name with the
        previous content.

        Args:
            name: Current name of the skill.
            skill: The new skill content.

        Returns:
            Path to the written SKILL.md.

        Raises:
            SkillNotFoundError: If the skill does not exist.
            SkillExistsError: If the new name is taken by another skill.
        """
        current_dir = self.skill_dir(name)
        if not current_dir.is_dir():
            raise SkillNotFoundError(name, current_dir)

        target_dir = self.skill_dir(skill.name)
        if target_dir != current_dir:
            if target_dir.exists():
                raise SkillExistsError(skill.name, target_dir)
            shutil.move(str(current_dir), str(target_dir))
            logger.debug(f"Renamed skill '{name}' to '{skill.name}'")

        path = target_dir / SKILL_FILENAME
        write_text_atomic(path, encode_skill(skill))
        return path

    def remove(self, name: str) -> None:
        """Delete a skill and everything in its directory.

        Version history is kept.

        Raises:
            SkillNotFoundError: If the skill does not exist.
        """
        skill_dir = self.skill_dir(name)
        if not skill_dir.is_dir():
            raise SkillNotFoundError(name, skill_dir)
        shutil.rmtree(skill_dir)
        logger.debug(f"Removed skill '{name}'")

    # ------------------------------------------------------------------
    # Listing and filtering
    # ------------------------------------------------------------------

    def list(self) -> ListResult:
        """List all stored skills.

        Hidden directories (including the history root) and directories
        without a SKILL.md are skipped. Documents that fail to decode are
        reported in ``failures`` rather than raised.
        """
        result = ListResult()

        if not self.skills_dir.is_dir():
            return result

        for entry in sorted(self.skills_dir.iterdir(), key=lambda p: p.name):
            if not entry.is_dir() or entry.name.startswith("."):
                continue
            if entry.resolve() == self.history_dir.resolve():
                continue

            path = entry / SKILL_FILENAME
            if not path.is_file():
                continue

            try:
                result.skills.append(decode_skill(read_text(path, entry.name), path))
            except (MalformedDocumentError, MalformedMetadataError) as e:
                logger.warning(f"Skipping unreadable skill '{entry.name}': {e}")
                result.failures.append(SkillLoadFailure(name=entry.name, path=path, error=e))

        return result

    def list_by_tag(self, tag: str) -> list[Skill]:
        """List skills carrying a tag (case-insensitive). An empty tag matches nothing."""
        if not tag:
            return []
        return [skill for skill in self.list().skills if skill.has_tag(tag)]

    def list_by_group(self, group: str) -> list[Skill]:
        """List skills in a group (case-insensitive). An empty group matches nothing."""
        if not group:
            return []
        return [skill for skill in self.list().skills if skill.in_group(group)]

    def get_all_tags(self) -> list[str]:
        """Get every tag in use, lowercased and sorted."""
        tags = {tag.lower() for skill in self.list().skills for tag in skill.tags}
        return sorted(tags)

    def get_all_groups(self) -> list[str]:
        """Get every non-empty group in use, sorted."""
        groups = {skill.group for skill in self.list().skills if skill.group}
        return sorted(groups)
