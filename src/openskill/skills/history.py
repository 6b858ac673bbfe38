"""
Version history for OpenSkill.

Snapshots are plain copies of a skill's SKILL.md taken on request:

    <history_dir>/
        code-review/
            SKILL.v1.md
            SKILL.v2.md

Each snapshot starts with a one-line header recording its number and
capture time, followed by the exact document content at that moment.
Snapshots are never modified once written.
"""

import logging
import re
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from openskill.skills.exceptions import MalformedDocumentError, VersionNotFoundError
from openskill.skills.models import SkillVersion
from openskill.skills.store import SkillStore, read_text, write_text_atomic

logger = logging.getLogger(__name__)

SNAPSHOT_PATTERN = re.compile(r"^SKILL\.v(\d+)\.md$")
HEADER_PATTERN = re.compile(r"^<!-- Version (\d+) saved at (.+?) -->\n")

# Version number that refers to the current document instead of a snapshot
CURRENT = 0


def snapshot_filename(version: int) -> str:
    return f"SKILL.v{version}.md"


def format_header(version: int, timestamp: datetime) -> str:
    return f"<!-- Version {version} saved at {timestamp.isoformat(timespec='seconds')} -->\n"


def strip_header(content: str) -> tuple[str, datetime | None]:
    """Split a snapshot into its document content and header timestamp.

    Content without a recognizable header is returned unchanged.
    """
    match = HEADER_PATTERN.match(content)
    if not match:
        return content, None

    try:
        timestamp = datetime.fromisoformat(match.group(2))
    except ValueError:
        timestamp = None
    return content[match.end() :], timestamp


class DiffLine(BaseModel):
    """One differing line position between two documents."""

    line_number: int = Field(..., ge=1, description="1-based line position")
    old: str | None = Field(default=None, description="Line in the first document, if any")
    new: str | None = Field(default=None, description="Line in the second document, if any")


def line_diff(a: str, b: str) -> list[DiffLine]:
    """Compare two documents position by position.

    Line i of one document is compared with line i of the other; there is
    no alignment of inserted or removed lines. Identical inputs produce an
    empty list.
    """
    old_lines = a.split("\n")
    new_lines = b.split("\n")
    diff = []

    for i in range(max(len(old_lines), len(new_lines))):
        old = old_lines[i] if i < len(old_lines) else None
        new = new_lines[i] if i < len(new_lines) else None
        if old != new:
            diff.append(DiffLine(line_number=i + 1, old=old, new=new))

    return diff


class VersionHistory:
    """Snapshot history of skill documents."""

    def __init__(self, store: SkillStore, history_dir: Path | None = None):
        self.store = store
        self.history_dir = Path(history_dir) if history_dir else store.history_dir

    def skill_history_dir(self, name: str) -> Path:
        return self.history_dir / self.store.key_for(name)

    def snapshot_path(self, name: str, version: int) -> Path:
        return self.skill_history_dir(name) / snapshot_filename(version)

    def _version_numbers(self, name: str) -> list[int]:
        history_dir = self.skill_history_dir(name)
        if not history_dir.is_dir():
            return []

        numbers = []
        for entry in history_dir.iterdir():
            match = SNAPSHOT_PATTERN.match(entry.name)
            if match and entry.is_file():
                numbers.append(int(match.group(1)))
        return numbers

    def save_version(self, name: str) -> SkillVersion:
        """Snapshot the current document of a skill.

        Args:
            name: Skill name.

        Returns:
            The new snapshot.

        Raises:
            SkillNotFoundError: If the skill has no current document.
        """
        content = self.store.read_document(name)

        numbers = self._version_numbers(name)
        version = max(numbers) + 1 if numbers else 1
        timestamp = datetime.now().astimezone()

        path = self.snapshot_path(name, version)
        write_text_atomic(path, format_header(version, timestamp) + content)

        logger.info(f"Saved version {version} of skill '{name}'")
        return SkillVersion(version=version, timestamp=timestamp, path=path)

    def list_versions(self, name: str) -> list[SkillVersion]:
        """List the snapshots of a skill, newest first.

        Returns an empty list when the skill has no history.
        """
        versions = []

        for number in self._version_numbers(name):
            path = self.snapshot_path(name, number)
            try:
                _, timestamp = strip_header(read_text(path, name))
            except MalformedDocumentError:
                timestamp = None
            if timestamp is None:
                timestamp = datetime.fromtimestamp(path.stat().st_mtime)
            versions.append(SkillVersion(version=number, timestamp=timestamp, path=path))

        versions.sort(key=lambda v: v.version, reverse=True)
        return versions

    def get_content(self, name: str, version: int) -> str:
        """Get the document content of a version.

        Args:
            name: Skill name.
            version: Snapshot number, or 0 for the current document.

        Raises:
            SkillNotFoundError: If version is 0 and the skill does not exist.
            VersionNotFoundError: If the snapshot does not exist.
            MalformedDocumentError: If the content is not valid UTF-8.
        """
        if version == CURRENT:
            return self.store.read_document(name)

        path = self.snapshot_path(name, version)
        if not path.is_file():
            raise VersionNotFoundError(name, version)

        content, _ = strip_header(read_text(path, name))
        return content

    def rollback(self, name: str, version: int) -> SkillVersion:
        """Restore a skill's document from a snapshot.

        The current document is snapshotted first; if that fails the
        rollback is aborted and nothing is overwritten.

        Args:
            name: Skill name.
            version: Snapshot to restore.

        Returns:
            The safety snapshot of the document that was replaced.

        Raises:
            VersionNotFoundError: If the snapshot does not exist.
            SkillNotFoundError: If the skill has no current document.
        """
        if version < 1 or not self.snapshot_path(name, version).is_file():
            raise VersionNotFoundError(name, version)

        content = self.get_content(name, version)
        safety = self.save_version(name)
        self.store.write_document(name, content)

        logger.info(f"Rolled back skill '{name}' to version {version} (saved current as v{safety.version})")
        return safety

    def diff(self, name: str, v1: int, v2: int) -> tuple[str, str]:
        """Resolve two versions of a skill to their content.

        Version 0 means the current document.
        """
        return self.get_content(name, v1), self.get_content(name, v2)

    def latest_version(self, name: str) -> int | None:
        numbers = self._version_numbers(name)
        return max(numbers) if numbers else None
