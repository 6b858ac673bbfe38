"""
Skill exceptions for OpenSkill.

Every error raised by the store, the document codec, the version history
and the import/export adapters derives from SkillError so the CLI can
report it uniformly.
"""

from pathlib import Path


class SkillError(Exception):
    """Base exception for skill errors."""

    def __init__(self, message: str, name: str | None = None, path: Path | None = None):
        self.name = name
        self.path = path
        super().__init__(f"{message}" + (f" (at {path})" if path else ""))


class SkillExistsError(SkillError):
    """A skill with the same normalized name already exists."""

    def __init__(self, name: str, path: Path | None = None):
        super().__init__(f"Skill '{name}' already exists", name, path)


class SkillNotFoundError(SkillError):
    """No skill is stored under the given name."""

    def __init__(self, name: str, path: Path | None = None):
        super().__init__(f"Skill '{name}' not found", name, path)


class InvalidSkillNameError(SkillError):
    """The name cannot be used as a storage key."""

    def __init__(self, name: str, reason: str):
        self.reason = reason
        super().__init__(f"Invalid skill name '{name}': {reason}", name)


class MalformedDocumentError(SkillError):
    """A SKILL.md document is missing its metadata block delimiters."""

    pass


class MalformedMetadataError(SkillError):
    """The metadata block of a SKILL.md document could not be parsed."""

    pass


class MalformedPayloadError(SkillError):
    """An imported JSON or YAML payload could not be parsed."""

    pass


class UnsupportedFormatError(SkillError):
    """The requested import/export format is not supported."""

    def __init__(self, fmt: str, name: str | None = None):
        self.format = fmt
        super().__init__(f"Unsupported format: {fmt}", name)


class VersionNotFoundError(SkillError):
    """The requested snapshot does not exist in a skill's history."""

    def __init__(self, name: str, version: int):
        self.version = version
        super().__init__(f"Version {version} not found for skill '{name}'", name)


class TemplateNotFoundError(SkillError):
    """No built-in template has the given name."""

    def __init__(self, template: str):
        self.template = template
        super().__init__(f"Template '{template}' not found")


class WorkspaceError(SkillError):
    """The project workspace file is missing, already present or unreadable."""

    pass
