"""
Skill models for OpenSkill.

Defines the skill record, its optional context and hook configuration,
version snapshots and the result of a bulk listing.
"""

from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _number_to_str(value: Any) -> Any:
    # YAML reads "version: 1.0" as a float and "- 2024" as an int
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _items_to_str(value: Any) -> Any:
    if isinstance(value, list):
        return [_number_to_str(item) for item in value]
    return value


class ContextConfig(BaseModel):
    """How a skill gathers context before it runs."""

    model_config = ConfigDict(extra="ignore")

    files: list[str] = Field(default_factory=list, description="Files to read")
    globs: list[str] = Field(default_factory=list, description="Glob patterns to match")
    commands: list[str] = Field(default_factory=list, description="Commands to execute")
    urls: list[str] = Field(default_factory=list, description="URLs to fetch")
    environment: list[str] = Field(default_factory=list, description="Env vars to include")

    @field_validator("files", "globs", "commands", "urls", "environment", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> Any:
        return _items_to_str(value)

    def is_empty(self) -> bool:
        return not (self.files or self.globs or self.commands or self.urls or self.environment)


class HooksConfig(BaseModel):
    """Commands run before and after a skill executes."""

    model_config = ConfigDict(extra="ignore")

    pre: list[str] = Field(default_factory=list, description="Commands to run before execution")
    post: list[str] = Field(default_factory=list, description="Commands to run after execution")

    @field_validator("pre", "post", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> Any:
        return _items_to_str(value)

    def is_empty(self) -> bool:
        return not (self.pre or self.post)


class Skill(BaseModel):
    """A skill definition.

    The name is kept verbatim for display; storage and lookups use the
    normalized form (see openskill.skills.naming).
    """

    model_config = ConfigDict(extra="ignore")

    name: str = Field(default="", description="Skill name")
    description: str = Field(default="", description="What the skill does")
    rules: list[str] = Field(default_factory=list, description="Ordered behavioral rules")

    # Composition (stored only, never resolved)
    extends: str = Field(default="", description="Name of a parent skill")
    includes: list[str] = Field(default_factory=list, description="Skills to compose")

    # Organization
    tags: list[str] = Field(default_factory=list, description="Free-text labels")
    group: str = Field(default="", description="Skill group/bundle name")
    template: str = Field(default="", description="Template this skill was created from")
    variables: dict[str, str] = Field(default_factory=dict, description="Configurable parameters")

    # Authorship
    author: str = Field(default="", description="Skill author")
    version: str = Field(default="", description="Semantic version")
    output_format: str = Field(default="", description="Expected output format")

    context: ContextConfig | None = Field(default=None, description="Context gathering")
    hooks: HooksConfig | None = Field(default=None, description="Pre/post execution hooks")
    chain: list[str] = Field(default_factory=list, description="Skills to run in sequence")

    @model_validator(mode="before")
    @classmethod
    def _fill_nulls(cls, data: Any) -> Any:
        """Treat explicit nulls (e.g. ``group:`` in YAML) as the zero value."""
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator(
        "name",
        "description",
        "extends",
        "group",
        "template",
        "author",
        "version",
        "output_format",
        mode="before",
    )
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        return _number_to_str(value)

    @field_validator("rules", "includes", "tags", "chain", mode="before")
    @classmethod
    def _coerce_items(cls, value: Any) -> Any:
        return _items_to_str(value)

    @field_validator("variables", mode="before")
    @classmethod
    def _variables_to_str(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {str(k): "" if v is None else str(v) for k, v in value.items()}
        return value

    @field_validator("context", "hooks", mode="after")
    @classmethod
    def _drop_empty(cls, value: ContextConfig | HooksConfig | None) -> Any:
        if value is not None and value.is_empty():
            return None
        return value

    def has_tag(self, tag: str) -> bool:
        """Case-insensitive exact tag match."""
        wanted = tag.lower()
        return any(t.lower() == wanted for t in self.tags)

    def in_group(self, group: str) -> bool:
        """Case-insensitive exact group match."""
        return self.group.lower() == group.lower()


class SkillVersion(BaseModel):
    """A saved snapshot of a skill's document."""

    version: int = Field(..., ge=1, description="Snapshot number, starting at 1")
    timestamp: datetime = Field(..., description="When the snapshot was captured")
    path: Path = Field(..., description="Path to the snapshot file")


class SkillLoadFailure(BaseModel):
    """A skill directory that could not be decoded during a listing."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(..., description="Directory name of the skill")
    path: Path = Field(..., description="Path to the SKILL.md document")
    error: Exception = Field(..., description="The decode error")


class ListResult(BaseModel):
    """Result of listing the store.

    Listing never fails because of one corrupt skill; decode errors are
    collected in ``failures`` so callers can decide whether to surface them.
    """

    skills: list[Skill] = Field(default_factory=list)
    failures: list[SkillLoadFailure] = Field(default_factory=list)


class SkillTemplate(BaseModel):
    """A pre-built skill that new skills can be created from."""

    name: str
    description: str
    category: str
    variables: dict[str, str] = Field(default_factory=dict)
    skill: Skill
