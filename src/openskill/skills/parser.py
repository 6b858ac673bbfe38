"""
SKILL.md document codec for OpenSkill.

A skill is persisted as a markdown document with a YAML metadata block:

    ---
    name: Code Review
    description: Reviews code
    tags:
    - quality
    ---

    # Code Review

    Reviews code

    ## Rules

    - Check nulls

The metadata block is authoritative for every field except the rules,
which are read back from the "## Rules" section of the markdown body.
Matching is line-oriented: a description or rule containing a line that
starts with "## " or "- " does not survive a round trip.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from openskill.skills.exceptions import MalformedDocumentError, MalformedMetadataError
from openskill.skills.models import Skill

DELIMITER = "---"
RULES_HEADING = "## Rules"

# Fields written ahead of the optional metadata, always present.
_REQUIRED_FIELDS = ("name", "description")


def _split_lines(content: str) -> list[str]:
    return content.split("\n")


def _is_delimiter(line: str) -> bool:
    return line.rstrip("\r") == DELIMITER


def split_document(content: str, path: Path | None = None) -> tuple[str, str]:
    """Split a SKILL.md document into its metadata text and markdown body.

    Raises:
        MalformedDocumentError: If the document does not start with a
            delimiter line or the metadata block is never closed.
    """
    lines = _split_lines(content)

    if not lines or not _is_delimiter(lines[0]):
        raise MalformedDocumentError("Invalid SKILL.md: missing frontmatter", path=path)

    for i, line in enumerate(lines[1:], start=1):
        if _is_delimiter(line):
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1 :])

    raise MalformedDocumentError("Invalid SKILL.md: unclosed frontmatter", path=path)


def parse_metadata(text: str, path: Path | None = None) -> dict[str, Any]:
    """Parse the metadata block into a mapping.

    Raises:
        MalformedMetadataError: If the block is not valid YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedMetadataError(f"Failed to parse frontmatter: {e}", path=path) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedMetadataError("Frontmatter must be a YAML mapping", path=path)
    return data


def parse_rules(body: str) -> list[str]:
    """Extract rules from the "## Rules" section of a markdown body.

    The section opens on a line reading exactly "## Rules" and closes at
    the next line starting with "## ". Within it, each "- " item is one
    rule; everything else is ignored.
    """
    rules: list[str] = []
    in_rules = False

    for line in _split_lines(body):
        line = line.rstrip("\r")

        if not in_rules:
            if line.rstrip() == RULES_HEADING:
                in_rules = True
            continue

        if line.startswith("## "):
            break

        if line.startswith("- "):
            rule = line[2:].strip()
            if rule:
                rules.append(rule)

    return rules


def decode_skill(content: str, path: Path | None = None) -> Skill:
    """Decode a SKILL.md document into a Skill.

    Args:
        content: The document text.
        path: Optional path for error messages.

    Returns:
        The decoded skill.

    Raises:
        MalformedDocumentError: If the metadata delimiters are missing.
        MalformedMetadataError: If the metadata block cannot be parsed.
    """
    metadata_text, body = split_document(content, path)
    metadata = parse_metadata(metadata_text, path)

    # Rules only ever come from the markdown body
    metadata.pop("rules", None)

    try:
        skill = Skill.model_validate(metadata)
    except ValidationError as e:
        raise MalformedMetadataError(
            f"Invalid frontmatter: {e}", name=str(metadata.get("name") or ""), path=path
        ) from e

    skill.rules = parse_rules(body)
    return skill


def build_metadata(skill: Skill) -> dict[str, Any]:
    """Build the metadata mapping for a skill.

    name and description are always present; optional fields are only
    included when they differ from their default.
    """
    data: dict[str, Any] = {field: getattr(skill, field) for field in _REQUIRED_FIELDS}

    optional = skill.model_dump(
        mode="json",
        exclude={"rules", *_REQUIRED_FIELDS},
        exclude_defaults=True,
    )
    for key, value in optional.items():
        if isinstance(value, dict) and key in ("context", "hooks"):
            value = {k: v for k, v in value.items() if v}
        if value in ("", [], {}, None):
            continue
        data[key] = value

    return data


def encode_skill(skill: Skill) -> str:
    """Encode a skill as a SKILL.md document.

    Args:
        skill: The skill to encode.

    Returns:
        The document text.
    """
    frontmatter = yaml.safe_dump(
        build_metadata(skill),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )

    parts = [f"{DELIMITER}\n", frontmatter, f"{DELIMITER}\n\n"]
    parts.append(f"# {skill.name}\n\n")
    parts.append(f"{skill.description}\n\n")

    if skill.rules:
        parts.append(f"{RULES_HEADING}\n\n")
        for rule in skill.rules:
            parts.append(f"- {rule}\n")

    return "".join(parts)
