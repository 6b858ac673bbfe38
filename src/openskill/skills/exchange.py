"""
Import and export of skills in external formats.

Supported formats are JSON, YAML and markdown. JSON and YAML carry the
full skill record; markdown is either a native SKILL.md document or a
loosely structured markdown file whose name, description and rules are
recovered heuristically.
"""

import json
import re
from pathlib import PurePosixPath
from typing import Any

import yaml
from pydantic import ValidationError

from openskill.skills.exceptions import MalformedPayloadError, UnsupportedFormatError
from openskill.skills.models import Skill
from openskill.skills.parser import DELIMITER, decode_skill, encode_skill, split_document

FORMATS = ("json", "yaml", "markdown")

FORMAT_ALIASES = {
    "json": "json",
    "yaml": "yaml",
    "yml": "yaml",
    "markdown": "markdown",
    "md": "markdown",
}

EXTENSION_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".md": "markdown",
    ".markdown": "markdown",
}

RULE_SECTION_PATTERN = re.compile(r"^##\s+(rules|instructions)\b", re.IGNORECASE)
NUMBERED_ITEM_PATTERN = re.compile(r"^\d+\.\s+")
BULLET_PREFIXES = ("- ", "* ")


def normalize_format(fmt: str) -> str:
    """Resolve a format name or alias to one of FORMATS.

    Raises:
        UnsupportedFormatError: If the format is unknown.
    """
    resolved = FORMAT_ALIASES.get(fmt.strip().lower())
    if resolved is None:
        raise UnsupportedFormatError(fmt)
    return resolved


def detect_format(source: str, default: str | None = None) -> str | None:
    """Guess a format from a file path or URL suffix.

    Query strings and fragments of URLs are ignored. Returns ``default``
    when the suffix is not recognized.
    """
    path = source.split("?", 1)[0].split("#", 1)[0]
    suffix = PurePosixPath(path).suffix.lower()
    return EXTENSION_FORMATS.get(suffix, default)


# =============================================================================
# Export
# =============================================================================


def skill_to_dict(skill: Skill) -> dict[str, Any]:
    """Dump every field of a skill; unset context and hooks are left out."""
    return skill.model_dump(mode="json", exclude_none=True)


def export_skill(skill: Skill, fmt: str) -> str:
    """Serialize a skill.

    Args:
        skill: The skill to export.
        fmt: json, yaml/yml or markdown/md.

    Returns:
        The serialized skill.

    Raises:
        UnsupportedFormatError: If the format is unknown.
    """
    try:
        resolved = normalize_format(fmt)
    except UnsupportedFormatError as e:
        e.name = skill.name
        raise

    if resolved == "json":
        return json.dumps(skill_to_dict(skill), indent=2, ensure_ascii=False) + "\n"
    if resolved == "yaml":
        return yaml.safe_dump(
            skill_to_dict(skill),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    return encode_skill(skill)


# =============================================================================
# Import
# =============================================================================


def _skill_from_mapping(data: Any, fmt: str) -> Skill:
    if data is None:
        return Skill()
    if not isinstance(data, dict):
        raise MalformedPayloadError(f"Invalid {fmt.upper()} skill: expected a mapping, got {type(data).__name__}")

    try:
        return Skill.model_validate(data)
    except ValidationError as e:
        raise MalformedPayloadError(
            f"Invalid {fmt.upper()} skill: {e}", name=str(data.get("name") or "") or None
        ) from e


def _list_item(line: str, numbered: bool = False) -> str | None:
    for prefix in BULLET_PREFIXES:
        if line.startswith(prefix):
            return line[len(prefix) :].strip()
    if numbered:
        match = NUMBERED_ITEM_PATTERN.match(line)
        if match:
            return line[match.end() :].strip()
    return None


def extract_rules_from_markdown(content: str) -> list[str]:
    """Recover rules from free-form markdown.

    Rules come from the first "## Rules" or "## Instructions" section
    (case-insensitive), where bulleted and numbered items count. Without
    such a section every unindented bullet item in the document is a rule.
    """
    lines = content.replace("\r\n", "\n").split("\n")
    rules: list[str] = []

    section_found = False
    for line in lines:
        stripped = line.strip()

        if not section_found:
            if RULE_SECTION_PATTERN.match(stripped):
                section_found = True
            continue

        if stripped.startswith("## "):
            break

        item = _list_item(stripped, numbered=True)
        if item:
            rules.append(item)

    if section_found:
        return rules

    for line in lines:
        item = _list_item(line.rstrip())
        if item:
            rules.append(item)
    return rules


def parse_markdown_skill(content: str) -> Skill:
    """Build a skill from markdown that has no metadata block.

    The first "# " heading is the name and the first line of prose after
    it is the description.
    """
    name = ""
    description = ""

    lines = content.replace("\r\n", "\n").split("\n")
    heading_index = None
    for i, line in enumerate(lines):
        if line.startswith("# "):
            name = line[2:].strip()
            heading_index = i
            break

    start = heading_index + 1 if heading_index is not None else 0
    for line in lines[start:]:
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or stripped.startswith(">"):
            continue
        if _list_item(stripped, numbered=True) is not None:
            continue
        description = stripped
        break

    return Skill(name=name, description=description, rules=extract_rules_from_markdown(content))


def import_markdown(content: str) -> Skill:
    """Import a markdown skill.

    Documents starting with a metadata block go through the SKILL.md
    codec, so decode errors propagate. When the body has no "## Rules"
    section the free-form rule extraction is applied to it instead.
    """
    if not content.startswith(DELIMITER):
        return parse_markdown_skill(content)

    skill = decode_skill(content)
    if not skill.rules:
        _, body = split_document(content)
        skill.rules = extract_rules_from_markdown(body)
    return skill


def import_skill(content: str, fmt: str) -> Skill:
    """Parse a skill from an external payload.

    Args:
        content: The payload text.
        fmt: json, yaml/yml or markdown/md.

    Returns:
        The parsed skill. Fields absent from the payload keep their zero
        value; the name may be empty.

    Raises:
        UnsupportedFormatError: If the format is unknown.
        MalformedPayloadError: If a JSON or YAML payload cannot be parsed.
        MalformedDocumentError: If a markdown metadata block is not closed.
        MalformedMetadataError: If a markdown metadata block cannot be parsed.
    """
    resolved = normalize_format(fmt)

    if resolved == "json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedPayloadError(f"Failed to parse JSON: {e}") from e
        return _skill_from_mapping(data, resolved)

    if resolved == "yaml":
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise MalformedPayloadError(f"Failed to parse YAML: {e}") from e
        return _skill_from_mapping(data, resolved)

    return import_markdown(content)
