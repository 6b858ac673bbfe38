"""
Unit tests for skill import and export.
"""

import json

import pytest
import yaml

from openskill.skills import (
    MalformedDocumentError,
    MalformedMetadataError,
    MalformedPayloadError,
    Skill,
    UnsupportedFormatError,
    detect_format,
    encode_skill,
    export_skill,
    import_skill,
)
from openskill.skills.exchange import extract_rules_from_markdown, normalize_format, parse_markdown_skill


# =============================================================================
# Formats
# =============================================================================


class TestFormats:
    """Tests for format names and detection."""

    @pytest.mark.parametrize(
        ("fmt", "expected"),
        [("json", "json"), ("YAML", "yaml"), ("yml", "yaml"), ("md", "markdown"), ("markdown", "markdown")],
    )
    def test_normalize(self, fmt, expected):
        """Aliases resolve to canonical names."""
        assert normalize_format(fmt) == expected

    def test_normalize_unknown(self):
        """Unknown formats are rejected."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            normalize_format("toml")
        assert exc_info.value.format == "toml"

    @pytest.mark.parametrize(
        ("source", "expected"),
        [
            ("skill.json", "json"),
            ("dir/skill.YML", "yaml"),
            ("SKILL.md", "markdown"),
            ("https://example.com/raw/skill.yaml?token=abc", "yaml"),
            ("https://example.com/skill.md#section", "markdown"),
            ("skill.txt", None),
        ],
    )
    def test_detect(self, source, expected):
        """Formats are detected from the suffix."""
        assert detect_format(source) == expected

    def test_detect_default(self):
        """Unknown suffixes fall back to the default."""
        assert detect_format("skill", default="yaml") == "yaml"


# =============================================================================
# Export
# =============================================================================


class TestExport:
    """Tests for export_skill."""

    def test_json(self, full_skill):
        """JSON export carries every field."""
        data = json.loads(export_skill(full_skill, "json"))
        assert data["name"] == "deploy-check"
        assert data["includes"] == ["lint", "security-review"]
        assert data["context"]["files"] == ["deploy.yaml"]
        assert data["hooks"]["pre"] == ["make lint"]

    def test_json_omits_unset_context(self, sample_skill):
        """Unset context and hooks are left out."""
        data = json.loads(export_skill(sample_skill, "json"))
        assert "context" not in data
        assert "hooks" not in data
        assert data["group"] == "backend"

    def test_yaml(self, sample_skill):
        """YAML export keeps field order and rules."""
        content = export_skill(sample_skill, "yml")
        assert content.startswith("name: Code Review\n")
        assert yaml.safe_load(content)["rules"] == sample_skill.rules

    def test_markdown(self, sample_skill):
        """Markdown export is the SKILL.md document."""
        assert export_skill(sample_skill, "md") == encode_skill(sample_skill)

    def test_unsupported(self, sample_skill):
        """Unknown formats name the skill."""
        with pytest.raises(UnsupportedFormatError) as exc_info:
            export_skill(sample_skill, "xml")
        assert exc_info.value.name == "Code Review"

    @pytest.mark.parametrize("fmt", ["json", "yaml", "markdown"])
    def test_export_then_import(self, full_skill, fmt):
        """Every format reads back the same skill."""
        assert import_skill(export_skill(full_skill, fmt), fmt) == full_skill


# =============================================================================
# JSON / YAML import
# =============================================================================


class TestStructuredImport:
    """Tests for JSON and YAML payloads."""

    def test_partial_payload(self):
        """Absent fields keep their zero value."""
        skill = import_skill('{"name": "a", "rules": ["r1"]}', "json")
        assert skill == Skill(name="a", rules=["r1"])

    def test_unknown_fields_ignored(self):
        """Extra keys are dropped."""
        skill = import_skill("name: a\nunknown: 1\n", "yaml")
        assert skill.name == "a"

    def test_empty_yaml(self):
        """An empty document is an empty skill."""
        assert import_skill("", "yaml") == Skill()

    @pytest.mark.parametrize(
        ("content", "fmt"),
        [
            ("{not json", "json"),
            ("[1, 2]", "json"),
            ('{"tags": "not-a-list"}', "json"),
            ("name: [unclosed", "yaml"),
            ("- just\n- a list\n", "yaml"),
        ],
    )
    def test_malformed(self, content, fmt):
        """Unparseable or wrongly shaped payloads are rejected."""
        with pytest.raises(MalformedPayloadError):
            import_skill(content, fmt)

    def test_unsupported(self):
        """Unknown formats are rejected."""
        with pytest.raises(UnsupportedFormatError):
            import_skill("name: a", "ini")


# =============================================================================
# Markdown import
# =============================================================================


class TestMarkdownImport:
    """Tests for markdown import."""

    def test_skill_document(self, sample_skill_md):
        """A SKILL.md document goes through the codec."""
        skill = import_skill(sample_skill_md, "markdown")
        assert skill.name == "Code Review"
        assert skill.tags == ["quality"]
        assert len(skill.rules) == 2

    def test_frontmatter_with_instructions_section(self):
        """Without a Rules section the rule heuristic runs on the body."""
        content = "---\nname: a\ndescription: b\n---\n\n# a\n\n## Instructions\n\n1. First step\n2. Second step\n"
        assert import_skill(content, "md").rules == ["First step", "Second step"]

    def test_unclosed_frontmatter(self):
        """Codec errors propagate for documents with a metadata block."""
        with pytest.raises(MalformedDocumentError):
            import_skill("---\nname: a\n\n# a\n", "md")

    def test_bad_frontmatter(self):
        """Metadata errors propagate."""
        with pytest.raises(MalformedMetadataError):
            import_skill("---\nname: [oops\n---\n", "md")

    def test_free_form(self):
        """Name, description and rules are recovered from plain markdown."""
        content = (
            "# Commit Helper\n"
            "\n"
            "> A quote to skip\n"
            "Writes good commit messages.\n"
            "\n"
            "## Rules\n"
            "\n"
            "- Use the imperative mood\n"
            "* Keep the subject short\n"
            "3. Reference issues\n"
            "\n"
            "## Examples\n"
            "\n"
            "- not a rule\n"
        )
        skill = parse_markdown_skill(content)
        assert skill.name == "Commit Helper"
        assert skill.description == "Writes good commit messages."
        assert skill.rules == ["Use the imperative mood", "Keep the subject short", "Reference issues"]

    def test_free_form_without_heading(self):
        """Without a heading the name is empty."""
        skill = import_skill("Just a description.\n\n- one rule\n", "markdown")
        assert skill.name == ""
        assert skill.description == "Just a description."
        assert skill.rules == ["one rule"]


class TestExtractRules:
    """Tests for extract_rules_from_markdown."""

    def test_section_heading_case_insensitive(self):
        """The section heading matches in any case."""
        assert extract_rules_from_markdown("## RULES\n- a\n") == ["a"]

    def test_top_level_bullets_without_section(self):
        """Without a section, only unindented bullets count."""
        content = "- one\n  - nested\n* two\n1. numbered\n"
        assert extract_rules_from_markdown(content) == ["one", "two"]

    def test_empty_section(self):
        """An empty section yields no rules, even with bullets elsewhere."""
        assert extract_rules_from_markdown("- outside\n\n## Rules\n\n## Next\n- later\n") == []
