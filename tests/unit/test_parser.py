"""
Unit tests for skill naming and the SKILL.md document codec.
"""

import pytest

from openskill.skills import (
    MalformedDocumentError,
    MalformedMetadataError,
    Skill,
    decode_skill,
    encode_skill,
    normalize_name,
)
from openskill.skills.parser import parse_rules, split_document


# =============================================================================
# Naming
# =============================================================================


class TestNormalizeName:
    """Tests for normalize_name."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Code Review", "code-review"),
            ("code review", "code-review"),
            ("code-review", "code-review"),
            ("API  Design", "api--design"),
            ("snake_case.v2", "snake_case.v2"),
            ("", ""),
        ],
    )
    def test_normalize(self, name, expected):
        """Lowercases and replaces spaces only."""
        assert normalize_name(name) == expected

    def test_idempotent(self):
        """Normalizing twice gives the same result."""
        once = normalize_name("My Fancy Skill")
        assert normalize_name(once) == once


# =============================================================================
# Frontmatter
# =============================================================================


class TestSplitDocument:
    """Tests for split_document."""

    def test_split(self):
        """Metadata and body are separated at the closing delimiter."""
        metadata, body = split_document("---\nname: a\n---\n\nbody\n")
        assert metadata == "name: a"
        assert body == "\nbody\n"

    def test_missing_delimiter(self):
        """A document not starting with --- is malformed."""
        with pytest.raises(MalformedDocumentError, match="missing frontmatter"):
            split_document("# Title\n")

    def test_unclosed(self):
        """A metadata block without a closing delimiter is malformed."""
        with pytest.raises(MalformedDocumentError, match="unclosed frontmatter"):
            split_document("---\nname: a\n\n# Title\n")


# =============================================================================
# Rules
# =============================================================================


class TestParseRules:
    """Tests for rule extraction from the markdown body."""

    def test_rules_section(self):
        """Only "- " items in the Rules section count."""
        body = "# T\n\n## Rules\n\n- one\n-two\n  - nested\n* star\n- two\n\n## Other\n\n- three\n"
        assert parse_rules(body) == ["one", "two"]

    def test_no_rules_section(self):
        """Bullets outside a Rules section are ignored."""
        assert parse_rules("# T\n\n- not a rule\n") == []

    def test_heading_must_match_exactly(self):
        """A heading with trailing words does not open the section."""
        assert parse_rules("## Rules for reviewers\n\n- one\n") == []

    def test_subheading_does_not_close_section(self):
        """Only a level-2 heading ends the section."""
        assert parse_rules("## Rules\n\n- one\n### Detail\n- two\n") == ["one", "two"]

    def test_empty_items_skipped(self):
        """Bullets with no text are dropped."""
        assert parse_rules("## Rules\n\n-  \n- real\n") == ["real"]


# =============================================================================
# Decode / Encode
# =============================================================================


class TestDecodeSkill:
    """Tests for decode_skill."""

    def test_decode(self, sample_skill_md):
        """Test decoding a typical document."""
        skill = decode_skill(sample_skill_md)
        assert skill.name == "Code Review"
        assert skill.description == "Reviews code for bugs and style issues"
        assert skill.tags == ["quality"]
        assert skill.rules == [
            "Check for null pointer dereferences",
            "Flag functions longer than 50 lines",
        ]

    def test_rules_in_metadata_ignored(self):
        """Rules come only from the body."""
        content = "---\nname: a\nrules:\n- hidden\n---\n\n## Rules\n\n- visible\n"
        assert decode_skill(content).rules == ["visible"]

    def test_absent_fields_default(self):
        """Fields not present in the metadata keep their zero value."""
        skill = decode_skill("---\nname: minimal\n---\n")
        assert skill.description == ""
        assert skill.tags == []
        assert skill.group == ""
        assert skill.context is None
        assert skill.hooks is None

    def test_null_values(self):
        """Explicit nulls are treated as absent."""
        skill = decode_skill("---\nname: a\ngroup:\ntags:\n---\n")
        assert skill.group == ""
        assert skill.tags == []

    def test_numeric_version(self):
        """A version YAML reads as a number is kept as text."""
        assert decode_skill("---\nname: a\nversion: 1.0\n---\n").version == "1.0"

    def test_numeric_list_entries(self):
        """Numbers in list fields are kept as text."""
        skill = decode_skill(
            "---\nname: Year\ntags:\n- 2024\n- release\nincludes:\n- 7\nchain:\n- 1.5\n"
            "context:\n  commands:\n  - 42\nhooks:\n  post:\n  - 3\n---\n"
        )
        assert skill.tags == ["2024", "release"]
        assert skill.includes == ["7"]
        assert skill.chain == ["1.5"]
        assert skill.context.commands == ["42"]
        assert skill.hooks.post == ["3"]

    def test_boolean_list_entry_rejected(self):
        """Booleans are not silently turned into tag names."""
        with pytest.raises(MalformedMetadataError):
            decode_skill("---\nname: a\ntags:\n- true\n---\n")

    def test_crlf_document(self):
        """Windows line endings are accepted."""
        content = "---\r\nname: a\r\n---\r\n\r\n## Rules\r\n\r\n- one\r\n"
        skill = decode_skill(content)
        assert skill.name == "a"
        assert skill.rules == ["one"]

    def test_invalid_yaml(self):
        """Unparseable metadata raises MalformedMetadataError."""
        with pytest.raises(MalformedMetadataError):
            decode_skill("---\nname: [unclosed\n---\n")

    def test_non_mapping_metadata(self):
        """Metadata that is not a mapping is rejected."""
        with pytest.raises(MalformedMetadataError, match="mapping"):
            decode_skill("---\n- a\n- b\n---\n")

    def test_wrongly_typed_field(self):
        """A field of the wrong shape is rejected."""
        with pytest.raises(MalformedMetadataError):
            decode_skill("---\nname: a\ntags:\n  key: value\n---\n")

    def test_missing_frontmatter(self):
        """A plain markdown document is malformed."""
        with pytest.raises(MalformedDocumentError):
            decode_skill("# Title\n\n- rule\n")


class TestEncodeSkill:
    """Tests for encode_skill."""

    def test_encode_layout(self, sample_skill):
        """Test the document layout."""
        content = encode_skill(sample_skill)
        assert content.startswith("---\nname: Code Review\ndescription: Reviews code")
        assert "\n---\n\n# Code Review\n\nReviews code for bugs and style issues\n\n## Rules\n\n" in content
        assert content.endswith("- Check for null pointer dereferences\n- Flag functions longer than 50 lines\n")

    def test_defaults_omitted(self):
        """Optional fields at their default are not written."""
        content = encode_skill(Skill(name="a", description="b"))
        metadata, _ = split_document(content)
        assert metadata == "name: a\ndescription: b"

    def test_no_rules_section_without_rules(self):
        """A skill with no rules has no Rules heading."""
        assert "## Rules" not in encode_skill(Skill(name="a", description="b"))

    def test_round_trip(self, sample_skill):
        """Decoding an encoded skill gives it back."""
        assert decode_skill(encode_skill(sample_skill)) == sample_skill

    def test_round_trip_all_fields(self, full_skill):
        """Every optional field survives a round trip."""
        decoded = decode_skill(encode_skill(full_skill))
        assert decoded == full_skill
        assert decoded.context.commands == ["git status"]
        assert decoded.hooks.pre == ["make lint"]
        assert decoded.variables == {"env": "staging"}

    def test_unicode(self):
        """Non-ASCII text is written as-is."""
        skill = Skill(name="résumé", description="Vérifie les CV", rules=["Toujours être précis"])
        content = encode_skill(skill)
        assert "résumé" in content
        assert decode_skill(content) == skill
