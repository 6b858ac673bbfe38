"""
Unit tests for skill validation and built-in templates.
"""

import pytest

from openskill.skills import BUILTIN_TEMPLATES, Skill, get_template, list_templates, validate_skill


class TestValidateSkill:
    """Tests for validate_skill."""

    def test_valid_skill(self, sample_skill):
        """A complete skill has no errors or warnings."""
        result = validate_skill(sample_skill.model_copy(update={"name": "code-review"}))
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_missing_required_fields(self):
        """Name and description are required."""
        result = validate_skill(Skill())
        assert not result.is_valid
        assert "Missing required field: name" in result.errors
        assert "Missing required field: description" in result.errors

    def test_no_rules_warns(self):
        """A skill without rules is valid with a warning."""
        result = validate_skill(Skill(name="a", description="A long enough description"))
        assert result.is_valid
        assert any("No rules defined" in w for w in result.warnings)

    def test_name_warnings(self):
        """Spaces and very long names are flagged."""
        result = validate_skill(Skill(name="has spaces " + "x" * 50, description="A long enough description"))
        assert any("contains spaces" in w for w in result.warnings)
        assert any("very long" in w for w in result.warnings)

    def test_short_description(self):
        """A very short description is flagged."""
        result = validate_skill(Skill(name="a", description="short", rules=["Always do the right thing"]))
        assert result.warnings == ["Description is very short - add more detail for clarity"]

    def test_rule_checks(self):
        """Empty rules are errors; short, long and vague rules are warnings."""
        skill = Skill(
            name="a",
            description="A long enough description",
            rules=["  ", "tiny", "x" * 501, "Be nice to everyone you meet"],
        )
        result = validate_skill(skill)

        assert result.errors == ["Rule 1 is empty"]
        assert "Rule 2 is very short - be more specific" in result.warnings
        assert "Rule 3 is very long - consider breaking into multiple rules" in result.warnings
        assert "Rule 4 is vague - use specific, actionable instructions" in result.warnings

    def test_many_rules(self):
        """More than twenty rules suggests consolidating."""
        skill = Skill(name="a", description="A long enough description", rules=[f"Rule number {i}" for i in range(21)])
        result = validate_skill(skill)
        assert result.warnings == ["Many rules defined - consider consolidating related rules"]


class TestTemplates:
    """Tests for the built-in templates."""

    def test_list(self):
        """All built-in templates are listed."""
        names = [t.name for t in list_templates()]
        assert len(names) == 8
        assert "code-review" in names
        assert "security-review" in names

    def test_list_is_a_copy(self):
        """Mutating the listing leaves the built-ins alone."""
        list_templates().clear()
        assert len(BUILTIN_TEMPLATES) == 8

    def test_get_case_insensitive(self):
        """Lookups ignore case."""
        template = get_template("Code-Review")
        assert template is not None
        assert template.category == "development"

    def test_get_missing(self):
        """Unknown templates return None."""
        assert get_template("nope") is None

    @pytest.mark.parametrize("template", BUILTIN_TEMPLATES, ids=lambda t: t.name)
    def test_templates_are_valid(self, template):
        """Every template produces a skill without validation errors."""
        result = validate_skill(template.skill)
        assert result.is_valid
        assert template.skill.name == template.name
        assert len(template.skill.rules) == 8
