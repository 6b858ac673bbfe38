"""
Skill validation for OpenSkill.

Validation is advisory: the store accepts any skill, and `openskill
validate` reports problems without changing anything.
"""

from pydantic import BaseModel, Field

from openskill.skills.models import Skill

MAX_NAME_LENGTH = 50
MIN_DESCRIPTION_LENGTH = 10
MAX_DESCRIPTION_LENGTH = 500
MIN_RULE_LENGTH = 10
MAX_RULE_LENGTH = 500
MAX_RULES = 20

VAGUE_RULE_PREFIXES = ("be good", "be nice")


class ValidationResult(BaseModel):
    """Errors and warnings found in a skill."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_skill(skill: Skill) -> ValidationResult:
    """Check a skill for missing fields and common authoring mistakes.

    Args:
        skill: The skill to check.

    Returns:
        ValidationResult. Errors make the skill invalid; warnings are
        suggestions.
    """
    result = ValidationResult()

    if not skill.name:
        result.errors.append("Missing required field: name")
    else:
        if " " in skill.name:
            result.warnings.append("Skill name contains spaces - consider using hyphens (e.g., 'code-review')")
        if len(skill.name) > MAX_NAME_LENGTH:
            result.warnings.append("Skill name is very long - consider a shorter, more memorable name")

    if not skill.description:
        result.errors.append("Missing required field: description")
    else:
        if len(skill.description) < MIN_DESCRIPTION_LENGTH:
            result.warnings.append("Description is very short - add more detail for clarity")
        if len(skill.description) > MAX_DESCRIPTION_LENGTH:
            result.warnings.append("Description is very long - consider being more concise")

    if not skill.rules:
        result.warnings.append("No rules defined - skills work better with specific behavioral rules")
        return result

    for i, rule in enumerate(skill.rules, start=1):
        if not rule.strip():
            result.errors.append(f"Rule {i} is empty")
            continue
        if len(rule) < MIN_RULE_LENGTH:
            result.warnings.append(f"Rule {i} is very short - be more specific")
        if len(rule) > MAX_RULE_LENGTH:
            result.warnings.append(f"Rule {i} is very long - consider breaking into multiple rules")
        if rule.lower().startswith(VAGUE_RULE_PREFIXES):
            result.warnings.append(f"Rule {i} is vague - use specific, actionable instructions")

    if len(skill.rules) > MAX_RULES:
        result.warnings.append("Many rules defined - consider consolidating related rules")

    return result
