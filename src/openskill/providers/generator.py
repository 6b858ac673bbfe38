"""
Skill generation with a text-generation provider.

Drafts new skills from a one-line intent, reviews existing skills,
explains them in plain language and runs them against a prompt.
Review and drafting responses are JSON; code fences around the JSON
are tolerated.
"""

import json
import logging
from typing import Any

from openskill.providers.exceptions import ResponseParseError
from openskill.providers.models import ImprovementSuggestion, TextGenerator
from openskill.skills.models import Skill

logger = logging.getLogger(__name__)

ENHANCE_PROMPT = """You are an expert AI systems engineer acting as a Skill Generator.

Produce a reusable skill definition: a declarative specification of how an AI
assistant should reason in one domain. A skill is a judgment module with
constraints and anti-patterns, not a prompt.

INPUTS:
- Skill Name: "{name}"
- User's Intent: {intent}

RULES:
Generate 8-12 rules that are:
- Falsifiable: it must be possible to violate the rule
- Specific: a reasonable engineer could disagree with it
- Actionable: written as directives ("Always...", "Never...", "When X, do Y...")
- Self-contained and specific to this domain

Cover hard constraints, concrete anti-patterns, tradeoff heuristics, edge cases,
and when to ask for clarification instead of assuming.

DESCRIPTION:
2-4 sentences conveying the skill's essential judgment, without marketing
language or hedging.

Response format (JSON only, no markdown, no code blocks):
{{
  "description": "...",
  "rules": ["rule1", "rule2", "..."]
}}"""

IMPROVE_PROMPT = """Analyze this skill definition and suggest improvements.

Skill Name: {name}
Description: {description}

Current Rules:
{rules}

Analyze the skill and provide:
1. Overall assessment (1-2 sentences)
2. Specific issues with existing rules (if any)
3. Suggested new or improved rules
4. Any missing edge cases or considerations

Return your response as JSON:
{{
  "assessment": "Overall assessment here",
  "issues": ["issue 1", "issue 2"],
  "improved_rules": ["improved rule 1", "improved rule 2"],
  "improved_description": "Better description if needed, or empty string"
}}"""

EXPLAIN_PROMPT = """Explain this skill in plain language for a developer who hasn't seen it before.

Skill Name: {name}
Description: {description}

Rules:
{rules}

Write a clear, concise explanation that covers:
1. What this skill is designed to do (1-2 sentences)
2. Key behaviors it enforces
3. What makes it effective
{extra}
Use simple language and avoid jargon. Format the response with clear sections."""

EXPLAIN_VERBOSE_EXTRA = """
Also include:
- Example scenarios where this skill would be applied
- Potential edge cases the skill handles
- How this skill might interact with other skills
"""


def strip_code_fences(response: str) -> str:
    """Remove a surrounding ```json ... ``` fence from a response."""
    text = response.strip()
    if text.startswith("```json"):
        text = text[len("```json") :]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_json_response(response: str, provider: str | None = None) -> dict[str, Any]:
    """
    Parse a JSON object out of a provider response.

    Raises:
        ResponseParseError: If the response is not a JSON object.
    """
    text = strip_code_fences(response)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Failed to parse provider response: {e}", provider, response) from e

    if not isinstance(data, dict):
        raise ResponseParseError("Provider response is not a JSON object", provider, response)
    return data


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if str(item).strip()]


def format_rules(rules: list[str]) -> str:
    """Number rules one per line for a prompt."""
    return "\n".join(f"{i}. {rule}" for i, rule in enumerate(rules, start=1))


def build_skill_context(skill: Skill, variables: dict[str, str] | None = None) -> str:
    """
    Render the instructions an assistant receives when a skill is active.

    Args:
        skill: The skill to render.
        variables: Values merged over the skill's own variables.
    """
    lines = [f"You are operating with the '{skill.name}' skill.", "", f"Description: {skill.description}", ""]
    if skill.rules:
        lines.append("Rules you must follow:")
        lines.extend(format_rules(skill.rules).splitlines())

    merged = {**skill.variables, **(variables or {})}
    if merged:
        if skill.rules:
            lines.append("")
        lines.append("Variables:")
        lines.extend(f"- {key} = {value}" for key, value in merged.items())

    return "\n".join(lines) + "\n"


class SkillGenerator:
    """Uses a TextGenerator to draft, review and explain skills."""

    def __init__(self, provider: TextGenerator):
        self.provider = provider

    @property
    def provider_name(self) -> str:
        return self.provider.name

    def enhance_skill(self, name: str, intent: str) -> Skill:
        """
        Draft a skill from a name and a short statement of intent.

        Args:
            name: Skill name.
            intent: What the skill should do.

        Returns:
            A skill with the generated description and rules.

        Raises:
            ProviderError: If generation fails.
            ResponseParseError: If the response is not the expected JSON.
        """
        logger.info(f"Generating skill '{name}' with {self.provider_name}")
        response = self.provider.generate(ENHANCE_PROMPT.format(name=name, intent=intent))
        data = parse_json_response(response, self.provider_name)

        description = str(data.get("description") or "").strip()
        rules = _string_list(data.get("rules"))
        if not description and not rules:
            raise ResponseParseError("Provider response has no description or rules", self.provider_name, response)

        return Skill(name=name, description=description or intent, rules=rules)

    def suggest_improvements(self, skill: Skill) -> ImprovementSuggestion:
        """
        Ask the provider to review a skill.

        Raises:
            ProviderError: If generation fails.
            ResponseParseError: If the response is not the expected JSON.
        """
        logger.info(f"Analyzing skill '{skill.name}' with {self.provider_name}")
        prompt = IMPROVE_PROMPT.format(
            name=skill.name,
            description=skill.description,
            rules=format_rules(skill.rules) or "(none)",
        )
        data = parse_json_response(self.provider.generate(prompt), self.provider_name)

        return ImprovementSuggestion(
            assessment=str(data.get("assessment") or "").strip(),
            issues=_string_list(data.get("issues")),
            improved_rules=_string_list(data.get("improved_rules")),
            improved_description=str(data.get("improved_description") or "").strip(),
        )

    def explain_skill(self, skill: Skill, verbose: bool = False) -> str:
        """Get a plain-language explanation of a skill."""
        prompt = EXPLAIN_PROMPT.format(
            name=skill.name,
            description=skill.description,
            rules=format_rules(skill.rules) or "(none)",
            extra=EXPLAIN_VERBOSE_EXTRA if verbose else "",
        )
        return self.provider.generate(prompt).strip()

    def run_skill(self, skill: Skill, prompt: str, variables: dict[str, str] | None = None) -> str:
        """
        Answer a prompt with a skill active.

        Raises:
            ProviderError: If generation fails.
        """
        logger.info(f"Running skill '{skill.name}' with {self.provider_name}")
        request = f"{build_skill_context(skill, variables)}\n\nUser request:\n{prompt}"
        return self.provider.generate(request).strip()


def apply_suggestion(skill: Skill, suggestion: ImprovementSuggestion) -> Skill:
    """Return a copy of a skill with suggested rules and description applied."""
    update: dict[str, Any] = {}
    if suggestion.improved_rules:
        update["rules"] = list(suggestion.improved_rules)
    if suggestion.improved_description:
        update["description"] = suggestion.improved_description
    return skill.model_copy(update=update, deep=True)
