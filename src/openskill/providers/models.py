"""
Provider data models for OpenSkill.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class MessageRole(str, Enum):
    """Valid message roles."""

    SYSTEM = "system"
    USER = "user"


@dataclass
class Message:
    """Prompt message."""

    role: str
    content: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to LiteLLM-compatible dict."""
        return {"role": self.role, "content": self.content}

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=MessageRole.SYSTEM.value, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=MessageRole.USER.value, content=content)


class TextGenerator(Protocol):
    """Anything that turns a prompt into text.

    Failures are reported as ProviderError subclasses.
    """

    @property
    def name(self) -> str: ...

    def generate(self, prompt: str) -> str: ...


@dataclass
class ImprovementSuggestion:
    """Result of asking a provider to review a skill."""

    assessment: str = ""
    issues: list[str] = field(default_factory=list)
    improved_rules: list[str] = field(default_factory=list)
    improved_description: str = ""

    def has_changes(self, current_description: str = "") -> bool:
        """Whether applying the suggestion would change anything."""
        return bool(self.improved_rules) or (
            bool(self.improved_description) and self.improved_description != current_description
        )
