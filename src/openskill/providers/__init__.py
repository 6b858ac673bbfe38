"""
OpenSkill Provider Layer.

Text generation via LiteLLM for drafting, reviewing and explaining
skills. Supports Groq, OpenAI, Anthropic and a local Ollama server.
"""

from openskill.providers.exceptions import (
    AuthenticationError,
    NetworkError,
    ProviderError,
    ProviderNotConfiguredError,
    RateLimitError,
    ResponseParseError,
    ServerError,
    classify_error,
)
from openskill.providers.generator import SkillGenerator, apply_suggestion, build_skill_context
from openskill.providers.manager import (
    DEFAULT_MODELS,
    PROVIDERS,
    ProviderManager,
    clear_provider_manager,
    get_provider_manager,
)
from openskill.providers.models import ImprovementSuggestion, Message, TextGenerator

__all__ = [
    # Manager
    "DEFAULT_MODELS",
    "PROVIDERS",
    "ProviderManager",
    "clear_provider_manager",
    "get_provider_manager",
    # Generator
    "SkillGenerator",
    "apply_suggestion",
    "build_skill_context",
    # Models
    "ImprovementSuggestion",
    "Message",
    "TextGenerator",
    # Exceptions
    "AuthenticationError",
    "NetworkError",
    "ProviderError",
    "ProviderNotConfiguredError",
    "RateLimitError",
    "ResponseParseError",
    "ServerError",
    "classify_error",
]
