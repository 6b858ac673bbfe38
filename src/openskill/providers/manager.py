"""
Provider manager for OpenSkill.

Sends prompts to the configured text-generation provider via LiteLLM.
Handles model resolution and API key lookup.
"""

import logging
import os
from typing import Any

import litellm
from litellm import completion

from openskill.config.schema import ProviderConfig
from openskill.providers.exceptions import (
    ProviderError,
    ProviderNotConfiguredError,
    ResponseParseError,
    classify_error,
)
from openskill.providers.models import Message

logger = logging.getLogger(__name__)

# Drop unsupported params per-provider
litellm.drop_params = True

PROVIDERS = ("groq", "openai", "anthropic", "ollama")

DEFAULT_MODELS = {
    "groq": "llama-3.3-70b-versatile",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-sonnet-20241022",
    "ollama": "llama3.2",
}

API_KEY_ENV_VARS = {
    "groq": "GROQ_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


class ProviderManager:
    """
    Text generation through one provider via LiteLLM.

    Implements the TextGenerator protocol: ``name`` and ``generate(prompt)``.
    """

    def __init__(self, config: ProviderConfig | None = None, provider: str | None = None):
        """
        Initialize the provider manager.

        Args:
            config: Provider configuration. Defaults are used if not provided.
            provider: Provider to use instead of ``config.default``.
        """
        self.config = config or ProviderConfig()
        self.provider = (provider or self.config.default).lower()

        if self.provider not in PROVIDERS:
            raise ProviderError(
                f"Unknown provider '{self.provider}'. Available: {', '.join(PROVIDERS)}",
                self.provider,
            )

    @property
    def name(self) -> str:
        return self.provider

    @property
    def model(self) -> str:
        """Model name for the active provider, without the LiteLLM prefix."""
        if self.provider == self.config.default and self.config.model:
            return self.config.model
        return self.config.models.get(self.provider) or DEFAULT_MODELS[self.provider]

    def resolve_model(self) -> str:
        """Get the LiteLLM model identifier (e.g. ``groq/llama-3.3-70b-versatile``)."""
        model = self.model
        if model.startswith(f"{self.provider}/"):
            return model
        return f"{self.provider}/{model}"

    def get_api_key(self, provider: str | None = None) -> str | None:
        """
        Get the API key for a provider.

        Configured keys take precedence over the vendor environment variable.
        """
        provider = provider or self.provider
        key = self.config.api_keys.get(provider)
        if key:
            return key
        env_var = API_KEY_ENV_VARS.get(provider)
        return os.environ.get(env_var) if env_var else None

    def is_configured(self, provider: str | None = None) -> bool:
        """Check whether a provider can be used. Ollama needs no key."""
        provider = provider or self.provider
        if provider == "ollama":
            return True
        return bool(self.get_api_key(provider))

    def get_available_providers(self) -> list[str]:
        """List the providers that are ready to use."""
        return [p for p in PROVIDERS if self.is_configured(p)]

    def _request_kwargs(self, messages: list[Message]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {
            "model": self.resolve_model(),
            "messages": [msg.to_dict() for msg in messages],
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens,
            "timeout": self.config.timeout,
        }

        if self.provider == "ollama":
            kwargs["api_base"] = self.config.ollama_endpoint
        else:
            kwargs["api_key"] = self.get_api_key()

        return kwargs

    def complete(self, messages: list[Message]) -> str:
        """
        Send a completion request and return the response text.

        Args:
            messages: Prompt messages.

        Returns:
            The response text.

        Raises:
            ProviderNotConfiguredError: If no API key is available.
            ResponseParseError: If the response has no text.
            ProviderError: For other provider-related errors.
        """
        if not self.is_configured():
            raise ProviderNotConfiguredError(self.provider, API_KEY_ENV_VARS.get(self.provider))

        kwargs = self._request_kwargs(messages)
        logger.info(f"Completing with model: {kwargs['model']}")

        try:
            response = completion(**kwargs)
        except Exception as e:
            error = classify_error(e, self.provider)
            logger.debug(f"Completion failed: {error}")
            raise error from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError) as e:
            raise ResponseParseError("Unexpected response shape from provider", self.provider) from e

        if not content:
            raise ResponseParseError("No response from provider", self.provider)
        return content

    def generate(self, prompt: str) -> str:
        """Send a single user prompt and return the response text."""
        return self.complete([Message.user(prompt)])


_provider_manager: ProviderManager | None = None


def get_provider_manager(provider: str | None = None, reload: bool = False) -> ProviderManager:
    """
    Get the global provider manager instance.

    Args:
        provider: Provider to use instead of the configured default.
        reload: Force recreation of the manager.

    Returns:
        ProviderManager instance.
    """
    global _provider_manager

    if provider:
        from openskill.config.loader import get_config

        return ProviderManager(get_config().providers, provider)

    if _provider_manager is None or reload:
        from openskill.config.loader import get_config

        _provider_manager = ProviderManager(get_config(reload=reload).providers)

    return _provider_manager


def clear_provider_manager() -> None:
    """Clear the global provider manager instance."""
    global _provider_manager
    _provider_manager = None
