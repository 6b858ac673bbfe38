"""
Pydantic configuration schema for OpenSkill.

This module defines all configuration models with validation.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ProviderName = Literal["groq", "openai", "anthropic", "ollama"]

# =============================================================================
# Provider Configuration
# =============================================================================


class ProviderConfig(BaseModel):
    """Text-generation provider configuration."""

    model_config = ConfigDict(extra="ignore")

    default: ProviderName = "groq"
    model: str | None = Field(default=None, description="Model override for the default provider")
    models: dict[str, str] = Field(default_factory=dict, description="Per-provider model overrides")
    api_keys: dict[str, str] = Field(default_factory=dict, description="Per-provider API keys")
    ollama_endpoint: str = "http://localhost:11434"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=2048, ge=1)
    timeout: float = Field(default=60.0, gt=0)

    @field_validator("default", mode="before")
    @classmethod
    def _lowercase_provider(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value


# =============================================================================
# Storage Configuration
# =============================================================================


class StorageConfig(BaseModel):
    """Where skills and their history are kept."""

    model_config = ConfigDict(extra="ignore")

    skills_dir: str = ".claude/skills"
    history_dir: str | None = Field(default=None, description="Defaults to <skills_dir>/.history")


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Log level used when --verbose is not given."""

    model_config = ConfigDict(extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("level", mode="before")
    @classmethod
    def _uppercase_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().upper()
        return value


# =============================================================================
# Root Configuration
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for OpenSkill.

    Configuration can be loaded from YAML files and environment
    variables, merged in order of priority.
    """

    model_config = ConfigDict(extra="ignore")

    providers: ProviderConfig = Field(default_factory=ProviderConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def get_model(self, provider: str | None = None) -> str | None:
        """Get the configured model for a provider, if any."""
        provider = provider or self.providers.default
        if provider == self.providers.default and self.providers.model:
            return self.providers.model
        return self.providers.models.get(provider)
