"""
Unit tests for the OpenSkill provider layer.
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from openskill.config.schema import ProviderConfig
from openskill.providers import (
    AuthenticationError,
    ImprovementSuggestion,
    Message,
    ProviderError,
    ProviderManager,
    ProviderNotConfiguredError,
    RateLimitError,
    ResponseParseError,
    ServerError,
    SkillGenerator,
    apply_suggestion,
    build_skill_context,
    classify_error,
    get_provider_manager,
)
from openskill.providers.generator import parse_json_response, strip_code_fences
from openskill.skills import Skill


def _response(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


# =============================================================================
# Model Tests
# =============================================================================


class TestMessage:
    """Tests for Message."""

    def test_factories(self):
        """Test the role constructors."""
        assert Message.user("Hello").to_dict() == {"role": "user", "content": "Hello"}
        assert Message.system("Be brief").to_dict() == {"role": "system", "content": "Be brief"}


class TestImprovementSuggestion:
    """Tests for ImprovementSuggestion."""

    def test_has_changes(self):
        """Only new rules or a different description count as changes."""
        assert not ImprovementSuggestion(assessment="Fine").has_changes("desc")
        assert not ImprovementSuggestion(improved_description="desc").has_changes("desc")
        assert ImprovementSuggestion(improved_description="better").has_changes("desc")
        assert ImprovementSuggestion(improved_rules=["r"]).has_changes("desc")


# =============================================================================
# Exception Tests
# =============================================================================


class TestClassifyError:
    """Tests for classify_error."""

    def test_provider_errors_pass_through(self):
        """ProviderErrors are returned unchanged."""
        error = RateLimitError("Rate limited", retry_after=60)
        assert classify_error(error) is error
        assert error.retry_after == 60

    def test_server_status(self):
        """5xx status codes are server errors."""
        error = Exception("boom")
        error.status_code = 503
        result = classify_error(error, "groq")
        assert isinstance(result, ServerError)
        assert result.provider == "groq"

    def test_auth_message(self):
        """Messages mentioning API keys are authentication errors."""
        assert isinstance(classify_error(Exception("Invalid API key provided")), AuthenticationError)

    def test_other(self):
        """Anything else is a plain ProviderError."""
        result = classify_error(ValueError("strange"))
        assert type(result) is ProviderError
        assert str(result) == "strange"


# =============================================================================
# Provider Manager Tests
# =============================================================================


class TestProviderManager:
    """Tests for ProviderManager."""

    def test_defaults(self):
        """The default provider is groq with its default model."""
        manager = ProviderManager()
        assert manager.name == "groq"
        assert manager.resolve_model() == "groq/llama-3.3-70b-versatile"

    def test_unknown_provider(self):
        """Unknown providers are rejected."""
        with pytest.raises(ProviderError, match="Unknown provider"):
            ProviderManager(provider="mystery")

    def test_model_overrides(self):
        """The model override applies to the default provider only."""
        config = ProviderConfig(default="openai", model="gpt-4o", models={"anthropic": "claude-3-haiku"})
        assert ProviderManager(config).model == "gpt-4o"
        assert ProviderManager(config, "anthropic").resolve_model() == "anthropic/claude-3-haiku"
        assert ProviderManager(config, "groq").model == "llama-3.3-70b-versatile"

    def test_prefixed_model_not_doubled(self):
        """A model already carrying the provider prefix is used as is."""
        config = ProviderConfig(default="openai", model="openai/gpt-4o")
        assert ProviderManager(config).resolve_model() == "openai/gpt-4o"

    def test_api_key_precedence(self, monkeypatch):
        """Configured keys win over environment variables."""
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")
        assert ProviderManager(provider="openai").get_api_key() == "from-env"

        config = ProviderConfig(api_keys={"openai": "from-config"})
        assert ProviderManager(config, "openai").get_api_key() == "from-config"

    def test_is_configured(self, monkeypatch):
        """Ollama never needs a key."""
        manager = ProviderManager()
        assert not manager.is_configured()
        assert manager.is_configured("ollama")
        assert manager.get_available_providers() == ["ollama"]

        monkeypatch.setenv("GROQ_API_KEY", "k")
        assert manager.is_configured()
        assert manager.get_available_providers() == ["groq", "ollama"]

    def test_generate(self):
        """A prompt is sent as a single user message."""
        manager = ProviderManager(ProviderConfig(api_keys={"groq": "secret"}))

        with patch("openskill.providers.manager.completion", return_value=_response("Hi!")) as mock:
            assert manager.generate("Hello") == "Hi!"

        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "groq/llama-3.3-70b-versatile"
        assert kwargs["messages"] == [{"role": "user", "content": "Hello"}]
        assert kwargs["api_key"] == "secret"
        assert kwargs["max_tokens"] == 2048

    def test_ollama_uses_endpoint(self):
        """Ollama requests go to the configured endpoint without a key."""
        config = ProviderConfig(default="ollama", ollama_endpoint="http://gpu-box:11434")

        with patch("openskill.providers.manager.completion", return_value=_response("ok")) as mock:
            ProviderManager(config).generate("ping")

        kwargs = mock.call_args.kwargs
        assert kwargs["model"] == "ollama/llama3.2"
        assert kwargs["api_base"] == "http://gpu-box:11434"
        assert "api_key" not in kwargs

    def test_not_configured(self):
        """Missing keys fail before any request is made."""
        with patch("openskill.providers.manager.completion") as mock:
            with pytest.raises(ProviderNotConfiguredError) as exc_info:
                ProviderManager().generate("Hello")
        mock.assert_not_called()
        assert exc_info.value.env_var == "GROQ_API_KEY"

    def test_errors_classified(self):
        """Exceptions from LiteLLM become ProviderErrors."""
        manager = ProviderManager(ProviderConfig(api_keys={"groq": "bad"}))

        with patch("openskill.providers.manager.completion", side_effect=Exception("Invalid API key")):
            with pytest.raises(AuthenticationError) as exc_info:
                manager.generate("Hello")
        assert exc_info.value.provider == "groq"

    @pytest.mark.parametrize("response", [_response(""), _response(None), SimpleNamespace(choices=[])])
    def test_empty_response(self, response):
        """Empty or malformed responses raise ResponseParseError."""
        manager = ProviderManager(ProviderConfig(api_keys={"groq": "k"}))
        with patch("openskill.providers.manager.completion", return_value=response):
            with pytest.raises(ResponseParseError):
                manager.generate("Hello")


class TestGetProviderManager:
    """Tests for the provider manager singleton."""

    def test_from_config(self, monkeypatch):
        """The singleton follows configuration."""
        monkeypatch.setenv("OPENSKILL_PROVIDER", "anthropic")
        manager = get_provider_manager(reload=True)
        assert manager.name == "anthropic"
        assert get_provider_manager() is manager

    def test_explicit_provider(self):
        """Naming a provider returns a separate manager."""
        assert get_provider_manager("ollama").name == "ollama"
        assert get_provider_manager().name == "groq"


# =============================================================================
# Generator Tests
# =============================================================================


class TestResponseParsing:
    """Tests for JSON response helpers."""

    @pytest.mark.parametrize(
        "response",
        ['{"a": 1}', '```json\n{"a": 1}\n```', '```\n{"a": 1}\n```', '  {"a": 1}  '],
    )
    def test_parse(self, response):
        """Fenced and bare JSON objects are accepted."""
        assert parse_json_response(response) == {"a": 1}

    def test_strip_plain_text(self):
        """Text without fences is only trimmed."""
        assert strip_code_fences("  hello ") == "hello"

    @pytest.mark.parametrize("response", ["not json", "[1, 2]"])
    def test_invalid(self, response):
        """Non-objects raise ResponseParseError with the raw response."""
        with pytest.raises(ResponseParseError) as exc_info:
            parse_json_response(response, "groq")
        assert exc_info.value.response == response
        assert exc_info.value.provider == "groq"


class TestSkillGenerator:
    """Tests for SkillGenerator."""

    def test_enhance_skill(self, fake_provider_factory):
        """A drafted skill uses the generated description and rules."""
        provider = fake_provider_factory('{"description": "Reviews PRs", "rules": ["Check tests", " "]}')
        skill = SkillGenerator(provider).enhance_skill("pr-review", "review pull requests")

        assert skill == Skill(name="pr-review", description="Reviews PRs", rules=["Check tests"])
        assert '"pr-review"' in provider.prompts[0]
        assert "review pull requests" in provider.prompts[0]

    def test_enhance_falls_back_to_intent(self, fake_provider_factory):
        """Without a description the intent is used."""
        provider = fake_provider_factory('{"rules": ["One rule"]}')
        skill = SkillGenerator(provider).enhance_skill("x", "do things")
        assert skill.description == "do things"

    def test_enhance_empty(self, fake_provider_factory):
        """A response with nothing usable is an error."""
        provider = fake_provider_factory('{"description": "", "rules": []}')
        with pytest.raises(ResponseParseError):
            SkillGenerator(provider).enhance_skill("x", "do things")

    def test_suggest_improvements(self, fake_provider_factory, sample_skill):
        """Suggestions are parsed from the response."""
        provider = fake_provider_factory(
            '```json\n{"assessment": "Solid", "issues": ["Vague"], '
            '"improved_rules": ["Be specific"], "improved_description": ""}\n```'
        )
        suggestion = SkillGenerator(provider).suggest_improvements(sample_skill)

        assert suggestion == ImprovementSuggestion(
            assessment="Solid", issues=["Vague"], improved_rules=["Be specific"], improved_description=""
        )
        assert "1. Check for null pointer dereferences" in provider.prompts[0]

    def test_explain(self, fake_provider_factory, sample_skill):
        """Verbose explanations ask for examples."""
        provider = fake_provider_factory("  An explanation.  ", "Another.")
        generator = SkillGenerator(provider)

        assert generator.explain_skill(sample_skill) == "An explanation."
        generator.explain_skill(sample_skill, verbose=True)
        assert "Example scenarios" not in provider.prompts[0]
        assert "Example scenarios" in provider.prompts[1]

    def test_apply_suggestion(self, sample_skill):
        """Applying returns an updated copy."""
        suggestion = ImprovementSuggestion(improved_rules=["New rule"], improved_description="Better")
        updated = apply_suggestion(sample_skill, suggestion)

        assert updated.rules == ["New rule"]
        assert updated.description == "Better"
        assert updated.tags == sample_skill.tags
        assert sample_skill.rules != ["New rule"]


class TestRunSkill:
    """Tests for running a skill against a prompt."""

    def test_context(self, sample_skill):
        """The context names the skill and numbers its rules."""
        context = build_skill_context(sample_skill)

        assert context.startswith("You are operating with the 'Code Review' skill.\n")
        assert "Description: Reviews code for bugs and style issues" in context
        assert "Rules you must follow:\n1. Check for null pointer dereferences\n2. Flag" in context
        assert "Variables:" not in context

    def test_context_variables(self, full_skill):
        """Given variables are merged over the skill's own."""
        context = build_skill_context(full_skill, {"env": "production", "region": "eu"})

        assert "- env = production\n- region = eu\n" in context
        assert "staging" not in context

    def test_run_skill(self, fake_provider_factory, sample_skill):
        """The prompt follows the skill context."""
        provider = fake_provider_factory("  Looks fine.  ")
        response = SkillGenerator(provider).run_skill(sample_skill, "Review: def f(): pass")

        assert response == "Looks fine."
        assert provider.prompts[0].startswith(build_skill_context(sample_skill))
        assert provider.prompts[0].endswith("\n\nUser request:\nReview: def f(): pass")
