"""
Provider exceptions for OpenSkill.

Defines custom exceptions for text-generation provider errors and maps
LiteLLM's exceptions onto them.
"""

from litellm import exceptions as litellm_exceptions


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(self, message: str, provider: str | None = None):
        super().__init__(message)
        self.provider = provider


class AuthenticationError(ProviderError):
    """API key invalid or missing."""

    pass


class RateLimitError(ProviderError):
    """Provider rate limit exceeded."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        retry_after: int | None = None,
    ):
        super().__init__(message, provider)
        self.retry_after = retry_after


class NetworkError(ProviderError):
    """Network-related error (connection, timeout, etc.)."""

    pass


class ServerError(ProviderError):
    """Provider server error (5xx status codes)."""

    pass


class ProviderNotConfiguredError(ProviderError):
    """No API key is available for the selected provider."""

    def __init__(self, provider: str, env_var: str | None = None):
        hint = f" Set {env_var} or providers.api_keys.{provider}." if env_var else ""
        super().__init__(f"Provider '{provider}' is not configured.{hint}", provider)
        self.env_var = env_var


class ResponseParseError(ProviderError):
    """The provider's response could not be interpreted."""

    def __init__(self, message: str, provider: str | None = None, response: str | None = None):
        super().__init__(message, provider)
        self.response = response


def classify_error(error: Exception, provider: str | None = None) -> ProviderError:
    """
    Convert an exception raised during a completion into a ProviderError.

    Args:
        error: The exception raised by LiteLLM (or anything else).
        provider: Provider name to attach.

    Returns:
        The matching ProviderError subclass instance.
    """
    if isinstance(error, ProviderError):
        return error

    message = str(error)

    if isinstance(error, litellm_exceptions.RateLimitError):
        return RateLimitError(f"Rate limit exceeded: {message}", provider)
    if isinstance(error, litellm_exceptions.AuthenticationError):
        return AuthenticationError(f"Authentication failed: {message}", provider)
    if isinstance(error, (litellm_exceptions.APIConnectionError, litellm_exceptions.Timeout)):
        return NetworkError(f"Network error: {message}", provider)
    if isinstance(error, (litellm_exceptions.ServiceUnavailableError, litellm_exceptions.InternalServerError)):
        return ServerError(f"Server error: {message}", provider)

    status = getattr(error, "status_code", None)
    if isinstance(status, int) and 500 <= status < 600:
        return ServerError(f"Server error: {message}", provider)

    lowered = message.lower()
    if "api key" in lowered or "auth" in lowered:
        return AuthenticationError(f"Authentication failed: {message}", provider)

    return ProviderError(message, provider)
