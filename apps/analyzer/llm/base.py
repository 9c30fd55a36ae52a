"""Common LLM interface.

Abstract base class every provider implements.
No fallback: a request never switches to another model or provider, and
no automatic retry is performed.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from .exceptions import LLMConfigurationError, LLMError
from .schemas import LLMRequestConfig, LLMResponse, Provider

logger = logging.getLogger(__name__)

# Key-format heuristics, checked before any network call
API_KEY_PREFIXES: dict[Provider, str] = {
    Provider.ANTHROPIC: "sk-ant-",
    Provider.OPENAI: "sk-",
    Provider.GEMINI: "AI",
}


def is_valid_api_key_format(provider: Provider, api_key: str) -> bool:
    """Check an API key against the provider's prefix heuristic."""
    if not api_key.startswith(API_KEY_PREFIXES[provider]):
        return False
    if provider == Provider.OPENAI and api_key.startswith(API_KEY_PREFIXES[Provider.ANTHROPIC]):
        return False
    return True


def validate_api_key_format(provider: Provider, api_key: str) -> None:
    """Raise LLMConfigurationError when the key does not look like the provider's.

    Raises:
        LLMConfigurationError: Key prefix does not match the provider
    """
    if not is_valid_api_key_format(provider, api_key):
        raise LLMConfigurationError(
            message=f"Invalid {provider.display_name} API key format",
            provider=provider.value,
        )


class LLMInterface(ABC):
    """Common LLM interface.

    Implemented by every provider (Anthropic, OpenAI, Gemini).

    Design rules:
    - One non-streaming request per call
    - No fallback to another model or provider
    - Vendor errors are converted to the LLMError hierarchy
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider name."""
        ...

    @property
    @abstractmethod
    def model(self) -> str:
        """Model id used for requests."""
        ...

    @abstractmethod
    async def generate(
        self,
        messages: list[dict[str, str]],
        system_prompt: str | None = None,
        config: LLMRequestConfig | None = None,
    ) -> LLMResponse:
        """Generate text.

        Args:
            messages: Conversation (list of role/content dicts)
            system_prompt: Optional system instructions
            config: Request options (max_tokens, temperature)

        Returns:
            LLMResponse: Generated text and metadata

        Raises:
            LLMAuthenticationError: Key rejected (NON_RETRYABLE)
            LLMRateLimitError: Rate limited (RETRYABLE)
            LLMServiceUnavailableError: Network or 5xx (RETRYABLE)
            LLMInvalidRequestError: Request rejected (NON_RETRYABLE)
            LLMEmptyResponseError: No usable text (VALIDATION_FAIL)
        """
        ...

    def _log_request(self, method: str, prompt_chars: int) -> None:
        """Request log."""
        logger.info(
            "LLM request",
            extra={
                "provider": self.provider_name,
                "method": method,
                "model": self.model,
                "prompt_chars": prompt_chars,
            },
        )

    def _log_response(self, method: str, response: LLMResponse) -> None:
        """Response log."""
        logger.info(
            "LLM response",
            extra={
                "provider": self.provider_name,
                "method": method,
                "model": response.model,
                "input_tokens": response.token_usage.input,
                "output_tokens": response.token_usage.output,
                "latency_ms": response.latency_ms,
            },
        )

    def _log_error(self, method: str, error: Exception) -> None:
        """Error log."""
        error_info: dict[str, Any] = {}
        if isinstance(error, LLMError):
            error_info = error.to_dict()

        logger.error(
            "LLM error",
            extra={
                "provider": self.provider_name,
                "method": method,
                "error_type": type(error).__name__,
                "error_message": str(error),
                "error_info": error_info,
            },
        )


def get_llm_client(provider: Provider | str, api_key: str, **kwargs: Any) -> LLMInterface:
    """Return the client for a provider.

    The key format is checked first so that a malformed key never reaches
    the vendor SDK.

    Args:
        provider: Provider enum or name ("anthropic", "openai", "gemini")
        api_key: Caller-supplied API key
        **kwargs: Client constructor arguments (model, ...)

    Returns:
        LLMInterface: Client instance

    Raises:
        ValueError: Unknown provider
        LLMConfigurationError: Key format does not match the provider
    """
    try:
        provider = Provider(provider.lower() if isinstance(provider, str) else provider)
    except ValueError:
        raise ValueError(f"Unknown LLM provider: {provider}") from None

    validate_api_key_format(provider, api_key)

    if provider == Provider.ANTHROPIC:
        from .anthropic import AnthropicClient

        return AnthropicClient(api_key=api_key, **kwargs)
    elif provider == Provider.OPENAI:
        from .openai import OpenAIClient

        return OpenAIClient(api_key=api_key, **kwargs)
    else:
        from .gemini import GeminiClient

        return GeminiClient(api_key=api_key, **kwargs)
