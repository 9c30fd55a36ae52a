"""LLM client module.

Provides one client per provider (Anthropic, OpenAI, Gemini).

Usage:
    from apps.analyzer.llm import Provider, get_llm_client

    client = get_llm_client(Provider.OPENAI, api_key="sk-...")
    response = await client.generate(messages=[{"role": "user", "content": "Hello"}])
    text = response.content
"""

from .base import (
    API_KEY_PREFIXES,
    LLMInterface,
    get_llm_client,
    is_valid_api_key_format,
    validate_api_key_format,
)
from .exceptions import (
    LLMAuthenticationError,
    LLMConfigurationError,
    LLMEmptyResponseError,
    LLMError,
    LLMInvalidRequestError,
    LLMRateLimitError,
    LLMServiceUnavailableError,
    LLMTimeoutError,
)
from .sanitizer import sanitize_user_input
from .schemas import LLMRequestConfig, LLMResponse, Provider, TokenUsage

__all__ = [
    # Base
    "LLMInterface",
    "get_llm_client",
    "API_KEY_PREFIXES",
    "is_valid_api_key_format",
    "validate_api_key_format",
    # Schemas
    "Provider",
    "LLMResponse",
    "LLMRequestConfig",
    "TokenUsage",
    # Sanitizer
    "sanitize_user_input",
    # Exceptions
    "LLMError",
    "LLMAuthenticationError",
    "LLMConfigurationError",
    "LLMEmptyResponseError",
    "LLMInvalidRequestError",
    "LLMRateLimitError",
    "LLMServiceUnavailableError",
    "LLMTimeoutError",
]
