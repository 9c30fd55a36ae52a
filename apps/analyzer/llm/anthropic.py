"""Anthropic Claude API client implementation."""

import logging
import os
import time
from typing import Any

from anthropic import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncAnthropic,
    AuthenticationError,
    RateLimitError,
)
from anthropic.types import MessageParam

from .base import LLMInterface
from .exceptions import (
    LLMAuthenticationError,
    LLMEmptyResponseError,
    LLMError,
    LLMInvalidRequestError,
    LLMRateLimitError,
    LLMServiceUnavailableError,
    LLMTimeoutError,
)
from .schemas import LLMRequestConfig, LLMResponse, Provider, TokenUsage

logger = logging.getLogger(__name__)

DEFAULT_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-sonnet-4-5")


class AnthropicClient(LLMInterface):
    """Anthropic Claude API client.

    Implements LLMInterface for Anthropic's Claude models.

    Important:
        - One request per call; SDK retries are disabled
        - The first content block of the reply must be text
    """

    PROVIDER = Provider.ANTHROPIC.value

    def __init__(self, api_key: str, model: str | None = None) -> None:
        """Initialize Anthropic client.

        Args:
            api_key: Anthropic API key supplied with the request.
            model: Model identifier to use.
        """
        self.client = AsyncAnthropic(api_key=api_key, max_retries=0)
        self._model = model or DEFAULT_MODEL
        logger.debug(f"AnthropicClient initialized with model={self._model}")

    @property
    def provider_name(self) -> str:
        return self.PROVIDER

    @property
    def model(self) -> str:
        return self._model

    async def generate(
        self,
        messages: list[dict[str, str]],
        system_prompt: str | None = None,
        config: LLMRequestConfig | None = None,
    ) -> LLMResponse:
        """Generate text response from Claude.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
                     Supported roles: 'user', 'assistant'
            system_prompt: System-level instructions for the model
            config: Request options

        Returns:
            LLMResponse with content, token_usage, and model info

        Raises:
            LLMError: Converted vendor failure or unusable reply
        """
        config = config or LLMRequestConfig()
        anthropic_messages = self._convert_messages(messages)
        self._log_request("generate", sum(len(m["content"]) for m in anthropic_messages))

        kwargs: dict[str, Any] = {
            "model": self._model,
            "max_tokens": config.max_tokens,
            "messages": anthropic_messages,
        }
        if system_prompt:
            kwargs["system"] = system_prompt
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature

        start_time = time.time()
        try:
            response = await self.client.messages.create(**kwargs)
        except Exception as e:
            converted = self._convert_exception(e)
            self._log_error("generate", converted)
            raise converted from e

        if not response.content or response.content[0].type != "text":
            error = LLMEmptyResponseError(
                message="Unexpected Anthropic response type",
                provider=self.PROVIDER,
                model=self._model,
            )
            self._log_error("generate", error)
            raise error

        llm_response = LLMResponse(
            content=response.content[0].text,
            token_usage=TokenUsage(
                input=response.usage.input_tokens,
                output=response.usage.output_tokens,
            ),
            model=response.model,
            provider=self.PROVIDER,
            finish_reason=response.stop_reason,
            latency_ms=(time.time() - start_time) * 1000,
        )
        self._log_response("generate", llm_response)
        return llm_response

    def _convert_exception(self, e: Exception) -> LLMError:
        """Map an Anthropic SDK exception to the LLMError hierarchy."""
        if isinstance(e, AuthenticationError):
            return LLMAuthenticationError(
                f"Authentication failed: {e}", provider=self.PROVIDER, model=self._model
            )
        if isinstance(e, RateLimitError):
            return LLMRateLimitError(
                f"Rate limit exceeded: {e}", provider=self.PROVIDER, model=self._model
            )
        if isinstance(e, APITimeoutError):
            return LLMTimeoutError(
                f"Request timed out: {e}", provider=self.PROVIDER, model=self._model
            )
        if isinstance(e, APIConnectionError):
            return LLMServiceUnavailableError(
                f"Connection failed: {e}", provider=self.PROVIDER, model=self._model
            )
        if isinstance(e, APIStatusError):
            if e.status_code >= 500:
                return LLMServiceUnavailableError(
                    f"Server error: {e}", provider=self.PROVIDER, model=self._model
                )
            return LLMInvalidRequestError(
                f"API error: {e}",
                provider=self.PROVIDER,
                model=self._model,
                details={"status_code": e.status_code},
            )
        return LLMInvalidRequestError(
            f"Unexpected error: {e}",
            provider=self.PROVIDER,
            model=self._model,
            details={"original_error": type(e).__name__},
        )

    def _convert_messages(self, messages: list[dict[str, str]]) -> list[MessageParam]:
        """Convert standard message format to Anthropic format.

        Args:
            messages: List of message dicts with 'role' and 'content' keys

        Returns:
            List of messages in Anthropic MessageParam format
        """
        anthropic_messages: list[MessageParam] = []
        for msg in messages:
            role = msg.get("role", "user")
            content = msg.get("content", "")

            # 'system' role is handled via the system parameter
            if role == "system":
                continue
            elif role == "assistant":
                anthropic_messages.append({"role": "assistant", "content": content})
            else:
                if role != "user":
                    logger.warning(f"Unknown role '{role}' mapped to 'user'")
                anthropic_messages.append({"role": "user", "content": content})

        return anthropic_messages
