"""OpenAI API client implementation.

No fallback: never switches to another model or provider.
One request per call; SDK retries are disabled.
"""

import logging
import os
import time
from typing import Any

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    AuthenticationError,
    BadRequestError,
    RateLimitError,
)

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


class OpenAIClient(LLMInterface):
    """OpenAI API client.

    Supported models: gpt-4o, gpt-4-turbo, ...
    """

    PROVIDER = Provider.OPENAI.value
    DEFAULT_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")

    def __init__(self, api_key: str, model: str | None = None) -> None:
        """Initialize.

        Args:
            api_key: OpenAI API key supplied with the request
            model: Model name to use
        """
        self.client = AsyncOpenAI(api_key=api_key, max_retries=0)
        self._model = model or self.DEFAULT_MODEL

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
        """Run a chat completion.

        Args:
            messages: Conversation (role/content)
            system_prompt: Optional system prompt
            config: Request options

        Returns:
            LLMResponse: Generated text and metadata

        Raises:
            LLMError: Converted vendor failure or empty reply
        """
        config = config or LLMRequestConfig()
        full_messages = list(messages)
        if system_prompt:
            full_messages = [{"role": "system", "content": system_prompt}, *full_messages]

        self._log_request("generate", sum(len(m.get("content", "")) for m in full_messages))
        logger.info("OpenAI API call: model=%s, max_tokens=%d", self._model, config.max_tokens)

        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": full_messages,
            "max_tokens": config.max_tokens,
            "response_format": {"type": "text"},
        }
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature

        start_time = time.time()
        try:
            response = await self.client.chat.completions.create(**kwargs)
        except Exception as e:
            converted = self._convert_exception(e)
            self._log_error("generate", converted)
            raise converted from e

        choice = response.choices[0] if response.choices else None
        content = choice.message.content if choice and choice.message else None
        if not content:
            error = LLMEmptyResponseError(
                message="Empty OpenAI response",
                provider=self.PROVIDER,
                model=self._model,
            )
            self._log_error("generate", error)
            raise error

        usage = response.usage
        llm_response = LLMResponse(
            content=content,
            token_usage=TokenUsage(
                input=usage.prompt_tokens if usage else 0,
                output=usage.completion_tokens if usage else 0,
            ),
            model=response.model,
            provider=self.PROVIDER,
            finish_reason=choice.finish_reason,
            latency_ms=(time.time() - start_time) * 1000,
        )
        logger.info("OpenAI API success: model=%s, tokens=%d", self._model, llm_response.token_usage.total)
        self._log_response("generate", llm_response)
        return llm_response

    def _convert_exception(self, e: Exception) -> LLMError:
        """Map an OpenAI SDK exception to the LLMError hierarchy."""
        if isinstance(e, AuthenticationError):
            logger.error("OpenAI API authentication error: %s", str(e))
            return LLMAuthenticationError(
                f"OpenAI API authentication failed: {e}", provider=self.PROVIDER, model=self._model
            )
        if isinstance(e, RateLimitError):
            return LLMRateLimitError(
                f"OpenAI API rate limit exceeded: {e}", provider=self.PROVIDER, model=self._model
            )
        if isinstance(e, APITimeoutError):
            return LLMTimeoutError(
                f"OpenAI API request timed out: {e}", provider=self.PROVIDER, model=self._model
            )
        if isinstance(e, APIConnectionError):
            return LLMServiceUnavailableError(
                f"OpenAI API connection failed: {e}", provider=self.PROVIDER, model=self._model
            )
        if isinstance(e, BadRequestError):
            logger.error("OpenAI API bad request: %s", str(e))
            return LLMInvalidRequestError(
                f"OpenAI API bad request: {e}", provider=self.PROVIDER, model=self._model
            )
        if isinstance(e, APIStatusError):
            if e.status_code >= 500:
                return LLMServiceUnavailableError(
                    f"OpenAI server error: {e}", provider=self.PROVIDER, model=self._model
                )
            logger.error("OpenAI API error: status=%d, %s", e.status_code, str(e))
            return LLMInvalidRequestError(
                f"OpenAI API error: {e}",
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
