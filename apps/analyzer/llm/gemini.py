"""Gemini API client.

LLM client built on the Google Gemini API (google-genai SDK).

No fallback:
- never switches to another model automatically
- one request per call, no retry
"""

import asyncio
import logging
import os
import time
from datetime import datetime
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

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


class GeminiClient(LLMInterface):
    """Gemini API client.

    The SDK call is blocking and runs in a worker thread so the event loop
    stays free while the model answers.
    """

    PROVIDER_NAME = Provider.GEMINI.value
    DEFAULT_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

    def __init__(self, api_key: str, model: str | None = None) -> None:
        """Initialize.

        Args:
            api_key: Gemini API key supplied with the request
            model: Model id to use
        """
        self._model = model or self.DEFAULT_MODEL
        self._client = genai.Client(api_key=api_key)

    @property
    def provider_name(self) -> str:
        return self.PROVIDER_NAME

    @property
    def model(self) -> str:
        return self._model

    async def generate(
        self,
        messages: list[dict[str, str]],
        system_prompt: str | None = None,
        config: LLMRequestConfig | None = None,
    ) -> LLMResponse:
        """Generate text.

        Args:
            messages: Conversation
            system_prompt: Optional system instructions
            config: Request options

        Returns:
            LLMResponse: Generated text
        """
        config = config or LLMRequestConfig()
        contents = self._build_contents(messages)
        self._log_request("generate", sum(len(m.get("content", "")) for m in messages))

        generation_config = self._build_generation_config(config, system_instruction=system_prompt)

        start_time = time.time()
        try:
            response = await asyncio.to_thread(
                self._client.models.generate_content,
                model=self._model,
                contents=contents,
                config=generation_config,
            )
        except Exception as e:
            converted = self._convert_exception(e)
            self._log_error("generate", converted)
            raise converted from e

        llm_response = self._parse_response(response, (time.time() - start_time) * 1000)
        if not llm_response.content:
            error = LLMEmptyResponseError(
                message="Empty Gemini response",
                provider=self.PROVIDER_NAME,
                model=self._model,
            )
            self._log_error("generate", error)
            raise error

        self._log_response("generate", llm_response)
        return llm_response

    def _build_contents(self, messages: list[dict[str, str]]) -> list[types.Content]:
        """Build Gemini contents from role/content messages."""
        contents = []
        for msg in messages:
            role = msg["role"]
            if role == "system":
                # handled through system_instruction
                continue
            gemini_role = "model" if role == "assistant" else "user"
            contents.append(
                types.Content(
                    role=gemini_role,
                    parts=[types.Part(text=msg["content"])],
                )
            )
        return contents

    def _build_generation_config(
        self,
        config: LLMRequestConfig,
        system_instruction: str | None = None,
    ) -> types.GenerateContentConfig:
        """Build the generation config."""
        kwargs: dict[str, Any] = {"max_output_tokens": config.max_tokens}
        if config.temperature is not None:
            kwargs["temperature"] = config.temperature
        if system_instruction:
            kwargs["system_instruction"] = system_instruction
        return types.GenerateContentConfig(**kwargs)

    def _parse_response(self, response: Any, latency_ms: float) -> LLMResponse:
        """Parse an SDK response into LLMResponse."""
        text = response.text or ""

        finish_reason = None
        if response.candidates:
            candidate = response.candidates[0]
            if getattr(candidate, "finish_reason", None) is not None:
                finish_reason = str(candidate.finish_reason)

        usage_metadata = getattr(response, "usage_metadata", None)
        if usage_metadata:
            input_tokens = getattr(usage_metadata, "prompt_token_count", 0) or 0
            output_tokens = getattr(usage_metadata, "candidates_token_count", 0) or 0
        else:
            input_tokens = 0
            output_tokens = 0

        return LLMResponse(
            content=text,
            token_usage=TokenUsage(input=input_tokens, output=output_tokens),
            model=self._model,
            provider=self.PROVIDER_NAME,
            finish_reason=finish_reason,
            created_at=datetime.now(),
            latency_ms=latency_ms,
        )

    def _convert_exception(self, e: Exception) -> LLMError:
        """Convert an exception to the unified format."""
        error_msg = str(e)
        code = e.code if isinstance(e, genai_errors.APIError) else None

        if code in (401, 403) or "api key not valid" in error_msg.lower():
            return LLMAuthenticationError(
                f"Authentication failed: {error_msg}",
                provider=self.PROVIDER_NAME,
                model=self._model,
            )
        if code == 429 or "rate limit" in error_msg.lower():
            return LLMRateLimitError(
                f"Rate limit exceeded: {error_msg}",
                provider=self.PROVIDER_NAME,
                model=self._model,
            )
        if isinstance(e, TimeoutError) or "timeout" in error_msg.lower():
            return LLMTimeoutError(
                f"Timeout: {error_msg}",
                provider=self.PROVIDER_NAME,
                model=self._model,
            )
        if (code is not None and code >= 500) or isinstance(e, ConnectionError):
            return LLMServiceUnavailableError(
                f"Service unavailable: {error_msg}",
                provider=self.PROVIDER_NAME,
                model=self._model,
            )
        return LLMInvalidRequestError(
            f"Invalid request: {error_msg}",
            provider=self.PROVIDER_NAME,
            model=self._model,
            details={"original_error": type(e).__name__, "code": code},
        )
