"""Unit tests for Anthropic Claude client."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from anthropic import APIConnectionError, APIStatusError, AuthenticationError, RateLimitError

from apps.analyzer.core.errors import ErrorCategory
from apps.analyzer.llm.anthropic import DEFAULT_MODEL, AnthropicClient
from apps.analyzer.llm.exceptions import (
    LLMAuthenticationError,
    LLMEmptyResponseError,
    LLMInvalidRequestError,
    LLMRateLimitError,
    LLMServiceUnavailableError,
)
from apps.analyzer.llm.schemas import LLMRequestConfig, LLMResponse

MESSAGES = [{"role": "user", "content": "Hello"}]


class TestAnthropicClientInit:
    """Tests for AnthropicClient initialization."""

    def test_sdk_retries_disabled(self):
        """The SDK is built with max_retries=0."""
        with patch("apps.analyzer.llm.anthropic.AsyncAnthropic") as mock_anthropic:
            client = AnthropicClient(api_key="sk-ant-test")

        mock_anthropic.assert_called_once_with(api_key="sk-ant-test", max_retries=0)
        assert client.model == DEFAULT_MODEL
        assert client.provider_name == "anthropic"

    def test_model_override(self):
        with patch("apps.analyzer.llm.anthropic.AsyncAnthropic"):
            client = AnthropicClient(api_key="sk-ant-test", model="claude-other")
        assert client.model == "claude-other"


class TestAnthropicClientGenerate:
    """Tests for AnthropicClient.generate() method."""

    @pytest.fixture
    def mock_client(self):
        """Create a mocked AnthropicClient."""
        with patch("apps.analyzer.llm.anthropic.AsyncAnthropic") as mock_anthropic:
            client = AnthropicClient(api_key="sk-ant-test")
            yield client, mock_anthropic.return_value

    @pytest.mark.asyncio
    async def test_generate_success(self, mock_client, mock_anthropic_response):
        """Generate returns LLMResponse on success."""
        client, mock_api = mock_client
        mock_api.messages.create = AsyncMock(return_value=mock_anthropic_response)

        result = await client.generate(messages=MESSAGES)

        assert isinstance(result, LLMResponse)
        assert result.content == '{"intentions": []}'
        assert result.token_usage.input == 100
        assert result.token_usage.output == 50
        assert result.finish_reason == "end_turn"

        kwargs = mock_api.messages.create.call_args.kwargs
        assert kwargs["max_tokens"] == 4096
        assert kwargs["messages"] == [{"role": "user", "content": "Hello"}]
        assert "system" not in kwargs
        assert "temperature" not in kwargs

    @pytest.mark.asyncio
    async def test_generate_passes_options(self, mock_client, mock_anthropic_response):
        client, mock_api = mock_client
        mock_api.messages.create = AsyncMock(return_value=mock_anthropic_response)

        await client.generate(
            messages=MESSAGES,
            system_prompt="Be brief.",
            config=LLMRequestConfig(max_tokens=100, temperature=0.2),
        )

        kwargs = mock_api.messages.create.call_args.kwargs
        assert kwargs["system"] == "Be brief."
        assert kwargs["max_tokens"] == 100
        assert kwargs["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_non_text_block_rejected(self, mock_client, mock_anthropic_response):
        """A first block that is not text is an unusable reply."""
        client, mock_api = mock_client
        mock_anthropic_response.content = [MagicMock(type="tool_use")]
        mock_api.messages.create = AsyncMock(return_value=mock_anthropic_response)

        with pytest.raises(LLMEmptyResponseError) as exc_info:
            await client.generate(messages=MESSAGES)

        assert str(exc_info.value) == "Unexpected Anthropic response type"
        assert exc_info.value.category == ErrorCategory.VALIDATION_FAIL

    @pytest.mark.asyncio
    async def test_auth_error_non_retryable(self, mock_client):
        client, mock_api = mock_client
        mock_api.messages.create = AsyncMock(
            side_effect=AuthenticationError(
                message="Invalid API key",
                response=MagicMock(status_code=401),
                body=None,
            )
        )

        with pytest.raises(LLMAuthenticationError) as exc_info:
            await client.generate(messages=MESSAGES)

        assert "Authentication failed" in str(exc_info.value)
        assert not exc_info.value.is_retryable()

    @pytest.mark.asyncio
    async def test_rate_limit_not_retried(self, mock_client):
        """Rate limits surface after exactly one call."""
        client, mock_api = mock_client
        mock_api.messages.create = AsyncMock(
            side_effect=RateLimitError(
                message="Rate limit exceeded",
                response=MagicMock(status_code=429),
                body=None,
            )
        )

        with pytest.raises(LLMRateLimitError) as exc_info:
            await client.generate(messages=MESSAGES)

        assert exc_info.value.is_retryable()
        assert mock_api.messages.create.await_count == 1

    @pytest.mark.asyncio
    async def test_connection_error(self, mock_client):
        client, mock_api = mock_client
        mock_api.messages.create = AsyncMock(side_effect=APIConnectionError(request=MagicMock()))

        with pytest.raises(LLMServiceUnavailableError):
            await client.generate(messages=MESSAGES)

    @pytest.mark.asyncio
    async def test_server_and_client_status_errors(self, mock_client):
        client, mock_api = mock_client

        mock_api.messages.create = AsyncMock(
            side_effect=APIStatusError("overloaded", response=MagicMock(status_code=529), body=None)
        )
        with pytest.raises(LLMServiceUnavailableError):
            await client.generate(messages=MESSAGES)

        mock_api.messages.create = AsyncMock(
            side_effect=APIStatusError("bad", response=MagicMock(status_code=400), body=None)
        )
        with pytest.raises(LLMInvalidRequestError) as exc_info:
            await client.generate(messages=MESSAGES)
        assert exc_info.value.details == {"status_code": 400}


class TestAnthropicConvertMessages:
    """Tests for message conversion."""

    def test_system_dropped_and_unknown_mapped_to_user(self):
        with patch("apps.analyzer.llm.anthropic.AsyncAnthropic"):
            client = AnthropicClient(api_key="sk-ant-test")

        converted = client._convert_messages(
            [
                {"role": "system", "content": "s"},
                {"role": "assistant", "content": "a"},
                {"role": "tool", "content": "t"},
            ]
        )

        assert converted == [{"role": "assistant", "content": "a"}, {"role": "user", "content": "t"}]
