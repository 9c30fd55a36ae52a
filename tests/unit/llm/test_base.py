"""Tests for key-format checks and client selection."""

from unittest.mock import patch

import pytest

from apps.analyzer.llm.base import get_llm_client, is_valid_api_key_format, validate_api_key_format
from apps.analyzer.llm.exceptions import LLMConfigurationError
from apps.analyzer.llm.schemas import Provider


class TestApiKeyFormat:
    """Tests for provider key prefixes."""

    @pytest.mark.parametrize(
        "provider,key,valid",
        [
            (Provider.ANTHROPIC, "sk-ant-api03-abc", True),
            (Provider.ANTHROPIC, "sk-abc", False),
            (Provider.OPENAI, "sk-proj-abc", True),
            (Provider.OPENAI, "sk-ant-api03-abc", False),
            (Provider.OPENAI, "AIza-abc", False),
            (Provider.GEMINI, "AIzaSyabc", True),
            (Provider.GEMINI, "sk-abc", False),
            (Provider.GEMINI, "ai-lowercase", False),
        ],
    )
    def test_prefixes(self, provider, key, valid):
        assert is_valid_api_key_format(provider, key) is valid

    @pytest.mark.parametrize(
        "provider,message",
        [
            (Provider.ANTHROPIC, "Invalid Anthropic API key format"),
            (Provider.OPENAI, "Invalid OpenAI API key format"),
            (Provider.GEMINI, "Invalid Gemini API key format"),
        ],
    )
    def test_error_message(self, provider, message):
        with pytest.raises(LLMConfigurationError) as exc_info:
            validate_api_key_format(provider, "bad-key")

        assert str(exc_info.value) == message
        assert exc_info.value.provider == provider.value


class TestGetLLMClient:
    """Tests for get_llm_client."""

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            get_llm_client("mistral", api_key="sk-x")

    def test_bad_key_never_builds_sdk(self):
        with patch("apps.analyzer.llm.anthropic.AsyncAnthropic") as mock_anthropic:
            with pytest.raises(LLMConfigurationError):
                get_llm_client("anthropic", api_key="sk-not-anthropic")

        mock_anthropic.assert_not_called()

    def test_builds_provider_client(self):
        with patch("apps.analyzer.llm.openai.AsyncOpenAI"):
            client = get_llm_client(Provider.OPENAI, api_key="sk-test", model="gpt-4o-mini")

        assert client.provider_name == "openai"
        assert client.model == "gpt-4o-mini"

    def test_provider_name_case_insensitive(self):
        with patch("apps.analyzer.llm.gemini.genai.Client"):
            client = get_llm_client("Gemini", api_key="AIza-test")

        assert client.provider_name == "gemini"
