"""Fixtures for LLM client tests."""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def mock_genai_response() -> MagicMock:
    """Gemini API response mock."""
    response = MagicMock()
    response.text = '{"intentions": []}'

    candidate = MagicMock()
    candidate.finish_reason = "STOP"
    response.candidates = [candidate]

    usage = MagicMock()
    usage.prompt_token_count = 10
    usage.candidates_token_count = 20
    response.usage_metadata = usage

    return response


@pytest.fixture
def mock_anthropic_response() -> MagicMock:
    """Anthropic messages.create response mock."""
    response = MagicMock()
    response.content = [MagicMock(type="text", text='{"intentions": []}')]
    response.usage = MagicMock(input_tokens=100, output_tokens=50)
    response.model = "claude-sonnet-4-5"
    response.stop_reason = "end_turn"
    return response


@pytest.fixture
def mock_openai_response() -> MagicMock:
    """OpenAI chat.completions.create response mock."""
    choice = MagicMock()
    choice.message.content = '{"intentions": []}'
    choice.finish_reason = "stop"

    response = MagicMock()
    response.choices = [choice]
    response.usage = MagicMock(prompt_tokens=80, completion_tokens=40)
    response.model = "gpt-4o"
    return response
