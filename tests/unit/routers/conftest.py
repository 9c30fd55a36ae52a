"""Fixtures for router tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from apps.analyzer.llm.schemas import LLMResponse, TokenUsage
from apps.analyzer.main import app


@pytest.fixture
def client() -> TestClient:
    """HTTP client bound to the app."""
    return TestClient(app)


@pytest.fixture
def query_payload(sample_rows) -> list[dict]:
    """Queries as sent by the browser."""
    return [row.model_dump() for row in sample_rows]


@pytest.fixture
def mock_llm(sample_llm_reply):
    """Patch client creation; yields (factory mock, client mock)."""
    llm = MagicMock()
    llm.model = "gpt-4o"
    llm.generate = AsyncMock(
        return_value=LLMResponse(
            content=sample_llm_reply,
            token_usage=TokenUsage(input=1, output=1),
            model="gpt-4o",
            provider="openai",
        )
    )
    with patch("apps.analyzer.services.analysis.get_llm_client", return_value=llm) as factory:
        yield factory, llm
