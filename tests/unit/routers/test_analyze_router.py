"""Tests for POST /api/analyze."""

import pytest

from apps.analyzer.llm.exceptions import LLMAuthenticationError


class TestAnalyzeValidation:
    """Request checks run in order and before any provider call."""

    @pytest.mark.parametrize(
        "body,error",
        [
            ({}, "Invalid queries format"),
            ({"queries": "x", "provider": "openai", "apiKey": "sk-a"}, "Invalid queries format"),
            ({"queries": [{"query": "q"}], "provider": "openai", "apiKey": "sk-a"}, "Invalid queries format"),
            ({"queries": [], "apiKey": "sk-a"}, "Invalid or missing provider"),
            ({"queries": [], "provider": "mistral", "apiKey": "sk-a"}, "Invalid or missing provider"),
            ({"queries": [], "provider": "openai"}, "Invalid or missing API key"),
            ({"queries": [], "provider": "openai", "apiKey": ""}, "Invalid or missing API key"),
            ({"queries": [], "provider": "openai", "apiKey": 12}, "Invalid or missing API key"),
            ({"queries": [], "provider": "anthropic", "apiKey": "sk-proj-x"}, "Invalid Anthropic API key format"),
            ({"queries": [], "provider": "openai", "apiKey": "AIza-x"}, "Invalid OpenAI API key format"),
            ({"queries": [], "provider": "openai", "apiKey": "sk-ant-x"}, "Invalid OpenAI API key format"),
            ({"queries": [], "provider": "gemini", "apiKey": "sk-x"}, "Invalid Gemini API key format"),
        ],
    )
    def test_rejected_before_network(self, client, mock_llm, body, error):
        factory, llm = mock_llm

        response = client.post("/api/analyze", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": error}
        factory.assert_not_called()
        llm.generate.assert_not_called()

    def test_queries_checked_before_provider(self, client, mock_llm):
        response = client.post("/api/analyze", json={"queries": None, "provider": "nope"})

        assert response.json() == {"error": "Invalid queries format"}

    def test_non_json_body(self, client, mock_llm):
        response = client.post("/api/analyze", content=b"not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body"}

    def test_json_array_body(self, client, mock_llm):
        response = client.post("/api/analyze", json=[1, 2])

        assert response.json() == {"error": "Invalid queries format"}


class TestAnalyzeSuccess:
    """Tests for a successful analysis."""

    def test_returns_analysis_and_classified_queries(self, client, mock_llm, query_payload, sample_analysis):
        factory, llm = mock_llm

        response = client.post(
            "/api/analyze",
            json={"queries": query_payload, "provider": "openai", "apiKey": "sk-test", "brand": "Acme"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["analysis"] == sample_analysis
        classified = body["classifiedQueries"]
        assert [q["intention"] for q in classified] == ["Recherche locale", "Prix", "Comparaison"]
        assert classified[0]["query"] == "escape game paris"
        assert classified[0]["clicks"] == 120
        assert classified[0]["confidence"] > 0
        llm.generate.assert_awaited_once()
        assert response.headers["X-Request-ID"]

    def test_request_id_echoed(self, client, mock_llm, query_payload):
        response = client.post(
            "/api/analyze",
            json={"queries": query_payload, "provider": "openai", "apiKey": "sk-test"},
            headers={"X-Request-ID": "abc123"},
        )

        assert response.headers["X-Request-ID"] == "abc123"


class TestAnalyzeFailure:
    """Downstream failures are answered with 500 and details."""

    def test_no_json_in_reply(self, client, mock_llm, query_payload):
        _, llm = mock_llm
        llm.generate.return_value = llm.generate.return_value.model_copy(update={"content": "Pas de JSON"})

        response = client.post(
            "/api/analyze",
            json={"queries": query_payload, "provider": "openai", "apiKey": "sk-test"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to analyze queries", "details": "No JSON found in response"}

    def test_nan_in_reply(self, client, mock_llm, query_payload):
        _, llm = mock_llm
        llm.generate.return_value = llm.generate.return_value.model_copy(
            update={"content": '{"intentions": [], "x": NaN}'}
        )

        response = client.post(
            "/api/analyze",
            json={"queries": query_payload, "provider": "openai", "apiKey": "sk-test"},
        )

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Failed to analyze queries"
        assert body["details"].startswith("Invalid JSON in response")

    def test_provider_error(self, client, mock_llm, query_payload):
        _, llm = mock_llm
        llm.generate.side_effect = LLMAuthenticationError("Authentication failed: bad key", provider="openai")

        response = client.post(
            "/api/analyze",
            json={"queries": query_payload, "provider": "openai", "apiKey": "sk-test"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to analyze queries", "details": "Authentication failed: bad key"}

    def test_unexpected_error(self, client, mock_llm, query_payload):
        _, llm = mock_llm
        llm.generate.side_effect = RuntimeError("socket closed")

        response = client.post(
            "/api/analyze",
            json={"queries": query_payload, "provider": "openai", "apiKey": "sk-test"},
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to analyze queries", "details": "socket closed"}
