"""Tests for health endpoints."""


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["version"] == "0.1.0"
        assert body["environment"] == "test"

    def test_detailed_lists_providers(self, client):
        response = client.get("/health/detailed")

        assert response.status_code == 200
        assert set(response.json()["providers"]) == {"anthropic", "openai", "gemini"}
