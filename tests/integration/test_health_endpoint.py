"""
Health check endpoint integration tests.
"""


class TestHealthEndpoint:
    """Test cases for the health check endpoint."""

    def test_degraded_before_first_listing(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "degraded"
        assert data["service"] == "claude-to-gemini"
        assert "timestamp" in data
        assert data["checks"]["model_cache"] == {"known_models": 0, "last_updated_at": 0.0}

    def test_healthy_after_listing(self, client):
        client.post("/v1/models/listing", json={"models/gemini-2.5-pro": {}})

        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["checks"]["model_cache"]["known_models"] == 1
        assert data["checks"]["model_cache"]["last_updated_at"] > 0

    def test_request_id_and_timing_headers(self, client):
        response = client.get("/health")

        assert response.headers["X-Request-ID"].startswith("req_")
        assert response.headers["X-Process-Time"].endswith("s")

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "message" in response.json()

    def test_unknown_path_uses_error_envelope(self, client):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        data = response.json()
        assert data["type"] == "error"
        assert data["error"]["code"] == "not_found"
