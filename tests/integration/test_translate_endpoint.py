"""
Integration tests for the translation and model listing endpoints.
"""

from tests.fixtures import (
    make_claude_request,
    make_image_block,
    make_model_listing,
    make_weather_tool,
)


class TestTranslateEndpoint:
    """Test cases for /v1/messages/translate"""

    def test_translate_with_tools(self, client):
        response = client.post(
            "/v1/messages/translate",
            json=make_claude_request(tools=[make_weather_tool()]),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["model"] == "gemini-2.5-pro"

        body = data["request"]
        assert body["contents"][0]["role"] == "user"
        parameters = body["tools"][0]["functionDeclarations"][0]["parameters"]
        assert parameters["properties"]["days"] == {
            "type": "INTEGER",
            "description": "Validation: maximum: 7",
        }

    def test_translate_tool_result_image(self, client):
        messages = [
            {
                "role": "assistant",
                "content": [
                    {"type": "tool_use", "id": "toolu_1", "name": "shot", "input": {}}
                ],
            },
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": "toolu_1",
                        "content": [make_image_block()],
                    }
                ],
            },
        ]
        response = client.post(
            "/v1/messages/translate", json=make_claude_request(messages=messages)
        )

        assert response.status_code == 200
        parts = response.json()["request"]["contents"][1]["parts"]
        assert parts[0]["functionResponse"]["name"] == "shot"
        assert "~1 bytes" in parts[0]["functionResponse"]["response"]["result"]
        assert parts[1] == {"inlineData": {"mimeType": "image/png", "data": "QQ=="}}

    def test_known_model_resolved_after_listing(self, client):
        client.post("/v1/models/listing", json=make_model_listing())

        response = client.post(
            "/v1/messages/translate",
            json=make_claude_request(model="models/gemini-2.5-PRO"),
        )
        assert response.json()["model"] == "Gemini-2.5-Pro"

    def test_invalid_request_returns_400(self, client):
        response = client.post(
            "/v1/messages/translate", json=make_claude_request(max_tokens=0)
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"]["code"] == "bad_request"
        assert "max_tokens" in data["error"]["message"]

    def test_schema_violation_returns_422(self, client):
        response = client.post("/v1/messages/translate", json={"model": "claude"})

        assert response.status_code == 422
        data = response.json()
        assert data["error"]["code"] == "validation_error"
        locations = [e["loc"] for e in data["error"]["details"]["validation_errors"]]
        assert ["body", "messages"] in locations


class TestModelEndpoints:
    """Test cases for model listing, lookup and quota endpoints"""

    def test_listing_and_lookup(self, client):
        response = client.post("/v1/models/listing", json=make_model_listing())

        assert response.status_code == 200
        assert response.json()["count"] == 5

        models = client.get("/v1/models").json()
        assert "Gemini-2.5-Pro" in models["models"]
        assert models["count"] == 5

    def test_null_listing_is_noop(self, client):
        response = client.post("/v1/models/listing", json=None)

        assert response.status_code == 200
        assert response.json() == {"count": 0, "last_updated_at": 0.0}

    def test_invalid_json_listing(self, client):
        response = client.post(
            "/v1/models/listing",
            content=b"{broken",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400

    def test_quota(self, client):
        response = client.post("/v1/models/quota", json=make_model_listing())

        assert response.status_code == 200
        rows = response.json()["quota"]
        assert [row["model"] for row in rows] == [
            "claude-sonnet-4-5",
            "gemini-2.5-flash",
            "models/Gemini-2.5-Pro",
        ]
        assert rows[1]["limit"] == "100%"
