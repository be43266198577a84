"""Integration tests for POST /api/generate-palette."""

import json

import httpx
import pytest

from palette_api.core.config import Settings
from palette_api.routers.palette import get_palette_service

ENDPOINT = "/api/generate-palette"


class TestGeneratePaletteSuccess:

    def test_fenced_palette_returned_unmodified(self, client, upstream, sample_palette):
        response = client.post(ENDPOINT, json={"prompt": "Calm fintech dashboard"})

        assert response.status_code == 200
        assert response.json() == sample_palette
        assert [c["role"] for c in response.json()["colors"]] == [c["role"] for c in sample_palette["colors"]]
        assert response.json()["colors"][2]["hex"] == "#38bdf8"
        assert "X-Request-ID" in response.headers

    def test_outbound_request(self, client, upstream):
        client.post(ENDPOINT, json={"prompt": "  Calm fintech dashboard "})

        assert len(upstream.requests) == 1
        request = upstream.requests[0]
        assert request.headers["authorization"] == "Bearer test-key"
        assert request.headers["x-title"] == "AI Color Picker Tool"
        assert "http-referer" in request.headers
        payload = upstream.last_payload()
        assert payload["model"] == "openai/gpt-4o"
        assert payload["temperature"] == 0.7
        assert [m["role"] for m in payload["messages"]] == ["system", "user"]
        assert payload["messages"][1]["content"] == "  Calm fintech dashboard "

    def test_unfenced_palette(self, client, upstream, completion, sample_palette):
        upstream.response = httpx.Response(200, json=completion(json.dumps(sample_palette)))

        response = client.post(ENDPOINT, json={"prompt": "forest"})
        assert response.status_code == 200
        assert response.json() == sample_palette


class TestGeneratePaletteInvalidInput:

    @pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": "   "}, {"prompt": 12}, {"prompt": None}, [], "forest"])
    def test_bad_prompt(self, client, upstream, body):
        response = client.post(ENDPOINT, json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}
        assert upstream.requests == []

    def test_body_not_json(self, client, upstream):
        response = client.post(ENDPOINT, content=b"prompt=forest", headers={"Content-Type": "text/plain"})

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}
        assert upstream.requests == []

    def test_null_body(self, client, upstream):
        response = client.post(ENDPOINT, content=b"null", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "Prompt is required"}
        assert upstream.requests == []


class TestGeneratePaletteConfiguration:

    def test_missing_api_key(self, make_client, upstream):
        with make_client(Settings(openrouter_api_key=None, service_env="test")) as client:
            response = client.post(ENDPOINT, json={"prompt": "forest"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "API key not configured. Please add OPENROUTER_API_KEY to your .env file."
        }
        assert upstream.requests == []


class TestGeneratePaletteUpstreamFailures:

    def test_upstream_error_status(self, client, upstream):
        upstream.response = httpx.Response(502, text="upstream secret diagnostics")

        response = client.post(ENDPOINT, json={"prompt": "forest"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate palette. Please try again."}
        assert "secret diagnostics" not in response.text
        assert len(upstream.requests) == 1

    def test_upstream_unreachable(self, client, upstream):
        upstream.response = httpx.ConnectError("connection refused")

        response = client.post(ENDPOINT, json={"prompt": "forest"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to generate palette. Please try again."}

    @pytest.mark.parametrize("mutate, message", [
        (lambda p: p["colors"].pop(), "Invalid palette structure received"),
        (lambda p: p["colors"][4].update(role="Highlight"), "Incomplete color palette received"),
        (lambda p: p["colors"][0].update(hex="blue"), "Invalid color format received"),
        (lambda p: p["colors"][1].update(hex="#ZZZZZZ"), "Invalid color format received"),
        (lambda p: p["colors"][6].update(hex="#FFF"), "Invalid color format received"),
    ])
    def test_malformed_palette(self, client, upstream, completion, sample_palette, mutate, message):
        mutate(sample_palette)
        content = json.dumps(sample_palette)
        upstream.response = httpx.Response(200, json=completion(content))

        response = client.post(ENDPOINT, json={"prompt": "forest"})

        assert response.status_code == 500
        assert response.json() == {"error": message}
        assert "colors" not in response.text

    def test_not_json_after_fence_stripping(self, client, upstream, completion):
        upstream.response = httpx.Response(200, json=completion("```json\nSure! Here is a palette: teal, coral\n```"))

        response = client.post(ENDPOINT, json={"prompt": "forest"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to parse color data"}

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "1e400"])
    def test_non_finite_number_in_completion(self, client, upstream, completion, sample_palette, literal):
        content = json.dumps(sample_palette)[:-1] + f', "score": {literal}}}'
        upstream.response = httpx.Response(200, json=completion(content))

        response = client.post(ENDPOINT, json={"prompt": "forest"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to parse color data"}

    def test_missing_content(self, client, upstream):
        upstream.response = httpx.Response(200, json={"choices": [{"message": {"content": ""}}]})

        response = client.post(ENDPOINT, json={"prompt": "forest"})

        assert response.status_code == 500
        assert response.json() == {"error": "Invalid response from AI"}


class TestGeneratePaletteUnexpected:

    def test_unexpected_error(self, make_client, test_settings):
        class Exploding:
            async def generate(self, body):
                raise RuntimeError("boom")

        client = make_client(test_settings)
        client.app.dependency_overrides[get_palette_service] = lambda: Exploding()

        with client:
            response = client.post(ENDPOINT, json={"prompt": "forest"})

        assert response.status_code == 500
        assert response.json() == {"error": "An unexpected error occurred"}
        assert "boom" not in response.text

    def test_unknown_route(self, client):
        response = client.get("/api/nope")

        assert response.status_code == 404
        assert "error" in response.json()
