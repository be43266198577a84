"""Pytest configuration and fixtures for the AI Color Picker API."""

import copy
import json
import sys
from pathlib import Path
from typing import Callable, Generator, List

import httpx
import pytest
from fastapi.testclient import TestClient

# Add the api directory to Python path
api_dir = Path(__file__).parent
sys.path.insert(0, str(api_dir))

from palette_api.core.config import Settings
from palette_api.main import create_app
from palette_api.routers.palette import get_palette_service
from palette_api.services.openrouter import OpenRouterClient
from palette_api.services.palette_service import PaletteService


SAMPLE_PALETTE = {
    "colors": [
        {"role": "Background", "hex": "#0F172A"},
        {"role": "Surface", "hex": "#1E293B"},
        {"role": "Primary", "hex": "#38bdf8"},
        {"role": "Secondary", "hex": "#6366F1"},
        {"role": "Accent", "hex": "#F59E0B"},
        {"role": "Text", "hex": "#F8FAFC"},
        {"role": "Subtext", "hex": "#94A3B8"},
    ]
}


class FakeOpenRouter:
    """Stands in for the OpenRouter endpoint behind an httpx.MockTransport.

    Set ``response`` to an ``httpx.Response`` or an exception to raise.
    """

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def sample_palette() -> dict:
    """A valid palette; a fresh copy per test."""
    return copy.deepcopy(SAMPLE_PALETTE)


@pytest.fixture
def completion() -> Callable[[object], dict]:
    """Build an OpenRouter chat-completion document around some content."""
    def _build(content) -> dict:
        return {
            "id": "gen-test",
            "model": "openai/gpt-4o",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        }
    return _build


@pytest.fixture
def fenced_palette_text(sample_palette) -> str:
    return "```json\n" + json.dumps(sample_palette, indent=2) + "\n```"


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a key, built without reading .env or os.environ."""
    return Settings(openrouter_api_key="test-key", service_env="test", log_level="DEBUG")


@pytest.fixture
def upstream(completion, fenced_palette_text) -> FakeOpenRouter:
    return FakeOpenRouter(httpx.Response(200, json=completion(fenced_palette_text)))


@pytest.fixture
def make_client(upstream) -> Callable[[Settings], TestClient]:
    """Create a TestClient whose OpenRouter calls hit ``upstream``."""
    def _make(settings: Settings) -> TestClient:
        app = create_app(settings)
        app.dependency_overrides[get_palette_service] = lambda: PaletteService(
            settings, OpenRouterClient(settings, transport=upstream.transport)
        )
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client, test_settings) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    with make_client(test_settings) as test_client:
        yield test_client
