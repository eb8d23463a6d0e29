"""Pytest configuration and fixtures for the AI Designer."""

import copy
import sys
from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Add the api directory to Python path
api_dir = Path(__file__).parent
sys.path.insert(0, str(api_dir))

from designer.core.config import Settings
from designer.main import app
from designer.routers.design import get_design_generator
from designer.scene.memory import MemorySceneHost


SAMPLE_DESIGN = {
    "elements": [
        {
            "type": "frame",
            "x": 50,
            "y": 50,
            "width": 300,
            "height": 400,
            "name": "Login Form",
            "fills": [{"type": "SOLID", "color": {"r": 0.98, "g": 0.98, "b": 0.98}}],
            "children": [
                {
                    "type": "text",
                    "x": 20,
                    "y": 20,
                    "width": 260,
                    "height": 30,
                    "name": "Title",
                    "text": "Login",
                    "fontSize": 24,
                    "fontWeight": 700,
                },
                {
                    "type": "rectangle",
                    "x": 20,
                    "y": 80,
                    "width": 260,
                    "height": 40,
                    "name": "Email Input",
                    "fills": [{"type": "SOLID", "color": {"r": 1, "g": 1, "b": 1}}],
                },
                {
                    "type": "rectangle",
                    "x": 20,
                    "y": 300,
                    "width": 260,
                    "height": 44,
                    "name": "Submit Button",
                    "fills": [{"type": "SOLID", "color": {"r": 0.2, "g": 0.4, "b": 0.8}}],
                },
            ],
        }
    ],
    "theme": {
        "primaryColor": {"r": 0.2, "g": 0.4, "b": 0.8},
        "secondaryColor": {"r": 0.6, "g": 0.6, "b": 0.6},
        "backgroundColor": {"r": 0.98, "g": 0.98, "b": 0.98},
    },
}


@pytest.fixture
def sample_design() -> dict:
    """A conforming design payload in wire (camelCase) form."""
    return copy.deepcopy(SAMPLE_DESIGN)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a fake API key and local endpoints."""
    return Settings(
        openrouter_api_key="test-key",
        openrouter_base_url="https://openrouter.test/api/v1",
        design_server_url="http://designer.test",
    )


@pytest.fixture
def memory_host() -> MemorySceneHost:
    """In-memory host with Inter Regular and Inter Bold available."""
    return MemorySceneHost(default_font_family="Inter")


@pytest.fixture
def mock_generator():
    """Generator double injected into the design router."""
    generator = AsyncMock()
    app.dependency_overrides[get_design_generator] = lambda: generator
    yield generator
    app.dependency_overrides.pop(get_design_generator, None)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def openrouter_completion():
    """Factory building an OpenRouter chat-completions response body."""
    def _build(content: str) -> dict:
        return {
            "choices": [{"message": {"content": content}}],
            "usage": {"prompt_tokens": 100, "completion_tokens": 50, "total_tokens": 150},
            "model": "google/gemini-2.0-flash-001",
        }
    return _build
