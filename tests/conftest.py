from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from link_summarizer.agents.summarizer import SummarizerAgent
from link_summarizer.config import API_KEY_PLACEHOLDER, Settings
from link_summarizer.main import app, get_orchestrator
from link_summarizer.services.orchestrator import LinkAnalysisOrchestrator
from link_summarizer.services.page_fetcher import PageFetcher

TEST_API_KEY = "test-gemini-key"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-flash:generateContent"


def gemini_response(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.fixture()
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides: Any) -> Settings:
        values = {"gemini_api_key": TEST_API_KEY}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture()
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture()
def unconfigured_settings(make_settings) -> Settings:
    return make_settings(gemini_api_key=API_KEY_PLACEHOLDER)


def build_orchestrator(settings: Settings) -> LinkAnalysisOrchestrator:
    return LinkAnalysisOrchestrator(settings, PageFetcher(settings), SummarizerAgent(settings))


@pytest.fixture()
def client_factory():
    def _client(settings: Settings) -> TestClient:
        orchestrator = build_orchestrator(settings)
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        return TestClient(app)

    yield _client
    app.dependency_overrides.clear()


@pytest.fixture()
def client(client_factory, settings):
    with client_factory(settings) as test_client:
        yield test_client
