import httpx
import pytest

from link_summarizer.agents.summarizer import NO_API_KEY_SUMMARY, SummarizerAgent
from link_summarizer.main import app
from link_summarizer.services.page_fetcher import PageFetcher, PageFetchError

from .conftest import GEMINI_URL, gemini_response


@pytest.fixture()
def unconfigured_client(client_factory, unconfigured_settings):
    with client_factory(unconfigured_settings) as test_client:
        yield test_client


def _stub_fetch(pages):
    async def _fake(self: PageFetcher, url: str) -> str:
        if url not in pages:
            raise PageFetchError("timeout of 10000ms exceeded")
        return pages[url]

    return _fake


def _stub_summary(summary: str = "Concise seven word summary of this page"):
    async def _fake(self: SummarizerAgent, url: str, content: str) -> str:
        return summary

    return _fake


def test_root_reports_service_running(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "running" in response.text


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": app.version}


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"urls": None},
        {"urls": []},
        {"urls": "https://example.com"},
        {"urls": {"first": "https://example.com"}},
        {"urls": [1, 2]},
        ["https://example.com"],
    ],
)
def test_invalid_urls_rejected(client, body):
    response = client.post("/analyze", json=body)

    assert response.status_code == 400
    payload = response.json()
    assert payload == {"error": "Please provide an array of URLs to analyze"}
    assert "results" not in payload


def test_non_json_body_rejected(client):
    response = client.post(
        "/analyze",
        content=b"urls=https://example.com",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    assert response.status_code == 400
    assert "error" in response.json()


def test_analyze_returns_entry_per_url(client, monkeypatch):
    pages = {
        "https://example.com": "<p>Example</p>",
        "https://python.org": "<p>Python</p>",
    }
    monkeypatch.setattr(PageFetcher, "fetch", _stub_fetch(pages))
    monkeypatch.setattr(SummarizerAgent, "summarize", _stub_summary())

    response = client.post(
        "/analyze",
        json={"urls": ["https://example.com", "https://python.org", "https://example.com"]},
    )

    assert response.status_code == 200
    results = response.json()["results"]
    assert set(results) == {"https://example.com", "https://python.org"}
    assert results["https://example.com"] == {
        "status": "success",
        "summary": "Concise seven word summary of this page",
    }


def test_analyze_drops_urls_beyond_limit(client, monkeypatch):
    urls = [f"https://site{i}.test" for i in range(12)]
    monkeypatch.setattr(PageFetcher, "fetch", _stub_fetch({url: "<p>x</p>" for url in urls}))
    monkeypatch.setattr(SummarizerAgent, "summarize", _stub_summary())

    response = client.post("/analyze", json={"urls": urls})

    assert response.status_code == 200
    assert sorted(response.json()["results"]) == sorted(urls[:10])


def test_failed_fetch_does_not_block_other_urls(client, monkeypatch):
    monkeypatch.setattr(PageFetcher, "fetch", _stub_fetch({"https://ok.test": "<p>fine</p>"}))
    monkeypatch.setattr(SummarizerAgent, "summarize", _stub_summary())

    response = client.post("/analyze", json={"urls": ["https://down.test", "https://ok.test"]})

    results = response.json()["results"]
    assert results["https://ok.test"]["status"] == "success"
    assert results["https://down.test"] == {
        "status": "error",
        "error": "timeout of 10000ms exceeded",
        "summary": "Could not access or analyze this site",
    }


def test_missing_api_key_yields_fallback_summary(unconfigured_client, respx_mock):
    respx_mock.get("https://example.com/").mock(
        return_value=httpx.Response(200, text="<html><body><p>Example Domain</p></body></html>")
    )
    respx_mock.get("https://www.python.org/").mock(
        return_value=httpx.Response(200, text="<html><body><p>Python</p></body></html>")
    )

    response = unconfigured_client.post(
        "/analyze",
        json={"urls": ["https://example.com/", "https://www.python.org/"]},
    )

    results = response.json()["results"]
    assert {entry["summary"] for entry in results.values()} == {NO_API_KEY_SUMMARY}
    assert {entry["status"] for entry in results.values()} == {"success"}


def test_end_to_end_with_gemini(client, respx_mock):
    respx_mock.get("https://example.com/").mock(
        return_value=httpx.Response(
            200,
            text="<html><head><style>h1{}</style></head><body><h1>Example Domain</h1></body></html>",
        )
    )
    respx_mock.get("https://down.example.com/").mock(return_value=httpx.Response(503))
    gemini_route = respx_mock.post(GEMINI_URL).mock(
        return_value=httpx.Response(
            200,
            json=gemini_response("Example domain  reserved for documentation and testing purposes"),
        )
    )

    response = client.post(
        "/analyze",
        json={"urls": ["https://example.com/", "https://down.example.com/"]},
    )

    assert response.status_code == 200
    results = response.json()["results"]
    assert results["https://example.com/"] == {
        "status": "success",
        "summary": "Example domain reserved for documentation and testing",
    }
    assert results["https://down.example.com/"]["status"] == "error"
    assert results["https://down.example.com/"]["error"] == "Request failed with status code 503"
    assert gemini_route.call_count == 1
    assert "Example Domain" in gemini_route.calls.last.request.content.decode()
