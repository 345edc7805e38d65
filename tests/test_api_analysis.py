"""Tests for the /analyze and /health API endpoints.

The shared ``AnalysisService`` on ``app.state`` is swapped for a fake so no
network calls are made.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from pageanalyzer.api.app import create_app
from pageanalyzer.errors import (
    ContextCancelledError,
    RequestConstructionError,
    StatusError,
    TransportError,
)
from pageanalyzer.scraper.models import AnalysisResult


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

def _result(url: str) -> AnalysisResult:
    return AnalysisResult(
        url=url,
        html_version="HTML5",
        title="Test Page",
        headings={"h1": 1, "h2": 2},
        has_login_form=True,
        internal_links=["/a", "https://example.com/b"],
        external_links=["https://external.com"],
        inaccessible_internal_links_count=1,
        inaccessible_external_links_count=0,
    )


class _FakeService:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[object, str]] = []

    def analyze(self, ctx, url: str) -> AnalysisResult:
        self.calls.append((ctx, url))
        if self.error is not None:
            raise self.error
        return _result(url)

    def close(self) -> None:
        pass


@pytest.fixture()
def fake_service():
    return _FakeService()


@pytest.fixture()
def client(fake_service):
    """Return a TestClient whose analysis service is replaced by a fake.

    The lifespan opens a real service when the context manager enters; it is
    closed immediately and swapped for the fake.
    """
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        c.app.state.analysis_service.close()
        c.app.state.analysis_service = fake_service
        yield c


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestHealth:
    def test_ok(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


class TestAnalyze:
    def test_returns_result(self, client, fake_service):
        resp = client.post("/analyze", json={"url": "https://example.com/"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["url"] == "https://example.com/"
        assert data["html_version"] == "HTML5"
        assert data["title"] == "Test Page"
        assert data["headings"] == {"h1": 1, "h2": 2}
        assert data["has_login_form"] is True
        assert data["internal_links"] == ["/a", "https://example.com/b"]
        assert data["external_links"] == ["https://external.com"]
        assert data["internal_links_count"] == 2
        assert data["external_links_count"] == 1
        assert data["inaccessible_internal_links_count"] == 1
        assert data["inaccessible_external_links_count"] == 0

    def test_passes_a_live_context_and_cancels_it_afterwards(self, client, fake_service):
        client.post("/analyze", json={"url": " https://example.com/ "})
        ctx, url = fake_service.calls[0]
        assert url == "https://example.com/"
        assert ctx.deadline is not None
        assert ctx.done() is True

    def test_empty_url_rejected(self, client, fake_service):
        resp = client.post("/analyze", json={"url": ""})
        assert resp.status_code == 422
        assert fake_service.calls == []

    def test_missing_url_rejected(self, client):
        resp = client.post("/analyze", json={})
        assert resp.status_code == 422

    def test_bad_url_is_400(self, client, fake_service):
        fake_service.error = RequestConstructionError("unsupported protocol scheme ''")
        resp = client.post("/analyze", json={"url": "nope"})
        assert resp.status_code == 400
        assert resp.json()["detail"].startswith("Analysis failed: failed to create request")

    @pytest.mark.parametrize(
        "error, message",
        [
            (StatusError(404), "request failed with status code: 404"),
            (TransportError("network error"), "network error"),
            (ContextCancelledError(), "context canceled"),
        ],
    )
    def test_upstream_failures_are_502(self, client, fake_service, error, message):
        fake_service.error = error
        resp = client.post("/analyze", json={"url": "https://example.com/"})
        assert resp.status_code == 502
        assert resp.json()["detail"] == f"Analysis failed: {message}"
