"""Tests for the 'analyze' CLI command."""

from __future__ import annotations

import json

from typer.testing import CliRunner

from cli.main import app
from pageanalyzer.errors import StatusError
from pageanalyzer.scraper.models import AnalysisResult

runner = CliRunner()


def _result(url: str) -> AnalysisResult:
    return AnalysisResult(
        url=url,
        html_version="HTML5",
        title="Test Page",
        headings={"h2": 1, "h1": 1},
        has_login_form=True,
        internal_links=["/internal-link", "https://example.com/internal"],
        external_links=["https://external.com"],
        inaccessible_internal_links_count=0,
        inaccessible_external_links_count=1,
    )


def test_analyze_prints_summary(monkeypatch):
    seen = {}

    def fake_analyze_page(url, timeout=None):
        seen["url"] = url
        seen["timeout"] = timeout
        return _result(url)

    monkeypatch.setattr("cli.main.analyze_page", fake_analyze_page)

    result = runner.invoke(app, ["analyze", "https://example.com/test", "--timeout", "5"])

    assert result.exit_code == 0
    assert seen == {"url": "https://example.com/test", "timeout": 5.0}
    assert "HTML version : HTML5" in result.stdout
    assert "Title        : Test Page" in result.stdout
    assert "h1=1  h2=1" in result.stdout
    assert "Login form   : yes" in result.stdout
    assert "Internal     : 2 (0 inaccessible)" in result.stdout
    assert "External     : 1 (1 inaccessible)" in result.stdout


def test_analyze_json_output(monkeypatch):
    monkeypatch.setattr("cli.main.analyze_page", lambda url, timeout=None: _result(url))

    result = runner.invoke(app, ["analyze", "https://example.com/test", "--json"])

    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["internal_links_count"] == 2
    assert data["external_links_count"] == 1
    assert data["has_login_form"] is True


def test_analyze_failure_exits_1(monkeypatch):
    def failing(url, timeout=None):
        raise StatusError(404)

    monkeypatch.setattr("cli.main.analyze_page", failing)

    result = runner.invoke(app, ["analyze", "https://example.com/missing"])

    assert result.exit_code == 1
    assert "[analyze] Analysis failed: request failed with status code: 404" in result.stdout


def test_analyze_empty_page(monkeypatch):
    empty = AnalysisResult(
        url="https://example.com/",
        html_version="",
        title="",
        headings={},
        has_login_form=False,
        internal_links=[],
        external_links=[],
        inaccessible_internal_links_count=0,
        inaccessible_external_links_count=0,
    )
    monkeypatch.setattr("cli.main.analyze_page", lambda url, timeout=None: empty)

    result = runner.invoke(app, ["analyze", "https://example.com/"])

    assert result.exit_code == 0
    assert "HTML version : (unknown)" in result.stdout
    assert "Title        : (none)" in result.stdout
    assert "Headings     : (none)" in result.stdout
    assert "Login form   : no" in result.stdout
