"""HTTP contract tests for the FastAPI routes."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.analyzer.engine import BusinessAnalyzer
from src.analyzer.errors import ContentError, FetchError, ParseError
from src.api.errors import install_error_handlers
from src.api.routes import router


def _make_app(analyzer: MagicMock) -> FastAPI:
    app = FastAPI()
    install_error_handlers(app)
    app.include_router(router)
    app.state.analyzer = analyzer
    return app


@pytest.fixture
def client(mock_analyzer: MagicMock) -> TestClient:
    return TestClient(_make_app(mock_analyzer))


@pytest.fixture
def pipeline_client(settings) -> TestClient:
    """The real pipeline with the model side stubbed out."""
    insights = MagicMock()
    insights.generate = AsyncMock()
    app = _make_app(BusinessAnalyzer(settings, insights=insights))
    app.state.insights = insights
    return TestClient(app)


class TestAnalyze:
    def test_url_success(self, client: TestClient, mock_analyzer: MagicMock) -> None:
        resp = client.post("/api/analyze", json={"url": "https://acme.example"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["analysis"]["scores"]["marketFit"] == 8.0
        assert body["analysis"]["marketPosition"] == "x"
        assert mock_analyzer.analyze.call_args.kwargs["url"] == "https://acme.example"

    def test_form_data_success(self, client: TestClient, mock_analyzer: MagicMock) -> None:
        resp = client.post(
            "/api/analyze",
            json={"formData": {"businessDescription": "A bakery in Lisbon."}},
        )
        assert resp.status_code == 200
        form = mock_analyzer.analyze.call_args.kwargs["form_data"]
        assert form.business_description == "A bakery in Lisbon."

    @pytest.mark.parametrize(
        "payload",
        [{}, {"url": "", "formData": {}}, {"url": "   "}, {"formData": {"businessModel": ""}}],
    )
    def test_missing_input_is_400(self, pipeline_client: TestClient, payload: dict) -> None:
        resp = pipeline_client.post("/api/analyze", json=payload)
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Either URL or form data is required"}
        pipeline_client.app.state.insights.generate.assert_not_awaited()

    def test_wrong_method_is_405(self, client: TestClient) -> None:
        resp = client.get("/api/analyze")
        assert resp.status_code == 405
        assert resp.json()["success"] is False

    def test_malformed_body_is_400(self, client: TestClient) -> None:
        resp = client.post(
            "/api/analyze",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Invalid request body"}

    @pytest.mark.parametrize(
        "error",
        [
            FetchError("Failed to fetch website: Not Found"),
            ContentError("No meaningful content found on the webpage"),
            ParseError("Analysis failed: Failed to parse analysis response"),
        ],
    )
    def test_pipeline_errors_are_500(self, mock_analyzer: MagicMock, error: Exception) -> None:
        mock_analyzer.analyze = AsyncMock(side_effect=error)
        client = TestClient(_make_app(mock_analyzer))
        resp = client.post("/api/analyze", json={"url": "https://acme.example"})
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "error": str(error)}


class TestAnalyzeWebsite:
    def test_success(self, client: TestClient, mock_analyzer: MagicMock) -> None:
        resp = client.post("/api/analyze-website", json={"url": "https://acme.example"})
        assert resp.status_code == 200
        assert resp.json()["success"] is True
        mock_analyzer.analyze_website.assert_awaited_once_with("https://acme.example")

    def test_missing_url_is_400(self, client: TestClient, mock_analyzer: MagicMock) -> None:
        resp = client.post("/api/analyze-website", json={})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "URL is required"}
        mock_analyzer.analyze_website.assert_not_awaited()

    def test_fetch_error_is_500(self, mock_analyzer: MagicMock) -> None:
        mock_analyzer.analyze_website = AsyncMock(
            side_effect=FetchError("Failed to fetch website: Forbidden")
        )
        client = TestClient(_make_app(mock_analyzer))
        resp = client.post("/api/analyze-website", json={"url": "https://acme.example"})
        assert resp.status_code == 500
        assert resp.json()["error"] == "Failed to fetch website: Forbidden"


class TestAnalyzeManual:
    def test_success(self, client: TestClient, mock_analyzer: MagicMock) -> None:
        resp = client.post(
            "/api/analyze-manual",
            json={"formData": {"title": "Acme", "description": "Anvils"}},
        )
        assert resp.status_code == 200
        form = mock_analyzer.analyze_form.call_args.args[0]
        assert form.title == "Acme"

    def test_missing_form_data_is_400(self, client: TestClient) -> None:
        resp = client.post("/api/analyze-manual", json={"url": "https://acme.example"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Form data is required"}

    def test_blank_form_data_is_400(self, pipeline_client: TestClient) -> None:
        resp = pipeline_client.post("/api/analyze-manual", json={"formData": {}})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "error": "Form data is required"}
        pipeline_client.app.state.insights.generate.assert_not_awaited()
