"""Shared fixtures: settings, sample pages and model replies, a mocked analyzer."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.analyzer.models import AnalysisReport
from src.config import Settings

SAMPLE_REPORT = {
    "scores": {"marketFit": 8, "growthPotential": 7, "businessModel": 9, "overall": 8},
    "analysis": {
        "strengths": ["a"],
        "improvements": ["b"],
        "recommendations": ["c"],
    },
    "marketPosition": "x",
}

SAMPLE_HTML = """
<html>
  <head>
    <title>Acme Analytics</title>
    <meta name="description" content="Analytics for small businesses">
    <script>var tracking = "ignore me";</script>
    <style>p { color: red; }</style>
  </head>
  <body>
    <header><p>Header paragraph</p></header>
    <nav><p>Nav paragraph</p></nav>
    <h1>Welcome to Acme</h1>
    <p>We help teams understand their data.</p>
    <p>   </p>
    <p>Dashboards   in minutes.</p>
    <div class="services-list">
      <div class="service">Reporting</div>
      <div class="service">Forecasting</div>
    </div>
    <footer><p>Footer paragraph</p></footer>
  </body>
</html>
"""


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, anthropic_api_key="test-key")  # type: ignore[call-arg]


@pytest.fixture
def sample_report_json() -> dict:
    return json.loads(json.dumps(SAMPLE_REPORT))


@pytest.fixture
def sample_report() -> AnalysisReport:
    return AnalysisReport.model_validate(SAMPLE_REPORT)


@pytest.fixture
def fenced_reply() -> str:
    return "```json\n" + json.dumps(SAMPLE_REPORT, separators=(",", ":")) + "\n```"


@pytest.fixture
def mock_analyzer(sample_report: AnalysisReport) -> MagicMock:
    """A BusinessAnalyzer stand-in whose pipeline methods all succeed."""
    analyzer = MagicMock()
    analyzer.analyze = AsyncMock(return_value=sample_report)
    analyzer.analyze_website = AsyncMock(return_value=sample_report)
    analyzer.analyze_form = AsyncMock(return_value=sample_report)
    return analyzer


@pytest.fixture
def sample_html() -> str:
    return SAMPLE_HTML
