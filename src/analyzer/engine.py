"""Business analyzer: the single pipeline behind both HTTP adapters."""

from __future__ import annotations

import logging
import time

from src.config import Settings

from .errors import AnalyzerError, MissingInputError
from .extract import scrape_website
from .insights import InsightGenerator
from .models import AnalysisReport, ManualFormData, ScrapedContent

logger = logging.getLogger(__name__)


class BusinessAnalyzer:
    """Orchestrates the (scrape ->) prompt -> parse pipeline.

    Built once per process; the model client inside the InsightGenerator is
    shared across requests while every request owns its own content record
    and report.
    """

    def __init__(self, settings: Settings, insights: InsightGenerator | None = None) -> None:
        self._settings = settings
        self._insights = insights or InsightGenerator(settings)

    async def analyze_website(self, url: str) -> AnalysisReport:
        """Scrape *url* and analyze what was extracted."""
        started = time.monotonic()
        logger.info("website analysis started", extra={"url": url})
        try:
            content = await scrape_website(
                url,
                timeout=self._settings.scrape_timeout_seconds,
                user_agent=self._settings.scrape_user_agent,
            )
            report = await self._insights.generate(content)
        except AnalyzerError as exc:
            logger.warning(
                "website analysis failed",
                extra={"url": url, "stage": exc.stage, "error": str(exc)},
            )
            raise
        logger.info(
            "website analysis completed",
            extra={"url": url, "elapsed_ms": round((time.monotonic() - started) * 1000)},
        )
        return report

    async def analyze_form(self, form: ManualFormData) -> AnalysisReport:
        """Analyze manually entered business details."""
        content = form.to_content()
        if content.is_empty():
            raise MissingInputError("Form data is required")
        return await self.analyze_content(content)

    async def analyze_content(self, content: ScrapedContent) -> AnalysisReport:
        started = time.monotonic()
        logger.info("manual analysis started", extra={"title": content.title[:80]})
        try:
            report = await self._insights.generate(content)
        except AnalyzerError as exc:
            logger.warning(
                "manual analysis failed",
                extra={"stage": exc.stage, "error": str(exc)},
            )
            raise
        logger.info(
            "manual analysis completed",
            extra={"elapsed_ms": round((time.monotonic() - started) * 1000)},
        )
        return report

    async def analyze(
        self,
        url: str | None = None,
        form_data: ManualFormData | None = None,
    ) -> AnalysisReport:
        """Analyze a URL if given, otherwise the form data."""
        if url and url.strip():
            return await self.analyze_website(url.strip())
        if form_data is not None and not form_data.to_content().is_empty():
            return await self.analyze_form(form_data)
        raise MissingInputError("Either URL or form data is required")
