"""Insight generator: prompt the model and parse its reply into a report."""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic_ai import Agent
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.providers.anthropic import AnthropicProvider
from pydantic_ai.settings import ModelSettings

from src.config import Settings

from .errors import AnalyzerError, ModelInvocationError
from .models import AnalysisReport, ScrapedContent
from .parsing import parse_model_reply
from .prompts import SYSTEM_PROMPT, format_analysis_prompt

logger = logging.getLogger(__name__)


def build_model(settings: Settings) -> Any:
    """Build the pydantic-ai model for the configured provider.

    Anthropic gets an explicit provider so the key comes from Settings and the
    HTTP client belongs to this model alone; other providers are addressed as
    ``provider:model`` and read their key from the environment.
    """
    if settings.llm_provider == "anthropic":
        provider = AnthropicProvider(
            api_key=settings.anthropic_api_key,
            http_client=httpx.AsyncClient(
                timeout=httpx.Timeout(settings.analysis_timeout_seconds, connect=5.0)
            ),
        )
        return AnthropicModel(settings.analysis_llm, provider=provider)
    return f"{settings.llm_provider}:{settings.analysis_llm}"


class InsightGenerator:
    """Turns a content record into a scored AnalysisReport via one model call."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._model_name = f"{settings.llm_provider}:{settings.analysis_llm}"
        self._agent: Agent | None = None

    def _get_agent(self) -> Agent:
        # Built on first use; provider construction errors surface from generate().
        if self._agent is None:
            self._agent = Agent(
                build_model(self._settings),
                system_prompt=SYSTEM_PROMPT,
                model_settings=ModelSettings(
                    temperature=self._settings.analysis_temperature,
                    max_tokens=self._settings.analysis_max_tokens,
                ),
            )
        return self._agent

    async def generate(self, content: ScrapedContent) -> AnalysisReport:
        """Run the model over *content* and return the parsed report."""
        payload = content.truncated()
        prompt = format_analysis_prompt(payload)
        logger.info(
            "model analysis started",
            extra={"model": self._model_name, "prompt_chars": len(prompt)},
        )

        try:
            result = await self._get_agent().run(prompt)
        except Exception as exc:
            logger.warning("model invocation failed", extra={"model": self._model_name}, exc_info=True)
            raise ModelInvocationError(f"Analysis failed: {exc}") from exc

        reply = (result.output or "").strip()
        if not reply:
            raise ModelInvocationError("Analysis failed: Empty response from model")
        logger.debug("model reply received", extra={"reply_length": len(reply)})

        try:
            report = parse_model_reply(reply)
        except AnalyzerError as exc:
            raise type(exc)(f"Analysis failed: {exc}") from exc

        logger.info(
            "model analysis completed",
            extra={"model": self._model_name, "overall": report.scores.overall},
        )
        return report
