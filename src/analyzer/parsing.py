"""Extract and validate the JSON report from a free-text model reply."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .errors import ParseError, ValidationError
from .models import AnalysisReport

logger = logging.getLogger(__name__)

_FENCED_BLOCK_RE = re.compile(r"```(?:json)?\n?([\s\S]*?)\n?```")
_BRACE_SPAN_RE = re.compile(r"\{[\s\S]*\}")

REQUIRED_KEYS = ("scores", "analysis", "marketPosition")


def _loads_object(candidate: str) -> dict[str, Any] | None:
    try:
        data = json.loads(candidate.strip())
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def extract_json(text: str) -> dict[str, Any]:
    """Pull a JSON object out of *text*.

    Tries the first fenced code block, then the greedy span from the first
    ``{`` to the last ``}``.
    """
    fenced = _FENCED_BLOCK_RE.search(text)
    if fenced:
        data = _loads_object(fenced.group(1))
        if data is not None:
            return data
        logger.debug("fenced block is not valid JSON, trying brace span")

    span = _BRACE_SPAN_RE.search(text)
    if span:
        data = _loads_object(span.group(0))
        if data is not None:
            return data

    logger.warning("no JSON object found in model reply", extra={"reply_length": len(text)})
    raise ParseError("Failed to parse analysis response")


def parse_report(data: dict[str, Any]) -> AnalysisReport:
    """Validate the report shape and round every score to one decimal."""
    missing = [key for key in REQUIRED_KEYS if data.get(key) is None]
    if missing:
        logger.warning("analysis missing required keys", extra={"missing": missing})
        raise ValidationError("Invalid analysis structure received")

    try:
        return AnalysisReport.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning(
            "analysis failed schema validation",
            extra={"error_count": exc.error_count()},
        )
        raise ValidationError(f"Invalid analysis structure received: {exc.errors()[0]['msg']}") from exc


def parse_model_reply(text: str) -> AnalysisReport:
    return parse_report(extract_json(text))
