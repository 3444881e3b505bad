"""
Serverless entry point for ``POST /api/analyze``.

Deploy with the Functions Framework (``--target=analyze``). Shares the
BusinessAnalyzer pipeline with the FastAPI server; this module only
translates between the platform's request object and the JSON envelope.
"""

import asyncio
import json
import logging
import threading
from functools import lru_cache

import functions_framework
from pydantic import ValidationError as PydanticValidationError

from src.analyzer.engine import BusinessAnalyzer
from src.analyzer.errors import AnalyzerError, MissingInputError
from src.api.schemas import AnalyzeRequest
from src.config import Settings, get_settings
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)

CORS_PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Max-Age": "3600",
}

# The model client's connection pool is bound to the loop it first ran on,
# so each worker thread keeps its own loop and analyzer.
_local = threading.local()


@lru_cache
def _configure() -> Settings:
    """Load settings and install logging once per process."""
    settings = get_settings()
    setup_logging(settings.log_level)
    if settings.missing_api_key():
        logger.error("ANTHROPIC_API_KEY not found in environment variables")
    return settings


def get_analyzer() -> BusinessAnalyzer:
    analyzer = getattr(_local, "analyzer", None)
    if analyzer is None:
        analyzer = _local.analyzer = BusinessAnalyzer(_configure())
    return analyzer


def _run(coro):
    loop = getattr(_local, "loop", None)
    if loop is None:
        loop = _local.loop = asyncio.new_event_loop()
    return loop.run_until_complete(coro)


def _envelope(payload: dict, status: int, headers: dict) -> tuple:
    return (json.dumps(payload), status, {**headers, "Content-Type": "application/json"})


@functions_framework.http
def analyze(request):
    """
    HTTP Cloud Function entry point.

    Expected JSON input (one of):
    {"url": "https://example.com"}
    {"formData": {"businessDescription": "...", "businessModel": "..."}}
    """
    if request.method == "OPTIONS":
        return ("", 204, CORS_PREFLIGHT_HEADERS)

    headers = {"Access-Control-Allow-Origin": "*"}

    if request.method != "POST":
        return _envelope({"success": False, "error": "Method not allowed"}, 405, headers)

    request_json = request.get_json(silent=True) or {}
    try:
        body = AnalyzeRequest.model_validate(request_json)
    except PydanticValidationError:
        return _envelope({"success": False, "error": "Invalid request body"}, 400, headers)

    try:
        report = _run(get_analyzer().analyze(url=body.url, form_data=body.form_data))
    except MissingInputError as e:
        return _envelope({"success": False, "error": str(e)}, 400, headers)
    except AnalyzerError as e:
        return _envelope({"success": False, "error": str(e)}, 500, headers)
    except Exception:
        logger.exception("serverless analysis failed")
        return _envelope({"success": False, "error": "An unknown error occurred"}, 500, headers)

    return _envelope(
        {"success": True, "analysis": report.model_dump(by_alias=True)},
        200,
        headers,
    )
