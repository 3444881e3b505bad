"""POST /api/analyze, /api/analyze-website, /api/analyze-manual handlers."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from src.analyzer.engine import BusinessAnalyzer
from src.analyzer.errors import MissingInputError
from src.api.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    ManualAnalyzeRequest,
    WebsiteAnalyzeRequest,
)

logger = logging.getLogger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    405: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

router = APIRouter(prefix="/api", responses=_ERROR_RESPONSES)


def _get_analyzer(request: Request) -> BusinessAnalyzer:
    return request.app.state.analyzer


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    body: AnalyzeRequest,
    analyzer: BusinessAnalyzer = Depends(_get_analyzer),
):
    logger.info(
        "analyze request received",
        extra={"has_url": bool(body.url), "has_form_data": body.form_data is not None},
    )
    report = await analyzer.analyze(url=body.url, form_data=body.form_data)
    return AnalyzeResponse(analysis=report)


@router.post("/analyze-website", response_model=AnalyzeResponse)
async def analyze_website(
    body: WebsiteAnalyzeRequest,
    analyzer: BusinessAnalyzer = Depends(_get_analyzer),
):
    if not body.url or not body.url.strip():
        raise MissingInputError("URL is required")
    report = await analyzer.analyze_website(body.url.strip())
    return AnalyzeResponse(analysis=report)


@router.post("/analyze-manual", response_model=AnalyzeResponse)
async def analyze_manual(
    body: ManualAnalyzeRequest,
    analyzer: BusinessAnalyzer = Depends(_get_analyzer),
):
    if body.form_data is None:
        raise MissingInputError("Form data is required")
    report = await analyzer.analyze_form(body.form_data)
    return AnalyzeResponse(analysis=report)
