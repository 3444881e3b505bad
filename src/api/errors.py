"""Map pipeline and framework errors onto the ``{success, error}`` envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.analyzer.errors import AnalyzerError, MissingInputError

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
    )


async def _analyzer_error_handler(request: Request, exc: AnalyzerError) -> JSONResponse:
    if isinstance(exc, MissingInputError):
        return error_response(status.HTTP_400_BAD_REQUEST, str(exc))
    logger.warning(
        "request failed",
        extra={"path": request.url.path, "stage": exc.stage, "error": str(exc)},
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("request body rejected", extra={"path": request.url.path, "errors": exc.errors()})
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body")


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error", extra={"path": request.url.path})
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unknown error occurred")


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AnalyzerError, _analyzer_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
