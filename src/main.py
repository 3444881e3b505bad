"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.analyzer.engine import BusinessAnalyzer
from src.api.errors import install_error_handlers
from src.api.routes import router
from src.config import get_settings
from src.logging_config import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Initialize logging FIRST so all subsequent operations produce JSON logs
    setup_logging(settings.log_level)
    logger.info("starting business analyzer")

    if settings.missing_api_key():
        logger.error("ANTHROPIC_API_KEY not found in environment variables")
        raise RuntimeError("ANTHROPIC_API_KEY not found in environment variables")

    # One model client per process, injected into handlers via app state
    app.state.settings = settings
    app.state.analyzer = BusinessAnalyzer(settings)

    logger.info(
        "business analyzer ready",
        extra={
            "llm_provider": settings.llm_provider,
            "analysis_llm": settings.analysis_llm,
            "port": settings.port,
        },
    )

    yield

    logger.info("shutting down business analyzer")


app = FastAPI(title="Business Analyzer", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)
install_error_handlers(app)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}


def run() -> None:
    """Console-script entry: serve the app with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run("src.main:app", host="0.0.0.0", port=settings.port, log_config=None)
