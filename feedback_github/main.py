"""
Feedback GitHub API

Thin FastAPI backend turning app feedback into GitHub issues.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from typing import Any

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from feedback_github.config import get_settings
from feedback_github.routers import feedback
from feedback_github.services.repository import (
    InvalidRepositoryUrl,
    parse_repository_slug,
)

logger = logging.getLogger(__name__)

settings = get_settings()

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown."""
    if not settings.github_repo_url:
        logger.warning("GITHUB_REPO_URL is not set; feedback will be rejected")
    yield


app = FastAPI(
    title="Feedback GitHub API",
    description="Uploads feedback screenshots and opens GitHub issues",
    version=VERSION,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# Routers
app.include_router(feedback.router, prefix="/api")


def _check_config() -> str:
    """Verify the target repository and token are usable. Returns 'ok' or 'fail'."""
    s = get_settings()
    if not s.github_token:
        return "fail"
    try:
        parse_repository_slug(s.github_repo_url)
    except InvalidRepositoryUrl:
        return "fail"
    return "ok"


@app.get("/api/health")
async def health_check() -> JSONResponse:
    """Health check verifying configuration."""
    checks = {"config": _check_config()}
    failed = [k for k, v in checks.items() if v != "ok"]

    if failed:
        overall = "degraded"
        logger.warning("Health check degraded — failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    result: dict[str, Any] = {
        "status": overall,
        "service": "feedback-github-api",
        "version": VERSION,
        "checks": checks,
    }
    return JSONResponse(content=result, status_code=200)


def run() -> None:
    """Serve the API with uvicorn (``feedback-github`` console script)."""
    s = get_settings()
    uvicorn.run(
        app, host=s.host, port=s.port, log_level="debug" if s.debug else "info"
    )
