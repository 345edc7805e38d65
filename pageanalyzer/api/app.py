"""FastAPI application factory.

Lifespan
--------
On startup the app opens a single :class:`AnalysisService` (one pooled
``httpx.Client`` shared across all requests via
``request.app.state.analysis_service``).  On shutdown it closes the client.

Routers
-------
    /health    liveness probe
    /analyze   single-page structural and link analysis
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from pageanalyzer.logger import configure_logging
from pageanalyzer.service import AnalysisService

from pageanalyzer.api.routers import analysis as analysis_router
from pageanalyzer.api.routers import health as health_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Open the shared analysis service on startup and close it on shutdown."""
    service = AnalysisService()
    app.state.analysis_service = service
    try:
        yield
    finally:
        service.close()


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    configure_logging()
    app = FastAPI(
        title="Page Analyzer API",
        description=(
            "Fetches a web page and reports its HTML version, title, heading "
            "distribution, login-form presence and internal/external link "
            "counts, including how many links are unreachable."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(health_router.router, prefix="/health", tags=["health"])
    app.include_router(analysis_router.router, prefix="/analyze", tags=["analysis"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn pageanalyzer.api.app:app --reload
app = create_app()
