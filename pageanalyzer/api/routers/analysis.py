"""Analysis endpoint.

Routes
------
POST /analyze    Body: {"url": "https://..."}    → AnalysisService.analyze
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from pageanalyzer.config import settings
from pageanalyzer.context import RequestContext
from pageanalyzer.errors import AnalysisError, RequestConstructionError

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class AnalyzeRequest(BaseModel):
    url: str = Field(..., min_length=1)


class AnalyzeResponse(BaseModel):
    url: str
    html_version: str
    title: str
    headings: dict[str, int]
    has_login_form: bool
    internal_links: list[str]
    external_links: list[str]
    internal_links_count: int
    external_links_count: int
    inaccessible_internal_links_count: int
    inaccessible_external_links_count: int


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=AnalyzeResponse)
def analyze_endpoint(body: AnalyzeRequest, request: Request) -> dict[str, Any]:
    """Fetch the page at ``url`` and return its structural analysis.

    A malformed URL is the caller's fault (400); every other failure is an
    upstream one (502).
    """
    service = request.app.state.analysis_service
    ctx = RequestContext(timeout=settings.analysis_timeout)
    try:
        result = service.analyze(ctx, body.url.strip())
    except RequestConstructionError as exc:
        raise HTTPException(
            status_code=400, detail=f"Analysis failed: {exc}"
        ) from exc
    except AnalysisError as exc:
        raise HTTPException(
            status_code=502, detail=f"Analysis failed: {exc}"
        ) from exc
    finally:
        ctx.cancel()
    return result.to_dict()
