"""SEARCHADS — Search API Routes."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import BaseModel

from searchads.engine.search_engine import SearchAdsEngine
from searchads.models.ad_models import Advertisement
from searchads.core.logging import get_logger

logger = get_logger("api.search")

router = APIRouter(tags=["Search"])


# ── Response Models ──


class SearchResponse(BaseModel):
    """Response for GET /ads/search."""

    status: str = "success"
    query: str
    count: int
    ads: List[Advertisement]


def get_engine(request: Request) -> SearchAdsEngine:
    """Dependency — the engine built at startup."""
    engine = getattr(request.app.state, "search_engine", None)
    if engine is None:
        raise HTTPException(status_code=503, detail="Search engine not started")
    return engine


# ── Endpoints ──


@router.get("/ads/search", response_model=SearchResponse)
def search_ads(
    q: str = Query("", description="Free-text query matched against ad title keywords"),
    engine: SearchAdsEngine = Depends(get_engine),
):
    """Return ads matching any keyword of the query.

    Ads matched by several keywords appear once per keyword unless
    deduplication is enabled.
    """
    ads = engine.select_ads(q)
    return SearchResponse(query=q, count=len(ads), ads=ads)


@router.get("/ingestion/report")
def get_ingestion_report(engine: SearchAdsEngine = Depends(get_engine)):
    """Outcome of the startup ingestion."""
    if engine.report is None:
        return {
            "status": "no_data",
            "state": engine.state.value,
            "error": engine.init_error,
        }
    return {
        "status": "success",
        "state": engine.state.value,
        "error": engine.init_error,
        "report": engine.report.model_dump(),
        "budget": engine.budget_report.model_dump() if engine.budget_report else None,
    }
