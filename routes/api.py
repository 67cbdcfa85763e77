from __future__ import annotations
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from config import settings
from models import AnalysisRequest, DishAnalysis, MenuScanRequest
from routes.dependencies import get_biomatch_engine
from services.analysis_service import BioMatchEngine
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter()


def _suggestion_payload(entries) -> List[Dict[str, Any]]:
    return [
        {"title": e.title, "type": e.kind.value, "source": e.source_tag}
        for e in entries
    ]


@router.post("/menu/scan")
def scan_menu(body: MenuScanRequest, engine: BioMatchEngine = Depends(get_biomatch_engine)):
    if not body.text or not body.text.strip():
        raise HTTPException(400, "menu text is required")
    try:
        dishes = engine.scan_menu(body.text, body.profile)
    except ValueError as e:
        raise HTTPException(400, str(e))

    logger.info("Menu scanned", extra={"dishes": len(dishes)})
    return {"dishes": [d.model_dump(mode="json") for d in dishes]}


@router.post("/analyze", response_model=DishAnalysis)
def analyze(body: AnalysisRequest, engine: BioMatchEngine = Depends(get_biomatch_engine)):
    try:
        return engine.analyze_dish(body)
    except ValueError as e:
        raise HTTPException(400, str(e))


@router.get("/search")
def search(
    q: str = "",
    page: Optional[int] = None,
    limit: Optional[int] = None,
    engine: BioMatchEngine = Depends(get_biomatch_engine),
):
    if not q.strip():
        raise HTTPException(400, "query is required")

    if page is None and limit is None:
        result = engine.search(q)
        return {"success": not result.error, "data": [r.model_dump() for r in result.results]}

    try:
        result = engine.search_page(
            q,
            page=page if page is not None else 1,
            limit=limit if limit is not None else 20,
        )
    except ValueError as e:
        raise HTTPException(400, str(e))

    return {
        "success": not result.error,
        "data": [r.model_dump() for r in result.results],
        "pagination": {
            "page": result.page,
            "limit": result.limit,
            "total": result.total,
            "has_more": result.has_more,
        },
    }


@router.get("/suggestions")
def suggestions(
    q: str = "",
    limit: int = Query(default=settings.SUGGESTION_LIMIT, ge=1),
    engine: BioMatchEngine = Depends(get_biomatch_engine),
):
    return _suggestion_payload(engine.rank_suggestions(q, limit))


@router.get("/suggestions/bootstrap")
def suggestions_bootstrap(
    limit: int = Query(default=400, ge=0),
    engine: BioMatchEngine = Depends(get_biomatch_engine),
):
    return _suggestion_payload(engine.bootstrap_suggestions(limit))
