from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text

from routes.dependencies import get_biomatch_engine
from services.analysis_service import BioMatchEngine
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health_check():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "biomatch-engine"
    }


@router.get("/detailed")
def detailed_health_check(engine: BioMatchEngine = Depends(get_biomatch_engine)):
    health_status: Dict[str, Any] = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "biomatch-engine",
        "checks": {}
    }

    data_service = engine.data_service
    store = data_service.flavor_cache.store
    if store is not None:
        try:
            with store.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            health_status["checks"]["flavor_store"] = {"status": "healthy"}
        except Exception as e:
            logger.error("Flavor store health check failed", extra={"error": str(e)})
            health_status["checks"]["flavor_store"] = {
                "status": "unhealthy",
                "error": str(e)
            }
            health_status["status"] = "degraded"

    stats = data_service.stats()
    health_status["checks"]["caches"] = {
        "search": stats["search_cache"],
        "flavor": stats["flavor_cache"],
    }
    health_status["checks"]["circuit_breaker"] = stats["circuit_breaker"]
    health_status["checks"]["degraded_provider_calls"] = stats["degraded_calls"]
    if stats["circuit_breaker"]["state"] != "closed":
        health_status["status"] = "degraded"

    health_status["checks"]["suggestion_index"] = {"entries": len(engine.suggestion_index)}

    return health_status
