from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from middleware.logging_middleware import RequestLoggingMiddleware
from routes.api import router as api_router
from routes.health import router as health_router
from services.analysis_service import BioMatchEngine, build_biomatch_engine
from services.cache.scheduled_flush import scheduled_flush
from utils.logger import setup_logger

logger = setup_logger(__name__)


def create_app(engine_factory: Optional[Callable[[], BioMatchEngine]] = None) -> FastAPI:
    factory = engine_factory or build_biomatch_engine

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting application lifespan")

        engine = factory()
        app.state.biomatch_engine = engine

        async with scheduled_flush(
            engine.data_service.flavor_cache,
            interval_seconds=settings.FLAVOR_CACHE_FLUSH_INTERVAL_SECONDS,
            purge=[engine.data_service.search_cache],
        ):
            logger.info("Flavor cache flush scheduled")
            yield

        engine.close()
        logger.info("Application shutdown complete")

    app = FastAPI(title="BioMatch API", version="0.1.0", debug=settings.DEBUG, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router)
    app.include_router(api_router, prefix="/api/v1")

    @app.get("/")
    def root():
        return {"app": "BioMatch", "status": "running"}

    return app


app = create_app()
