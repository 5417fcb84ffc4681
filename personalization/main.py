import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from personalization.api.v1.api import api_router, tags_metadata
from personalization.config import Settings, settings as default_settings
from personalization.core.exceptions import AppException
from personalization.engine import PersonalizationEngine
from personalization.repositories import ContentCatalog

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None, catalog: Optional[ContentCatalog] = None
) -> FastAPI:
    """
    Application factory pattern.

    Tests pass their own settings and an in-memory catalog; production
    uses the environment-driven settings and the configured catalog.
    """
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan events.

        This handles:
        1. Snapshot store connection (memory, sql or redis)
        2. Loading persisted engine state
        3. Closing the store on shutdown
        """
        logger.info(
            f"Starting {settings.app_name} (Environment: {settings.environment})"
        )
        engine = await PersonalizationEngine.create(settings, catalog)
        app.state.engine = engine
        logger.info("Application startup complete")

        yield

        logger.info("Shutting down application")
        await engine.close()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Personalized recommendations, social engagement and A/B evaluation",
        docs_url="/docs" if settings.debug else None,  # Hide docs in production
        redoc_url="/redoc" if settings.debug else None,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID middleware for tracing
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        return response

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "details": exc.details,
                "request_id": getattr(request.state, "request_id", None),
            },
        )

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "app_name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "store_backend": settings.store_backend,
            "timestamp": time.time(),
        }

    app.include_router(api_router, prefix="/api")

    return app


# Create the application instance
app = create_app()
