"""
FastAPI application factory and configuration.

This follows the application factory pattern, making testing easier
and allowing a different store or catalog to be injected per app.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config.settings import settings
from ..exceptions import DraftError
from ..external.player_catalog import InMemoryPlayerCatalog
from ..services.draft_service import DraftService
from ..store.session_store import InMemorySessionStore, JsonFileSessionStore
from .routes.drafts import router as drafts_router
from .routes.health import router as health_router
from .routes.players import router as players_router

logging.basicConfig(level=logging.INFO,
                    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def build_draft_service() -> DraftService:
    """Wire a DraftService from environment settings."""
    if settings.store_backend == "file":
        store = JsonFileSessionStore(settings.data_dir)
        logger.info(f"Using file session store at {settings.data_dir}")
    else:
        store = InMemorySessionStore()
        logger.info("Using in-memory session store")

    if settings.catalog_path is not None:
        catalog = InMemoryPlayerCatalog.from_json_file(settings.catalog_path)
    else:
        logger.warning("DRAFTROOM_CATALOG_PATH not set; starting with an empty player catalog")
        catalog = InMemoryPlayerCatalog()

    return DraftService(store, catalog)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting up Draft Room API...")

    if getattr(app.state, "draft_service", None) is None:
        app.state.draft_service = build_draft_service()

    logger.info("Startup complete")

    yield

    logger.info("Shutdown complete")


def create_app(config: Dict[str, Any] = None,
               draft_service: Optional[DraftService] = None) -> FastAPI:
    """
    Application factory function.

    Creates and configures a FastAPI application instance. Pass
    draft_service to run against a specific store and catalog; otherwise
    one is built from environment settings at startup.
    """

    # Default configuration
    default_config = {
        "title": "Draft Room",
        "description": "Snake draft engine with autodraft",
        "version": __version__,
        "debug": settings.debug,
    }

    # Merge with provided config
    if config:
        default_config.update(config)

    app = FastAPI(
        title=default_config["title"],
        description=default_config["description"],
        version=default_config["version"],
        debug=default_config["debug"],
        lifespan=lifespan,
        docs_url="/docs" if default_config["debug"] else None,  # Disable docs in prod
        redoc_url="/redoc" if default_config["debug"] else None,
    )

    if draft_service is not None:
        app.state.draft_service = draft_service

    # Add request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all requests for monitoring and debugging."""
        start_time = time.time()

        logger.info(f"Request: {request.method} {request.url}")

        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        logger.info(
            f"Response: {response.status_code} - {process_time:.3f}s - {request.method} {request.url.path}"
        )

        return response

    # Exception handlers
    @app.exception_handler(DraftError)
    async def draft_exception_handler(request: Request, exc: DraftError):
        """Map engine errors to their status codes."""
        logger.info(f"Draft error on {request.url.path}: {exc.error_type}: {exc}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "type": exc.error_type,
                    "message": str(exc),
                    "status_code": exc.status_code,
                }
            }
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with consistent format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "type": "http_error",
                    "message": exc.detail,
                    "status_code": exc.status_code,
                }
            }
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        return JSONResponse(
            status_code=422,
            content={
                "error": {
                    "type": "validation_error",
                    "message": "Request validation failed",
                    "details": jsonable_errors(exc),
                }
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unexpected error: {exc}", exc_info=True)

        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "type": "internal_error",
                    "message": "An unexpected error occurred",
                    # Don't leak error details in production
                    "details": str(exc) if default_config["debug"] else None,
                }
            }
        )

    # Include routers
    app.include_router(health_router, prefix="/api/v1", tags=["health"])
    app.include_router(drafts_router, prefix="/api/v1", tags=["drafts"])
    app.include_router(players_router, prefix="/api/v1", tags=["players"])

    # Root endpoint
    @app.get("/")
    async def root():
        """Root endpoint with basic API information."""
        return {
            "name": default_config["title"],
            "version": default_config["version"],
            "description": default_config["description"],
            "docs_url": "/docs" if default_config["debug"] else None,
            "health_check": "/api/v1/health",
        }

    return app


def jsonable_errors(exc: RequestValidationError):
    # ctx may hold exception instances that JSONResponse cannot encode
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "draftroom.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
