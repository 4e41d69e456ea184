"""
Regulations Analyzer Service - Main Application
===============================================

FastAPI application serving agency, regulation and analysis endpoints
over the imported CFR text.

Version: 0.1.0
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from services.regulations_analyzer import __version__
from services.regulations_analyzer.errors import StoreError
from services.regulations_analyzer.importer import build_importer
from services.regulations_analyzer.routes import agencies, analysis, data, regulations
from services.regulations_analyzer.routes.data import ImportState
from shared.config import Settings, get_settings
from shared.database import DatabaseClient
from shared.logging import get_logger, setup_logging
from shared.models import ErrorResponse, HealthResponse


SERVICE_NAME = "regulations-analyzer"

logger = get_logger(__name__)


def _error_response(status_code: int, error: Any) -> JSONResponse:
    body = ErrorResponse(error=error, status_code=status_code)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Application settings (defaults to the cached settings)
    """
    settings = settings or get_settings()

    setup_logging(
        log_level=settings.log_level.value,
        json_logs=settings.is_production,
        service_name=SERVICE_NAME,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> Any:
        """Application lifespan manager."""
        logger.info(
            "regulations_analyzer_starting",
            environment=settings.environment.value,
            port=settings.port,
        )

        db = DatabaseClient(settings.database)
        try:
            await db.create_schema()
        except Exception as e:
            logger.error("startup_failed", error=str(e))
            await db.close()
            raise

        app.state.db = db
        app.state.importer_factory = lambda: build_importer(db, settings)
        app.state.import_state = ImportState()

        yield

        logger.info("regulations_analyzer_shutting_down")
        await db.close()

    app = FastAPI(
        title="Federal Regulations Analyzer",
        description="Word count, complexity and deregulation analytics over the CFR",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ========================================================================
    # Health Check Endpoints
    # ========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check(request: Request) -> HealthResponse:
        """Service health check including the database."""
        db: DatabaseClient = request.app.state.db
        return HealthResponse.from_components(
            service=SERVICE_NAME,
            version=__version__,
            components={"database": await db.health_check()},
        )

    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "service": "Federal Regulations Analyzer",
            "version": __version__,
            "docs": "/docs",
        }

    # ========================================================================
    # Include Routers
    # ========================================================================

    app.include_router(agencies.router, prefix="/api/agencies", tags=["Agencies"])
    app.include_router(regulations.router, prefix="/api/regulations", tags=["Regulations"])
    app.include_router(analysis.router, prefix="/api/analysis", tags=["Analysis"])
    app.include_router(data.router, prefix="/api/data", tags=["Data"])

    # ========================================================================
    # Error Handlers
    # ========================================================================

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle HTTP exceptions."""
        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
        )
        return _error_response(exc.status_code, exc.detail)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        """Handle persistence failures."""
        logger.error(
            "store_error",
            operation=exc.operation,
            error=str(exc),
            path=request.url.path,
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database operation failed")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    return app


app = create_app()


# ============================================================================
# Run with Uvicorn
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "services.regulations_analyzer.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.value.lower(),
    )
