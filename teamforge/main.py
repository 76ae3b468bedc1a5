"""
Main application entry point.

Creates and configures the FastAPI application.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from teamforge.config import get_settings
from teamforge.core.api import router as optimizer_router
from teamforge.utils.logging import RequestContextMiddleware, configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Handles startup and shutdown events.
    """
    settings = get_settings()
    logger.info("application_startup", app=settings.app_name, environment=settings.environment)

    yield

    logger.info("application_shutdown")


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application
    """
    settings = get_settings()

    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Parallel-optimization engine for simulated workforce teams",
        version=settings.api_version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Accept", "Content-Type", "Authorization", "X-Request-ID"],
        max_age=600,
    )
    app.add_middleware(RequestContextMiddleware)

    register_exception_handlers(app)
    register_routes(app)

    return app


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle validation errors."""
        errors = []
        for error in exc.errors():
            errors.append({
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"],
            })

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "validation_error",
                "message": "Request validation failed",
                "details": errors,
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle uncaught exceptions."""
        logger.exception("unhandled_exception", path=request.url.path)

        content = {
            "error": "internal_error",
            "message": "An unexpected error occurred",
        }
        if get_settings().debug:
            content["detail"] = str(exc)

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes."""

    @app.get("/health", tags=["system"])
    async def health_check():
        """Health check endpoint."""
        settings = get_settings()
        return {
            "status": "healthy",
            "version": settings.api_version,
            "environment": settings.environment,
        }

    @app.get("/", tags=["system"])
    async def root():
        """Root endpoint with API information."""
        settings = get_settings()
        return {
            "name": settings.app_name,
            "version": settings.api_version,
            "documentation": "/docs" if settings.debug else "disabled",
            "endpoints": {
                "health": "/health",
                "analyze_task": "POST /tasks/analyze",
                "optimize_team": "POST /teams/optimize",
                "plan_team": "POST /teams/plan",
                "team_report": "POST /teams/report",
                "distribution": "POST /workload/distribution",
            },
        }

    app.include_router(optimizer_router, prefix="")


app = create_application()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "teamforge.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
