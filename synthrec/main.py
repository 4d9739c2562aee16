"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from synthrec.api.v1.router import api_router
from synthrec.config import settings
from synthrec.core.exceptions import ConfigurationError
from synthrec.core.llm_client import validate_azure_config
from synthrec.models.response import HealthCheckResponse, RootResponse
from synthrec.utils.logging import get_logger

LOGGER = get_logger(__name__, level=settings.log_level)


def _model_configured() -> bool:
    try:
        validate_azure_config(settings.llm.to_azure_config())
    except ConfigurationError:
        return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the FastAPI application.

    Args:
        app: FastAPI application instance

    Yields:
        None
    """
    # Startup
    LOGGER.info(
        "Starting application",
        extra={
            "app_name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "cache_directory": str(settings.cache.directory),
        },
    )
    if not _model_configured():
        LOGGER.warning("Azure OpenAI is not configured; generation requests will fail")

    yield

    # Shutdown
    LOGGER.info("Shutting down application")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="LLM-backed generator of validated synthetic medical, billing and identity documents",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get(
    "/health",
    response_model=HealthCheckResponse,
    tags=["Health"],
    summary="Health check endpoint",
    description="Check if the service is running and able to generate",
    operation_id="get_service_health_status",
)
async def health_check() -> HealthCheckResponse:
    """Health check endpoint.

    Returns:
        HealthCheckResponse: Service health status
    """
    model_configured = _model_configured()

    return HealthCheckResponse(
        status="healthy" if model_configured else "degraded",
        version=settings.app_version,
        service=settings.app_name,
        cache_enabled=settings.cache.enabled,
        model_configured=model_configured,
    )


# Root endpoint
@app.get(
    "/",
    response_model=RootResponse,
    tags=["Root"],
    summary="Root endpoint",
    description="Get basic information about the API",
    operation_id="get_public_root_metadata",
)
async def root() -> RootResponse:
    """Root endpoint.

    Returns:
        RootResponse: Basic API information
    """
    return RootResponse(
        message="Server is running",
        version=settings.app_version,
        docs="/docs",
        health="/health",
    )


# Include routers
app.include_router(api_router, prefix=settings.api_v1_prefix)

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "synthrec.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
