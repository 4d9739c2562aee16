from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Health check response model.

    Attributes:
        status: Service status
        version: Application version
        service: Service name
        cache_enabled: Whether generation results are cached
        model_configured: Whether an Azure OpenAI deployment is configured
    """

    status: str = Field(
        default="healthy",
        description="Service health status",
        examples=["healthy", "degraded"],
    )
    version: str = Field(
        ...,
        description="Application version",
        examples=["0.1.0"],
    )
    service: str = Field(
        ...,
        description="Service name",
        examples=["Synthrec - Synthetic Record Generator"],
    )
    cache_enabled: bool = Field(..., description="Generation cache enabled")
    model_configured: bool = Field(..., description="Azure OpenAI configuration is complete")


class RootResponse(BaseModel):
    """Root endpoint response payload."""

    message: str = Field(..., description="Service status message")
    version: str = Field(..., description="Running application version")
    docs: str = Field(..., description="Path to the interactive API docs")
    health: str = Field(..., description="Path to the health check endpoint")


class ErrorResponse(BaseModel):
    """Error payload returned when generation fails."""

    detail: str = Field(..., description="Human-readable failure reason")
