from fastapi import APIRouter

from synthrec.api.v1.endpoints import generation

# Create API router
api_router = APIRouter()

# Include routers
api_router.include_router(generation.router, prefix="/generation", tags=["Generation"])

__all__ = ["api_router"]
