"""
Health check route
"""

from fastapi import APIRouter

from mcflation.web.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe; does not touch the dataset."""
    return HealthResponse()
