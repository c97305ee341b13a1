"""
Health check and system status endpoints.
"""

from typing import Annotated
from fastapi import APIRouter, Depends

from ..models import HealthResponse
from ..config import Settings, get_settings


router = APIRouter(
    prefix="/api/v1",
    tags=["health"]
)


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Annotated[Settings, Depends(get_settings)]
):
    """
    Health check endpoint.

    Returns the API status and whether a Census API key is configured.
    Requests without a key still work but are rate limited by the Census Bureau.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        census_api_key_configured=bool(settings.census_api_key)
    )
