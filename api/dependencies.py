"""
FastAPI Dependencies

Shared dependencies for dependency injection.
"""

from functools import lru_cache
from typing import Annotated, Optional
from fastapi import Depends

from twin.census_client import CensusClient
from .config import Settings, get_settings


@lru_cache()
def _cached_census_client(
    api_key: Optional[str],
    base_url: str,
    year: str,
    dataset: str,
    timeout: float
) -> CensusClient:
    return CensusClient(
        api_key=api_key,
        year=year,
        dataset=dataset,
        base_url=base_url,
        timeout=timeout
    )


def get_census_client(
    settings: Annotated[Settings, Depends(get_settings)]
) -> CensusClient:
    """
    Get a CensusClient for the configured census source.

    One client (and HTTP session) is created per distinct configuration
    and reused for all requests.
    """
    return _cached_census_client(
        settings.census_api_key,
        settings.census_base_url,
        settings.census_year,
        settings.census_dataset,
        settings.census_timeout
    )
