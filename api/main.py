"""
Demographic Digital Twin API Server

REST API for building demographic profiles, comparing them against
US Census statistics and generating personas.
"""

import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .routers import health, locations, profiles

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


# ============================================
# Application Lifespan
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown"""
    logger.info("Starting Demographic Digital Twin API")
    logger.info(f"Census source: {settings.census_base_url}/{settings.census_year}/{settings.census_dataset}")
    if not settings.census_api_key:
        logger.warning("CENSUS_API_KEY not set, Census requests will be rate limited")

    yield

    logger.info("Shutting down Demographic Digital Twin API")


# ============================================
# FastAPI Application
# ============================================

app = FastAPI(
    title=settings.app_name,
    description="""
    Build synthetic demographic "digital twins" and compare them with US Census data.

    ## Overview

    Profiles can be described in plain English or submitted as structured
    data. Each profile is compared against American Community Survey
    statistics for its state, city or ZIP code, and turned into a persona
    with lifestyle traits and a spending distribution.

    ## Endpoints

    - **POST /api/v1/profiles/extract** - Extract fields from free text
    - **POST /api/v1/profiles/infer** - Build a complete profile from free text
    - **POST /api/v1/profiles/insights** - Compare a profile with census statistics
    - **POST /api/v1/profiles/persona** - Persona traits and spending habits
    - **POST /api/v1/profiles/scenario** - Derive a what-if scenario
    - **GET /api/v1/states/resolve** - Resolve a state to its FIPS code
    - **GET /api/v1/census/baseline** - Census baseline for a location
    - **GET /health** - Health check

    ## Usage Example

    ```python
    import requests

    profile = requests.post(
        'http://localhost:8000/api/v1/profiles/infer',
        json={'text': 'A 42-year-old married teacher earning $58k in Ohio'}
    ).json()

    insights = requests.post(
        'http://localhost:8000/api/v1/profiles/insights',
        json=profile
    ).json()['insights']
    ```
    """,
    version=settings.app_version,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(locations.router)
app.include_router(profiles.router)


# ============================================
# Root Endpoints
# ============================================

@app.get("/health", tags=["Health"])
async def root_health():
    """Health check for load balancers"""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc)
    }


@app.get("/", tags=["Health"])
async def root():
    """API information"""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "extract": "POST /api/v1/profiles/extract",
            "infer": "POST /api/v1/profiles/infer",
            "insights": "POST /api/v1/profiles/insights",
            "persona": "POST /api/v1/profiles/persona",
            "scenario": "POST /api/v1/profiles/scenario",
            "resolve_state": "GET /api/v1/states/resolve",
            "baseline": "GET /api/v1/census/baseline"
        }
    }


# ============================================
# Run with: uvicorn api.main:app --port 8000
# ============================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
