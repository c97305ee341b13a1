"""
State resolution and census baseline endpoints.
"""

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from ..models import BaselineResponse, StateResolutionResponse
from ..dependencies import get_census_client
from twin.census import fetch_baseline
from twin.census_client import CensusClient
from twin.models import Location
from twin.states import InvalidLocation, resolve_state_code, state_name


router = APIRouter(
    prefix="/api/v1",
    tags=["locations"]
)


@router.get("/states/resolve", response_model=StateResolutionResponse)
async def resolve_state(
    state: str = Query(..., description="State name, 2-letter abbreviation or FIPS code", examples=["CA"])
):
    """
    Resolve a state to its FIPS code.

    Accepts full names (any case), postal abbreviations (any case) and
    two-digit FIPS codes.
    """
    try:
        return StateResolutionResponse(
            input=state,
            code=resolve_state_code(state),
            name=state_name(state)
        )
    except InvalidLocation as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/census/baseline", response_model=BaselineResponse)
def get_census_baseline(
    client: Annotated[CensusClient, Depends(get_census_client)],
    state: str = Query(..., description="State name, abbreviation or FIPS code", examples=["TX"]),
    city: Optional[str] = Query(None, description="City name", examples=["Austin"]),
    zip_code: Optional[str] = Query(None, description="Five-digit ZIP code", examples=["78701"])
):
    """
    Area baseline from the Census ACS.

    If the Census API is unavailable the fixed fallback baseline is returned.

    ## Fallback baseline

    - Median age 35, median income $75,000
    - Education: 10% / 25% / 30% / 25% / 10%
    - Household size 2.5
    - Marital status: 30% / 45% / 15% / 5% / 5%
    """
    location = Location(state=state, city=city or "", zip_code=zip_code or "")
    try:
        baseline = fetch_baseline(location, client)
    except InvalidLocation as e:
        raise HTTPException(status_code=400, detail=str(e))

    return BaselineResponse.from_baseline(baseline)
