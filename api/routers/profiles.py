"""
Profile endpoints: extraction, inference, census insights, persona and scenarios.
"""

import logging
from typing import Annotated
from fastapi import APIRouter, Depends, HTTPException

from ..models import (
    ExtractedInfoResponse, PersonaResponse, ProfileModel, ScenarioRequest,
    TextRequest, ValidationResponse
)
from ..dependencies import get_census_client
from twin.census_client import CensusClient
from twin.extractor import extract_demographic_info, infer_demographics
from twin.insights import validate_demographics
from twin.persona import generate_persona
from twin.scenarios import apply_scenario

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/api/v1/profiles",
    tags=["profiles"]
)


@router.post("/extract", response_model=ExtractedInfoResponse)
async def extract_profile_fields(request: TextRequest):
    """
    Extract demographic fields from free text.

    Fields that cannot be found are returned as null. The confidence score
    is the share of the five fields (age, state, marital status, education,
    income) found directly, multiplied by 0.8 for each field inferred from age.
    """
    info = extract_demographic_info(request.text)
    return ExtractedInfoResponse.from_extracted(info)


@router.post("/infer", response_model=ProfileModel)
async def infer_profile(request: TextRequest):
    """
    Build a complete profile from free text.

    Missing fields get fixed defaults: age 35, Single, High School, $50,000.
    """
    profile = infer_demographics(request.text)
    return ProfileModel.from_profile(profile)


@router.post("/insights", response_model=ValidationResponse)
def profile_insights(
    request: ProfileModel,
    client: Annotated[CensusClient, Depends(get_census_client)]
):
    """
    Compare a profile against census statistics for its location.

    ## Response

    - Seventeen insights when a baseline is available (the fallback
      baseline is used if the Census API is down)
    - Five "Unable to compare" insights if the location cannot be resolved
    """
    result = validate_demographics(request.to_profile(), client)
    return ValidationResponse.from_result(result)


@router.post("/persona", response_model=PersonaResponse)
async def profile_persona(request: ProfileModel):
    """
    Generate persona traits and spending habits.

    Spending percentages are computed per category and are not
    normalized, so they need not sum to 100.
    """
    persona = generate_persona(request.to_profile())
    return PersonaResponse.from_persona(persona)


@router.post("/scenario", response_model=ProfileModel)
async def profile_scenario(request: ScenarioRequest):
    """
    Derive a what-if scenario profile.

    ## Scenario types

    - **income_change**: `income_multiplier` (0.5-2.0)
    - **location_change**: `new_state` (CA, NY, TX, FL, WA) and
      `cost_of_living_adjustment` (0.5-2.0)

    ## Example Request
```json
    {
      "profile": {"age": 35, "income": 65000, "location": {"state": "OH"}},
      "scenario_type": "location_change",
      "adjustments": {"new_state": "CA", "cost_of_living_adjustment": 1.3}
    }
```
    """
    try:
        scenario = apply_scenario(
            request.profile.to_profile(),
            request.scenario_type,
            **request.adjustments
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Scenario generation failed: {e}")
        raise HTTPException(status_code=500, detail=f"Scenario generation failed: {str(e)}")

    return ProfileModel.from_profile(scenario)
