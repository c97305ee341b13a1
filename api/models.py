"""
Pydantic models for API requests and responses.

These models define the structure of data sent to and from the API.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional, Union
from datetime import datetime, timezone

from twin.models import (
    CensusBaseline, DemographicProfile, EducationLevel, ExtractedInfo,
    Location, MaritalStatus, PersonaTraits, ValidationResult
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# PROFILE MODELS
# ============================================================================

class LocationModel(BaseModel):
    """Profile location"""

    state: str = Field("", description="State name, 2-letter abbreviation or FIPS code", examples=["CA"])
    city: str = Field("", description="City name", examples=["Sacramento"])
    zip_code: str = Field("", description="Five-digit ZIP code", examples=["95814"])


class ProfileModel(BaseModel):
    """A complete demographic profile"""

    age: int = Field(..., description="Age in years", ge=0, le=120, examples=[35])
    income: float = Field(..., description="Annual income in dollars", ge=0, examples=[65000])
    location: LocationModel = Field(default_factory=LocationModel)
    education: EducationLevel = Field(EducationLevel.HIGH_SCHOOL, description="Highest education level")
    occupation: str = Field("", description="Occupation", examples=["Nurse"])
    household_size: int = Field(1, description="People in household", ge=1, examples=[3])
    marital_status: MaritalStatus = Field(MaritalStatus.SINGLE, description="Marital status")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "age": 35,
                "income": 65000,
                "location": {"state": "CA", "city": "", "zip_code": ""},
                "education": "Bachelor's Degree",
                "occupation": "Nurse",
                "household_size": 3,
                "marital_status": "Married"
            }
        }
    )

    def to_profile(self) -> DemographicProfile:
        return DemographicProfile(
            age=self.age,
            income=self.income,
            location=Location(
                state=self.location.state,
                city=self.location.city,
                zip_code=self.location.zip_code,
            ),
            education=self.education.value,
            occupation=self.occupation,
            household_size=self.household_size,
            marital_status=self.marital_status.value,
        )

    @classmethod
    def from_profile(cls, profile: DemographicProfile) -> 'ProfileModel':
        return cls(**profile.to_dict())


# ============================================================================
# REQUEST MODELS
# ============================================================================

class TextRequest(BaseModel):
    """Free-text description of a person"""

    text: str = Field(
        ...,
        description="Natural-language description",
        max_length=5000,
        examples=["A 35-year-old married nurse making $65,000 in California"]
    )


class ScenarioRequest(BaseModel):
    """Request to derive a what-if scenario from a profile"""

    profile: ProfileModel
    scenario_type: str = Field(
        ...,
        description="Scenario type: income_change or location_change",
        examples=["income_change"]
    )
    adjustments: Dict[str, Union[float, str]] = Field(
        default_factory=dict,
        description="Scenario adjustments (e.g. income_multiplier, new_state)",
        examples=[{"income_multiplier": 1.5}]
    )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class ExtractedLocationModel(BaseModel):
    state: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None


class ExtractedInfoResponse(BaseModel):
    """Fields found in free text, with a 0-1 confidence score"""

    age: Optional[int] = None
    marital_status: Optional[str] = None
    education: Optional[str] = None
    income: Optional[float] = None
    location: ExtractedLocationModel = Field(default_factory=ExtractedLocationModel)
    confidence: float = Field(..., ge=0, le=1, description="Share of fields found directly, decayed for inferred fields")

    @classmethod
    def from_extracted(cls, info: ExtractedInfo) -> 'ExtractedInfoResponse':
        return cls(**info.to_dict())


class EducationLevelsModel(BaseModel):
    less_high_school: float
    high_school: float
    some_college: float
    bachelors: float
    graduate: float


class MaritalStatusModel(BaseModel):
    single: float
    married: float
    divorced: float
    widowed: float
    separated: float


class BaselineResponse(BaseModel):
    """Area-level census baseline"""

    median_age: float
    median_income: float
    education_levels: EducationLevelsModel
    household_size: float = Field(..., description="Estimated from household-type counts")
    marital_status: MaritalStatusModel

    @classmethod
    def from_baseline(cls, baseline: CensusBaseline) -> 'BaselineResponse':
        return cls(**baseline.to_dict())


class InsightsModel(BaseModel):
    """Comparison insights; detail fields are absent when census data was unavailable"""

    age_comparison: str
    income_comparison: str
    education_comparison: str
    household_comparison: str
    marital_status_comparison: str
    income_percentile: Optional[str] = None
    income_vs_state: Optional[str] = None
    monthly_income: Optional[str] = None
    education_trends: Optional[str] = None
    education_vs_income: Optional[str] = None
    household_type: Optional[str] = None
    household_vs_median: Optional[str] = None
    location_demographics: Optional[str] = None
    cost_of_living: Optional[str] = None
    suggested_savings: Optional[str] = None
    retirement_projections: Optional[str] = None
    investment_potential: Optional[str] = None


class ValidationResponse(BaseModel):
    """Profile validated against census statistics"""

    is_valid: bool
    insights: InsightsModel

    @classmethod
    def from_result(cls, result: ValidationResult) -> 'ValidationResponse':
        return cls(**result.to_dict())


class SpendingHabitModel(BaseModel):
    category: str
    percentage: float = Field(..., description="Share of income; categories are not normalized to 100")
    notes: str = ""


class PersonaResponse(BaseModel):
    """Persona traits and spending distribution"""

    lifestyle: List[str]
    interests: List[str]
    financial_goals: List[str]
    challenges: List[str]
    opportunities: List[str]
    spending_habits: List[SpendingHabitModel]

    @classmethod
    def from_persona(cls, persona: PersonaTraits) -> 'PersonaResponse':
        return cls(**persona.to_dict())


class StateResolutionResponse(BaseModel):
    """Resolved state"""

    input: str = Field(..., description="State as given")
    code: str = Field(..., description="Two-digit FIPS code", examples=["06"])
    name: str = Field(..., description="Canonical state name", examples=["California"])


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    census_api_key_configured: bool = Field(..., description="Whether a Census API key is set")
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="Check timestamp (UTC)"
    )
