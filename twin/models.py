"""
Data models for the demographic digital twin.

Defines the core data structures passed between the extractor,
census normalizer, insight comparator and persona synthesizer.
"""

from dataclasses import asdict, dataclass, field, replace as dataclass_replace
from typing import Dict, List, Optional
from enum import Enum


class EducationLevel(Enum):
    """Education level categories (values match the form labels)"""
    LESS_THAN_HS = "Less than High School"
    HIGH_SCHOOL = "High School"
    SOME_COLLEGE = "Some College"
    BACHELORS = "Bachelor's Degree"
    MASTERS = "Master's Degree"
    DOCTORAL = "Doctoral Degree"


class MaritalStatus(Enum):
    """Marital status categories"""
    SINGLE = "Single"
    MARRIED = "Married"
    DIVORCED = "Divorced"
    WIDOWED = "Widowed"
    SEPARATED = "Separated"


EDUCATION_VALUES = [e.value for e in EducationLevel]
MARITAL_STATUS_VALUES = [m.value for m in MaritalStatus]

MIN_AGE = 0
MAX_AGE = 120


@dataclass(frozen=True)
class Location:
    """Where the profile lives. All parts are optional."""
    state: str = ""
    city: str = ""
    zip_code: str = ""

    def to_dict(self) -> dict:
        return {
            'state': self.state,
            'city': self.city,
            'zip_code': self.zip_code,
        }


@dataclass(frozen=True)
class DemographicProfile:
    """
    A fully specified synthetic individual.

    Profiles are immutable. Scenario variants are derived with replace(),
    which validates the new copy and leaves the original untouched.
    """
    age: int
    income: float
    location: Location = field(default_factory=Location)
    education: str = EducationLevel.HIGH_SCHOOL.value
    occupation: str = ""
    household_size: int = 1
    marital_status: str = MaritalStatus.SINGLE.value

    def __post_init__(self):
        if not MIN_AGE <= self.age <= MAX_AGE:
            raise ValueError(f"Age must be between {MIN_AGE} and {MAX_AGE}, got {self.age}")
        if self.income < 0:
            raise ValueError(f"Income must be non-negative, got {self.income}")
        if self.household_size < 1:
            raise ValueError(f"Household size must be at least 1, got {self.household_size}")
        if self.education not in EDUCATION_VALUES:
            raise ValueError(
                f"Unknown education level '{self.education}'. "
                f"Expected one of: {EDUCATION_VALUES}"
            )
        if self.marital_status not in MARITAL_STATUS_VALUES:
            raise ValueError(
                f"Unknown marital status '{self.marital_status}'. "
                f"Expected one of: {MARITAL_STATUS_VALUES}"
            )

    def replace(self, **changes) -> 'DemographicProfile':
        """Return a validated copy with the given fields changed"""
        return dataclass_replace(self, **changes)

    @classmethod
    def from_dict(cls, data: dict) -> 'DemographicProfile':
        """
        Build a profile from a dictionary.

        Accepts both snake_case keys and the camelCase keys used by
        the browser client (householdSize, maritalStatus, zipCode).
        """
        location = data.get('location') or {}
        return cls(
            age=int(data['age']),
            income=float(data['income']),
            location=Location(
                state=location.get('state') or '',
                city=location.get('city') or '',
                zip_code=location.get('zip_code') or location.get('zipCode') or '',
            ),
            education=data.get('education', EducationLevel.HIGH_SCHOOL.value),
            occupation=data.get('occupation') or '',
            household_size=int(data.get('household_size', data.get('householdSize', 1))),
            marital_status=data.get('marital_status', data.get('maritalStatus', MaritalStatus.SINGLE.value)),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            'age': self.age,
            'income': self.income,
            'location': self.location.to_dict(),
            'education': self.education,
            'occupation': self.occupation,
            'household_size': self.household_size,
            'marital_status': self.marital_status,
        }


@dataclass(frozen=True)
class EducationLevels:
    """Share of the area population (percent) in each education bucket"""
    less_high_school: float
    high_school: float
    some_college: float
    bachelors: float
    graduate: float


@dataclass(frozen=True)
class MaritalStatusBreakdown:
    """Share of the area population (percent) in each marital status"""
    single: float
    married: float
    divorced: float
    widowed: float
    separated: float


@dataclass(frozen=True)
class CensusBaseline:
    """
    Area-level statistics used as the comparison reference.

    Always fully populated: every field has a literal fallback, see fallback().
    household_size is an estimate derived from household-type counts,
    not the census-reported average.
    """
    median_age: float
    median_income: float
    education_levels: EducationLevels
    household_size: float
    marital_status: MaritalStatusBreakdown

    @classmethod
    def fallback(cls) -> 'CensusBaseline':
        """Baseline used whenever the census source is unavailable or malformed"""
        return cls(
            median_age=35,
            median_income=75000,
            education_levels=EducationLevels(
                less_high_school=10,
                high_school=25,
                some_college=30,
                bachelors=25,
                graduate=10,
            ),
            household_size=2.5,
            marital_status=MaritalStatusBreakdown(
                single=30,
                married=45,
                divorced=15,
                widowed=5,
                separated=5,
            ),
        )

    def to_dict(self) -> dict:
        return {
            'median_age': self.median_age,
            'median_income': self.median_income,
            'education_levels': asdict(self.education_levels),
            'household_size': self.household_size,
            'marital_status': asdict(self.marital_status),
        }


@dataclass
class ExtractedLocation:
    """Location parts found in free text"""
    state: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None


@dataclass
class ExtractedInfo:
    """
    Extractor output before promotion to a DemographicProfile.

    Unset fields mean nothing was found (or inferred) for them.
    confidence is in [0, 1] and drops by 0.8x for each inferred field.
    """
    age: Optional[int] = None
    marital_status: Optional[str] = None
    education: Optional[str] = None
    income: Optional[float] = None
    location: ExtractedLocation = field(default_factory=ExtractedLocation)
    confidence: float = 0.0

    def to_dict(self) -> dict:
        return {
            'age': self.age,
            'marital_status': self.marital_status,
            'education': self.education,
            'income': self.income,
            'location': {
                'state': self.location.state,
                'city': self.location.city,
                'zip_code': self.location.zip_code,
            },
            'confidence': self.confidence,
        }


@dataclass
class SpendingHabit:
    """Share of income for one spending category"""
    category: str
    percentage: float
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            'category': self.category,
            'percentage': self.percentage,
            'notes': self.notes,
        }


@dataclass
class PersonaTraits:
    """Descriptive and financial-behaviour profile derived from demographics"""
    lifestyle: List[str] = field(default_factory=list)
    interests: List[str] = field(default_factory=list)
    financial_goals: List[str] = field(default_factory=list)
    challenges: List[str] = field(default_factory=list)
    opportunities: List[str] = field(default_factory=list)
    spending_habits: List[SpendingHabit] = field(default_factory=list)

    def total_spending_percentage(self) -> float:
        """Sum of category percentages (not normalized, rarely 100)"""
        return sum(h.percentage for h in self.spending_habits)

    def to_dict(self) -> dict:
        return {
            'lifestyle': list(self.lifestyle),
            'interests': list(self.interests),
            'financial_goals': list(self.financial_goals),
            'challenges': list(self.challenges),
            'opportunities': list(self.opportunities),
            'spending_habits': [h.to_dict() for h in self.spending_habits],
        }


@dataclass
class InsightSet:
    """
    Human-readable comparison of a profile against its area baseline.

    The five basic comparisons are always present. The detail fields are
    left unset when the baseline could not be obtained.
    """
    # Basic demographics
    age_comparison: str
    income_comparison: str
    education_comparison: str
    household_comparison: str
    marital_status_comparison: str

    # Detailed income analysis
    income_percentile: Optional[str] = None
    income_vs_state: Optional[str] = None
    monthly_income: Optional[str] = None

    # Education context
    education_trends: Optional[str] = None
    education_vs_income: Optional[str] = None

    # Household insights
    household_type: Optional[str] = None
    household_vs_median: Optional[str] = None

    # Location context
    location_demographics: Optional[str] = None
    cost_of_living: Optional[str] = None

    # Financial implications
    suggested_savings: Optional[str] = None
    retirement_projections: Optional[str] = None
    investment_potential: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary, omitting unset detail fields"""
        return {k: v for k, v in vars(self).items() if v is not None}


@dataclass
class ValidationResult:
    """Outcome of validating a profile against census statistics"""
    insights: InsightSet
    is_valid: bool = True

    def to_dict(self) -> dict:
        return {
            'is_valid': self.is_valid,
            'insights': self.insights.to_dict(),
        }
