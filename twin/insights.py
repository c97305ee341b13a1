"""
Insight comparison.

Compares a DemographicProfile against its area CensusBaseline and renders
the result as human-readable strings. All derivations are plain arithmetic:

- Income difference: (income - median) / median * 100
- Suggested savings: 20% of monthly gross income
- Retirement goal: 10x annual income, target age 65
- Investment potential: High (> 1.2x median), Moderate (> median), Limited
"""

import logging
from types import MappingProxyType
from typing import Mapping, NamedTuple

from .models import (
    CensusBaseline, DemographicProfile, EducationLevel, InsightSet, ValidationResult
)
from .census import fetch_baseline
from .census_client import CensusClient

logger = logging.getLogger(__name__)


RETIREMENT_AGE = 65
SAVINGS_RATE = 0.20
RETIREMENT_INCOME_MULTIPLE = 10
AFTER_TAX_RATIO = 0.75

# Profile education -> CensusBaseline.education_levels field
EDUCATION_BUCKETS: Mapping[str, str] = MappingProxyType({
    EducationLevel.LESS_THAN_HS.value: 'less_high_school',
    EducationLevel.HIGH_SCHOOL.value: 'high_school',
    EducationLevel.SOME_COLLEGE.value: 'some_college',
    EducationLevel.BACHELORS.value: 'bachelors',
    EducationLevel.MASTERS.value: 'graduate',
    EducationLevel.DOCTORAL.value: 'graduate',
})
DEFAULT_EDUCATION_BUCKET = 'high_school'

MARITAL_BUCKETS = ('single', 'married', 'divorced', 'widowed', 'separated')
DEFAULT_MARITAL_BUCKET = 'single'


class BucketMatch(NamedTuple):
    """Result of mapping a category value onto a baseline bucket"""
    matched: bool
    bucket: str


def classify_education(education: str) -> BucketMatch:
    """Map an education level to its baseline bucket (unknown -> high_school)"""
    bucket = EDUCATION_BUCKETS.get(education)
    if bucket is None:
        return BucketMatch(False, DEFAULT_EDUCATION_BUCKET)
    return BucketMatch(True, bucket)


def classify_marital_status(status: str) -> BucketMatch:
    """Map a marital status (any case) to its baseline bucket (unknown -> single)"""
    normalized = str(status).lower()
    if normalized in MARITAL_BUCKETS:
        return BucketMatch(True, normalized)
    return BucketMatch(False, DEFAULT_MARITAL_BUCKET)


def format_number(value: float, max_decimals: int = 3, grouping: bool = True) -> str:
    """
    Render a number the way a browser's toLocaleString does for en-US:
    thousands separators and no trailing zeros.
    """
    spec = f"{',' if grouping else ''}.{max_decimals}f"
    text = format(value, spec)
    if max_decimals:
        text = text.rstrip('0').rstrip('.')
    return text


def _position(value: float, reference: float) -> str:
    if value > reference:
        return "above"
    if value < reference:
        return "below"
    return "at"


def _household_type(household_size: float) -> str:
    if household_size <= 2:
        return "small"
    if household_size <= 4:
        return "medium"
    return "large"


def _investment_potential(income: float, median_income: float) -> str:
    if income > median_income * 1.2:
        return "High"
    if income > median_income:
        return "Moderate"
    return "Limited"


def _cost_of_living(median_income: float) -> str:
    if median_income > 75000:
        return "high"
    if median_income > 50000:
        return "moderate"
    return "low"


def _living_standard(income_diff: float) -> str:
    if income_diff > 20:
        return "comfortable"
    if income_diff > 0:
        return "moderate"
    return "tight"


def compare_demographics(profile: DemographicProfile, baseline: CensusBaseline) -> InsightSet:
    """
    Compare a profile with its area baseline.

    Args:
        profile: Validated demographic profile
        baseline: Area statistics from fetch_baseline or normalize_census_data

    Returns:
        InsightSet with all seventeen insights populated
    """
    median_income = baseline.median_income
    income_diff = 0.0
    if median_income:
        income_diff = (profile.income - median_income) / median_income * 100

    monthly_income = profile.income / 12
    suggested_savings = monthly_income * SAVINGS_RATE
    years_to_retirement = max(0, RETIREMENT_AGE - profile.age)
    retirement_goal = profile.income * RETIREMENT_INCOME_MULTIPLE

    education = classify_education(profile.education)
    education_percentage = getattr(baseline.education_levels, education.bucket)
    if not education.matched:
        logger.debug(f"Unknown education '{profile.education}', comparing as {education.bucket}")

    marital = classify_marital_status(profile.marital_status)
    marital_percentage = getattr(baseline.marital_status, marital.bucket, 0) or 0

    income_position = _position(profile.income, median_income)
    if income_position == "at":
        income_percentile = "The income is at the median for this area (0.0% difference)"
    else:
        income_percentile = (
            f"The income is {abs(income_diff):.1f}% {income_position} the median for this area"
        )

    median_age = format_number(baseline.median_age, grouping=False)
    household_size = format_number(baseline.household_size, grouping=False)
    monthly = format_number(monthly_income, max_decimals=0)

    return InsightSet(
        age_comparison=(
            f"Age is {_position(profile.age, baseline.median_age)} the median age "
            f"({median_age}) for this area"
        ),
        income_comparison=(
            f"Income is {income_position} the median income "
            f"(${format_number(median_income)}) for this area"
        ),
        education_comparison=(
            f"{education_percentage:.1f}% of people in this area have a similar education level"
        ),
        household_comparison=f"Average household size in this area is {household_size} people",
        marital_status_comparison=(
            f"{marital_percentage:.1f}% of people in this area have the same marital status"
        ),

        income_percentile=income_percentile,
        income_vs_state=(
            f"Monthly income of ${monthly} suggests {_living_standard(income_diff)} "
            f"living standards for this area"
        ),
        monthly_income=(
            f"Monthly income breakdown: ${monthly} gross, suggesting about "
            f"${format_number(monthly_income * AFTER_TAX_RATIO, max_decimals=0)} after taxes"
        ),

        education_trends=(
            f"People with {profile.education} education in this area typically earn "
            f"{'above' if education_percentage > 50 else 'below'} median income"
        ),
        education_vs_income=(
            f"This income level is {'typical' if profile.income > median_income else 'atypical'} "
            f"for this education level in this area"
        ),

        household_type=(
            f"This area has predominantly {_household_type(baseline.household_size)} households"
        ),
        household_vs_median=(
            f"The household profile aligns with "
            f"{'family' if baseline.household_size > 2 else 'non-family'} household patterns in this area"
        ),

        location_demographics=(
            f"This area has a {'mature' if baseline.median_age > 40 else 'young'} population with "
            f"{'high' if median_income > 75000 else 'moderate'} income levels"
        ),
        cost_of_living=(
            f"Based on median income, this area has {_cost_of_living(median_income)} cost of living"
        ),

        suggested_savings=(
            f"Recommended monthly savings: ${format_number(suggested_savings, max_decimals=0)} "
            f"(20% of income)"
        ),
        retirement_projections=(
            f"Retirement goal: ${format_number(retirement_goal)} in {years_to_retirement} years"
        ),
        investment_potential=(
            f"Investment capacity: {_investment_potential(profile.income, median_income)} "
            f"based on income vs. area median"
        ),
    )


def unavailable_insights() -> InsightSet:
    """Reduced insight set used when no baseline could be obtained"""
    return InsightSet(
        age_comparison="Unable to compare age with area statistics",
        income_comparison="Unable to compare income with area statistics",
        education_comparison="Unable to compare education with area statistics",
        household_comparison="Unable to compare household size with area statistics",
        marital_status_comparison="Unable to compare marital status with area statistics",
    )


def validate_demographics(profile: DemographicProfile, client: CensusClient) -> ValidationResult:
    """
    Fetch the area baseline for a profile and compare against it.

    Never raises: if the baseline cannot be obtained (e.g. the state does
    not resolve) the result carries the five "Unable to compare" insights.
    """
    try:
        baseline = fetch_baseline(profile.location, client)
    except Exception as e:
        logger.error(f"Validation error: {e}")
        return ValidationResult(insights=unavailable_insights())

    return ValidationResult(insights=compare_demographics(profile, baseline))
