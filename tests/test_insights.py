"""
Tests for insight comparison.
"""

import pytest

from twin.insights import (
    classify_education, classify_marital_status, compare_demographics,
    format_number, unavailable_insights, validate_demographics
)
from twin.models import CensusBaseline, DemographicProfile, Location


@pytest.fixture
def baseline():
    return CensusBaseline.fallback()


def test_compare_full_insight_set(profile, baseline):
    """Married, Bachelor's, $60k, age 35 against the fallback baseline"""
    insights = compare_demographics(profile, baseline).to_dict()

    assert len(insights) == 17
    assert insights['age_comparison'] == "Age is at the median age (35) for this area"
    assert insights['income_comparison'] == "Income is below the median income ($75,000) for this area"
    assert insights['education_comparison'] == "25.0% of people in this area have a similar education level"
    assert insights['household_comparison'] == "Average household size in this area is 2.5 people"
    assert insights['marital_status_comparison'] == "45.0% of people in this area have the same marital status"
    assert insights['income_percentile'] == "The income is 20.0% below the median for this area"
    assert insights['income_vs_state'] == (
        "Monthly income of $5,000 suggests tight living standards for this area"
    )
    assert insights['monthly_income'] == (
        "Monthly income breakdown: $5,000 gross, suggesting about $3,750 after taxes"
    )
    assert insights['education_trends'] == (
        "People with Bachelor's Degree education in this area typically earn below median income"
    )
    assert insights['education_vs_income'] == (
        "This income level is atypical for this education level in this area"
    )
    assert insights['household_type'] == "This area has predominantly medium households"
    assert insights['household_vs_median'] == (
        "The household profile aligns with family household patterns in this area"
    )
    assert insights['location_demographics'] == (
        "This area has a young population with moderate income levels"
    )
    assert insights['cost_of_living'] == "Based on median income, this area has moderate cost of living"
    assert insights['suggested_savings'] == "Recommended monthly savings: $1,000 (20% of income)"
    assert insights['retirement_projections'] == "Retirement goal: $600,000 in 30 years"
    assert insights['investment_potential'] == (
        "Investment capacity: Limited based on income vs. area median"
    )


def test_high_earner_above_median(baseline):
    profile = DemographicProfile(age=50, income=120000, location=Location(state='WA'))
    insights = compare_demographics(profile, baseline)

    assert insights.age_comparison == "Age is above the median age (35) for this area"
    assert insights.income_comparison == "Income is above the median income ($75,000) for this area"
    assert insights.income_percentile == "The income is 60.0% above the median for this area"
    assert "comfortable" in insights.income_vs_state
    assert insights.education_vs_income.startswith("This income level is typical")
    assert insights.investment_potential.startswith("Investment capacity: High")


def test_income_at_median(baseline):
    profile = DemographicProfile(age=30, income=75000)
    insights = compare_demographics(profile, baseline)

    assert insights.income_comparison == "Income is at the median income ($75,000) for this area"
    assert insights.income_percentile == "The income is at the median for this area (0.0% difference)"
    assert "tight living standards" in insights.income_vs_state
    assert insights.investment_potential.startswith("Investment capacity: Limited")


def test_moderate_investment_potential(baseline):
    profile = DemographicProfile(age=40, income=80000)
    insights = compare_demographics(profile, baseline)

    assert insights.investment_potential.startswith("Investment capacity: Moderate")
    assert "moderate living standards" in insights.income_vs_state


def test_retirement_years_never_negative(baseline):
    profile = DemographicProfile(age=70, income=40000)
    insights = compare_demographics(profile, baseline)
    assert insights.retirement_projections == "Retirement goal: $400,000 in 0 years"


def test_area_descriptors():
    baseline = CensusBaseline(
        median_age=42.3,
        median_income=91250,
        education_levels=CensusBaseline.fallback().education_levels,
        household_size=1.8,
        marital_status=CensusBaseline.fallback().marital_status,
    )
    profile = DemographicProfile(age=30, income=50000)
    insights = compare_demographics(profile, baseline)

    assert insights.age_comparison == "Age is below the median age (42.3) for this area"
    assert insights.income_comparison == "Income is below the median income ($91,250) for this area"
    assert insights.household_type == "This area has predominantly small households"
    assert "non-family" in insights.household_vs_median
    assert insights.location_demographics == "This area has a mature population with high income levels"
    assert insights.cost_of_living == "Based on median income, this area has high cost of living"


def test_doctoral_compares_as_graduate(baseline):
    profile = DemographicProfile(age=45, income=90000, education="Doctoral Degree")
    insights = compare_demographics(profile, baseline)
    assert insights.education_comparison.startswith("10.0%")


def test_classify_education():
    assert classify_education("Master's Degree") == (True, 'graduate')
    assert classify_education("Some College") == (True, 'some_college')
    assert classify_education("Trade certificate") == (False, 'high_school')


def test_classify_marital_status():
    assert classify_marital_status("Widowed") == (True, 'widowed')
    assert classify_marital_status("married") == (True, 'married')
    assert classify_marital_status("Engaged") == (False, 'single')


@pytest.mark.parametrize("value,kwargs,expected", [
    (75000, {}, "75,000"),
    (75235.5, {}, "75,235.5"),
    (5416.666, {'max_decimals': 0}, "5,417"),
    (2.5, {'grouping': False}, "2.5"),
    (35.0, {'grouping': False}, "35"),
])
def test_format_number(value, kwargs, expected):
    assert format_number(value, **kwargs) == expected


def test_unavailable_insights():
    insights = unavailable_insights().to_dict()

    assert len(insights) == 5
    assert insights['household_comparison'] == "Unable to compare household size with area statistics"
    assert insights['marital_status_comparison'] == "Unable to compare marital status with area statistics"


def test_validate_demographics(profile, stub_census):
    result = validate_demographics(profile, stub_census)

    assert result.is_valid is True
    assert result.insights.income_comparison == (
        "Income is below the median income ($75,235) for this area"
    )
    assert result.insights.age_comparison == "Age is below the median age (36.5) for this area"


def test_validate_demographics_with_census_down(profile, failing_census):
    """The fallback baseline still yields the full insight set"""
    result = validate_demographics(profile, failing_census)
    assert len(result.insights.to_dict()) == 17
    assert "($75,000)" in result.insights.income_comparison


def test_validate_demographics_invalid_state(stub_census):
    profile = DemographicProfile(age=30, income=50000, location=Location(state='Atlantis'))
    result = validate_demographics(profile, stub_census)

    assert result.is_valid is True
    assert result.insights.to_dict() == unavailable_insights().to_dict()
