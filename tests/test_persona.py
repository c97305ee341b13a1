"""
Tests for persona and spending synthesis.
"""

import pytest

from twin.models import DemographicProfile
from twin.persona import (
    SPENDING_CATEGORIES, calculate_spending_percentage, generate_persona,
    get_age_category, get_income_category, get_life_stage
)


def _spending(persona):
    return {h.category: h.percentage for h in persona.spending_habits}


@pytest.mark.parametrize("age,expected", [(18, 'young'), (30, 'young'), (31, 'middleAge'), (50, 'middleAge'), (51, 'senior')])
def test_age_category(age, expected):
    assert get_age_category(age) == expected


@pytest.mark.parametrize("income,expected", [(40000, 'low'), (40001, 'middle'), (100000, 'middle'), (100001, 'high')])
def test_income_category(income, expected):
    assert get_income_category(income) == expected


@pytest.mark.parametrize("age,expected", [(29, 'early_career'), (30, 'mid_career'), (49, 'mid_career'), (50, 'later_life')])
def test_life_stage(age, expected):
    assert get_life_stage(age) == expected


def test_age_thirty_splits_buckets():
    """At 30 traits are still young but goals are already mid-career"""
    persona = generate_persona(DemographicProfile(age=30, income=60000))

    assert persona.lifestyle[:4] == ['active', 'social', 'tech-savvy', 'career-focused']
    assert persona.financial_goals == ['retirement savings', 'college funds', 'mortgage management']


def test_young_low_income_spending():
    persona = generate_persona(DemographicProfile(age=25, income=30000))

    assert _spending(persona) == {
        'housing': 40,
        'transportation': 20,
        'food': 17,
        'healthcare': 7,
        'entertainment': 12,
        'savings': 8,
        'other': 10,
    }
    assert persona.total_spending_percentage() == 114


def test_middle_profile_uses_base_percentages():
    persona = generate_persona(DemographicProfile(age=40, income=70000))

    expected = {name: config['base_percentage'] for name, config in SPENDING_CATEGORIES.items()}
    assert _spending(persona) == expected
    assert persona.total_spending_percentage() == 100
    assert all(h.notes == "" for h in persona.spending_habits)


def test_senior_high_income_spending():
    persona = generate_persona(DemographicProfile(age=70, income=150000))
    spending = _spending(persona)

    assert spending['housing'] == 20
    assert spending['healthcare'] == 12
    assert spending['savings'] == 30
    assert list(spending) == list(SPENDING_CATEGORIES)


def test_spending_notes():
    profile = DemographicProfile(age=25, income=30000)

    percentage, notes = calculate_spending_percentage('healthcare', profile)

    assert percentage == 7
    assert notes == ["Increased due to low income", "Decreased due to young age group"]

    persona = generate_persona(profile)
    healthcare = next(h for h in persona.spending_habits if h.category == 'healthcare')
    assert healthcare.notes == "Increased due to low income; Decreased due to young age group"


def test_lifestyle_traits_combine_tables():
    persona = generate_persona(
        DemographicProfile(age=45, income=120000, education="Master's Degree")
    )

    assert persona.lifestyle == [
        'family-oriented', 'career-established', 'health-conscious',
        'luxury-oriented', 'investment-focused', 'experience-seeking',
        'academically-inclined', 'specialized-expertise',
    ]


def test_doctoral_adds_no_education_traits():
    persona = generate_persona(
        DemographicProfile(age=60, income=90000, education="Doctoral Degree")
    )

    assert len(persona.lifestyle) == 6
    assert persona.interests == ['travel', 'health & wellness', 'hobbies']
    assert persona.challenges[0] == 'healthcare costs'


def test_early_career_lists():
    persona = generate_persona(DemographicProfile(age=22, income=35000))

    assert persona.interests == ['social media', 'technology', 'entertainment']
    assert persona.opportunities == [
        'high growth potential', 'tech-savvy advantage', 'time to compound investments'
    ]


def test_persona_to_dict():
    data = generate_persona(DemographicProfile(age=35, income=50000)).to_dict()

    assert set(data) == {
        'lifestyle', 'interests', 'financial_goals', 'challenges',
        'opportunities', 'spending_habits'
    }
    assert len(data['spending_habits']) == 7
    assert data['spending_habits'][0]['category'] == 'housing'


def test_spending_is_not_normalized():
    """Only middle-income, middle-aged profiles happen to total 100"""
    profiles = [
        DemographicProfile(age=age, income=income)
        for age in (22, 40, 68)
        for income in (30000, 70000, 150000)
    ]
    totals = [generate_persona(p).total_spending_percentage() for p in profiles]

    assert totals.count(100) == 1
    assert sum(1 for total in totals if total != 100) == 8
