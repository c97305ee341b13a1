"""
Persona and spending synthesis.

Classifies a profile into age/income buckets and builds lifestyle traits
and a spending distribution from fixed tables.

Spending model (per category, independently):
    percentage = base + income_modifier[income bucket] + age_modifier[age bucket]

Middle income and middle age have no modifiers. The seven percentages are
not renormalized, so they rarely sum to 100.

Two age splits are in use:
- get_age_category: young <= 30 < middleAge <= 50 < senior (traits, spending)
- get_life_stage: < 30, < 50, otherwise (interests, goals, challenges)
"""

import logging
from types import MappingProxyType
from typing import List, Mapping, Tuple

from .models import DemographicProfile, EducationLevel, PersonaTraits, SpendingHabit

logger = logging.getLogger(__name__)


# =============================================================================
# LIFESTYLE TRAITS
# =============================================================================

AGE_TRAITS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    'young': ('active', 'social', 'tech-savvy', 'career-focused'),
    'middleAge': ('family-oriented', 'career-established', 'health-conscious'),
    'senior': ('retirement-focused', 'leisure-oriented', 'health-prioritizing'),
})

INCOME_TRAITS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    'low': ('budget-conscious', 'value-seeking', 'practical'),
    'middle': ('balanced-spending', 'saving-oriented', 'quality-focused'),
    'high': ('luxury-oriented', 'investment-focused', 'experience-seeking'),
})

# Doctoral Degree has no entry and adds no education traits
EDUCATION_TRAITS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    EducationLevel.LESS_THAN_HS.value: ('practical-skills', 'hands-on-learning'),
    EducationLevel.HIGH_SCHOOL.value: ('traditional-values', 'practical-minded'),
    EducationLevel.SOME_COLLEGE.value: ('skill-developing', 'career-transitioning'),
    EducationLevel.BACHELORS.value: ('professionally-oriented', 'career-focused'),
    EducationLevel.MASTERS.value: ('academically-inclined', 'specialized-expertise'),
})


# =============================================================================
# LIFE STAGE LISTS (interests, goals, challenges, opportunities)
# =============================================================================

LIFE_STAGE_PROFILES: Mapping[str, Mapping[str, Tuple[str, ...]]] = MappingProxyType({
    'early_career': MappingProxyType({
        'interests': ('social media', 'technology', 'entertainment'),
        'financial_goals': ('building credit', 'starting investments', 'career growth'),
        'challenges': ('student debt', 'building credit history', 'entry-level income'),
        'opportunities': ('high growth potential', 'tech-savvy advantage', 'time to compound investments'),
    }),
    'mid_career': MappingProxyType({
        'interests': ('home improvement', 'family activities', 'career development'),
        'financial_goals': ('retirement savings', 'college funds', 'mortgage management'),
        'challenges': ('work-life balance', 'family expenses', 'career advancement'),
        'opportunities': ('peak earning years', 'investment growth', 'career advancement'),
    }),
    'later_life': MappingProxyType({
        'interests': ('travel', 'health & wellness', 'hobbies'),
        'financial_goals': ('retirement planning', 'estate planning', 'healthcare savings'),
        'challenges': ('healthcare costs', 'fixed income management', 'market volatility'),
        'opportunities': ('retirement benefits', 'investment experience', 'time for leisure'),
    }),
})


# =============================================================================
# SPENDING CATEGORIES
# =============================================================================

SPENDING_CATEGORIES: Mapping[str, dict] = MappingProxyType({
    'housing': {
        'base_percentage': 30,
        'income': {'low': 5, 'high': -5},
        'age': {'young': 5, 'senior': -5},
    },
    'transportation': {
        'base_percentage': 15,
        'income': {'low': 2, 'high': -2},
        'age': {'young': 3, 'senior': -3},
    },
    'food': {
        'base_percentage': 12,
        'income': {'low': 3, 'high': -2},
        'age': {'young': 2, 'senior': -1},
    },
    'healthcare': {
        'base_percentage': 8,
        'income': {'low': 2, 'high': -1},
        'age': {'young': -3, 'senior': 5},
    },
    'entertainment': {
        'base_percentage': 10,
        'income': {'low': -3, 'high': 5},
        'age': {'young': 5, 'senior': -3},
    },
    'savings': {
        'base_percentage': 15,
        'income': {'low': -5, 'high': 10},
        'age': {'young': -2, 'senior': 5},
    },
    'other': {
        'base_percentage': 10,
        'income': {'low': -2, 'high': 3},
        'age': {'young': 2, 'senior': -1},
    },
})


def get_age_category(age: int) -> str:
    """Age bucket for traits and spending modifiers (30 is still young)"""
    if age <= 30:
        return 'young'
    if age <= 50:
        return 'middleAge'
    return 'senior'


def get_income_category(income: float) -> str:
    """Income bucket: low <= $40k < middle <= $100k < high"""
    if income <= 40000:
        return 'low'
    if income <= 100000:
        return 'middle'
    return 'high'


def get_life_stage(age: int) -> str:
    """Life stage for interests and goals (30 is already mid-career)"""
    if age < 30:
        return 'early_career'
    if age < 50:
        return 'mid_career'
    return 'later_life'


def calculate_spending_percentage(category: str, profile: DemographicProfile) -> Tuple[float, List[str]]:
    """
    Spending share for one category.

    Returns:
        (percentage, notes) where notes explain each modifier applied
    """
    config = SPENDING_CATEGORIES[category]
    percentage = config['base_percentage']
    notes = []

    income_category = get_income_category(profile.income)
    age_category = get_age_category(profile.age)

    modifier = config.get('income', {}).get(income_category)
    if modifier:
        percentage += modifier
        notes.append(f"{'Increased' if modifier > 0 else 'Decreased'} due to {income_category} income")

    modifier = config.get('age', {}).get(age_category)
    if modifier:
        percentage += modifier
        notes.append(f"{'Increased' if modifier > 0 else 'Decreased'} due to {age_category} age group")

    return percentage, notes


def generate_persona(profile: DemographicProfile) -> PersonaTraits:
    """
    Build persona traits and spending habits for a profile.

    Args:
        profile: Validated demographic profile

    Returns:
        PersonaTraits (recomputed on every call)
    """
    age_category = get_age_category(profile.age)
    income_category = get_income_category(profile.income)

    lifestyle = [
        *AGE_TRAITS[age_category],
        *INCOME_TRAITS[income_category],
        *EDUCATION_TRAITS.get(profile.education, ()),
    ]

    stage = LIFE_STAGE_PROFILES[get_life_stage(profile.age)]

    spending_habits = []
    for category in SPENDING_CATEGORIES:
        percentage, notes = calculate_spending_percentage(category, profile)
        spending_habits.append(SpendingHabit(
            category=category,
            percentage=percentage,
            notes='; '.join(notes)
        ))

    persona = PersonaTraits(
        lifestyle=lifestyle,
        interests=list(stage['interests']),
        financial_goals=list(stage['financial_goals']),
        challenges=list(stage['challenges']),
        opportunities=list(stage['opportunities']),
        spending_habits=spending_habits,
    )

    logger.debug(
        f"Persona for age {profile.age} ({age_category}), income {income_category}: "
        f"spending total {persona.total_spending_percentage()}%"
    )
    return persona
