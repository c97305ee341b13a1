"""
Demographic Digital Twin Package

Builds synthetic demographic profiles from text or forms, compares them
against US Census ACS statistics, and derives persona and spending traits.
"""

from .models import (
    DemographicProfile,
    Location,
    CensusBaseline,
    EducationLevels,
    MaritalStatusBreakdown,
    ExtractedInfo,
    PersonaTraits,
    SpendingHabit,
    InsightSet,
    ValidationResult,
    EducationLevel,
    MaritalStatus,
)
from .states import InvalidLocation, resolve_state_code, state_name
from .extractor import extract_demographic_info, infer_demographics
from .census_client import CensusClient, CensusAPIError
from .census import normalize_census_data, fetch_baseline
from .insights import compare_demographics, validate_demographics
from .persona import generate_persona
from .scenarios import apply_scenario, SCENARIO_TYPES

__version__ = "1.0.0"

__all__ = [
    # Data models
    'DemographicProfile',
    'Location',
    'CensusBaseline',
    'EducationLevels',
    'MaritalStatusBreakdown',
    'ExtractedInfo',
    'PersonaTraits',
    'SpendingHabit',
    'InsightSet',
    'ValidationResult',

    # Enums
    'EducationLevel',
    'MaritalStatus',

    # Errors
    'InvalidLocation',
    'CensusAPIError',

    # Pipeline
    'resolve_state_code',
    'state_name',
    'extract_demographic_info',
    'infer_demographics',
    'CensusClient',
    'normalize_census_data',
    'fetch_baseline',
    'compare_demographics',
    'validate_demographics',
    'generate_persona',
    'apply_scenario',
    'SCENARIO_TYPES',
]
