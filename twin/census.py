"""
Census data normalization.

Turns the raw ACS header + data rows into a CensusBaseline. Every field
has a literal fallback, so callers always get a fully populated baseline:

- Unparseable, zero or missing cells use the per-field fallback
- A response that is not at least [header_row, data_row] returns
  CensusBaseline.fallback() as a whole

Known simplifications:
- some_college has no numerator variable wired up and is fixed at 30%
- marital status percentages are fixed (30/45/15/5/5) for every area
- household_size is estimated from household-type counts, not observed
"""

import logging
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .models import CensusBaseline, EducationLevels, Location, MaritalStatusBreakdown
from .states import resolve_state_code, state_name
from .census_client import CensusAPIError, CensusClient

logger = logging.getLogger(__name__)


# =============================================================================
# VARIABLES AND FALLBACKS
# =============================================================================

MEDIAN_AGE = 'B01002_001E'
MEDIAN_INCOME = 'B19013_001E'
EDUCATION_TOTAL = 'B15003_001E'
NO_SCHOOLING = 'B15003_002E'
HIGH_SCHOOL = 'B15003_017E'
BACHELORS = 'B15003_022E'
MASTERS = 'B15003_023E'
TOTAL_HOUSEHOLDS = 'B11001_001E'
FAMILY_HOUSEHOLDS = 'B11001_002E'
NONFAMILY_HOUSEHOLDS = 'B11001_007E'

REQUIRED_VARIABLES = (
    MEDIAN_AGE,
    MEDIAN_INCOME,
    EDUCATION_TOTAL,
    NO_SCHOOLING,
    HIGH_SCHOOL,
    BACHELORS,
    MASTERS,
    TOTAL_HOUSEHOLDS,
    FAMILY_HOUSEHOLDS,
    NONFAMILY_HOUSEHOLDS,
)

FALLBACK_MEDIAN_AGE = 35
FALLBACK_MEDIAN_INCOME = 75000
FALLBACK_HOUSEHOLD_SIZE = 2.5
SOME_COLLEGE_PERCENT = 30

FALLBACK_EDUCATION = {
    'less_high_school': 10,
    'high_school': 25,
    'bachelors': 25,
    'graduate': 10,
}

FIXED_MARITAL_STATUS = {
    'single': 30,
    'married': 45,
    'divorced': 15,
    'widowed': 5,
    'separated': 5,
}

# Assumed people per household when estimating household size
PEOPLE_PER_FAMILY_HOUSEHOLD = 2.5
PEOPLE_PER_NONFAMILY_HOUSEHOLD = 1.2


def _or_fallback(value: float, fallback: float) -> float:
    """Use fallback for NaN or zero, mirroring the source's falsy check"""
    if pd.isna(value) or value == 0:
        return fallback
    return float(value)


def _parse_row(header: Sequence, row: Sequence) -> pd.Series:
    """Numeric view of the data row, indexed by header code (NaN if unparseable)"""
    cells = list(row)[:len(header)]
    cells += [None] * (len(header) - len(cells))
    return pd.to_numeric(
        pd.Series(cells, index=[str(h) for h in header], dtype=object),
        errors='coerce'
    )


def _get_value(values: pd.Series, prefix: str) -> float:
    """Value of the first column whose header starts with prefix, else NaN"""
    for position, code in enumerate(values.index):
        if code.startswith(prefix):
            return float(values.iloc[position])
    return np.nan


def _is_valid_shape(raw_rows) -> bool:
    return (
        isinstance(raw_rows, (list, tuple))
        and len(raw_rows) >= 2
        and all(isinstance(r, (list, tuple)) for r in raw_rows[:2])
    )


def estimate_household_size(
    total_households: float,
    family_households: float,
    nonfamily_households: float
) -> float:
    """
    Estimate average household size from household-type counts.

    Heuristic: family households ~2.5 people, non-family ~1.2 people.
    Rounded to one decimal.
    """
    estimated_people = (
        family_households * PEOPLE_PER_FAMILY_HOUSEHOLD
        + nonfamily_households * PEOPLE_PER_NONFAMILY_HOUSEHOLD
    )
    return round(estimated_people / total_households, 1)


def normalize_census_data(raw_rows) -> CensusBaseline:
    """
    Convert raw ACS rows to a CensusBaseline.

    Args:
        raw_rows: [header_row, data_row] as returned by CensusClient.fetch

    Returns:
        CensusBaseline; the fixed fallback baseline if raw_rows is malformed
    """
    if not _is_valid_shape(raw_rows):
        logger.warning("Census data malformed, using fallback baseline")
        return CensusBaseline.fallback()

    values = _parse_row(raw_rows[0], raw_rows[1])

    missing = [v for v in REQUIRED_VARIABLES if not any(c.startswith(v) for c in values.index)]
    if missing:
        logger.warning(f"Census response missing variables {missing}, using fallbacks for them")

    education_total = _or_fallback(_get_value(values, EDUCATION_TOTAL), 1)
    total_households = _or_fallback(_get_value(values, TOTAL_HOUSEHOLDS), 1)
    family_households = _or_fallback(_get_value(values, FAMILY_HOUSEHOLDS), 0)
    nonfamily_households = _or_fallback(_get_value(values, NONFAMILY_HOUSEHOLDS), 0)

    def education_percent(variable: str, bucket: str) -> float:
        return _or_fallback(
            _get_value(values, variable) / education_total * 100,
            FALLBACK_EDUCATION[bucket]
        )

    household_size = estimate_household_size(
        total_households, family_households, nonfamily_households
    )

    return CensusBaseline(
        median_age=_or_fallback(_get_value(values, MEDIAN_AGE), FALLBACK_MEDIAN_AGE),
        median_income=_or_fallback(_get_value(values, MEDIAN_INCOME), FALLBACK_MEDIAN_INCOME),
        education_levels=EducationLevels(
            less_high_school=education_percent(NO_SCHOOLING, 'less_high_school'),
            high_school=education_percent(HIGH_SCHOOL, 'high_school'),
            some_college=SOME_COLLEGE_PERCENT,
            bachelors=education_percent(BACHELORS, 'bachelors'),
            graduate=education_percent(MASTERS, 'graduate'),
        ),
        household_size=_or_fallback(household_size, FALLBACK_HOUSEHOLD_SIZE),
        marital_status=MaritalStatusBreakdown(**FIXED_MARITAL_STATUS),
    )


def fetch_baseline(location: Location, client: CensusClient) -> CensusBaseline:
    """
    Fetch and normalize the census baseline for a location.

    Args:
        location: Profile location (state may be a name, abbreviation or FIPS code)
        client: CensusClient used for the request

    Returns:
        CensusBaseline; the fallback baseline if the census source fails

    Raises:
        InvalidLocation: if location.state cannot be resolved
    """
    state_code: Optional[str] = None
    if location.state:
        state_code = resolve_state_code(location.state)
        logger.info(f"Census baseline for {state_name(state_code)} ({state_code})")

    try:
        raw_rows = client.fetch(
            state_code,
            city=location.city or None,
            zip_code=location.zip_code or None
        )
    except CensusAPIError as e:
        logger.warning(f"Census API unavailable ({e}), using fallback baseline")
        return CensusBaseline.fallback()

    return normalize_census_data(raw_rows)
