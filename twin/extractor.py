"""
Natural-language demographic extraction.

Pulls age, state, marital status, education and income out of a free-text
description using regular expressions and keyword tables, scores how much
was found directly, then backfills a few fields from age-based heuristics.

Confidence scoring:
- Start at (directly matched fields) / 5
- Multiply by 0.8 for every field a heuristic fills in, in order:
  education, income, marital status
"""

import logging
import re
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Sequence

from .models import (
    DemographicProfile, EducationLevel, ExtractedInfo, Location,
    MaritalStatus, MAX_AGE, MIN_AGE
)

logger = logging.getLogger(__name__)


# =============================================================================
# PATTERNS
# =============================================================================

AGE_PATTERNS = (
    re.compile(r'(\d+)(?:\s*(?:year|yr)s?)?(?:\s*old)?', re.IGNORECASE),
    re.compile(r'age(?:\s*:)?\s*(\d+)', re.IGNORECASE),
)

_STATE_NAMES = (
    'alabama', 'alaska', 'arizona', 'arkansas', 'california', 'colorado',
    'connecticut', 'delaware', 'florida', 'georgia', 'hawaii', 'idaho',
    'illinois', 'indiana', 'iowa', 'kansas', 'kentucky', 'louisiana', 'maine',
    'maryland', 'massachusetts', 'michigan', 'minnesota', 'mississippi',
    'missouri', 'montana', 'nebraska', 'nevada', 'new hampshire', 'new jersey',
    'new mexico', 'new york', 'north carolina', 'north dakota', 'ohio',
    'oklahoma', 'oregon', 'pennsylvania', 'rhode island', 'south carolina',
    'south dakota', 'tennessee', 'texas', 'utah', 'vermont', 'virginia',
    'washington', 'west virginia', 'wisconsin', 'wyoming',
)

_STATE_ABBREVIATIONS = (
    'AL', 'AK', 'AZ', 'AR', 'CA', 'CO', 'CT', 'DE', 'FL', 'GA', 'HI', 'ID',
    'IL', 'IN', 'IA', 'KS', 'KY', 'LA', 'ME', 'MD', 'MA', 'MI', 'MN', 'MS',
    'MO', 'MT', 'NE', 'NV', 'NH', 'NJ', 'NM', 'NY', 'NC', 'ND', 'OH', 'OK',
    'OR', 'PA', 'RI', 'SC', 'SD', 'TN', 'TX', 'UT', 'VT', 'VA', 'WA', 'WV',
    'WI', 'WY',
)

# Full names are case-insensitive; abbreviations must be uppercase
STATE_PATTERNS = (
    re.compile(
        r'\b(' + '|'.join(name.replace(' ', r'\s+') for name in _STATE_NAMES) + r')\b',
        re.IGNORECASE,
    ),
    re.compile(r'\b(' + '|'.join(_STATE_ABBREVIATIONS) + r')\b'),
)

_AMOUNT = r'(\d+(?:,\d{3})*(?:\.\d{2})?)'
_SUFFIX = r'(?:\s*(thousand|million|k|m)\b)?'

INCOME_PATTERNS = (
    re.compile(r'(?:earn|make|income|salary)\s*(?:of|:)?\s*\$?' + _AMOUNT + _SUFFIX, re.IGNORECASE),
    re.compile(r'\$' + _AMOUNT + _SUFFIX + r'(?:\s*(?:per|a|/)\s*(?:year|yr|annually))?', re.IGNORECASE),
)


# =============================================================================
# KEYWORD TABLES (order matters: ties go to the first category seen)
# =============================================================================

MARITAL_STATUS_KEYWORDS: Mapping[str, Sequence[str]] = MappingProxyType({
    'single': ('single', 'never married', 'bachelor', 'unmarried', 'no wife', 'no husband'),
    'married': ('married', 'wife', 'husband', 'spouse'),
    'divorced': ('divorced', 'separated', 'ex-wife', 'ex-husband'),
    'widowed': ('widowed', 'widow', 'widower'),
    'separated': ('separated',),
})

EDUCATION_KEYWORDS: Mapping[str, Sequence[str]] = MappingProxyType({
    EducationLevel.LESS_THAN_HS.value: ('dropout', 'no diploma', 'no degree', 'elementary', 'middle school'),
    EducationLevel.HIGH_SCHOOL.value: ('high school', 'hs diploma', 'ged'),
    EducationLevel.SOME_COLLEGE.value: ('some college', 'associate', 'trade school', 'vocational'),
    EducationLevel.BACHELORS.value: ('bachelor', 'college', 'university', 'undergrad'),
    EducationLevel.MASTERS.value: ('master', 'graduate', 'phd', 'doctorate', 'professional degree'),
})

INCOME_MULTIPLIERS = {
    'k': 1_000,
    'thousand': 1_000,
    'm': 1_000_000,
    'million': 1_000_000,
}

# Applied to the running confidence each time a heuristic fills a field
INFERENCE_PENALTY = 0.8

# Literal defaults used by infer_demographics
DEFAULT_AGE = 35
DEFAULT_MARITAL_STATUS = MaritalStatus.SINGLE.value
DEFAULT_EDUCATION = EducationLevel.HIGH_SCHOOL.value
DEFAULT_INCOME = 50000


class KeywordMatch(NamedTuple):
    value: str
    confidence: float


def find_best_match(text: str, keywords: Mapping[str, Sequence[str]]) -> KeywordMatch:
    """
    Pick the category whose keyword phrase covers the largest share of the text.

    Confidence for a phrase is len(phrase) / len(text). Only a strictly
    greater confidence replaces the current best, so ties keep the first
    category in table order.

    Returns:
        KeywordMatch with value '' and confidence 0 when nothing matched
    """
    best = KeywordMatch('', 0.0)
    lowered = text.lower()

    for value, phrases in keywords.items():
        for phrase in phrases:
            if phrase in lowered:
                confidence = len(phrase) / len(text)
                if confidence > best.confidence:
                    best = KeywordMatch(value, confidence)

    return best


def normalize_income(amount: str, modifier: Optional[str] = None) -> float:
    """
    Convert a matched amount like '50,000' or '75' + 'k' to dollars.

    Args:
        amount: digits with optional thousands separators and cents
        modifier: optional suffix ('k', 'thousand', 'm', 'million')
    """
    value = float(amount.replace(',', ''))
    if modifier:
        value *= INCOME_MULTIPLIERS.get(modifier.lower(), 1)
    return value


def _first_group(patterns, text: str) -> Optional[re.Match]:
    for pattern in patterns:
        match = pattern.search(text)
        if match and match.group(1):
            return match
    return None


def extract_demographic_info(text: str) -> ExtractedInfo:
    """
    Extract whatever demographic fields can be found in free text.

    Never raises: fields that cannot be found are left as None.

    Args:
        text: Free-text description (e.g. "A 35-year-old making $50,000 in CA")

    Returns:
        ExtractedInfo with matched and inferred fields plus a confidence score
    """
    info = ExtractedInfo()
    text = text or ''

    # Age
    match = _first_group(AGE_PATTERNS, text)
    if match:
        info.age = int(match.group(1))

    # State
    match = _first_group(STATE_PATTERNS, text)
    if match:
        info.location.state = ' '.join(match.group(1).split())

    # Marital status and education
    if text:
        marital = find_best_match(text, MARITAL_STATUS_KEYWORDS)
        if marital.confidence > 0:
            info.marital_status = marital.value

        education = find_best_match(text, EDUCATION_KEYWORDS)
        if education.confidence > 0:
            info.education = education.value

    # Income
    match = _first_group(INCOME_PATTERNS, text)
    if match:
        info.income = normalize_income(match.group(1), match.group(2))

    # Zero age or income count as "not found", same as an absent field
    found = [
        info.age,
        info.location.state,
        info.marital_status,
        info.education,
        info.income,
    ]
    info.confidence = sum(1 for value in found if value) / 5

    _backfill_from_age(info)

    logger.debug(f"Extracted {info.to_dict()} from {len(text)} chars")
    return info


def _backfill_from_age(info: ExtractedInfo) -> None:
    """Fill gaps from age heuristics, decaying confidence per backfill"""
    if not info.education and info.age and info.age > 65:
        info.education = EducationLevel.HIGH_SCHOOL.value
        info.confidence *= INFERENCE_PENALTY

    if not info.income and info.age:
        if info.age < 25:
            info.income = 30000
        elif info.age < 35:
            info.income = 50000
        elif info.age < 50:
            info.income = 75000
        elif info.age < 65:
            info.income = 85000
        else:
            info.income = 45000  # retirement income
        info.confidence *= INFERENCE_PENALTY

    # Ages 35-75 are left unset by this rule
    if not info.marital_status and info.age:
        inferred = None
        if info.age < 25:
            inferred = 'single'
        elif info.age < 35:
            inferred = 'married'
        elif info.age > 75:
            inferred = 'widowed'
        if inferred:
            info.marital_status = inferred
            info.confidence *= INFERENCE_PENALTY


def infer_demographics(text: str) -> DemographicProfile:
    """
    Build a complete profile from free text.

    Runs extract_demographic_info, then fills every field that is still
    missing with a fixed default (age 35, Single, High School, $50,000,
    empty location). An extracted age outside 0-120 is treated as missing.
    """
    extracted = extract_demographic_info(text)

    age = extracted.age
    if age is not None and not MIN_AGE <= age <= MAX_AGE:
        logger.debug(f"Ignoring out-of-range age {age}")
        age = None

    marital_status = extracted.marital_status
    if marital_status:
        marital_status = marital_status.capitalize()

    return DemographicProfile(
        age=age or DEFAULT_AGE,
        income=extracted.income or DEFAULT_INCOME,
        location=Location(
            state=extracted.location.state or '',
            city=extracted.location.city or '',
            zip_code=extracted.location.zip_code or '',
        ),
        education=extracted.education or DEFAULT_EDUCATION,
        marital_status=marital_status or DEFAULT_MARITAL_STATUS,
    )
