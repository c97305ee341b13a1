"""
State/region resolution.

Maps free-form state names and postal abbreviations to the two-digit
FIPS codes used by the Census Bureau API.
"""

import re
from types import MappingProxyType
from typing import Mapping


class InvalidLocation(ValueError):
    """Raised when a state string cannot be resolved to a FIPS code"""


# FIPS state codes (50 states + DC)
STATE_CODES: Mapping[str, str] = MappingProxyType({
    'Alabama': '01',
    'Alaska': '02',
    'Arizona': '04',
    'Arkansas': '05',
    'California': '06',
    'Colorado': '08',
    'Connecticut': '09',
    'Delaware': '10',
    'District of Columbia': '11',
    'Florida': '12',
    'Georgia': '13',
    'Hawaii': '15',
    'Idaho': '16',
    'Illinois': '17',
    'Indiana': '18',
    'Iowa': '19',
    'Kansas': '20',
    'Kentucky': '21',
    'Louisiana': '22',
    'Maine': '23',
    'Maryland': '24',
    'Massachusetts': '25',
    'Michigan': '26',
    'Minnesota': '27',
    'Mississippi': '28',
    'Missouri': '29',
    'Montana': '30',
    'Nebraska': '31',
    'Nevada': '32',
    'New Hampshire': '33',
    'New Jersey': '34',
    'New Mexico': '35',
    'New York': '36',
    'North Carolina': '37',
    'North Dakota': '38',
    'Ohio': '39',
    'Oklahoma': '40',
    'Oregon': '41',
    'Pennsylvania': '42',
    'Rhode Island': '44',
    'South Carolina': '45',
    'South Dakota': '46',
    'Tennessee': '47',
    'Texas': '48',
    'Utah': '49',
    'Vermont': '50',
    'Virginia': '51',
    'Washington': '53',
    'West Virginia': '54',
    'Wisconsin': '55',
    'Wyoming': '56',
})

# Postal abbreviation to state name
STATE_ABBREVIATIONS: Mapping[str, str] = MappingProxyType({
    'AL': 'Alabama', 'AK': 'Alaska', 'AZ': 'Arizona', 'AR': 'Arkansas',
    'CA': 'California', 'CO': 'Colorado', 'CT': 'Connecticut',
    'DE': 'Delaware', 'DC': 'District of Columbia', 'FL': 'Florida',
    'GA': 'Georgia', 'HI': 'Hawaii', 'ID': 'Idaho', 'IL': 'Illinois',
    'IN': 'Indiana', 'IA': 'Iowa', 'KS': 'Kansas', 'KY': 'Kentucky',
    'LA': 'Louisiana', 'ME': 'Maine', 'MD': 'Maryland', 'MA': 'Massachusetts',
    'MI': 'Michigan', 'MN': 'Minnesota', 'MS': 'Mississippi', 'MO': 'Missouri',
    'MT': 'Montana', 'NE': 'Nebraska', 'NV': 'Nevada', 'NH': 'New Hampshire',
    'NJ': 'New Jersey', 'NM': 'New Mexico', 'NY': 'New York',
    'NC': 'North Carolina', 'ND': 'North Dakota', 'OH': 'Ohio',
    'OK': 'Oklahoma', 'OR': 'Oregon', 'PA': 'Pennsylvania',
    'RI': 'Rhode Island', 'SC': 'South Carolina', 'SD': 'South Dakota',
    'TN': 'Tennessee', 'TX': 'Texas', 'UT': 'Utah', 'VT': 'Vermont',
    'VA': 'Virginia', 'WA': 'Washington', 'WV': 'West Virginia',
    'WI': 'Wisconsin', 'WY': 'Wyoming',
})

_FIPS_PATTERN = re.compile(r'^\d{2}$')
_NAMES_BY_CODE = {code: name for name, code in STATE_CODES.items()}


def resolve_state_code(state: str) -> str:
    """
    Resolve a state name, abbreviation or FIPS code to a FIPS code.

    Args:
        state: e.g. 'California', 'california', 'CA', 'ca' or '06'

    Returns:
        Two-digit FIPS code (e.g. '06')

    Raises:
        InvalidLocation: if the input matches no known state
    """
    value = str(state).strip()

    # Already a FIPS code
    if _FIPS_PATTERN.match(value):
        return value

    upper = value.upper()
    if upper in STATE_ABBREVIATIONS:
        return STATE_CODES[STATE_ABBREVIATIONS[upper]]

    lower = value.lower()
    for name, code in STATE_CODES.items():
        if name.lower() == lower:
            return code

    raise InvalidLocation(
        f"Invalid state: {state}. Please use full state name or 2-letter abbreviation."
    )


def state_name(state: str) -> str:
    """
    Canonical state name for any input resolve_state_code accepts.

    Unassigned FIPS codes (e.g. '03') are returned unchanged.
    """
    code = resolve_state_code(state)
    return _NAMES_BY_CODE.get(code, code)
