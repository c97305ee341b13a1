"""
What-if scenarios.

Derives a new profile from an existing one by applying a single
declarative adjustment. The source profile is never modified.
"""

import logging
from typing import Dict

from .models import DemographicProfile, Location

logger = logging.getLogger(__name__)


# Adjustment definitions per scenario type: (min, max, default) for sliders,
# (options, default) for selects
SCENARIO_TYPES: Dict[str, dict] = {
    'income_change': {
        'label': 'Income Change',
        'description': 'Adjust income levels and analyze impact',
        'adjustments': {
            'income_multiplier': {'min': 0.5, 'max': 2.0, 'default': 1.0},
        },
    },
    'location_change': {
        'label': 'Location Change',
        'description': 'Analyze impact of moving to a different location',
        'adjustments': {
            'new_state': {'options': ['CA', 'NY', 'TX', 'FL', 'WA'], 'default': 'CA'},
            'cost_of_living_adjustment': {'min': 0.5, 'max': 2.0, 'default': 1.0},
        },
    },
}


def _resolve_adjustments(scenario_type: str, adjustments: dict) -> dict:
    """Validate adjustments against the scenario definition and fill defaults"""
    if scenario_type not in SCENARIO_TYPES:
        raise ValueError(
            f"Unknown scenario type '{scenario_type}'. "
            f"Available: {list(SCENARIO_TYPES.keys())}"
        )

    spec = SCENARIO_TYPES[scenario_type]['adjustments']
    unknown = set(adjustments) - set(spec)
    if unknown:
        raise ValueError(f"Unknown adjustments for {scenario_type}: {sorted(unknown)}")

    resolved = {}
    for key, config in spec.items():
        value = adjustments.get(key, config['default'])
        if 'options' in config:
            if value not in config['options']:
                raise ValueError(f"{key} must be one of {config['options']}, got {value!r}")
        else:
            value = float(value)
            if not config['min'] <= value <= config['max']:
                raise ValueError(
                    f"{key} must be between {config['min']} and {config['max']}, got {value}"
                )
        resolved[key] = value

    return resolved


def apply_scenario(profile: DemographicProfile, scenario_type: str, **adjustments) -> DemographicProfile:
    """
    Apply a what-if scenario to a profile.

    Args:
        profile: Source profile (left unchanged)
        scenario_type: 'income_change' or 'location_change'
        **adjustments: Scenario adjustments, e.g. income_multiplier=1.5

    Returns:
        New DemographicProfile with the adjustment applied

    Raises:
        ValueError: for unknown scenario types, unknown adjustments or
            out-of-range values
    """
    values = _resolve_adjustments(scenario_type, adjustments)

    if scenario_type == 'income_change':
        scenario = profile.replace(income=profile.income * values['income_multiplier'])
    else:
        # City and ZIP belong to the old state
        scenario = profile.replace(
            location=Location(state=values['new_state']),
            income=profile.income * values['cost_of_living_adjustment'],
        )

    logger.info(f"Applied {scenario_type} {values}: income {profile.income:,.0f} -> {scenario.income:,.0f}")
    return scenario
