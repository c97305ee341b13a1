#!/usr/bin/env python3
"""
Digital Twin Description Script
Builds a demographic twin from a plain-English description (or a saved
profile) and prints it

Pipeline:
1. infer_demographics      → complete profile (defaults fill the gaps)
2. validate_demographics   → census comparison insights
3. generate_persona        → lifestyle traits and spending habits

Usage:
    # Compare against live Census data
    python describe_twin.py "A 42-year-old married teacher earning $58k in Ohio"

    # With an API key (or use CENSUS_API_KEY environment variable)
    python describe_twin.py "A 28-year-old nurse in TX" --census-api-key YOUR_KEY

    # Offline, against the fallback baseline
    python describe_twin.py "A 67-year-old widow in Florida" --offline

    # From a profile saved by the web client (camelCase keys accepted)
    python describe_twin.py --profile-json profile.json
"""

import argparse
import json
import logging
import sys

from twin.census_client import CensusClient, DEFAULT_DATASET, DEFAULT_YEAR
from twin.extractor import extract_demographic_info, infer_demographics
from twin.insights import compare_demographics, validate_demographics
from twin.models import CensusBaseline, DemographicProfile, ValidationResult
from twin.persona import generate_persona
from twin.scenarios import SCENARIO_TYPES, apply_scenario

logger = logging.getLogger(__name__)


def analyze_profile(
    profile: DemographicProfile,
    client: CensusClient = None,
    scenario: str = None,
    adjustments: dict = None
) -> dict:
    """
    Compare a profile with census data and build its persona.

    Args:
        profile: Complete demographic profile
        client: CensusClient, or None to compare against the fallback baseline
        scenario: Optional scenario type applied to the profile first
        adjustments: Scenario adjustments

    Returns:
        Dictionary with profile, validation and persona sections
    """
    if scenario:
        profile = apply_scenario(profile, scenario, **(adjustments or {}))

    if client is None:
        result = ValidationResult(insights=compare_demographics(profile, CensusBaseline.fallback()))
    else:
        result = validate_demographics(profile, client)

    persona = generate_persona(profile)

    return {
        'profile': profile.to_dict(),
        'validation': result.to_dict(),
        'persona': persona.to_dict(),
    }


def describe(text: str, client: CensusClient = None, scenario: str = None, adjustments: dict = None) -> dict:
    """
    Run the full twin pipeline on a description.

    Returns:
        analyze_profile() output plus the raw extraction
    """
    extracted = extract_demographic_info(text)
    profile = infer_demographics(text)
    logger.info(f"Extraction confidence: {extracted.confidence:.2f}")

    return {
        'extracted': extracted.to_dict(),
        **analyze_profile(profile, client, scenario, adjustments),
    }


def load_profile(path: str) -> DemographicProfile:
    """Load a profile from a JSON file in either snake_case or camelCase form"""
    with open(path, encoding='utf-8') as f:
        data = json.load(f)
    logger.info(f"Loaded profile from {path}")
    return DemographicProfile.from_dict(data)


def _parse_adjustment(value: str):
    key, _, raw = value.partition('=')
    if not raw:
        raise argparse.ArgumentTypeError(f"Adjustment must look like key=value, got '{value}'")
    try:
        return key, float(raw)
    except ValueError:
        return key, raw


def main():
    parser = argparse.ArgumentParser(
        description='Build a demographic digital twin from a text description',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python describe_twin.py "A 35-year-old making $50,000 in CA"

  # What-if: same person earning 50% more
  python describe_twin.py "A 35-year-old making $50,000 in CA" \\
      --scenario income_change --adjust income_multiplier=1.5

  # What-if: moving to New York with a 1.3x cost of living
  python describe_twin.py "A 35-year-old making $50,000 in CA" \\
      --scenario location_change --adjust new_state=NY --adjust cost_of_living_adjustment=1.3

  # Saved profile (snake_case or camelCase keys)
  python describe_twin.py --profile-json profile.json --offline
        """
    )

    parser.add_argument('text', type=str, nargs='?',
                        help='Plain-English description of the person')
    parser.add_argument('--profile-json', type=str, metavar='PATH',
                        help='Read a complete profile from a JSON file instead of text')
    parser.add_argument('--census-api-key', type=str,
                        help='Census API key (or use CENSUS_API_KEY env var)')
    parser.add_argument('--year', type=str, default=DEFAULT_YEAR,
                        help=f'ACS vintage (default: {DEFAULT_YEAR})')
    parser.add_argument('--dataset', type=str, default=DEFAULT_DATASET,
                        help=f'ACS dataset (default: {DEFAULT_DATASET})')
    parser.add_argument('--offline', action='store_true',
                        help='Skip the Census API and compare against the fallback baseline')
    parser.add_argument('--scenario', type=str, choices=list(SCENARIO_TYPES.keys()),
                        help='Apply a what-if scenario before comparing')
    parser.add_argument('--adjust', type=_parse_adjustment, action='append', default=[],
                        metavar='KEY=VALUE', help='Scenario adjustment (repeatable)')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: INFO)')

    args = parser.parse_args()

    if bool(args.text) == bool(args.profile_json):
        parser.error('Provide exactly one of a description or --profile-json')

    logging.basicConfig(
        level=args.log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )

    client = None
    if not args.offline:
        client = CensusClient(api_key=args.census_api_key, year=args.year, dataset=args.dataset)

    try:
        if args.profile_json:
            output = analyze_profile(load_profile(args.profile_json), client, args.scenario, dict(args.adjust))
        else:
            output = describe(args.text, client, args.scenario, dict(args.adjust))
    except (OSError, KeyError, ValueError) as e:
        logger.error(f"✗ {e}")
        sys.exit(1)

    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
