"""
Tests for state resolution.
"""

import pytest

from twin.states import (
    STATE_ABBREVIATIONS, STATE_CODES, InvalidLocation, resolve_state_code, state_name
)


@pytest.mark.parametrize("state", ["California", "california", "CALIFORNIA", "CA", "ca", "06", " CA "])
def test_resolve_california_forms(state):
    """Names, abbreviations and FIPS codes resolve case-insensitively"""
    assert resolve_state_code(state) == "06"


def test_resolve_multi_word_name():
    assert resolve_state_code("new york") == "36"
    assert resolve_state_code("District of Columbia") == "11"
    assert resolve_state_code("DC") == "11"


def test_fips_code_returned_unchanged():
    """Any two-digit string is accepted as a FIPS code"""
    assert resolve_state_code("48") == "48"
    assert resolve_state_code("03") == "03"


def test_invalid_state_raises():
    with pytest.raises(InvalidLocation) as exc:
        resolve_state_code("Atlantis")

    assert str(exc.value) == (
        "Invalid state: Atlantis. Please use full state name or 2-letter abbreviation."
    )


@pytest.mark.parametrize("state", ["", "C", "123", "XX"])
def test_malformed_states_raise(state):
    with pytest.raises(InvalidLocation):
        resolve_state_code(state)


def test_invalid_location_is_value_error():
    """Callers that handle ValueError also handle bad states"""
    assert issubclass(InvalidLocation, ValueError)


def test_tables_cover_states_and_dc():
    assert len(STATE_CODES) == 51
    assert len(STATE_ABBREVIATIONS) == 51
    assert all(name in STATE_CODES for name in STATE_ABBREVIATIONS.values())
    assert len(set(STATE_CODES.values())) == 51


def test_state_name():
    assert state_name("tx") == "Texas"
    assert state_name("53") == "Washington"
    assert state_name("03") == "03"


@pytest.mark.parametrize("state", ["Texas", "tx", "48", "Rhode Island", "wy"])
def test_resolution_is_idempotent(state):
    code = resolve_state_code(state)
    assert resolve_state_code(code) == code


def test_error_mentions_input():
    with pytest.raises(InvalidLocation, match="Zanzibar"):
        resolve_state_code("Zanzibar")
