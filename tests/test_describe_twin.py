"""
Tests for the describe_twin script.
"""

import json
import sys
from pathlib import Path

import pytest

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'scripts'))

import describe_twin  # noqa: E402


def test_describe_offline():
    output = describe_twin.describe("A 42-year-old married teacher earning $58k in Ohio")

    assert output['profile']['age'] == 42
    assert output['profile']['marital_status'] == 'Married'
    assert output['profile']['income'] == 58000
    assert output['validation']['insights']['income_comparison'] == (
        "Income is below the median income ($75,000) for this area"
    )
    assert len(output['persona']['spending_habits']) == 7


def test_describe_with_scenario(stub_census):
    output = describe_twin.describe(
        "A 35-year-old making $50,000 in CA",
        client=stub_census,
        scenario='income_change',
        adjustments={'income_multiplier': 2.0}
    )

    assert output['extracted']['income'] == 50000
    assert output['profile']['income'] == 100000
    assert "above the median income ($75,235)" in output['validation']['insights']['income_comparison']


def test_parse_adjustment():
    assert describe_twin._parse_adjustment('income_multiplier=1.5') == ('income_multiplier', 1.5)
    assert describe_twin._parse_adjustment('new_state=NY') == ('new_state', 'NY')


def test_main_prints_json(monkeypatch, capsys):
    monkeypatch.setattr(sys, 'argv', ['describe_twin.py', 'A 22-year-old in TX', '--offline'])

    describe_twin.main()

    out = capsys.readouterr().out
    assert '"age": 22' in out
    assert '"state": "TX"' in out


def test_main_rejects_bad_scenario(monkeypatch):
    monkeypatch.setattr(sys, 'argv', [
        'describe_twin.py', 'A 22-year-old in TX', '--offline',
        '--scenario', 'income_change', '--adjust', 'income_multiplier=9'
    ])

    with pytest.raises(SystemExit) as exc:
        describe_twin.main()
    assert exc.value.code == 1


def test_load_profile_accepts_camel_case(tmp_path):
    path = tmp_path / 'profile.json'
    path.write_text(json.dumps({
        'age': 58,
        'income': 92000,
        'location': {'state': 'WA', 'city': 'Spokane', 'zipCode': '99201'},
        'education': "Master's Degree",
        'householdSize': 2,
        'maritalStatus': 'Married',
    }))

    profile = describe_twin.load_profile(str(path))

    assert profile.location.zip_code == '99201'
    assert profile.household_size == 2
    assert profile.marital_status == 'Married'


def test_main_with_profile_json(monkeypatch, capsys, tmp_path):
    path = tmp_path / 'profile.json'
    path.write_text(json.dumps({'age': 40, 'income': 80000, 'maritalStatus': 'Divorced'}))
    monkeypatch.setattr(sys, 'argv', ['describe_twin.py', '--profile-json', str(path), '--offline'])

    describe_twin.main()

    output = json.loads(capsys.readouterr().out)
    assert 'extracted' not in output
    assert output['profile']['marital_status'] == 'Divorced'
    assert output['validation']['insights']['investment_potential'].startswith(
        "Investment capacity: Moderate"
    )


def test_main_rejects_invalid_profile_json(monkeypatch, tmp_path):
    path = tmp_path / 'profile.json'
    path.write_text(json.dumps({'age': 200, 'income': 80000}))
    monkeypatch.setattr(sys, 'argv', ['describe_twin.py', '--profile-json', str(path), '--offline'])

    with pytest.raises(SystemExit) as exc:
        describe_twin.main()
    assert exc.value.code == 1


def test_main_requires_one_input(monkeypatch):
    monkeypatch.setattr(sys, 'argv', ['describe_twin.py', '--offline'])

    with pytest.raises(SystemExit) as exc:
        describe_twin.main()
    assert exc.value.code == 2
