"""
Pytest fixtures for API and pipeline testing.
"""

import pytest
from fastapi.testclient import TestClient

from api.config import Settings
from twin.census_client import CensusAPIError, CensusClient
from twin.models import DemographicProfile, Location


# Header + one data row in the shape the ACS API returns
CENSUS_HEADER = [
    'NAME', 'B01002_001E', 'B19013_001E', 'B15003_001E', 'B15003_002E',
    'B15003_017E', 'B15003_022E', 'B15003_023E', 'B11001_001E',
    'B11001_002E', 'B11001_007E', 'B12001_001E', 'state'
]
CENSUS_ROW = [
    'California', '36.5', '75235', '26000000', '1300000',
    '5200000', '5720000', '2340000', '13000000',
    '8970000', '4030000', '31000000', '06'
]


class StubCensusClient(CensusClient):
    """CensusClient that never touches the network"""

    def __init__(self, rows=None, error: CensusAPIError = None):
        super().__init__(api_key='test-key')
        self.rows = rows
        self.error = error
        self.calls = []

    def fetch(self, state_code, city=None, zip_code=None):
        self.calls.append((state_code, city, zip_code))
        # Keep the real geography validation
        self.build_params(state_code, city, zip_code)
        if self.error is not None:
            raise self.error
        return self.rows


# Override settings for testing
def get_settings_override():
    return Settings(
        debug=True,
        census_api_key='test-key',
    )


@pytest.fixture
def census_rows():
    """Raw census rows for California"""
    return [list(CENSUS_HEADER), list(CENSUS_ROW)]


@pytest.fixture
def stub_census(census_rows):
    """Stub client returning the California rows"""
    return StubCensusClient(rows=census_rows)


@pytest.fixture
def failing_census():
    """Stub client whose census source is down"""
    return StubCensusClient(error=CensusAPIError("Census API request failed", status_code=503))


@pytest.fixture
def profile():
    """A mid-career profile in California"""
    return DemographicProfile(
        age=35,
        income=60000,
        location=Location(state='CA'),
        education="Bachelor's Degree",
        occupation='Nurse',
        household_size=3,
        marital_status='Married',
    )


@pytest.fixture
def client(stub_census):
    """
    FastAPI test client.
    """
    # Override settings and the census source
    from api.main import app
    from api.dependencies import get_census_client, get_settings

    app.dependency_overrides[get_settings] = get_settings_override
    app.dependency_overrides[get_census_client] = lambda: stub_census

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
