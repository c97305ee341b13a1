"""
US Census Bureau ACS API client.

Fetches the raw header + data rows that census.normalize_census_data
turns into a CensusBaseline.
"""

import os
import logging
from typing import List, Optional

import requests

logger = logging.getLogger(__name__)


CENSUS_API_BASE = "https://api.census.gov/data"
DEFAULT_YEAR = "2019"
DEFAULT_DATASET = "acs/acs5"

# Variables requested for every query
CENSUS_VARIABLES = {
    'NAME': 'area_name',
    'B01002_001E': 'median_age',
    'B19013_001E': 'median_household_income',
    'B15003_001E': 'education_total',
    'B15003_002E': 'no_schooling',
    'B15003_017E': 'high_school_graduate',
    'B15003_022E': 'bachelors_degree',
    'B15003_023E': 'masters_degree',
    'B11001_001E': 'total_households',
    'B11001_002E': 'family_households',
    'B11001_007E': 'nonfamily_households',
    'B12001_001E': 'marital_status_total',
}


class CensusAPIError(RuntimeError):
    """Census source unavailable or returned something unusable"""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class CensusClient:
    """
    Thin wrapper around the ACS data API.

    Returns the API's own array-of-arrays shape: a header row of variable
    codes followed by one data row of string-encoded values.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        year: str = DEFAULT_YEAR,
        dataset: str = DEFAULT_DATASET,
        base_url: str = CENSUS_API_BASE,
        timeout: float = 30.0
    ):
        """
        Args:
            api_key: Census API key (falls back to CENSUS_API_KEY env var)
            year: ACS vintage (e.g. '2019')
            dataset: ACS dataset path (e.g. 'acs/acs5')
            base_url: API root
            timeout: Request timeout in seconds
        """
        self.api_key = api_key or os.getenv('CENSUS_API_KEY')
        self.year = str(year)
        self.dataset = dataset
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.year}/{self.dataset}"

    def build_params(
        self,
        state_code: Optional[str],
        city: Optional[str] = None,
        zip_code: Optional[str] = None
    ) -> dict:
        """
        Build query parameters with the geography predicate for a location.

        ZIP codes query the ZIP code tabulation area within the state,
        cities query all places in the state, otherwise the whole state.
        """
        params = {'get': ','.join(CENSUS_VARIABLES.keys())}

        if zip_code:
            if not state_code:
                raise CensusAPIError("State is required when querying by ZIP code", status_code=400)
            params['for'] = f"zip code tabulation area:{zip_code}"
            params['in'] = f"state:{state_code}"
        elif city and state_code:
            params['for'] = "place:*"
            params['in'] = f"state:{state_code}"
        elif state_code:
            params['for'] = f"state:{state_code}"
        else:
            raise CensusAPIError("No valid location provided", status_code=400)

        if self.api_key:
            params['key'] = self.api_key

        return params

    def fetch(
        self,
        state_code: Optional[str],
        city: Optional[str] = None,
        zip_code: Optional[str] = None
    ) -> List[List[str]]:
        """
        Fetch census rows for a location.

        Args:
            state_code: Two-digit FIPS code
            city: Optional city name (selects the matching place row)
            zip_code: Optional five-digit ZIP code

        Returns:
            [header_row, data_row]

        Raises:
            CensusAPIError: on network errors, HTTP errors or malformed data
        """
        params = self.build_params(state_code, city, zip_code)
        logger.info(f"Fetching Census data from {self.url} ({params['for']})")

        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise CensusAPIError(f"Census API request failed: {e}", status_code=503) from e

        if not response.ok:
            logger.error(f"Census API error response: {response.text}")
            raise CensusAPIError(
                f"Census API error: {response.status_code} - {response.text}",
                status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CensusAPIError("Invalid response format from Census API") from e

        if not isinstance(data, list) or len(data) < 2:
            raise CensusAPIError("Invalid data format received from Census API")

        header = data[0]
        if not isinstance(header, list) or not all(
            isinstance(row, list) and len(row) >= len(header) for row in data[1:]
        ):
            raise CensusAPIError("Invalid data format received from Census API")

        if city and not zip_code:
            return [header, self._select_place_row(header, data[1:], city)]
        return [header, data[1]]

    @staticmethod
    def _select_place_row(header: list, rows: list, city: str) -> list:
        """Pick the place whose NAME starts with the city, else the first row"""
        if 'NAME' not in header:
            return rows[0]

        name_idx = header.index('NAME')
        wanted = city.strip().lower()
        for row in rows:
            if str(row[name_idx]).lower().startswith(wanted):
                return row

        logger.warning(f"No place named '{city}' in response, using {rows[0][name_idx]}")
        return rows[0]
