"""
AeroDataBox (RapidAPI) client for looking up a flight's route by callsign.
"""

import logging
from typing import Any, Dict, List

from whattheflight.api.api_pool import APIConnectionPool
from whattheflight.utils.config import Config

logger = logging.getLogger(__name__)

RAPIDAPI_HOST = 'aerodatabox.p.rapidapi.com'


class RouteLookupError(Exception):
    """Raised when AeroDataBox answers with an error status."""

    def __init__(self, status_code: int):
        super().__init__(f"Lookup failed: {status_code}")
        self.status_code = status_code


class AeroDataBoxClient:
    """Thin wrapper around the AeroDataBox callsign endpoint."""

    def __init__(self, pool: APIConnectionPool, api_key: str = Config.RAPIDAPI_KEY,
                 base_url: str = Config.AERODATABOX_API_URL,
                 timeout: float = Config.FETCH_TIMEOUT):
        self.pool = pool
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def fetch_flights_by_callsign(self, callsign: str) -> List[Dict[str, Any]]:
        """
        Fetch flights matching a callsign.

        Args:
            callsign: Normalized (upper case) ATC callsign, e.g. 'BAW123'

        Returns:
            List of AeroDataBox flight objects, most relevant first

        Raises:
            RouteLookupError: On a non-2xx response
            requests.exceptions.RequestException: On network failure
        """
        headers = {
            'X-RapidAPI-Key': self.api_key,
            'X-RapidAPI-Host': RAPIDAPI_HOST,
        }

        logger.info(f"Looking up route for {callsign} on AeroDataBox")
        response = self.pool.get(f"{self.base_url}/flights/callsign/{callsign}",
                                 headers=headers, timeout=self.timeout)

        if not response.ok:
            logger.warning(f"AeroDataBox returned {response.status_code} for {callsign}")
            raise RouteLookupError(response.status_code)

        # 204 means no flights for this callsign
        if response.status_code == 204 or not response.content:
            return []

        data = response.json()
        return data if isinstance(data, list) else []
