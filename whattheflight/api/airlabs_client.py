"""
AirLabs API client.

AirLabs is the preferred source because its flight records already carry
the departure and arrival airports. It needs an API key.
"""

import logging
from typing import List, Dict, Any, Optional

from whattheflight.api.api_pool import APIConnectionPool
from whattheflight.api.providers import AircraftProvider, BoundingBox, ProviderError
from whattheflight.utils.config import Config

logger = logging.getLogger(__name__)

FEET_TO_METERS = 0.3048
KNOTS_TO_MPS = 0.514444
FPM_TO_MPS = 0.00508


def parse_flight(flight: Dict[str, Any]) -> Dict[str, Any]:
    """Convert an AirLabs flight object into a normalized aircraft record."""
    speed = flight.get('speed')
    v_speed = flight.get('v_speed')

    return {
        'icao24': flight.get('hex') or flight.get('icao_24') or 'unknown',
        'callsign': (flight.get('flight_icao') or flight.get('flight_iata') or '').strip() or 'Unknown',
        'origin_country': flight.get('flag') or '',
        'latitude': flight.get('lat'),
        'longitude': flight.get('lng'),
        'altitude_m': (flight.get('alt') or 0) * FEET_TO_METERS,
        'on_ground': False,
        'velocity': speed * KNOTS_TO_MPS if speed else None,
        'heading': flight.get('dir'),
        'vertical_rate': v_speed * FPM_TO_MPS if v_speed else None,
        'registration': flight.get('reg_number'),
        'aircraft_type': flight.get('aircraft_icao'),
        'operator': flight.get('airline_name'),
        'origin': flight.get('dep_iata') or flight.get('dep_icao'),
        'origin_name': flight.get('dep_city'),
        'destination': flight.get('arr_iata') or flight.get('arr_icao'),
        'destination_name': flight.get('arr_city'),
        'squawk': flight.get('squawk'),
    }


class AirLabsClient(AircraftProvider):
    """Client for the AirLabs flights and airports endpoints."""

    name = 'airlabs'

    def __init__(self, pool: APIConnectionPool, api_key: str = Config.AIRLABS_KEY,
                 base_url: str = Config.AIRLABS_API_URL,
                 timeout: float = Config.FETCH_TIMEOUT):
        self.pool = pool
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def fetch_aircraft(self, bbox: BoundingBox) -> List[Dict[str, Any]]:
        """
        Fetch live flights within a bounding box.

        Args:
            bbox: Tuple of (min_lat, max_lat, min_lon, max_lon)

        Returns:
            List of normalized aircraft records
        """
        if not self.is_configured():
            raise ProviderError(self.name, "no API key configured")

        # AirLabs wants SW lat, SW lng, NE lat, NE lng
        bbox_param = f"{bbox[0]},{bbox[2]},{bbox[1]},{bbox[3]}"
        data = self._get_json(
            self.pool,
            f"{self.base_url}/flights",
            params={'api_key': self.api_key, 'bbox': bbox_param},
            timeout=self.timeout
        )

        if not isinstance(data, dict):
            raise ProviderError(self.name, f"unexpected response format: {type(data).__name__}")
        # Bad keys and exhausted quotas come back as 200 with an error object
        error = data.get('error')
        if error and not data.get('response'):
            message = error.get('message', 'unknown error') if isinstance(error, dict) else str(error)
            raise ProviderError(self.name, message)

        flights = data.get('response') or []
        logger.info(f"Received {len(flights)} flights from AirLabs")
        return [parse_flight(flight) for flight in flights]

    def lookup_airport(self, code: str) -> Optional[Dict[str, str]]:
        """
        Look up an airport by IATA code.

        Returns:
            Dictionary with name and city, or None if not found
        """
        if not self.is_configured():
            return None

        data = self._get_json(
            self.pool,
            f"{self.base_url}/airports",
            params={'api_key': self.api_key, 'iata_code': code},
            timeout=self.timeout
        )

        if not isinstance(data, dict):
            raise ProviderError(self.name, f"unexpected response format: {type(data).__name__}")

        airports = data.get('response')
        if not airports:
            return None
        if not isinstance(airports, list) or not isinstance(airports[0], dict):
            raise ProviderError(self.name, "malformed airport response")

        airport = airports[0]
        return {
            'name': airport.get('name') or code,
            'city': airport.get('city') or airport.get('country_code') or '',
        }
