"""
OpenSky Network API client for fetching real-time flight data.

Anonymous access only. Used as the fallback when AirLabs is not configured
or fails.
"""

import logging
from typing import List, Dict, Any, Optional

from whattheflight.api.api_pool import APIConnectionPool
from whattheflight.api.providers import AircraftProvider, BoundingBox, ProviderError
from whattheflight.utils.config import Config

logger = logging.getLogger(__name__)

# Minimum length of an OpenSky state vector (up to position_source)
STATE_VECTOR_LENGTH = 17


def parse_state_vector(state: List[Any]) -> Optional[Dict[str, Any]]:
    """
    Convert a raw OpenSky state array into a normalized aircraft record.

    Altitude prefers the geometric altitude and falls back to the
    barometric one, then to 0.

    Returns:
        Normalized record, or None if the array is too short
    """
    if len(state) < STATE_VECTOR_LENGTH:
        return None

    geo_altitude = state[13]
    baro_altitude = state[7]
    if geo_altitude is not None:
        altitude = geo_altitude
    elif baro_altitude is not None:
        altitude = baro_altitude
    else:
        altitude = 0

    return {
        'icao24': state[0],
        'callsign': (state[1] or '').strip() or 'Unknown',
        'origin_country': state[2] or '',
        'longitude': state[5],
        'latitude': state[6],
        'altitude_m': float(altitude),
        'on_ground': bool(state[8]),
        'velocity': state[9],
        'heading': state[10],
        'vertical_rate': state[11],
        'squawk': state[14],
    }


class OpenSkyClient(AircraftProvider):
    """Client for the OpenSky Network /states/all endpoint."""

    name = 'opensky'

    def __init__(self, pool: APIConnectionPool, base_url: str = Config.OPENSKY_API_URL,
                 timeout: float = Config.FETCH_TIMEOUT):
        self.pool = pool
        self.base_url = base_url
        self.timeout = timeout
        self.last_response_time: Optional[float] = None

    def fetch_aircraft(self, bbox: BoundingBox) -> List[Dict[str, Any]]:
        """
        Fetch aircraft state vectors within a bounding box.

        Args:
            bbox: Tuple of (min_lat, max_lat, min_lon, max_lon)

        Returns:
            List of normalized aircraft records
        """
        params = {
            'lamin': bbox[0],
            'lamax': bbox[1],
            'lomin': bbox[2],
            'lomax': bbox[3]
        }

        logger.info(f"Fetching state vectors with bbox: min_lat={bbox[0]:.4f}, max_lat={bbox[1]:.4f}, "
                    f"min_lon={bbox[2]:.4f}, max_lon={bbox[3]:.4f}")

        data = self._get_json(self.pool, f"{self.base_url}/states/all",
                              params=params, timeout=self.timeout)

        if not isinstance(data, dict):
            raise ProviderError(self.name, f"unexpected response format: {type(data).__name__}")

        self.last_response_time = data.get('time')

        # null states just means nothing in the box
        states = data.get('states') or []

        aircraft_list = []
        for state in states:
            record = parse_state_vector(state)
            if record is not None:
                aircraft_list.append(record)

        logger.info(f"Received {len(aircraft_list)} states from OpenSky")
        return aircraft_list
