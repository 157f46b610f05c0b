"""
Common interface for aircraft position providers.

Every provider turns its own wire format into the same normalized record:

    {
        'icao24': str, 'callsign': str, 'origin_country': str,
        'latitude': float | None, 'longitude': float | None,
        'altitude_m': float, 'on_ground': bool,
        'velocity': m/s | None, 'heading': deg | None, 'vertical_rate': m/s | None,
        # optional metadata
        'registration', 'aircraft_type', 'operator', 'origin', 'origin_name',
        'destination', 'destination_name', 'squawk'
    }

so the aircraft service never needs to know which backend answered.
"""

from typing import Any, Dict, List, Tuple

import requests

BoundingBox = Tuple[float, float, float, float]


class ProviderError(Exception):
    """Raised when a provider cannot deliver usable data."""

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.message = message


class AircraftProvider:
    """Base class for aircraft position sources."""

    name = 'provider'

    def is_configured(self) -> bool:
        """Whether this provider has what it needs (e.g. an API key)."""
        return True

    def fetch_aircraft(self, bbox: BoundingBox) -> List[Dict[str, Any]]:
        """
        Fetch normalized aircraft records inside a bounding box.

        Args:
            bbox: Tuple of (min_lat, max_lat, min_lon, max_lon)

        Returns:
            List of normalized aircraft dictionaries (possibly empty)

        Raises:
            ProviderError: If the provider failed to answer
        """
        raise NotImplementedError

    def _get_json(self, pool, url: str, **kwargs) -> Any:
        """GET a URL through the pool and decode JSON, mapping failures to ProviderError."""
        try:
            response = pool.get(url, **kwargs)
        except requests.exceptions.Timeout as e:
            raise ProviderError(self.name, f"request timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            raise ProviderError(self.name, f"request failed: {e}") from e

        if not response.ok:
            raise ProviderError(self.name, f"API error: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(self.name, f"invalid JSON: {e}") from e
