"""
Flight route lookup by callsign.

The first three characters of an airline callsign are the operator's ICAO
designator, so even without a route we can usually name the airline.
Routes come from AeroDataBox and are cached for an hour.
"""

import logging
from typing import Any, Dict, Optional

import requests

from whattheflight.api.aerodatabox_client import AeroDataBoxClient, RouteLookupError
from whattheflight.core.exceptions import ValidationError
from whattheflight.models import RouteInfo
from whattheflight.utils.cache import TTLCache, normalize_code
from whattheflight.utils.config import Config
from whattheflight.utils.lookup_tables import get_airline_name

logger = logging.getLogger(__name__)


def split_callsign(callsign: str) -> tuple:
    """Split 'BAW123' into ('BAW', '123')."""
    return callsign[:3], callsign[3:]


def _airport_code(airport: Dict[str, Any]) -> Optional[str]:
    return airport.get('iata') or airport.get('icao')


def _endpoint_airport(flight: Dict[str, Any], key: str) -> Dict[str, Any]:
    """The 'airport' object under departure/arrival, or {} if absent or malformed."""
    endpoint = flight.get(key)
    airport = endpoint.get('airport') if isinstance(endpoint, dict) else None
    return airport if isinstance(airport, dict) else {}


class RouteService:
    """Resolves callsigns to origin, destination and airline."""

    def __init__(self, client: AeroDataBoxClient,
                 cache: Optional[TTLCache] = None):
        self.client = client
        self.cache = cache or TTLCache(
            max_size=500,
            default_ttl=Config.ROUTE_CACHE_TTL,
            name='route cache'
        )

    def lookup(self, callsign: str) -> RouteInfo:
        """
        Look up the route for a callsign.

        Never raises on network failure: the answer degrades to the airline
        name (from the static table) plus an error string.

        Raises:
            ValidationError: If the callsign is empty
        """
        callsign = normalize_code(callsign or '')
        if not callsign:
            raise ValidationError("Callsign required")

        cached = self.cache.get(callsign)
        if cached is not None:
            logger.debug(f"Using cached route for {callsign}")
            return RouteInfo(
                origin=cached.origin,
                destination=cached.destination,
                airline=cached.airline,
                cached=True,
            )

        airline_icao, flight_number = split_callsign(callsign)
        airline = get_airline_name(airline_icao)

        if not self.client.is_configured():
            return RouteInfo(airline=airline, flight_number=flight_number,
                             error="Route lookup not configured")

        try:
            flights = self.client.fetch_flights_by_callsign(callsign)
        except RouteLookupError as e:
            return RouteInfo(airline=airline, flight_number=flight_number, error=str(e))
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Route lookup error for {callsign}: {e}")
            return RouteInfo(airline=airline, flight_number=flight_number, error=str(e))

        if not flights:
            return RouteInfo(airline=airline, flight_number=flight_number, not_found=True)

        flight = flights[0]
        if not isinstance(flight, dict):
            logger.error(f"Malformed route response for {callsign}: {type(flight).__name__}")
            return RouteInfo(airline=airline, flight_number=flight_number,
                             error="Malformed route response")

        departure = _endpoint_airport(flight, 'departure')
        arrival = _endpoint_airport(flight, 'arrival')
        operator = flight.get('airline')

        route = RouteInfo(
            origin=_airport_code(departure),
            origin_name=departure.get('name'),
            destination=_airport_code(arrival),
            destination_name=arrival.get('name'),
            airline=(operator.get('name') if isinstance(operator, dict) else None) or airline,
            flight_number=flight.get('number') or flight_number,
        )

        if route.origin and route.destination:
            self.cache.set(callsign, route)
            logger.info(f"Route for {callsign}: {route.origin} -> {route.destination}")

        return route

    def close(self) -> None:
        """Drop cached routes."""
        self.cache.clear()
