"""
Aircraft service module for handling aircraft-related business logic.

This module provides the core service layer for aircraft lookups: it asks
the configured providers for aircraft around the observer, works out where
each aircraft appears in the observer's sky, and formats the results for
WebSocket clients.

Providers are tried in order; the first one that answers wins, even if it
answers with no aircraft. Only when every provider fails does the service
report an error.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional, List, Sequence

from whattheflight.api.providers import AircraftProvider, ProviderError
from whattheflight.models import AircraftSample, FlightSnapshot, Observer
from whattheflight.utils.config import Config
from whattheflight.utils.geometry import (
    bearing_to_direction,
    build_bounding_box,
    calculate_bearing,
    calculate_distance,
    calculate_elevation,
)

logger = logging.getLogger(__name__)


def build_aircraft_sample(observer: Observer, record: Dict[str, Any],
                          radius_km: float,
                          min_altitude_m: float = Config.MIN_ALTITUDE_M) -> Optional[AircraftSample]:
    """
    Place a normalized provider record in the observer's sky.

    Args:
        observer: Observer position
        record: Normalized provider record (see whattheflight.api.providers)
        radius_km: Search radius; anything further away is dropped
        min_altitude_m: Aircraft lower than this are treated as on the ground

    Returns:
        AircraftSample with bearing, distance and elevation, or None if the
        record should be excluded
    """
    latitude = record.get('latitude')
    longitude = record.get('longitude')
    if latitude is None or longitude is None:
        return None

    altitude = record.get('altitude_m') or 0
    if record.get('on_ground') or altitude < min_altitude_m:
        return None

    distance = calculate_distance(observer.latitude, observer.longitude, latitude, longitude)
    # The provider query is a square; we want a circle
    if distance > radius_km:
        return None

    bearing = calculate_bearing(observer.latitude, observer.longitude, latitude, longitude)
    elevation = calculate_elevation(distance, altitude)

    return AircraftSample(
        icao24=record.get('icao24') or 'unknown',
        callsign=record.get('callsign') or 'Unknown',
        latitude=latitude,
        longitude=longitude,
        altitude=altitude,
        bearing=bearing,
        distance=distance,
        elevation=elevation,
        on_ground=bool(record.get('on_ground')),
        origin_country=record.get('origin_country') or '',
        velocity=record.get('velocity'),
        heading=record.get('heading'),
        vertical_rate=record.get('vertical_rate'),
        registration=record.get('registration'),
        aircraft_type=record.get('aircraft_type'),
        operator=record.get('operator'),
        origin=record.get('origin'),
        origin_name=record.get('origin_name'),
        destination=record.get('destination'),
        destination_name=record.get('destination_name'),
        squawk=record.get('squawk'),
    )


class AircraftService:
    """
    Service for fetching and formatting nearby aircraft.

    Attributes:
        providers: Aircraft providers in the order they are tried
        min_altitude_m: Altitude below which aircraft are ignored
    """

    def __init__(self, providers: Sequence[AircraftProvider],
                 min_altitude_m: float = Config.MIN_ALTITUDE_M):
        self.providers = list(providers)
        self.min_altitude_m = min_altitude_m

    def fetch_flights(self, latitude: float, longitude: float,
                      radius_km: float = Config.DEFAULT_RADIUS_KM) -> FlightSnapshot:
        """
        Fetch aircraft around a position.

        This method performs the following operations:
        1. Builds a bounding box around the observer
        2. Asks each configured provider in turn until one answers
        3. Adds bearing, distance and elevation to every usable record
        4. Sorts the result by distance, closest first

        Returns:
            FlightSnapshot; ``ok`` is False when every provider failed
        """
        observer = Observer(latitude, longitude)
        bbox = build_bounding_box(latitude, longitude, radius_km)

        last_error = "No aircraft provider configured"
        last_source = None

        for provider in self.providers:
            if not provider.is_configured():
                logger.debug(f"Skipping {provider.name}: not configured")
                continue

            last_source = provider.name
            try:
                records = provider.fetch_aircraft(bbox)
            except ProviderError as e:
                logger.error(f"Provider {provider.name} failed: {e.message}")
                last_error = str(e)
                continue

            flights = self.build_samples(observer, records, radius_km)
            logger.info(f"{provider.name}: {len(records)} aircraft received, "
                        f"{len(flights)} within {radius_km:g}km")

            return FlightSnapshot(
                flights=flights,
                source=provider.name,
                observer=observer,
                radius_km=radius_km,
                raw_count=len(records),
            )

        logger.warning(f"All aircraft providers failed: {last_error}")
        return FlightSnapshot(
            flights=[],
            source=last_source,
            observer=observer,
            radius_km=radius_km,
            error=f"Failed to fetch: {last_error}",
        )

    def build_samples(self, observer: Observer, records: List[Dict[str, Any]],
                      radius_km: float) -> List[AircraftSample]:
        """Filter and augment provider records, closest first."""
        samples = []
        for record in records:
            sample = build_aircraft_sample(observer, record, radius_km, self.min_altitude_m)
            if sample is not None:
                samples.append(sample)

        samples.sort(key=lambda sample: sample.distance)
        return samples

    def format_aircraft(self, aircraft: AircraftSample) -> Dict[str, Any]:
        """
        Format a single aircraft for client display.

        Keeps the raw values and adds rounded, display-ready ones next to
        them (feet, knots, compass point).
        """
        message = aircraft.to_dict()
        message.update({
            'bearing': round(aircraft.bearing, 1),
            'distance': round(aircraft.distance, 2),
            'elevation': round(aircraft.elevation, 1),
            'altitude_ft': aircraft.altitude_ft,
            'speed_kts': aircraft.speed_kts,
            'direction': bearing_to_direction(aircraft.bearing),
        })
        return message

    def format_flights_message(self, snapshot: FlightSnapshot) -> Dict[str, Any]:
        """
        Format a poll result for the client.

        Returns:
            Message dictionary of type 'flights'
        """
        message = {
            'type': 'flights',
            'timestamp': datetime.fromtimestamp(snapshot.timestamp, timezone.utc).isoformat(),
            'source': snapshot.source,
            'user_location': snapshot.observer.to_dict(),
            'flights': [self.format_aircraft(a) for a in snapshot.flights],
            'debug': {
                'raw_count': snapshot.raw_count,
                'filtered_count': len(snapshot.flights),
                'radius_km': snapshot.radius_km,
            },
        }
        if snapshot.error:
            message['error'] = snapshot.error
        return message

    def format_match_message(self, heading: Optional[float], tilt: Optional[float],
                             matched: Optional[AircraftSample]) -> Dict[str, Any]:
        """
        Format the current pointing state for the client.

        Returns:
            Message dictionary of type 'match'
        """
        return {
            'type': 'match',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'heading': round(heading, 1) if heading is not None else None,
            'tilt': round(tilt, 1) if tilt is not None else None,
            'direction': bearing_to_direction(heading) if heading is not None else None,
            'aircraft': self.format_aircraft(matched) if matched else None,
        }
