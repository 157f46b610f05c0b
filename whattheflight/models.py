"""
Data models for the What The Flight backend.
"""

import time
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List


@dataclass(frozen=True)
class Observer:
    """The user's position, fixed for the whole session."""
    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {'lat': self.latitude, 'lon': self.longitude}


@dataclass(frozen=True)
class OrientationSample:
    """A heading/tilt reading; either field may be missing."""
    heading: Optional[float] = None
    tilt: Optional[float] = None


@dataclass
class AircraftSample:
    """An aircraft as seen from the observer."""
    icao24: str
    callsign: str
    latitude: float
    longitude: float
    altitude: float
    bearing: float
    distance: float
    elevation: float
    on_ground: bool = False
    origin_country: str = ''
    velocity: Optional[float] = None
    heading: Optional[float] = None
    vertical_rate: Optional[float] = None
    registration: Optional[str] = None
    aircraft_type: Optional[str] = None
    operator: Optional[str] = None
    origin: Optional[str] = None
    origin_name: Optional[str] = None
    destination: Optional[str] = None
    destination_name: Optional[str] = None
    squawk: Optional[str] = None

    @property
    def altitude_ft(self) -> int:
        """Get altitude in feet."""
        return round(self.altitude * 3.28084)

    @property
    def speed_kts(self) -> Optional[int]:
        """Get ground speed in knots."""
        return round(self.velocity * 1.944) if self.velocity is not None else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'icao24': self.icao24,
            'callsign': self.callsign,
            'origin_country': self.origin_country,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'altitude': self.altitude,
            'velocity': self.velocity,
            'heading': self.heading,
            'vertical_rate': self.vertical_rate,
            'on_ground': self.on_ground,
            'bearing': self.bearing,
            'distance': self.distance,
            'elevation': self.elevation,
            'registration': self.registration,
            'aircraft_type': self.aircraft_type,
            'operator': self.operator,
            'origin': self.origin,
            'origin_name': self.origin_name,
            'destination': self.destination,
            'destination_name': self.destination_name,
            'squawk': self.squawk,
        }


@dataclass
class FlightSnapshot:
    """Outcome of one poll of the aircraft providers."""
    flights: List[AircraftSample]
    source: Optional[str]
    observer: Observer
    radius_km: float
    timestamp: float = field(default_factory=time.time)
    raw_count: int = 0
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when a provider answered, even with no aircraft."""
        return self.source is not None and self.error is None


@dataclass
class RouteInfo:
    """Flight route information model."""
    origin: Optional[str] = None
    origin_name: Optional[str] = None
    destination: Optional[str] = None
    destination_name: Optional[str] = None
    airline: Optional[str] = None
    flight_number: Optional[str] = None
    cached: bool = False
    not_found: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation, dropping empty fields."""
        data = {
            'origin': self.origin,
            'origin_name': self.origin_name,
            'destination': self.destination,
            'destination_name': self.destination_name,
            'airline': self.airline,
            'flight_number': self.flight_number,
            'error': self.error,
        }
        data = {key: value for key, value in data.items() if value is not None}
        if self.cached:
            data['cached'] = True
        if self.not_found:
            data['not_found'] = True
        return data


@dataclass
class Airport:
    """Airport information model."""
    code: str
    name: str
    city: str = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'code': self.code,
            'name': self.name,
            'city': self.city,
        }
