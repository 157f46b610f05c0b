"""
Geometry utilities for calculating distances, bearings, and elevation angles.
"""

import math
from typing import Tuple


# Earth's mean radius in kilometers
EARTH_RADIUS_KM = 6371.0

# Approximate kilometers per degree of latitude
KM_PER_DEGREE = 111.0

COMPASS_POINTS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]


def normalize_angle(angle: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    return ((angle % 360) + 360) % 360


def angle_diff(a: float, b: float) -> float:
    """
    Shortest signed difference a - b in degrees.

    Returns:
        Difference in (-180, 180]
    """
    diff = normalize_angle(a - b)
    return diff - 360 if diff > 180 else diff


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on Earth.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in kilometers
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)

    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (math.sin(dlat / 2) ** 2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the initial great-circle bearing from point 1 to point 2.

    Args:
        lat1: Latitude of origin point in degrees
        lon1: Longitude of origin point in degrees
        lat2: Latitude of destination point in degrees
        lon2: Longitude of destination point in degrees

    Returns:
        Bearing in degrees [0, 360), where 0 is North
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlon = math.radians(lon2 - lon1)

    x = math.sin(dlon) * math.cos(lat2_rad)
    y = (math.cos(lat1_rad) * math.sin(lat2_rad) -
         math.sin(lat1_rad) * math.cos(lat2_rad) * math.cos(dlon))

    bearing = math.degrees(math.atan2(x, y))
    return (bearing + 360) % 360


def calculate_elevation(distance_km: float, altitude_m: float) -> float:
    """
    Calculate the elevation angle to an aircraft.

    Flat-earth right triangle; no curvature or refraction correction,
    which is fine at the tens of kilometers we deal with.

    Args:
        distance_km: Horizontal distance to aircraft in kilometers
        altitude_m: Aircraft altitude in meters

    Returns:
        Elevation angle in degrees (90 when directly overhead)
    """
    return math.degrees(math.atan2(altitude_m, distance_km * 1000))


def build_bounding_box(lat: float, lon: float,
                       radius_km: float) -> Tuple[float, float, float, float]:
    """
    Build a bounding box around a center point.

    Args:
        lat: Center latitude
        lon: Center longitude
        radius_km: Search radius in kilometers

    Returns:
        Tuple of (min_lat, max_lat, min_lon, max_lon)
    """
    lat_offset = radius_km / KM_PER_DEGREE
    lon_offset = radius_km / (KM_PER_DEGREE * math.cos(math.radians(lat)))

    return (lat - lat_offset, lat + lat_offset, lon - lon_offset, lon + lon_offset)


def bearing_to_direction(bearing: float) -> str:
    """Name of the nearest of the eight compass points."""
    index = round(normalize_angle(bearing) / 45) % 8
    return COMPASS_POINTS[index]
